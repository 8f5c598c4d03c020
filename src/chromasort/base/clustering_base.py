"""
Base class for color clustering algorithms.

Provides the common algorithmic skeleton for alternating optimization
between assignment and update steps, including reseeding of clusters that
lose all of their members.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Tuple, Union
import torch
from torch import Tensor
import time
import warnings

from .interfaces import (
    AssignmentStrategy, CenterUpdater,
    InitializationStrategy, ConvergenceCriterion, ClusteringObjective
)
from .data_structures import ClusterState, AlgorithmState, Cluster, Point
from ..utils.validation import validate_colors, check_n_clusters, check_random_state


class BaseClusteringAlgorithm:
    """Base class implementing the alternating optimization framework.

    Subclasses need to specify:
    - Assignment strategy
    - Center update strategy
    - Initialization strategy
    - Convergence criterion
    - Objective function

    Every iteration appends a new :class:`AlgorithmState` to ``history_``;
    the tensors it holds are copies and are never touched again.
    """

    def __init__(self,
                 n_clusters: int,
                 n_init: int = 1,
                 max_iter: int = 100,
                 tol: float = 1e-3,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[torch.device] = None):
        """
        Args:
            n_clusters: Number of clusters K
            n_init: Number of independent initializations; the run with
                    the lowest objective is kept
            max_iter: Maximum iterations
            tol: Convergence tolerance on squared center movement
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Seed or generator for reproducibility
                          (None for a fresh random seed on every fit)
            device: Torch device (None for auto-detect)
        """
        self.n_clusters = n_clusters
        self.n_init = n_init
        self.max_iter = max_iter
        self.tol = tol
        self.verbose = verbose
        self.random_state = random_state

        if device is None:
            self.device = torch.device('cuda' if torch.cuda.is_available() else 'cpu')
        else:
            self.device = device

        # These will be set by subclasses
        self.assignment_strategy: Optional[AssignmentStrategy] = None
        self.update_strategy: Optional[CenterUpdater] = None
        self.initialization_strategy: Optional[InitializationStrategy] = None
        self.convergence_criterion: Optional[ConvergenceCriterion] = None
        self.objective: Optional[ClusteringObjective] = None

        # Algorithm state
        self.fitted_ = False
        self.n_iter_ = 0
        self.converged_ = False
        self.history_: List[AlgorithmState] = []
        self.centers_: Optional[Tensor] = None
        self.labels_: Optional[Tensor] = None
        self.clusters_: List[Cluster] = []

    @abstractmethod
    def _create_components(self) -> None:
        """Create algorithm-specific components.

        Subclasses must implement this to instantiate:
        - self.assignment_strategy
        - self.update_strategy
        - self.initialization_strategy
        - self.convergence_criterion
        - self.objective
        """
        pass

    def fit(self, X, y=None) -> 'BaseClusteringAlgorithm':
        """Fit the clustering model.

        Args:
            X: (n, 3) colors (tensor, array, or sequence of Color/Point)
            y: Ignored (for sklearn compatibility)

        Returns:
            Self
        """
        return self._fit(X)

    def fit_predict(self, X, y=None) -> Tensor:
        """Fit and return cluster assignments.

        Args:
            X: (n, 3) colors
            y: Ignored

        Returns:
            (n,) tensor of cluster assignments
        """
        self._fit(X)
        return self.labels_

    def predict(self, X) -> Tensor:
        """Predict cluster assignments for new data.

        Args:
            X: (n, 3) colors

        Returns:
            (n,) tensor of cluster assignments
        """
        if not self.fitted_:
            raise RuntimeError("Model must be fitted before calling predict")

        X = self._validate_data(X)
        if X.shape[0] == 0:
            return torch.zeros(0, dtype=torch.long, device=self.device)
        return self._assign(X, self.centers_)

    def _fit(self, X) -> 'BaseClusteringAlgorithm':
        """Internal fit method: validation, restarts and bookkeeping."""
        X = self._validate_data(X, ensure_min_samples=1)
        check_n_clusters(self.n_clusters)
        if isinstance(self.n_init, bool) or not isinstance(self.n_init, int) or self.n_init < 1:
            raise ValueError(f"n_init must be a positive int, got {self.n_init!r}")
        n_points = X.shape[0]

        self._create_components()
        generator = check_random_state(self.random_state)

        self.n_iter_ = 0
        self.history_ = []

        start_time = time.time()

        if n_points < self.n_clusters:
            # Not enough colors to fill K clusters: every color is its own cluster
            if self.verbose:
                print(f"Only {n_points} colors for {self.n_clusters} clusters; "
                      f"returning one cluster per color")
            self.centers_ = X.clone()
            self.labels_ = torch.arange(n_points, device=X.device)
            self.converged_ = True
            self._finalize(X)
            return self

        n_runs = self._effective_n_init()
        best = None
        for run in range(n_runs):
            if self.verbose and n_runs > 1:
                print(f"Run {run + 1}/{n_runs}")
            result = self._single_run(X, generator)
            # strict comparison keeps the earliest run on ties
            if best is None or result['inertia'] < best['inertia']:
                best = result

        total_time = time.time() - start_time

        if self.verbose:
            if not best['converged']:
                warnings.warn(f"Failed to converge after {self.max_iter} iterations")
            print(f"Total fitting time: {total_time:.3f}s")

        self.centers_ = best['centers']
        self.labels_ = best['labels']
        self.converged_ = best['converged']
        self.n_iter_ = best['n_iter']
        self.history_ = best['history']
        self._finalize(X)
        return self

    def _effective_n_init(self) -> int:
        return self.n_init

    def _single_run(self, X: Tensor, generator: torch.Generator) -> Dict[str, Any]:
        """One initialization followed by the alternating optimization."""
        if self.verbose:
            print(f"Initializing {self.n_clusters} clusters...")

        self.convergence_criterion.reset()
        centers = self.initialization_strategy.initialize(
            X, self.n_clusters, generator=generator
        )
        history: List[AlgorithmState] = []
        converged = False
        n_iter = 0

        # Main optimization loop
        for iteration in range(self.max_iter):
            iter_start_time = time.time()

            # Assignment step
            assignments = self._assign(X, centers)
            counts = torch.bincount(assignments, minlength=self.n_clusters)

            # Update step
            new_centers = centers.clone()
            empty = []
            for k in range(self.n_clusters):
                if counts[k] > 0:
                    new_centers[k] = self.update_strategy.update(X[assignments == k])
                else:
                    empty.append(k)

            reseeded = self._reseed_empty_clusters(X, new_centers, empty, generator)

            objective_value = self.objective.compute(X, new_centers, assignments).item()

            converged = self.convergence_criterion.check({
                'iteration': iteration,
                'objective': objective_value,
                'assignments': assignments,
                'previous_centers': centers,
                'centers': new_centers,
                'reseeded': reseeded
            })

            diff = new_centers - centers
            center_shift = torch.sum(diff * diff, dim=1).max().item()

            history.append(AlgorithmState(
                iteration=iteration,
                cluster_state=ClusterState(
                    centers=new_centers.clone(),
                    counts=counts.clone(),
                    n_clusters=self.n_clusters
                ),
                assignments=assignments.clone(),
                objective_value=objective_value,
                center_shift=center_shift,
                reseeded=tuple(reseeded),
                converged=converged
            ))

            centers = new_centers
            n_iter = iteration + 1

            # Logging
            iter_time = time.time() - iter_start_time
            if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
                obj_direction = "↓" if self.objective.minimize else "↑"
                print(f"Iteration {iteration:3d}: objective = {objective_value:.6f} "
                      f"{obj_direction} shift = {center_shift:.2e} ({iter_time:.3f}s)")
            if reseeded and self.verbose >= 2:
                print(f"  reseeded empty clusters {reseeded}")

            if converged:
                if self.verbose:
                    print(f"Converged at iteration {iteration}")
                break

        labels, centers = self._final_partition(X, centers, generator)
        return {
            'centers': centers,
            'labels': labels,
            'inertia': self.objective.compute(X, centers, labels).item(),
            'converged': converged,
            'n_iter': n_iter,
            'history': history
        }

    def _final_partition(self, X: Tensor, centers: Tensor,
                         generator: torch.Generator) -> Tuple[Tensor, Tensor]:
        """Assign every color to the final centers and refit the centers.

        A cluster emptied by this last pass is reseeded onto a spare color
        and the colors are assigned again, until every cluster holds a color
        or no spare color is left. Each center is then recomputed from the
        members it ends up with, so returned centers and members agree.

        Returns:
            labels: (n,) cluster indices
            centers: (K, 3) centers of the returned members
        """
        centers = centers.clone()
        labels = self._assign(X, centers)

        # each productive round pins one more center onto its own color
        for _ in range(self.n_clusters + 1):
            counts = torch.bincount(labels, minlength=self.n_clusters)
            empty = torch.where(counts == 0)[0].tolist()
            if not empty:
                break
            if not self._reseed_empty_clusters(X, centers, empty, generator):
                break
            labels = self._assign(X, centers)

        for k in range(self.n_clusters):
            members = X[labels == k]
            if members.shape[0] > 0:
                centers[k] = self.update_strategy.update(members)
        return labels, centers

    def _assign(self, X: Tensor, centers: Tensor) -> Tensor:
        assignments = self.assignment_strategy.compute_assignments(X, centers)
        if isinstance(assignments, tuple):
            assignments = assignments[0]
        return assignments

    def _reseed_empty_clusters(self, X: Tensor, centers: Tensor, empty: List[int],
                               generator: torch.Generator) -> List[int]:
        """Move each empty cluster onto a random input color, in place.

        Colors that already coincide with another center are skipped. When
        every color is already a center the cluster keeps its old center and
        is not reported as reseeded.

        Returns:
            Indices of the clusters that were moved
        """
        reseeded = []
        for k in empty:
            others = torch.cat([centers[:k], centers[k + 1:]])
            taken = (X.unsqueeze(1) == others.unsqueeze(0)).all(dim=2).any(dim=1)
            candidates = torch.where(~taken)[0]
            if len(candidates) == 0:
                continue
            pick = torch.randint(len(candidates), (1,), generator=generator).item()
            centers[k] = X[candidates[pick]]
            reseeded.append(k)
        return reseeded

    def _finalize(self, X: Tensor) -> None:
        """Build cluster snapshots and fitted attributes from final labels."""
        clusters = []
        dropped = 0
        for k in range(self.centers_.shape[0]):
            member_rows = X[self.labels_ == k]
            if member_rows.shape[0] == 0:
                dropped += 1
                continue
            clusters.append(Cluster(
                center=Point.from_tensor(self.centers_[k]),
                members=tuple(Point.from_tensor(row) for row in member_rows)
            ))

        if dropped:
            warnings.warn(f"{dropped} of {self.centers_.shape[0]} clusters ended "
                          f"empty and were dropped; the input has fewer distinct "
                          f"colors than clusters requested", UserWarning)

        self.clusters_ = clusters
        self.fitted_ = True

    def _validate_data(self, X, ensure_min_samples: int = 0) -> Tensor:
        """Validate and prepare input data."""
        return validate_colors(X, dtype=torch.float64, device=self.device,
                               ensure_min_samples=ensure_min_samples)

    @property
    def cluster_centers_(self) -> Tensor:
        """Get cluster centers."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.centers_

    @property
    def inertia_(self) -> float:
        """Sum of squared distances of each color to its final center."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return float(sum(
            sum(m.distance_squared(c.center) for m in c.members)
            for c in self.clusters_
        ))

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'n_init': self.n_init,
            'max_iter': self.max_iter,
            'tol': self.tol,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'device': self.device
        }

    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        """Set parameters (sklearn compatibility)."""
        valid = self.get_params()
        for key, value in params.items():
            if key not in valid:
                raise ValueError(f"Invalid parameter {key!r} for {type(self).__name__}")
            setattr(self, key, value)
        return self
