"""
Core interfaces for the color ranking and clustering components.

This module defines the abstract base classes that all components must implement,
so that distance formulas, initialization, assignment, center updates and
convergence checks can be swapped independently.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple, Dict, Any
import torch
from torch import Tensor


class ColorDistance(ABC):
    """Abstract base class for distances between colors.

    Implementations work row-wise on RGB tensors so that a single query can be
    scored against a whole collection at once. Zero means identical, larger
    values mean more dissimilar.
    """

    @abstractmethod
    def compute(self, a: Tensor, b: Tensor) -> Tensor:
        """Compute distances between corresponding rows of ``a`` and ``b``.

        Args:
            a: (n, 3) or (3,) tensor of RGB values in [0, 1]
            b: (n, 3) or (3,) tensor of RGB values in [0, 1]; broadcast
               against ``a``

        Returns:
            (n,) tensor of distances
        """
        pass

    @property
    def bounded(self) -> bool:
        """Whether the distance is guaranteed to lie in [0, 1]."""
        return False

    def __call__(self, a: Tensor, b: Tensor) -> Tensor:
        return self.compute(a, b)

    @staticmethod
    def _broadcast_pair(a: Tensor, b: Tensor) -> Tuple[Tensor, Tensor]:
        """Bring ``a`` and ``b`` to a common (n, 3) shape."""
        if a.dim() == 1:
            a = a.unsqueeze(0)
        if b.dim() == 1:
            b = b.unsqueeze(0)
        if a.shape[-1] != 3 or b.shape[-1] != 3:
            raise ValueError(f"Expected RGB rows, got shapes {tuple(a.shape)} and {tuple(b.shape)}")
        a, b = torch.broadcast_tensors(a, b.to(dtype=a.dtype, device=a.device))
        return a, b


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-cluster assignment strategies."""

    @abstractmethod
    def compute_assignments(self, points: Tensor, centers: Tensor,
                            **kwargs) -> Tensor:
        """Compute cluster assignments for points.

        Args:
            points: (n, 3) tensor of data points
            centers: (K, 3) tensor of current cluster centers

        Returns:
            (n,) tensor of cluster indices
        """
        pass


class CenterUpdater(ABC):
    """Abstract base class for cluster center update policies."""

    @abstractmethod
    def update(self, members: Tensor, **kwargs) -> Tensor:
        """Compute a new center from the points assigned to a cluster.

        Args:
            members: (m, 3) tensor of assigned points, m >= 1

        Returns:
            (3,) tensor with the new center
        """
        pass


class InitializationStrategy(ABC):
    """Abstract base class for cluster initialization strategies."""

    @abstractmethod
    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> Tensor:
        """Choose initial cluster centers.

        Args:
            points: (n, 3) tensor of data points
            n_clusters: Number of clusters to initialize
            generator: Optional random generator for reproducibility

        Returns:
            (K, 3) tensor of initial centers
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []


class ClusteringObjective(ABC):
    """Abstract base class for clustering objective functions."""

    @abstractmethod
    def compute(self, points: Tensor, centers: Tensor,
                assignments: Tensor) -> Tensor:
        """Compute objective function value.

        Args:
            points: (n, 3) tensor of data points
            centers: (K, 3) tensor of cluster centers
            assignments: (n,) hard assignments

        Returns:
            Scalar objective value
        """
        pass

    @property
    @abstractmethod
    def minimize(self) -> bool:
        """Whether to minimize (True) or maximize (False) this objective."""
        pass
