"""
Hard assignment strategy for color clustering.

Assigns each color to its nearest cluster center.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, ColorDistance
from ..distances.euclidean import EuclideanDistance


class HardAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to nearest cluster.

    Each point is assigned to exactly one cluster based on minimum distance.
    When several centers are equally close the lowest cluster index wins.
    """

    def __init__(self, metric: Optional[ColorDistance] = None):
        """
        Args:
            metric: Distance used for assignment. Defaults to squared
                    Euclidean distance in RGB space.
        """
        super().__init__()
        self.metric = metric if metric is not None else EuclideanDistance(squared=True)

    def distance_matrix(self, points: Tensor, centers: Tensor) -> Tensor:
        """(n, K) distances from every point to every center."""
        n_points = points.shape[0]
        n_clusters = centers.shape[0]

        distances = torch.zeros(n_points, n_clusters, dtype=points.dtype,
                                device=points.device)
        for k in range(n_clusters):
            distances[:, k] = self.metric.compute(points, centers[k])
        return distances

    def compute_assignments(self, points: Tensor, centers: Tensor,
                            **kwargs) -> Tensor:
        """Assign each point to nearest cluster.

        Args:
            points: (n, 3) data points
            centers: (K, 3) cluster centers
            **kwargs: Ignored for basic hard assignment

        Returns:
            (n,) tensor of cluster indices
        """
        distances = self.distance_matrix(points, centers)

        # torch.argmin returns the first index among equal minima
        return torch.argmin(distances, dim=1)
