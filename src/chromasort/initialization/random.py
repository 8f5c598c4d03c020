"""
Forgy initialization strategy for color k-means.

Picks actual input colors as the initial cluster centers.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy


class ForgyInit(InitializationStrategy):
    """Random initialization by selecting points from the dataset.

    Selects n_clusters indices uniformly *with replacement*, so the same
    color may seed more than one cluster; the clustering loop reseeds any
    cluster left empty by a duplicate.
    """

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> Tensor:
        """Initialize centers with random points.

        Args:
            points: (n, 3) data points
            n_clusters: Number of clusters
            generator: Optional CPU generator for reproducibility

        Returns:
            (K, 3) tensor of initial centers
        """
        n_points = points.shape[0]
        if n_points == 0:
            raise ValueError("Cannot initialize clusters from an empty set of points")

        indices = torch.randint(n_points, (n_clusters,), generator=generator)
        return points[indices.to(points.device)].clone()
