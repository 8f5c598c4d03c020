"""
Euclidean distances in RGB space.

Squared Euclidean distance is what the clusterer uses to assign colors to
centers; the "redmean" weighted variant adds a perceptual correction.
"""

import torch
from torch import Tensor

from ..base.interfaces import ColorDistance


class EuclideanDistance(ColorDistance):
    """Squared Euclidean distance metric.

    Computes ||a - b||² in RGB space.
    """

    def __init__(self, squared: bool = True):
        """
        Args:
            squared: If True, return squared distances (default).
                    If False, return actual Euclidean distances.
        """
        self.squared = squared

    def compute(self, a: Tensor, b: Tensor) -> Tensor:
        """Compute Euclidean distances between rows.

        Args:
            a: (n, 3) or (3,) RGB tensor
            b: (n, 3) or (3,) RGB tensor

        Returns:
            (n,) tensor of distances
        """
        a, b = self._broadcast_pair(a, b)

        diff = a - b
        squared_distances = torch.sum(diff * diff, dim=1)

        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)

    def __repr__(self) -> str:
        return f"EuclideanDistance(squared={self.squared})"


class RedmeanDistance(ColorDistance):
    """Weighted RGB distance with weights that depend on the mean red level.

    Computes sqrt((2 + r̄) ΔR² + 4 ΔG² + (3 - r̄) ΔB²) where r̄ is the mean red
    value of the two colors. Ranges from 0 to 3.
    """

    def compute(self, a: Tensor, b: Tensor) -> Tensor:
        """Compute redmean distances.

        Args:
            a: (n, 3) or (3,) RGB tensor
            b: (n, 3) or (3,) RGB tensor

        Returns:
            (n,) tensor of distances
        """
        a, b = self._broadcast_pair(a, b)

        r_mean = (a[:, 0] + b[:, 0]) / 2
        diff = a - b
        weights = torch.stack([2.0 + r_mean,
                               torch.full_like(r_mean, 4.0),
                               3.0 - r_mean], dim=1)
        return torch.sqrt(torch.sum(weights * diff * diff, dim=1))

    def __repr__(self) -> str:
        return "RedmeanDistance()"
