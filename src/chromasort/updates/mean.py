"""
Mean update strategy for centroid-based clustering.
"""

import torch
from torch import Tensor

from ..base.interfaces import CenterUpdater


class MeanUpdater(CenterUpdater):
    """New center is the arithmetic mean of the assigned colors.

    The result is clamped to the unit cube.
    """

    def update(self, members: Tensor, **kwargs) -> Tensor:
        """Compute the clamped mean.

        Args:
            members: (m, 3) assigned points, m >= 1

        Returns:
            (3,) center
        """
        if members.shape[0] == 0:
            raise ValueError("Cannot update the center of an empty cluster")
        return torch.clamp(members.mean(dim=0), 0.0, 1.0)
