"""
Medoid-snap update strategy.

Computes the mean of a cluster and then moves the center onto the member
nearest to it, so every palette color is one that was actually observed.
"""

import torch
from torch import Tensor

from ..base.interfaces import CenterUpdater


class MedoidUpdater(CenterUpdater):
    """New center is the member closest to the members' mean.

    Ties go to the member that appears first.
    """

    def update(self, members: Tensor, **kwargs) -> Tensor:
        """Snap the mean onto the nearest member.

        Args:
            members: (m, 3) assigned points, m >= 1

        Returns:
            (3,) center, equal to one of the rows of ``members``
        """
        if members.shape[0] == 0:
            raise ValueError("Cannot update the center of an empty cluster")

        mean = members.mean(dim=0)
        diff = members - mean.unsqueeze(0)
        distances = torch.sum(diff * diff, dim=1)
        return members[torch.argmin(distances)].clone()
