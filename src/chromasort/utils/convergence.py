"""
Convergence criterion for the clustering loop: maximum movement of any
cluster center.
"""

from typing import Dict, Any
import torch
from torch import Tensor

from ..base.interfaces import ConvergenceCriterion


class CenterShift(ConvergenceCriterion):
    """Converged once no center moves by more than ``tol`` (squared distance).

    An iteration that had to reseed an empty cluster never counts as
    converged, even if the reseeded center happens to land where it was.
    """

    def __init__(self, tol: float = 1e-3, patience: int = 1):
        """
        Args:
            tol: Threshold on the maximum squared center movement
            patience: Number of consecutive stable iterations required
        """
        super().__init__()
        self.tol = tol
        self.patience = patience
        self._stable_count = 0

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check whether the centers have stopped moving."""
        previous: Tensor = current_state['previous_centers']
        current: Tensor = current_state['centers']
        reseeded = current_state.get('reseeded', ())

        diff = current - previous
        shift = torch.sum(diff * diff, dim=1).max().item()

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'center_shift': shift,
            'reseeded': tuple(reseeded)
        })

        if shift < self.tol and not reseeded:
            self._stable_count += 1
            return self._stable_count >= self.patience

        self._stable_count = 0
        return False

    def reset(self):
        super().reset()
        self._stable_count = 0
