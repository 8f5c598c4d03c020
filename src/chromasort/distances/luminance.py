"""
Luminance ("shade") distance.

Ignores hue entirely and compares how light two colors look.
"""

import torch
from torch import Tensor

from ..base.interfaces import ColorDistance
from ..utils.colorspace import luminance


class LuminanceDistance(ColorDistance):
    """Absolute difference of perceptual luminance.

    Computes |L1 - L2| with L = 0.299R + 0.587G + 0.114B. Symmetric,
    monotonic in the luminance gap and bounded to [0, 1].
    """

    @property
    def bounded(self) -> bool:
        return True

    def compute(self, a: Tensor, b: Tensor) -> Tensor:
        """Compute luminance distances.

        Args:
            a: (n, 3) or (3,) RGB tensor
            b: (n, 3) or (3,) RGB tensor

        Returns:
            (n,) tensor of distances in [0, 1]
        """
        a, b = self._broadcast_pair(a, b)
        return torch.abs(luminance(a) - luminance(b))

    def __repr__(self) -> str:
        return "LuminanceDistance()"
