"""
CIEDE2000 color difference.

A perceptually uniform alternative to the hue-weighted formula. Values are in
Delta-E units (roughly 0-100+), so they are not comparable with the bounded
[0, 1] distances; pick one formula per ranking session.
"""

import math
import torch
from torch import Tensor

from ..base.interfaces import ColorDistance
from ..utils.colorspace import rgb_to_lab


_POW25_7 = 25.0 ** 7


def delta_e_2000(lab1: Tensor, lab2: Tensor,
                 kL: float = 1.0, kC: float = 1.0, kH: float = 1.0) -> Tensor:
    """CIEDE2000 difference between rows of two (n, 3) Lab tensors.

    Args:
        lab1: (n, 3) Lab tensor
        lab2: (n, 3) Lab tensor
        kL, kC, kH: Parametric weighting factors

    Returns:
        (n,) tensor of Delta-E 2000 values
    """
    L1, a1, b1 = lab1[:, 0], lab1[:, 1], lab1[:, 2]
    L2, a2, b2 = lab2[:, 0], lab2[:, 1], lab2[:, 2]

    C1 = torch.sqrt(a1 * a1 + b1 * b1)
    C2 = torch.sqrt(a2 * a2 + b2 * b2)
    C_bar = (C1 + C2) / 2
    C_bar7 = C_bar ** 7
    G = 0.5 * (1 - torch.sqrt(C_bar7 / (C_bar7 + _POW25_7)))

    a1_p = (1 + G) * a1
    a2_p = (1 + G) * a2
    C1_p = torch.sqrt(a1_p * a1_p + b1 * b1)
    C2_p = torch.sqrt(a2_p * a2_p + b2 * b2)

    two_pi = 2 * math.pi
    h1_p = torch.remainder(torch.atan2(b1, a1_p), two_pi)
    h2_p = torch.remainder(torch.atan2(b2, a2_p), two_pi)

    chroma_product = C1_p * C2_p
    achromatic = chroma_product == 0

    # Hue difference, wrapped into [-pi, pi]
    dh = h2_p - h1_p
    dh = torch.where(dh > math.pi, dh - two_pi, dh)
    dh = torch.where(dh < -math.pi, dh + two_pi, dh)
    dh = torch.where(achromatic, torch.zeros_like(dh), dh)

    dL_p = L2 - L1
    dC_p = C2_p - C1_p
    dH_p = 2 * torch.sqrt(chroma_product) * torch.sin(dh / 2)

    L_bar_p = (L1 + L2) / 2
    C_bar_p = (C1_p + C2_p) / 2

    # Mean hue, taking the short way around the circle
    h_sum = h1_p + h2_p
    h_bar_p = torch.where(
        torch.abs(h1_p - h2_p) <= math.pi,
        h_sum / 2,
        torch.where(h_sum < two_pi, (h_sum + two_pi) / 2, (h_sum - two_pi) / 2)
    )
    h_bar_p = torch.where(achromatic, h_sum, h_bar_p)

    T = (1
         - 0.17 * torch.cos(h_bar_p - math.radians(30))
         + 0.24 * torch.cos(2 * h_bar_p)
         + 0.32 * torch.cos(3 * h_bar_p + math.radians(6))
         - 0.20 * torch.cos(4 * h_bar_p - math.radians(63)))

    delta_theta = math.radians(30) * torch.exp(-((torch.rad2deg(h_bar_p) - 275) / 25) ** 2)
    C_bar_p7 = C_bar_p ** 7
    R_C = 2 * torch.sqrt(C_bar_p7 / (C_bar_p7 + _POW25_7))
    L_offset = (L_bar_p - 50) ** 2
    S_L = 1 + (0.015 * L_offset) / torch.sqrt(20 + L_offset)
    S_C = 1 + 0.045 * C_bar_p
    S_H = 1 + 0.015 * C_bar_p * T
    R_T = -torch.sin(2 * delta_theta) * R_C

    l_term = dL_p / (kL * S_L)
    c_term = dC_p / (kC * S_C)
    h_term = dH_p / (kH * S_H)

    total = l_term ** 2 + c_term ** 2 + h_term ** 2 + R_T * c_term * h_term
    return torch.sqrt(total.clamp_min(0.0))


class DeltaE2000Distance(ColorDistance):
    """CIEDE2000 difference of two sRGB colors.

    Colors are linearized, converted to XYZ and then to Lab (D65 white)
    before applying the Delta-E 2000 formula.
    """

    def __init__(self, kL: float = 1.0, kC: float = 1.0, kH: float = 1.0):
        self.kL = kL
        self.kC = kC
        self.kH = kH

    def compute(self, a: Tensor, b: Tensor) -> Tensor:
        """Compute Delta-E 2000 distances.

        Args:
            a: (n, 3) or (3,) RGB tensor
            b: (n, 3) or (3,) RGB tensor

        Returns:
            (n,) tensor of Delta-E values
        """
        a, b = self._broadcast_pair(a, b)
        return delta_e_2000(rgb_to_lab(a), rgb_to_lab(b),
                            kL=self.kL, kC=self.kC, kH=self.kH)

    def __repr__(self) -> str:
        return f"DeltaE2000Distance(kL={self.kL}, kC={self.kC}, kH={self.kH})"
