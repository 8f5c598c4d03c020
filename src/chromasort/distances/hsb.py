"""
Hue-weighted color distance.

Compares colors in hue/saturation/brightness space with hue dominating, so
that colors of the same "color family" rank close together regardless of how
light or muted they are.
"""

import torch
from torch import Tensor

from ..base.interfaces import ColorDistance
from ..utils.colorspace import rgb_to_hsb


HUE_WEIGHT = 0.7
SATURATION_WEIGHT = 0.2
BRIGHTNESS_WEIGHT = 0.1

MIN_BRIGHTNESS = 0.1
MIN_SATURATION = 0.15


class HueWeightedDistance(ColorDistance):
    """Weighted sum of circular hue, saturation and brightness differences.

    Computes w_h * dh + w_s * |s1 - s2| + w_b * |b1 - b2| where dh is the
    shorter way around the hue circle (at most 0.5).

    With the default weights the result lies in [0, 0.65].
    """

    def __init__(self,
                 hue_weight: float = HUE_WEIGHT,
                 saturation_weight: float = SATURATION_WEIGHT,
                 brightness_weight: float = BRIGHTNESS_WEIGHT,
                 achromatic_guard: bool = False,
                 min_brightness: float = MIN_BRIGHTNESS,
                 min_saturation: float = MIN_SATURATION):
        """
        Args:
            hue_weight: Weight of the circular hue difference
            saturation_weight: Weight of the saturation difference
            brightness_weight: Weight of the brightness difference
            achromatic_guard: If True, pairs where either color is nearly
                black (brightness < min_brightness) or nearly gray
                (saturation < min_saturation) get the maximum distance 1.0,
                because hue is unstable there. Identical colors still get 0.
            min_brightness: Brightness threshold for the guard
            min_saturation: Saturation threshold for the guard
        """
        weights = (hue_weight, saturation_weight, brightness_weight)
        if any(w < 0 for w in weights):
            raise ValueError(f"Weights must be non-negative, got {weights}")
        self.hue_weight = hue_weight
        self.saturation_weight = saturation_weight
        self.brightness_weight = brightness_weight
        self.achromatic_guard = achromatic_guard
        self.min_brightness = min_brightness
        self.min_saturation = min_saturation

    @property
    def bounded(self) -> bool:
        # hue term is at most 0.5, the other two at most 1
        return (0.5 * self.hue_weight + self.saturation_weight
                + self.brightness_weight) <= 1.0

    def compute(self, a: Tensor, b: Tensor) -> Tensor:
        """Compute hue-weighted distances.

        Args:
            a: (n, 3) or (3,) RGB tensor
            b: (n, 3) or (3,) RGB tensor

        Returns:
            (n,) tensor of distances
        """
        a, b = self._broadcast_pair(a, b)
        hsb_a = rgb_to_hsb(a)
        hsb_b = rgb_to_hsb(b)

        hue_diff = torch.abs(hsb_a[:, 0] - hsb_b[:, 0])
        hue_diff = torch.where(hue_diff > 0.5, 1.0 - hue_diff, hue_diff)
        sat_diff = torch.abs(hsb_a[:, 1] - hsb_b[:, 1])
        bri_diff = torch.abs(hsb_a[:, 2] - hsb_b[:, 2])

        distances = (self.hue_weight * hue_diff
                     + self.saturation_weight * sat_diff
                     + self.brightness_weight * bri_diff)

        if self.achromatic_guard:
            achromatic = ((hsb_a[:, 2] < self.min_brightness)
                          | (hsb_b[:, 2] < self.min_brightness)
                          | (hsb_a[:, 1] < self.min_saturation)
                          | (hsb_b[:, 1] < self.min_saturation))
            identical = (a == b).all(dim=1)
            distances = torch.where(achromatic & ~identical,
                                    torch.ones_like(distances), distances)

        return distances

    def __repr__(self) -> str:
        return (f"HueWeightedDistance(hue_weight={self.hue_weight}, "
                f"saturation_weight={self.saturation_weight}, "
                f"brightness_weight={self.brightness_weight}, "
                f"achromatic_guard={self.achromatic_guard})")
