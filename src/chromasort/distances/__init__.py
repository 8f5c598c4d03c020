"""Distance metrics between colors."""

from .hsb import (
    HueWeightedDistance,
    HUE_WEIGHT,
    SATURATION_WEIGHT,
    BRIGHTNESS_WEIGHT
)
from .luminance import LuminanceDistance
from .euclidean import EuclideanDistance, RedmeanDistance
from .delta_e import DeltaE2000Distance, delta_e_2000

__all__ = [
    # Similarity formulas
    'HueWeightedDistance',
    'LuminanceDistance',
    'DeltaE2000Distance',
    'delta_e_2000',

    # RGB distances
    'EuclideanDistance',
    'RedmeanDistance',

    # Weights
    'HUE_WEIGHT',
    'SATURATION_WEIGHT',
    'BRIGHTNESS_WEIGHT'
]
