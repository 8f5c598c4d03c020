"""Utility functions for color ranking and clustering."""

from .colorspace import (
    D65_WHITE,
    rgb_to_hsb,
    hsb_to_rgb,
    luminance,
    srgb_to_linear,
    rgb_to_xyz,
    xyz_to_lab,
    rgb_to_lab
)

from .convergence import (
    CenterShift
)

from .validation import (
    validate_colors,
    as_color_tensor,
    check_n_clusters,
    check_random_state,
    check_percentile
)

__all__ = [
    # Color spaces
    'D65_WHITE',
    'rgb_to_hsb',
    'hsb_to_rgb',
    'luminance',
    'srgb_to_linear',
    'rgb_to_xyz',
    'xyz_to_lab',
    'rgb_to_lab',

    # Convergence criterion
    'CenterShift',

    # Validation
    'validate_colors',
    'as_color_tensor',
    'check_n_clusters',
    'check_random_state',
    'check_percentile'
]
