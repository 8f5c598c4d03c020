"""
Color space conversions.

All functions operate on (n, 3) tensors of RGB values in [0, 1] and return
tensors of the same leading shape, so whole collections convert at once.
"""

from typing import Tuple
import torch
from torch import Tensor

from ..base.data_structures import LUMA_COEFFICIENTS


# D65 reference white
D65_WHITE: Tuple[float, float, float] = (0.95047, 1.0, 1.08883)

# Linear sRGB -> CIE XYZ
SRGB_TO_XYZ = (
    (0.4124564, 0.3575761, 0.1804375),
    (0.2126729, 0.7151522, 0.0721750),
    (0.0193339, 0.1191920, 0.9503041),
)

_LAB_DELTA = 6.0 / 29.0


def _as_2d(rgb: Tensor) -> Tensor:
    if rgb.dim() == 1:
        rgb = rgb.unsqueeze(0)
    if rgb.dim() != 2 or rgb.shape[1] != 3:
        raise ValueError(f"Expected (n, 3) RGB tensor, got shape {tuple(rgb.shape)}")
    return rgb


def rgb_to_hsb(rgb: Tensor) -> Tensor:
    """Convert RGB to hue/saturation/brightness.

    Hue is the position on the color wheel in [0, 1); it is 0 for grays.
    Saturation is 0 for black.

    Args:
        rgb: (n, 3) tensor

    Returns:
        (n, 3) tensor of (hue, saturation, brightness)
    """
    rgb = _as_2d(rgb)
    r, g, b = rgb[:, 0], rgb[:, 1], rgb[:, 2]

    max_c, _ = rgb.max(dim=1)
    min_c, _ = rgb.min(dim=1)
    delta = max_c - min_c

    brightness = max_c
    saturation = torch.where(max_c > 0, delta / max_c.clamp_min(1e-12),
                             torch.zeros_like(max_c))

    safe_delta = torch.where(delta > 0, delta, torch.ones_like(delta))
    hue_r = ((g - b) / safe_delta) % 6.0
    hue_g = (b - r) / safe_delta + 2.0
    hue_b = (r - g) / safe_delta + 4.0

    # Channel precedence r > g > b when several share the maximum
    hue = torch.where(max_c == r, hue_r, torch.where(max_c == g, hue_g, hue_b))
    hue = torch.where(delta > 0, hue / 6.0, torch.zeros_like(hue))
    hue = hue % 1.0

    return torch.stack([hue, saturation, brightness], dim=1)


def hsb_to_rgb(hsb: Tensor) -> Tensor:
    """Inverse of :func:`rgb_to_hsb`.

    Args:
        hsb: (n, 3) tensor of (hue, saturation, brightness)

    Returns:
        (n, 3) tensor of RGB values
    """
    hsb = _as_2d(hsb)
    h, s, v = hsb[:, 0] % 1.0, hsb[:, 1], hsb[:, 2]

    # Standard sector formula: channel n gets v - v*s*max(0, min(k, 4-k, 1))
    def channel(n: float) -> Tensor:
        k = (n + h * 6.0) % 6.0
        ramp = torch.clamp(torch.minimum(k, 4.0 - k), 0.0, 1.0)
        return v - v * s * ramp

    return torch.stack([channel(5.0), channel(3.0), channel(1.0)], dim=1)


def luminance(rgb: Tensor) -> Tensor:
    """Perceptual luminance 0.299R + 0.587G + 0.114B.

    Args:
        rgb: (n, 3) tensor

    Returns:
        (n,) tensor in [0, 1]
    """
    rgb = _as_2d(rgb)
    weights = torch.tensor(LUMA_COEFFICIENTS, dtype=rgb.dtype, device=rgb.device)
    return rgb @ weights


def srgb_to_linear(rgb: Tensor) -> Tensor:
    """Undo the sRGB transfer curve (gamma correction)."""
    return torch.where(rgb > 0.04045,
                       ((rgb + 0.055) / 1.055) ** 2.4,
                       rgb / 12.92)


def rgb_to_xyz(rgb: Tensor) -> Tensor:
    """Convert sRGB to CIE XYZ (D65)."""
    rgb = _as_2d(rgb)
    matrix = torch.tensor(SRGB_TO_XYZ, dtype=rgb.dtype, device=rgb.device)
    return srgb_to_linear(rgb) @ matrix.t()


def xyz_to_lab(xyz: Tensor, white: Tuple[float, float, float] = D65_WHITE) -> Tensor:
    """Convert CIE XYZ to CIE Lab relative to ``white``."""
    xyz = _as_2d(xyz)
    ref = torch.tensor(white, dtype=xyz.dtype, device=xyz.device)
    t = xyz / ref

    # Cube root above delta^3, linear segment below
    f = torch.where(t > _LAB_DELTA ** 3,
                    t.clamp_min(0.0) ** (1.0 / 3.0),
                    t / (3.0 * _LAB_DELTA ** 2) + 4.0 / 29.0)

    L = 116.0 * f[:, 1] - 16.0
    a = 500.0 * (f[:, 0] - f[:, 1])
    b = 200.0 * (f[:, 1] - f[:, 2])
    return torch.stack([L, a, b], dim=1)


def rgb_to_lab(rgb: Tensor) -> Tensor:
    """Convert sRGB in [0, 1] to CIE Lab (D65)."""
    return xyz_to_lab(rgb_to_xyz(rgb))
