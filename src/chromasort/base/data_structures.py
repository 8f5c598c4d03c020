"""
Core data structures for color ranking and palette clustering.

This module provides the value types exchanged with callers (colors, points,
clusters) and the per-iteration snapshots recorded by the clustering loop.
"""

from typing import Optional, List, Tuple, Dict, Any, Iterable
from dataclasses import dataclass, field
from enum import Enum
import math
import torch
from torch import Tensor


LUMA_COEFFICIENTS: Tuple[float, float, float] = (0.299, 0.587, 0.114)


class SimilarityMethod(Enum):
    """Which distance formula a similarity query uses."""
    COLOR = 'color'  # hue-weighted
    SHADE = 'shade'  # brightness only


def _check_channel(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")
    if value < 0.0 or value > 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {value}")
    return value


@dataclass(frozen=True)
class Color:
    """Normalized RGBA color.

    Channels are floats in [0, 1]. Alpha is carried along for callers but is
    ignored by equality and by every distance computation.
    """

    red: float
    green: float
    blue: float
    alpha: float = field(default=1.0, compare=False)

    def __post_init__(self):
        """Validate channel ranges."""
        for name in ('red', 'green', 'blue', 'alpha'):
            object.__setattr__(self, name, _check_channel(name, getattr(self, name)))

    @classmethod
    def from_rgb255(cls, red: int, green: int, blue: int, alpha: int = 255) -> 'Color':
        """Build a color from 8-bit channel values."""
        return cls(red / 255.0, green / 255.0, blue / 255.0, alpha / 255.0)

    @classmethod
    def from_hex(cls, value: str) -> 'Color':
        """Parse ``#RRGGBB`` or ``#RRGGBBAA``."""
        text = value.lstrip('#')
        if len(text) not in (6, 8):
            raise ValueError(f"Expected 6 or 8 hex digits, got {value!r}")
        try:
            channels = [int(text[i:i + 2], 16) for i in range(0, len(text), 2)]
        except ValueError:
            raise ValueError(f"Invalid hex color: {value!r}") from None
        return cls.from_rgb255(*channels)

    @classmethod
    def from_hsb(cls, hue: float, saturation: float, brightness: float) -> 'Color':
        """Build a color from hue/saturation/brightness in [0, 1]."""
        from ..utils.colorspace import hsb_to_rgb
        hsb = torch.tensor([[hue, saturation, brightness]], dtype=torch.float64)
        r, g, b = hsb_to_rgb(hsb)[0].clamp(0.0, 1.0).tolist()
        return cls(r, g, b)

    @classmethod
    def from_tensor(cls, values: Tensor) -> 'Color':
        """Build a color from a (3,) tensor of RGB values."""
        r, g, b = values.detach().cpu().tolist()
        return cls(r, g, b)

    def to_hex(self) -> str:
        return '#' + ''.join(f"{round(c * 255):02X}" for c in self.to_tuple())

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.red, self.green, self.blue)

    def to_tensor(self, dtype: torch.dtype = torch.float64,
                  device: Optional[torch.device] = None) -> Tensor:
        return torch.tensor(self.to_tuple(), dtype=dtype, device=device)

    def to_point(self) -> 'Point':
        return Point(self.red, self.green, self.blue)

    @property
    def brightness(self) -> float:
        """Perceptual luminance (0.299R + 0.587G + 0.114B)."""
        wr, wg, wb = LUMA_COEFFICIENTS
        return wr * self.red + wg * self.green + wb * self.blue

    def hsb(self) -> Tuple[float, float, float]:
        """Hue, saturation and brightness, each in [0, 1]."""
        from ..utils.colorspace import rgb_to_hsb
        h, s, v = rgb_to_hsb(self.to_tensor().unsqueeze(0))[0].tolist()
        return (h, s, v)


@dataclass(frozen=True)
class Point:
    """A color as a vector in RGB space, used for clustering arithmetic."""

    x: float
    y: float
    z: float

    ZERO = None  # set below the class body

    @classmethod
    def from_color(cls, color: Color) -> 'Point':
        return cls(color.red, color.green, color.blue)

    @classmethod
    def from_tensor(cls, values: Tensor) -> 'Point':
        x, y, z = values.detach().cpu().tolist()
        return cls(x, y, z)

    def __add__(self, other: 'Point') -> 'Point':
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __truediv__(self, scalar: float) -> 'Point':
        return Point(self.x / scalar, self.y / scalar, self.z / scalar)

    def distance_squared(self, other: 'Point') -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return dx * dx + dy * dy + dz * dz

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_tensor(self, dtype: torch.dtype = torch.float64,
                  device: Optional[torch.device] = None) -> Tensor:
        return torch.tensor(self.to_tuple(), dtype=dtype, device=device)

    def to_color(self) -> Color:
        """Convert back to a color, clamping into the unit cube."""
        return Color(*(min(1.0, max(0.0, c)) for c in self.to_tuple()))

    @staticmethod
    def mean(points: Iterable['Point']) -> 'Point':
        """Arithmetic mean of a non-empty collection of points."""
        total = Point(0.0, 0.0, 0.0)
        count = 0
        for p in points:
            total = total + p
            count += 1
        if count == 0:
            raise ValueError("Cannot average an empty collection of points")
        return total / count


Point.ZERO = Point(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Cluster:
    """Immutable snapshot of one cluster: its center and its members."""

    center: Point
    members: Tuple[Point, ...] = ()

    @property
    def population(self) -> int:
        return len(self.members)

    @property
    def brightness(self) -> float:
        """Perceptual luminance of the center."""
        return self.center.to_color().brightness

    @property
    def color(self) -> Color:
        return self.center.to_color()

    @property
    def is_empty(self) -> bool:
        return not self.members


@dataclass
class ClusterState:
    """Cluster centers and populations at a given iteration.

    Stored as tensors so that the whole set of K centers can be compared
    between iterations in one operation.
    """

    centers: Tensor  # (K, 3)
    counts: Tensor   # (K,) members per cluster
    n_clusters: int

    def __post_init__(self):
        """Validate shapes."""
        assert self.centers.shape == (self.n_clusters, 3)
        assert self.counts.shape == (self.n_clusters,)

    @property
    def device(self) -> torch.device:
        return self.centers.device

    def empty_clusters(self) -> List[int]:
        return torch.where(self.counts == 0)[0].tolist()

    def to(self, device: torch.device) -> 'ClusterState':
        return ClusterState(
            centers=self.centers.to(device),
            counts=self.counts.to(device),
            n_clusters=self.n_clusters
        )


@dataclass
class AlgorithmState:
    """Complete state of the clustering loop after one iteration.

    Each iteration appends a fresh instance; earlier snapshots are never
    modified.
    """
    iteration: int
    cluster_state: ClusterState
    assignments: Tensor  # (n,) cluster index per point
    objective_value: float
    center_shift: float  # max squared movement of any center
    reseeded: Tuple[int, ...] = ()
    converged: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to(self, device: torch.device) -> 'AlgorithmState':
        return AlgorithmState(
            iteration=self.iteration,
            cluster_state=self.cluster_state.to(device),
            assignments=self.assignments.to(device),
            objective_value=self.objective_value,
            center_shift=self.center_shift,
            reseeded=self.reseeded,
            converged=self.converged,
            metadata=self.metadata.copy()
        )
