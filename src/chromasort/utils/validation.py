"""
Input validation utilities.

Provides functions for converting the many shapes in which callers hand over
colors (Color/Point objects, tuples, numpy arrays, tensors) into a single
(n, 3) tensor, with range and sanity checks.
"""

from typing import Optional, Union, Sequence, Any
import torch
from torch import Tensor
import numpy as np

from ..base.data_structures import Color, Point


ColorsLike = Union[Tensor, np.ndarray, Sequence[Any]]


def _row_to_tuple(item: Any) -> tuple:
    if isinstance(item, Color):
        return item.to_tuple()
    if isinstance(item, Point):
        return item.to_tuple()
    if isinstance(item, (tuple, list)):
        if len(item) not in (3, 4):
            raise ValueError(f"Expected 3 or 4 channels, got {len(item)}")
        return tuple(float(c) for c in item[:3])
    raise TypeError(f"Cannot interpret {type(item).__name__} as a color")


def validate_colors(X: ColorsLike,
                    dtype: torch.dtype = torch.float64,
                    device: Optional[torch.device] = None,
                    ensure_min_samples: int = 0,
                    check_range: bool = True) -> Tensor:
    """Validate and convert input colors to an (n, 3) tensor.

    Args:
        X: Colors as a tensor/array of shape (n, 3) or (n, 4), or a sequence
           of Color, Point or channel tuples. A trailing alpha channel is
           dropped.
        dtype: Target data type
        device: Target device
        ensure_min_samples: Minimum number of colors required
        check_range: Whether to reject channels outside [0, 1]

    Returns:
        Validated (n, 3) tensor

    Raises:
        ValueError: If validation fails
        TypeError: If the input type is not understood
    """
    if isinstance(X, Tensor):
        X = X.to(dtype=dtype, device=device)
    elif isinstance(X, np.ndarray):
        X = torch.from_numpy(np.ascontiguousarray(X)).to(dtype=dtype, device=device)
    elif isinstance(X, (list, tuple)):
        rows = [_row_to_tuple(item) for item in X]
        if rows:
            X = torch.tensor(rows, dtype=dtype, device=device)
        else:
            X = torch.zeros((0, 3), dtype=dtype, device=device)
    else:
        raise TypeError(f"Cannot convert {type(X)} to tensor")

    if X.dim() == 1 and X.shape[0] in (3, 4):
        X = X.unsqueeze(0)
    if X.dim() != 2:
        raise ValueError(f"Expected 2D array, got {X.dim()}D")
    if X.shape[1] == 4:
        X = X[:, :3]
    if X.shape[1] != 3:
        raise ValueError(f"Expected 3 color channels, got {X.shape[1]}")

    n_samples = X.shape[0]
    if n_samples < ensure_min_samples:
        raise ValueError(f"Found {n_samples} colors, but need at least "
                         f"{ensure_min_samples}")

    if n_samples > 0:
        if torch.isnan(X).any():
            raise ValueError("Input contains NaN values")
        if torch.isinf(X).any():
            raise ValueError("Input contains infinite values")
        if check_range and ((X < 0.0).any() or (X > 1.0).any()):
            raise ValueError("Color channels must be in [0, 1]")

    return X


def as_color_tensor(color: Union[Color, Point, Sequence[float], Tensor],
                    dtype: torch.dtype = torch.float64,
                    device: Optional[torch.device] = None) -> Tensor:
    """Validate a single color and return it as a (3,) tensor."""
    if isinstance(color, (Color, Point)):
        color = [color]
    elif isinstance(color, (tuple, list)) and color and not isinstance(color[0], (Color, Point, tuple, list)):
        color = [tuple(color)]
    X = validate_colors(color, dtype=dtype, device=device)
    if X.shape[0] != 1:
        raise ValueError(f"Expected a single color, got {X.shape[0]}")
    return X[0]


def check_n_clusters(n_clusters: int) -> None:
    """Validate number of clusters.

    Unlike most k-means implementations, requesting more clusters than there
    are colors is allowed (each color then becomes its own cluster).

    Raises:
        TypeError: If not an int
        ValueError: If not positive
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)):
        raise TypeError(f"n_clusters must be int, got {type(n_clusters)}")

    if n_clusters <= 0:
        raise ValueError(f"n_clusters must be positive, got {n_clusters}")


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> torch.Generator:
    """Create generator from random state.

    Args:
        random_state: Seed, generator, or None for a non-deterministic seed

    Returns:
        CPU generator
    """
    if random_state is None:
        generator = torch.Generator()
        generator.seed()
        return generator
    elif isinstance(random_state, (int, np.integer)) and not isinstance(random_state, bool):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    elif isinstance(random_state, torch.Generator):
        return random_state
    else:
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")


def check_percentile(percentile: float) -> float:
    """Validate a fraction in [0, 1]."""
    percentile = float(percentile)
    if not 0.0 <= percentile <= 1.0:
        raise ValueError(f"percentile must be in [0, 1], got {percentile}")
    return percentile
