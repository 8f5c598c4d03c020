# tests/utils.py
"""
Small, reusable helpers used across the chromasort test suite.

Functions:
- to_numpy_2d(x): convert an (n, 3) tensor/array/list of Points to numpy.
- perm_invariant_center_match(C, G): best matching of learned centers to ground truth; returns (max_err, perm).
- labels_equal_up_to_perm(y1, y2, K): whether two labelings agree up to renaming clusters.
- time_block(label, meta=None): context manager that prints wall-clock time with optional metadata.
- print_timing(label, seconds, **meta): convenience printer for timings (used by time_block).

Notes:
- Keep dependencies light; torch is optional.
"""

from __future__ import annotations

import json
import itertools
import time
from contextlib import contextmanager
from typing import Any, Dict, Sequence, Tuple, Union

import numpy as np

try:
    import torch
    from torch import Tensor as TorchTensor
except Exception:  # pragma: no cover
    torch = None  # type: ignore
    TorchTensor = None  # type: ignore

ArrayLike = Union[np.ndarray, "TorchTensor", Sequence[Any]]


def _is_torch(x: Any) -> bool:
    return (torch is not None) and isinstance(x, torch.Tensor)


def to_numpy_2d(x: ArrayLike) -> np.ndarray:
    """Convert centers (tensor, array, or Points/Colors/Clusters) to an (n, 3) array."""
    if _is_torch(x):
        return x.detach().cpu().numpy()
    if isinstance(x, (list, tuple)) and x and hasattr(x[0], "to_tuple"):
        return np.array([item.to_tuple() for item in x], dtype=np.float64)
    if isinstance(x, (list, tuple)) and x and hasattr(x[0], "center"):
        return np.array([item.center.to_tuple() for item in x], dtype=np.float64)
    arr = np.asarray(x, dtype=np.float64)
    if arr.ndim != 2:
        raise ValueError(f"Expected 2D array, got shape {arr.shape}")
    return arr


def perm_invariant_center_match(
    C: ArrayLike, G: ArrayLike
) -> Tuple[float, Tuple[int, ...]]:
    """
    Match learned centers C to ground-truth centers G over all permutations.

    Parameters
    ----------
    C : (k, 3) learned centers
    G : (k, 3) ground-truth centers

    Returns
    -------
    (max_err, best_perm)
      max_err  : largest Euclidean distance between a center and its match
                 under the best permutation
      best_perm: tuple p such that G[p[i]] is matched to C[i]

    Notes
    -----
    O(k!) brute force; tests here keep k small.
    """
    C_np = to_numpy_2d(C)
    G_np = to_numpy_2d(G)
    if C_np.shape != G_np.shape:
        raise ValueError(f"Shape mismatch: C {C_np.shape} vs G {G_np.shape}")
    k = C_np.shape[0]
    if k == 0:
        return 0.0, tuple()

    D = np.linalg.norm(C_np[:, None, :] - G_np[None, :, :], axis=2)

    best_err = np.inf
    best_perm: Tuple[int, ...] = tuple(range(k))
    for perm in itertools.permutations(range(k)):
        err = float(np.max(D[np.arange(k), perm]))
        if err < best_err:
            best_err = err
            best_perm = perm
    return best_err, best_perm


def labels_equal_up_to_perm(y1: np.ndarray, y2: np.ndarray, K: int) -> bool:
    """Return True if y2 can be relabeled to equal y1 exactly."""
    y1 = np.asarray(y1)
    y2 = np.asarray(y2)
    for perm in itertools.permutations(range(K)):
        mapping = np.array(perm)
        if np.array_equal(y1, mapping[y2]):
            return True
    return False


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Example
    -------
    >>> with time_block("fit", {"n": 300, "K": 3}):
    ...     model.fit(X)

    Output
    ------
    [timing] fit {"n":300,"K":3} 0.012s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        print_timing(label, dt, **(meta or {}))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """
    Print timing in a compact, machine-readable single line.

    Example:
    [timing] fit {"n":300,"K":3} 0.012s
    """
    meta_str = ""
    if meta:
        # Compact JSON to make it easy to parse if needed
        try:
            meta_str = " " + json.dumps(meta, separators=(",", ":"))
        except Exception:
            meta_str = " " + repr(meta)
    print(f"[timing] {label}{meta_str} {seconds:.3f}s")
