"""
Dominant-color palettes.

Turns a cluster list into an ordered palette. The first palette entry is the
natural default query color for a similarity search.
"""

from typing import List, Optional, Union, Sequence
import torch

from ..base.data_structures import Cluster, Color
from .kmeans import cluster


PALETTE_ORDERS = ('population', 'brightness', 'index')


def sort_by_population(clusters: Sequence[Cluster]) -> List[Cluster]:
    """Largest clusters first; equal populations keep their input order."""
    return sorted(clusters, key=lambda c: c.population, reverse=True)


def sort_by_brightness(clusters: Sequence[Cluster]) -> List[Cluster]:
    """Brightest centers first (perceptual luminance)."""
    return sorted(clusters, key=lambda c: c.brightness, reverse=True)


def dominant_palette(colors,
                     k: int = 5,
                     order: str = 'population',
                     seed: Optional[Union[int, torch.Generator]] = None,
                     **kwargs) -> List[Color]:
    """Cluster ``colors`` and return the center colors as a palette.

    Args:
        colors: Anything :func:`cluster` accepts
        k: Maximum palette size
        order: 'population' (most common first), 'brightness' (brightest
               first) or 'index' (cluster order)
        seed: Seed for the clustering
        **kwargs: Forwarded to :func:`cluster`

    Returns:
        List of at most ``k`` colors
    """
    if order not in PALETTE_ORDERS:
        raise ValueError(f"Unknown palette order {order!r}; expected one of {PALETTE_ORDERS}")

    clusters = cluster(colors, k, seed, **kwargs)
    if order == 'population':
        clusters = sort_by_population(clusters)
    elif order == 'brightness':
        clusters = sort_by_brightness(clusters)

    return [c.color for c in clusters]
