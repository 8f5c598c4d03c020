"""Clustering algorithm implementations."""

from .kmeans import (
    ColorKMeans,
    KMeansObjective,
    cluster,
    DEFAULT_MAX_ITER,
    DEFAULT_TOL,
    DEFAULT_N_INIT
)
from .palette import sort_by_population, sort_by_brightness, dominant_palette

__all__ = [
    'ColorKMeans',
    'KMeansObjective',
    'cluster',
    'DEFAULT_MAX_ITER',
    'DEFAULT_TOL',
    'DEFAULT_N_INIT',
    'sort_by_population',
    'sort_by_brightness',
    'dominant_palette'
]
