"""
chromasort: color similarity ranking and palette clustering.

This package provides:
- Similarity scoring of colors (hue-weighted "color" and luminance "shade")
- Ranking and percentile filtering of items by similarity to a query color
- K-means clustering of colors into dominant palettes

Example usage:
    >>> from chromasort import Color, SimilarityEngine, dominant_palette
    >>>
    >>> photo_colors = {
    ...     'sunset.jpg': Color(0.95, 0.35, 0.10),
    ...     'beach.jpg': Color(0.20, 0.55, 0.85),
    ...     'poppy.jpg': Color(0.90, 0.10, 0.10),
    ... }
    >>>
    >>> # Default query: the most common color of the collection
    >>> query = dominant_palette(list(photo_colors.values()), k=2, seed=0)[0]
    >>>
    >>> # Most similar photos first
    >>> engine = SimilarityEngine()
    >>> ranked = engine.rank(query, photo_colors)
"""

__version__ = '0.1.0'

# Value types
from .base import (
    Color,
    Point,
    Cluster,
    SimilarityMethod,
    ClusterState,
    AlgorithmState,
    LUMA_COEFFICIENTS
)

# Similarity
from .ranking import SimilarityEngine, similarity, ColorCache, DEFAULT_PERCENTILE
from .distances import (
    HueWeightedDistance,
    LuminanceDistance,
    DeltaE2000Distance,
    EuclideanDistance,
    RedmeanDistance
)

# Clustering
from .algorithms import (
    ColorKMeans,
    cluster,
    dominant_palette,
    sort_by_population,
    sort_by_brightness
)

# Import visualization
from .visualization import plot_palette, plot_color_clusters_3d

__all__ = [
    # Value types
    'Color',
    'Point',
    'Cluster',
    'SimilarityMethod',
    'ClusterState',
    'AlgorithmState',
    'LUMA_COEFFICIENTS',

    # Similarity
    'SimilarityEngine',
    'similarity',
    'ColorCache',
    'DEFAULT_PERCENTILE',
    'HueWeightedDistance',
    'LuminanceDistance',
    'DeltaE2000Distance',
    'EuclideanDistance',
    'RedmeanDistance',

    # Clustering
    'ColorKMeans',
    'cluster',
    'dominant_palette',
    'sort_by_population',
    'sort_by_brightness',

    # Visualization
    'plot_palette',
    'plot_color_clusters_3d',

    # Version
    '__version__'
]
