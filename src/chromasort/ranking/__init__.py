"""Similarity scoring, ranking and the caller-owned color cache."""

from .engine import SimilarityEngine, similarity, DEFAULT_PERCENTILE
from .cache import ColorCache

__all__ = [
    'SimilarityEngine',
    'similarity',
    'DEFAULT_PERCENTILE',
    'ColorCache'
]
