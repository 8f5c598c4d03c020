"""Base classes and interfaces for color ranking and clustering."""

from .interfaces import (
    ColorDistance,
    AssignmentStrategy,
    CenterUpdater,
    InitializationStrategy,
    ConvergenceCriterion,
    ClusteringObjective
)

from .data_structures import (
    LUMA_COEFFICIENTS,
    SimilarityMethod,
    Color,
    Point,
    Cluster,
    ClusterState,
    AlgorithmState
)

from .clustering_base import BaseClusteringAlgorithm

__all__ = [
    # Interfaces
    'ColorDistance',
    'AssignmentStrategy',
    'CenterUpdater',
    'InitializationStrategy',
    'ConvergenceCriterion',
    'ClusteringObjective',

    # Data structures
    'LUMA_COEFFICIENTS',
    'SimilarityMethod',
    'Color',
    'Point',
    'Cluster',
    'ClusterState',
    'AlgorithmState',

    # Base algorithm
    'BaseClusteringAlgorithm'
]
