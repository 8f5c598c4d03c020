"""
Initialization from previous solution or custom centers.

Useful for warm starts, e.g. refining last session's palette with the colors
of newly added photos.
"""

from typing import List, Optional, Union, Sequence
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..base.data_structures import ClusterState, Cluster, Color, Point
from ..utils.validation import validate_colors


class FromPreviousInit(InitializationStrategy):
    """Initialize from previous cluster centers or custom starting points.

    Accepts either:
    - A tensor of shape (n_clusters, 3) with initial centers
    - A ClusterState object from a previous run
    - A list of Cluster snapshots, Points or Colors
    """

    def __init__(self, initial_state: Union[Tensor, ClusterState,
                                            Sequence[Union[Cluster, Point, Color]]]):
        """
        Args:
            initial_state: Previous solution to use for initialization
        """
        self.initial_state = initial_state

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> Tensor:
        """Initialize from previous state.

        Args:
            points: (n, 3) data points (used for dtype/device)
            n_clusters: Expected number of clusters
            generator: Ignored

        Returns:
            (K, 3) tensor of centers
        """
        if isinstance(self.initial_state, Tensor):
            centers = self.initial_state
        elif isinstance(self.initial_state, ClusterState):
            centers = self.initial_state.centers
        elif isinstance(self.initial_state, (list, tuple)):
            centers = [item.center if isinstance(item, Cluster) else item
                       for item in self.initial_state]
        else:
            raise TypeError(f"Unknown initial_state type: {type(self.initial_state)}")

        centers = validate_colors(centers, dtype=points.dtype, device=points.device)

        if centers.shape[0] != n_clusters:
            raise ValueError(f"Initial centers has {centers.shape[0]} clusters, "
                             f"but n_clusters={n_clusters}")

        return centers.clone()
