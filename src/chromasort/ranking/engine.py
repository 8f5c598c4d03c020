"""
Color similarity engine.

Scores colors against a query color with one of the similarity methods and
ranks or filters a collection of identified colors by that score.
"""

from typing import Optional, Union, List, Tuple, Dict, Any, Hashable, Mapping, Sequence
import torch
from torch import Tensor

from ..base.interfaces import ColorDistance
from ..base.data_structures import Color, SimilarityMethod
from ..distances.hsb import HueWeightedDistance
from ..distances.luminance import LuminanceDistance
from ..utils.validation import validate_colors, as_color_tensor, check_percentile


DEFAULT_PERCENTILE = 0.3

ColorItems = Union[Mapping[Hashable, Color], Sequence[Tuple[Hashable, Color]]]


def _resolve_method(method: Union[SimilarityMethod, str]) -> SimilarityMethod:
    if isinstance(method, SimilarityMethod):
        return method
    try:
        return SimilarityMethod(str(method).lower())
    except ValueError:
        raise ValueError(f"Unknown similarity method: {method!r}") from None


def _split_items(items: ColorItems) -> Tuple[List[Hashable], List[Color]]:
    if isinstance(items, Mapping):
        pairs = list(items.items())
    else:
        pairs = list(items)
    identifiers = [identifier for identifier, _ in pairs]
    colors = [color for _, color in pairs]
    return identifiers, colors


class SimilarityEngine:
    """Scores and ranks colors against a query color.

    One distance formula is bound per similarity method for the lifetime of
    the engine, so every score it produces is comparable with every other.

    Parameters
    ----------
    method : SimilarityMethod or str, default=SimilarityMethod.COLOR
        Which formula to use: 'color' (hue-weighted) or 'shade' (luminance)
    color_metric : ColorDistance, optional
        Formula for the COLOR method. Defaults to HueWeightedDistance();
        DeltaE2000Distance() is the perceptual alternative.
    shade_metric : ColorDistance, optional
        Formula for the SHADE method. Defaults to LuminanceDistance().
    device : torch.device, optional
        Device for computation

    Examples
    --------
    >>> engine = SimilarityEngine(method='color')
    >>> engine.rank(Color(0.9, 0.1, 0.1), {'a': Color(1, 0, 0), 'b': Color(0, 0, 1)})
    [('a', 0.0322...), ('b', 0.2655...)]
    """

    def __init__(self,
                 method: Union[SimilarityMethod, str] = SimilarityMethod.COLOR,
                 color_metric: Optional[ColorDistance] = None,
                 shade_metric: Optional[ColorDistance] = None,
                 device: Optional[torch.device] = None):
        self.method = _resolve_method(method)
        self.color_metric = color_metric if color_metric is not None else HueWeightedDistance()
        self.shade_metric = shade_metric if shade_metric is not None else LuminanceDistance()
        self.device = device if device is not None else torch.device('cpu')

    @property
    def metric(self) -> ColorDistance:
        """Distance formula for the current method."""
        if self.method is SimilarityMethod.SHADE:
            return self.shade_metric
        return self.color_metric

    def distance(self, a: Color, b: Color) -> float:
        """Distance between two colors (0 means identical)."""
        ta = as_color_tensor(a, device=self.device)
        tb = as_color_tensor(b, device=self.device)
        return float(self.metric.compute(ta, tb)[0].item())

    def scores(self, query: Color, colors: Union[Sequence[Color], Tensor]) -> Tensor:
        """Distances from ``query`` to every color in ``colors``.

        Args:
            query: Reference color
            colors: Sequence of colors or (n, 3) tensor

        Returns:
            (n,) tensor of distances
        """
        target = as_color_tensor(query, device=self.device)
        X = validate_colors(colors, device=self.device)
        if X.shape[0] == 0:
            return torch.zeros(0, dtype=X.dtype, device=X.device)
        return self.metric.compute(X, target)

    def rank(self, query: Color, items: ColorItems) -> List[Tuple[Hashable, float]]:
        """Rank identified colors by distance to ``query``.

        Args:
            query: Reference color
            items: Mapping of identifier -> color, or sequence of
                   (identifier, color) pairs

        Returns:
            List of (identifier, score), most similar first. Equal scores
            keep their input order.
        """
        identifiers, colors = _split_items(items)
        if not identifiers:
            return []
        values = self.scores(query, colors).tolist()
        ranked = sorted(zip(identifiers, values), key=lambda item: item[1])
        return [(identifier, float(score)) for identifier, score in ranked]

    def filter(self, query: Color, items: ColorItems,
               percentile: float = DEFAULT_PERCENTILE) -> List[Tuple[Hashable, float]]:
        """Keep the best-ranked fraction of ``items``.

        Returns the first ``min(int(n * percentile), n - 1) + 1`` entries of
        :meth:`rank`, so at least one item survives for non-empty input.

        Args:
            query: Reference color
            items: Mapping or sequence of (identifier, color) pairs
            percentile: Fraction of the collection to keep, in [0, 1]

        Returns:
            List of (identifier, score), most similar first
        """
        percentile = check_percentile(percentile)
        ranked = self.rank(query, items)
        if not ranked:
            return []
        threshold_index = min(int(len(ranked) * percentile), len(ranked) - 1)
        return ranked[:threshold_index + 1]

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'method': self.method,
            'color_metric': self.color_metric,
            'shade_metric': self.shade_metric,
            'device': self.device
        }

    def set_params(self, **params) -> 'SimilarityEngine':
        """Set parameters (sklearn compatibility)."""
        for key, value in params.items():
            if key == 'method':
                value = _resolve_method(value)
            setattr(self, key, value)
        return self

    def __repr__(self) -> str:
        return f"SimilarityEngine(method={self.method.value!r}, metric={self.metric!r})"


def similarity(a: Color, b: Color,
               method: Union[SimilarityMethod, str] = SimilarityMethod.COLOR) -> float:
    """Distance between two colors under ``method``.

    COLOR: 0.7 * circular hue difference + 0.2 * |saturation difference|
    + 0.1 * |brightness difference|, in [0, 0.65].
    SHADE: absolute difference of perceptual luminance, in [0, 1].

    The function is pure: symmetric, zero for identical colors.
    """
    return SimilarityEngine(method).distance(a, b)
