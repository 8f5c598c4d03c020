"""
Caller-owned color cache.

Holds the representative color computed for each photo so that it does not
have to be extracted again. The cache is an ordinary object: whoever needs
it creates it and passes it along; nothing in the library keeps one.
"""

from typing import Dict, Hashable, Iterator, Iterable, Optional, Tuple
from collections.abc import MutableMapping

from ..base.data_structures import Color


class ColorCache(MutableMapping):
    """In-memory mapping of identifier -> Color.

    Behaves like a dict, so it can be handed straight to
    :meth:`SimilarityEngine.rank` and :meth:`SimilarityEngine.filter`.
    Only Color values are accepted.
    """

    def __init__(self, initial: Optional[Iterable[Tuple[Hashable, Color]]] = None):
        self._colors: Dict[Hashable, Color] = {}
        self.hits = 0
        self.misses = 0
        if initial is not None:
            self.update(initial)

    def __getitem__(self, identifier: Hashable) -> Color:
        return self._colors[identifier]

    def __setitem__(self, identifier: Hashable, color: Color) -> None:
        if not isinstance(color, Color):
            raise TypeError(f"ColorCache only stores Color values, got {type(color).__name__}")
        self._colors[identifier] = color

    def __delitem__(self, identifier: Hashable) -> None:
        del self._colors[identifier]

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._colors)

    def __len__(self) -> int:
        return len(self._colors)

    def lookup(self, identifier: Hashable) -> Optional[Color]:
        """Return the cached color or None, counting hits and misses."""
        color = self._colors.get(identifier)
        if color is None:
            self.misses += 1
        else:
            self.hits += 1
        return color

    def missing(self, identifiers: Iterable[Hashable]) -> list:
        """Identifiers that still need a color, in input order."""
        return [identifier for identifier in identifiers if identifier not in self._colors]

    def clear(self) -> None:
        self._colors.clear()
        self.hits = 0
        self.misses = 0

    def __repr__(self) -> str:
        return f"ColorCache(size={len(self)}, hits={self.hits}, misses={self.misses})"
