"""Initialization strategies for color clustering."""

from .random import ForgyInit
from .from_previous import FromPreviousInit

__all__ = [
    'ForgyInit',
    'FromPreviousInit'
]
