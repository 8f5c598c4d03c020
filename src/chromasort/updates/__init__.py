"""Center update policies for color clustering."""

from .mean import MeanUpdater
from .medoid import MedoidUpdater

__all__ = [
    'MeanUpdater',
    'MedoidUpdater'
]
