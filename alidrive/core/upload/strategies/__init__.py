"""Upload strategies."""
from .chunking import BasePartStrategy, FixedSizePartStrategy

__all__ = [
    'BasePartStrategy',
    'FixedSizePartStrategy',
]
