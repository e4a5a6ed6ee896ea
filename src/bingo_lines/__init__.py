"""Balanced, line-unique 4x4 bingo card generation."""

from .api import generate_cards
from .models import Card, GenerationResult
from .version import __version__

__all__ = ["Card", "GenerationResult", "generate_cards", "__version__"]
