"""Core module for balanced bingo card generation."""

from .generator import BalancedGenerator, GenerationParams, GenerationStats, generate_bingo_cards

__all__ = ["BalancedGenerator", "GenerationParams", "GenerationStats", "generate_bingo_cards"]
