"""AI module for the grid game."""

from .interface import AIInterface
from .random_ai import RandomAI


__all__ = [
    "AIInterface",
    "RandomAI",
]
