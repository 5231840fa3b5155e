"""Game logic module for the N×N grid game."""

from .engine import GameEngine
from .rules import GridRules


__all__ = [
    "GameEngine",
    "GridRules",
]
