"""N×N tic-tac-toe with a random opponent."""

__version__ = "0.1.0"
