"""Random move AI."""

import random

from ..core.types import Board, Move
from .interface import AIInterface


class RandomAI(AIInterface):
    """Uniform random move AI.

    By default it picks line and column independently from the whole board
    without looking at its contents, so it can propose occupied cells; the
    engine discards those and asks again. With sample_empty_only it picks
    among empty cells instead.
    """

    def __init__(self, seed: int | None = None, sample_empty_only: bool = False):
        """
        Args:
            seed: Random seed for reproducible games
            sample_empty_only: Only propose empty cells
        """
        self.rng = random.Random(seed)
        self.sample_empty_only = sample_empty_only

    def propose_move(self, board: Board) -> Move:
        if self.sample_empty_only:
            empty = board.empty_cells()
            if not empty:
                raise ValueError("No empty cells available")
            position = self.rng.choice(empty)
            return Move(position.line, position.column)

        return Move(
            line=self.rng.randint(1, board.size),
            column=self.rng.randint(1, board.size),
        )

    def get_name(self) -> str:
        return "Random AI (empty cells)" if self.sample_empty_only else "Random AI"
