"""Abstract interface for AI players."""

from abc import ABC, abstractmethod

from ..core.types import Board, Move


class AIInterface(ABC):
    """Abstract interface for AI players.

    Implementations propose a move given the current board. The engine
    validates every proposal and asks again when one is rejected.
    """

    @abstractmethod
    def propose_move(self, board: Board) -> Move:
        """Propose the next move.

        Args:
            board: Copy of the current board

        Returns:
            Candidate move (1-indexed), not guaranteed to be legal
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get AI name for display."""
        pass
