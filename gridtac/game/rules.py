"""Rules for an N×N grid game won by a full row, column or diagonal."""


from ..core.types import Board, Move, Position


class GridRules:
    """Generalized tic-tac-toe rules.

    Win condition: a whole line of the board (row, column, main diagonal or
    anti-diagonal) holding the mover's symbol. The win length always equals
    the board size.
    """

    def is_valid_move(self, board: Board, move: Move) -> bool:
        """Check if a move is valid.

        Args:
            board: Current board
            move: Candidate move (1-indexed)

        Returns:
            True if both coordinates are positive, on the board, and the cell is empty
        """
        if not move.valid:
            return False
        if not board.contains(move.line, move.column):
            return False
        return board.is_empty(move.line, move.column)

    def lines_through(self, board: Board, move: Move) -> list[list[Position]]:
        """The four candidate lines for a move.

        Row and column follow the move. Both diagonals are always included,
        whether or not the move lies on them.
        """
        size = board.size
        indexes = range(1, size + 1)
        return [
            [Position(move.line, i) for i in indexes],
            [Position(i, move.column) for i in indexes],
            [Position(i, i) for i in indexes],
            [Position(size - i + 1, i) for i in indexes],
        ]

    def winning_line(self, board: Board, move: Move, symbol: str) -> list[Position]:
        """Check whether the move completed a line for symbol.

        Returns:
            Positions of the first complete line, or empty list if no win
        """
        for line in self.lines_through(board, move):
            if all(board.cell(p.line, p.column) == symbol for p in line):
                return line
        return []

    def is_draw(self, board: Board) -> bool:
        """Board has no empty cells left. Callers check for a win first."""
        return board.is_full

    def apply_move(self, board: Board, move: Move, symbol: str) -> None:
        """Place symbol on the board in place.

        Raises:
            ValueError: If move is invalid
        """
        if not self.is_valid_move(board, move):
            raise ValueError(f"Invalid move: {move}")
        board.place(move.line, move.column, symbol)
