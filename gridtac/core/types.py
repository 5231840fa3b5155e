"""
Shared data types for the gridtac game.

These types are the contracts between modules.
The engine, the agents and the presentation layers all exchange these structures.
Public coordinates are 1-indexed: (1, 1) is the top-left cell.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from ..ai.interface import AIInterface


DRAW = "-"
EMPTY_MARK = "-"


# ─────────────────────────────────────────────────────────────
# PLAYER & GAME PHASE
# ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Player:
    """A participant with a symbol.

    Players without an agent are human-driven: their moves come from outside
    the engine. Players with an agent propose their own moves.
    """

    symbol: str
    agent: AIInterface | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.symbol

    @property
    def is_human(self) -> bool:
        return self.agent is None


class GamePhase(Enum):
    """Current phase of the game."""

    IN_PROGRESS = auto()
    WON = auto()
    DRAW = auto()


# ─────────────────────────────────────────────────────────────
# BOARD REPRESENTATION
# ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Position:
    """Grid position (1-indexed)."""

    line: int
    column: int


@dataclass(frozen=True)
class Move:
    """A candidate move; only checked for positivity here, bounds are the engine's job."""

    line: int
    column: int

    @property
    def valid(self) -> bool:
        return all(
            isinstance(v, int) and not isinstance(v, bool) and v > 0
            for v in (self.line, self.column)
        )

    def __str__(self) -> str:
        return f"({self.line}, {self.column})"


class Board:
    """
    Square grid of cells.

    Each cell holds None (empty) or a player symbol. The grid is stored
    0-indexed internally; every public accessor takes 1-indexed coordinates.
    """

    def __init__(self, size: int):
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise ValueError(f"Board size must be a positive integer (got {size!r})")
        self.size = size
        self.grid: list[list[str | None]] = [[None] * size for _ in range(size)]

    def __len__(self) -> int:
        return self.size

    def contains(self, line: int, column: int) -> bool:
        """True if (line, column) lies on the board."""
        return 1 <= line <= self.size and 1 <= column <= self.size

    def cell(self, line: int, column: int) -> str | None:
        return self.grid[line - 1][column - 1]

    def place(self, line: int, column: int, symbol: str) -> None:
        self.grid[line - 1][column - 1] = symbol

    def is_empty(self, line: int, column: int) -> bool:
        return self.cell(line, column) is None

    def empty_cells(self) -> list[Position]:
        """All empty positions, row by row."""
        return [
            Position(line=r + 1, column=c + 1)
            for r, row in enumerate(self.grid)
            for c, cell in enumerate(row)
            if cell is None
        ]

    @property
    def is_full(self) -> bool:
        return all(cell is not None for row in self.grid for cell in row)

    def rows(self) -> list[list[str | None]]:
        """Copy of the grid, for renderers."""
        return [list(row) for row in self.grid]

    def copy(self) -> Board:
        """Create a deep copy of the board."""
        board = Board(self.size)
        board.grid = self.rows()
        return board

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid

    def __str__(self) -> str:
        return "\n".join(
            " ".join(cell if cell is not None else EMPTY_MARK for cell in row)
            for row in self.grid
        )


# ─────────────────────────────────────────────────────────────
# GAME STATE
# ─────────────────────────────────────────────────────────────


@dataclass
class GameState:
    """Complete game state snapshot."""

    board: Board
    phase: GamePhase
    current_player: Player
    winner: str | None = None
    winning_positions: list[Position] = field(default_factory=list)
    turn_number: int = 1

    @property
    def outcome(self) -> str | None:
        """None while in progress, the winner's symbol, or DRAW."""
        if self.phase == GamePhase.DRAW:
            return DRAW
        return self.winner

    @property
    def is_over(self) -> bool:
        return self.phase != GamePhase.IN_PROGRESS

    def copy(self) -> GameState:
        return GameState(
            board=self.board.copy(),
            phase=self.phase,
            current_player=self.current_player,
            winner=self.winner,
            winning_positions=self.winning_positions.copy(),
            turn_number=self.turn_number,
        )
