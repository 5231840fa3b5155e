"""Game engine for N×N grid game state management."""

import logging

from ..core.bus import EventBus, get_event_bus
from ..core.events import Event, EventType
from ..core.types import Board, GamePhase, GameState, Move, Player
from .rules import GridRules


logger = logging.getLogger(__name__)


class GameEngine:
    """Manages game state and enforces rules.

    Stateful engine that:
    - Owns the board and whose turn it is
    - Validates moves, silently ignoring illegal ones
    - Detects wins/draws
    - Plays agent-driven turns until a human is to move or the game ends
    - Emits events for state changes
    """

    def __init__(
        self,
        board_size: int = 3,
        player1: Player | None = None,
        player2: Player | None = None,
        rules: GridRules | None = None,
        bus: EventBus | None = None,
    ):
        """Initialize game engine and start a fresh game.

        Args:
            board_size: Cells per side (must be >= 1)
            player1: Moves first (default: human X)
            player2: Moves second (default: human O)
            rules: Game rules (uses defaults if None)
            bus: Event bus (uses global if None)

        Raises:
            ValueError: If board_size is not a positive integer
        """
        if isinstance(board_size, bool) or not isinstance(board_size, int) or board_size < 1:
            raise ValueError(f"Board size must be a positive integer (got {board_size!r})")

        self.board_size = board_size
        self.player1 = player1 or Player("X")
        self.player2 = player2 or Player("O")
        if self.player1.symbol == self.player2.symbol:
            logger.warning(
                "Both players use symbol %r; wins cannot be told apart", self.player1.symbol
            )
        self.rules = rules or GridRules()
        self.bus = bus or get_event_bus()
        self._state = self._initial_state()

        self.bus.publish(Event(
            type=EventType.GAME_STARTED,
            data={
                "board_size": board_size,
                "players": [self.player1.symbol, self.player2.symbol],
            },
            source="game_engine"
        ))

    def _initial_state(self) -> GameState:
        return GameState(
            board=Board(self.board_size),
            phase=GamePhase.IN_PROGRESS,
            current_player=self.player1,
        )

    def reset(self) -> GameState:
        """Discard the board and outcome; same players and size, player1 to move."""
        self._state = self._initial_state()
        self.bus.publish(Event(
            type=EventType.GAME_RESET,
            data={"board_size": self.board_size},
            source="game_engine"
        ))
        return self.state

    def make_move(self, line: int, column: int) -> GameState:
        """Submit a move for the current player (1-indexed)."""
        return self.submit_move(Move(line, column))

    def submit_move(self, move: Move) -> GameState:
        """Submit a move, then let agents play their turns.

        Illegal moves and moves after the game is over are ignored without
        error. A move submitted while an agent holds the turn is ignored too;
        the agents simply play.

        Returns:
            Game state after the call
        """
        if self._state.current_player.is_human:
            self._process_move(move)
        else:
            logger.debug("Ignoring external move %s: %s is agent-driven",
                         move, self._state.current_player)
        return self.run_agents()

    def run_agents(self) -> GameState:
        """Play agent turns until a human must move or the game ends.

        Agents may propose illegal moves; those are discarded and the agent
        is asked again.
        """
        while not self.is_game_over and not self._state.current_player.is_human:
            player = self._state.current_player
            move = player.agent.propose_move(self._state.board.copy())
            logger.debug("AI %s: line %s column %s", player.symbol, move.line, move.column)
            self.bus.publish(Event(
                type=EventType.AGENT_PROPOSED,
                data={"player": player.symbol, "line": move.line, "column": move.column},
                source="game_engine"
            ))
            self._process_move(move)
        return self.state

    def _process_move(self, move: Move) -> bool:
        """Apply one move for the current player. Returns True if accepted."""
        state = self._state
        if state.is_over:
            return False

        player = state.current_player
        if not self.rules.is_valid_move(state.board, move):
            logger.debug("Rejected move %s for %s", move, player)
            self.bus.publish(Event(
                type=EventType.INVALID_MOVE,
                data={"player": player.symbol, "line": move.line, "column": move.column},
                source="game_engine"
            ))
            return False

        new_board = state.board.copy()
        self.rules.apply_move(new_board, move, player.symbol)
        winning_positions = self.rules.winning_line(new_board, move, player.symbol)

        if winning_positions:
            self._state = GameState(
                board=new_board,
                phase=GamePhase.WON,
                current_player=player,
                winner=player.symbol,
                winning_positions=winning_positions,
                turn_number=state.turn_number,
            )
        elif self.rules.is_draw(new_board):
            self._state = GameState(
                board=new_board,
                phase=GamePhase.DRAW,
                current_player=player,
                turn_number=state.turn_number,
            )
        else:
            self._state = GameState(
                board=new_board,
                phase=GamePhase.IN_PROGRESS,
                current_player=self._other(player),
                turn_number=state.turn_number + 1,
            )

        logger.debug("%s played %s", player, move)
        self.bus.publish(Event(
            type=EventType.MOVE_MADE,
            data={"player": player.symbol, "line": move.line, "column": move.column},
            source="game_engine"
        ))

        if self._state.phase == GamePhase.WON:
            logger.info("%s won on turn %d", player, self._state.turn_number)
            self.bus.publish(Event(
                type=EventType.GAME_WON,
                data={
                    "winner": player.symbol,
                    "positions": [(p.line, p.column) for p in winning_positions],
                },
                source="game_engine"
            ))
        elif self._state.phase == GamePhase.DRAW:
            logger.info("Draw after %d turns", self._state.turn_number)
            self.bus.publish(Event(
                type=EventType.GAME_DRAW,
                source="game_engine"
            ))
        else:
            self.bus.publish(Event(
                type=EventType.TURN_CHANGED,
                data={"player": self._state.current_player.symbol, "turn": self._state.turn_number},
                source="game_engine"
            ))

        return True

    def _other(self, player: Player) -> Player:
        return self.player2 if player is self.player1 else self.player1

    def status_text(self) -> str:
        """Human-readable status line for displays."""
        if self._state.phase == GamePhase.DRAW:
            return "draw"
        if self._state.phase == GamePhase.WON:
            return f"{self._state.winner} won"
        return f"it is {self._state.current_player.symbol}'s turn"

    def to_text(self) -> str:
        """Board dump for debugging: one row per line, '-' for empty cells."""
        text = str(self._state.board)
        if self.outcome is not None:
            text += f" winner: {self.outcome}"
        return text

    def __str__(self) -> str:
        return self.to_text()

    @property
    def state(self) -> GameState:
        """Snapshot of the current game state; changing it does not affect the game."""
        return self._state.copy()

    @property
    def board(self) -> Board:
        """Copy of the board; the session board changes only through moves."""
        return self._state.board.copy()

    @property
    def players(self) -> tuple[Player, Player]:
        return self.player1, self.player2

    @property
    def current_player(self) -> Player:
        return self._state.current_player

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    @property
    def winner(self) -> str | None:
        """Symbol of the winner, None if nobody has won (yet)."""
        return self._state.winner

    @property
    def outcome(self) -> str | None:
        """None while in progress, the winner's symbol, or DRAW."""
        return self._state.outcome

    @property
    def is_draw(self) -> bool:
        return self._state.phase == GamePhase.DRAW

    @property
    def is_game_over(self) -> bool:
        """Check if game is over."""
        return self._state.is_over
