"""
CLI for the gridtac game.

Usage:
    uv run python -m gridtac.cli.main --help
    uv run python -m gridtac.cli.main play --size 4
    uv run python -m gridtac.cli.main play --ai-first --seed 7
    uv run python -m gridtac.cli.main watch --size 5 --delay 0
    uv run python -m gridtac.cli.main dashboard --port 8502
"""

import logging
import shlex
import subprocess
import sys
import time
from pathlib import Path
from typing import Annotated

import typer

from ..ai.random_ai import RandomAI
from ..core.bus import EventBus
from ..core.config import LogLevel, get_settings
from ..core.events import Event, EventType
from ..core.types import Board, Move, Player
from ..game.engine import GameEngine


logger = logging.getLogger(__name__)

app = typer.Typer(
    name="gridtac",
    help="N×N tic-tac-toe against a random opponent.",
    add_completion=False,
)


def configure_logging(level: LogLevel | None = None) -> None:
    """Apply log settings, with an optional level override."""
    settings = get_settings().log
    logging.basicConfig(
        level=(level or settings.level).value,
        format=settings.format,
        force=True,
    )


def board_to_ascii(board: Board) -> str:
    """Convert board to ASCII display with 1-indexed headers."""
    size = board.size
    marks = [cell for row in board.grid for cell in row if cell is not None]
    width = max([1, len(str(size))] + [len(mark) for mark in marks])
    separator = "   +" + ("-" * (width + 2) + "+") * size

    header = "    " + "".join(f" {c:^{width}}  " for c in range(1, size + 1))
    lines = ["\n" + header.rstrip(), separator]
    for i, row in enumerate(board.grid, start=1):
        cells = "|".join(f" {(cell or ''):^{width}} " for cell in row)
        lines.append(f"{i:>2} |{cells}|")
        lines.append(separator)

    return "\n".join(lines)


def print_status(engine: GameEngine) -> None:
    """Print board and status line."""
    typer.echo(board_to_ascii(engine.board))
    typer.echo(f"\nTurn: {engine.state.turn_number}")
    typer.echo(engine.status_text())


def parse_move(text: str) -> Move:
    """Parse 'line column' (space or comma separated).

    Raises:
        ValueError: If the text is not two integers
    """
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        raise ValueError(f"Expected 'line column', got {text!r}")
    return Move(int(parts[0]), int(parts[1]))


def _resolve_size(size: int | None) -> int:
    size = size if size is not None else get_settings().game.board_size
    if size < 1:
        typer.echo(f"Board size must be at least 1 (got {size})", err=True)
        raise typer.Exit(1)
    return size


def _echo_agent_moves(engine: GameEngine, delay: float = 0.0):
    """Build a MOVE_MADE handler that reports agent moves."""

    def handler(event: Event) -> None:
        symbol = event.data["player"]
        player = next(p for p in engine.players if p.symbol == symbol)
        if player.is_human:
            return
        typer.echo(f"\n🤖 {symbol} ({player.agent.get_name()}) played "
                   f"line {event.data['line']}, column {event.data['column']}")
        if delay > 0:
            typer.echo(board_to_ascii(engine.board))
            time.sleep(delay)

    return handler


@app.command()
def play(
    size: Annotated[int | None, typer.Option("--size", "-n", help="Board size (cells per side)")] = None,
    symbol: Annotated[str | None, typer.Option("--symbol", help="Your symbol")] = None,
    ai_symbol: Annotated[str | None, typer.Option("--ai-symbol", help="Opponent symbol")] = None,
    ai_first: Annotated[bool, typer.Option("--ai-first", help="Opponent plays first")] = False,
    seed: Annotated[int | None, typer.Option("--seed", "-s", help="Random seed")] = None,
    empty_only: Annotated[bool, typer.Option("--empty-only", help="Opponent only picks empty cells")] = False,
    log_level: Annotated[LogLevel | None, typer.Option("--log-level", case_sensitive=False, help="Log level")] = None,
):
    """
    Play against the random opponent.

    Enter moves as 'line column' (1-indexed), 'q' to quit.
    """
    configure_logging(log_level)
    settings = get_settings()
    size = _resolve_size(size)
    symbol = symbol or settings.game.human_symbol
    ai_symbol = ai_symbol or settings.game.ai_symbol
    if symbol == ai_symbol:
        typer.echo(f"Symbols must differ (both are {symbol!r})", err=True)
        raise typer.Exit(1)

    ai = RandomAI(
        seed=seed if seed is not None else settings.ai.seed,
        sample_empty_only=empty_only or settings.ai.sample_empty_only,
    )
    human = Player(symbol)
    opponent = Player(ai_symbol, agent=ai)
    first_is_ai = ai_first or not settings.game.human_first
    players = (opponent, human) if first_is_ai else (human, opponent)

    bus = EventBus()
    engine = GameEngine(size, *players, bus=bus)
    bus.subscribe(EventType.MOVE_MADE, _echo_agent_moves(engine))

    typer.echo("\n" + "=" * 50)
    typer.echo(f"  TIC-TAC-TOE {size}×{size}")
    typer.echo("=" * 50)
    typer.echo(f"\nYou: {symbol}   Opponent: {ai_symbol} ({ai.get_name()})")
    typer.echo("Enter 'line column' to play, 'q' to quit\n")

    engine.run_agents()

    while not engine.is_game_over:
        print_status(engine)
        while True:
            try:
                user_input = typer.prompt(f"\n👤 Your move (1-{size} 1-{size})")
            except (KeyboardInterrupt, typer.Abort):
                typer.echo("\nGame quit.")
                return
            if user_input.strip().lower() == "q":
                typer.echo("Game quit.")
                return
            try:
                move = parse_move(user_input)
            except ValueError:
                typer.echo(f"Enter two numbers between 1 and {size}")
                continue
            if not engine.rules.is_valid_move(engine.board, move):
                typer.echo(f"Invalid! {move} is off the board or taken")
                continue
            engine.submit_move(move)
            break

    print_status(engine)


@app.command()
def watch(
    size: Annotated[int | None, typer.Option("--size", "-n", help="Board size (cells per side)")] = None,
    seed: Annotated[int | None, typer.Option("--seed", "-s", help="Random seed")] = None,
    delay: Annotated[float, typer.Option("--delay", help="Pause between moves in seconds")] = 0.5,
    log_level: Annotated[LogLevel | None, typer.Option("--log-level", case_sensitive=False, help="Log level")] = None,
):
    """Watch two random agents play each other."""
    configure_logging(log_level)
    settings = get_settings()
    size = _resolve_size(size)
    seed = seed if seed is not None else settings.ai.seed
    empty_only = settings.ai.sample_empty_only

    first = Player(settings.game.human_symbol,
                   agent=RandomAI(seed=seed, sample_empty_only=empty_only))
    second = Player(settings.game.ai_symbol,
                    agent=RandomAI(seed=None if seed is None else seed + 1,
                                   sample_empty_only=empty_only))

    bus = EventBus()
    engine = GameEngine(size, first, second, bus=bus)
    bus.subscribe(EventType.MOVE_MADE, _echo_agent_moves(engine, delay=delay))

    typer.echo(f"{first.symbol} vs {second.symbol} on {size}×{size}\nPress Ctrl+C to stop\n")
    try:
        engine.run_agents()
    except KeyboardInterrupt:
        typer.echo("\nStopped.")

    print_status(engine)


@app.command()
def dashboard(
    port: Annotated[int | None, typer.Option("--port", "-p", help="Streamlit server port")] = None,
):
    """Open the browser dashboard."""
    port = port if port is not None else get_settings().ui.port
    script = Path(__file__).resolve().parents[1] / "app" / "game_dashboard.py"
    cmd = [sys.executable, "-m", "streamlit", "run", str(script), "--server.port", str(port)]
    logger.info("Launching dashboard on port %d", port)
    typer.echo("Running: " + " ".join(shlex.quote(part) for part in cmd))
    try:
        rc = subprocess.call(cmd)
    except FileNotFoundError as e:
        typer.echo(f"Could not start streamlit: {e}", err=True)
        raise typer.Exit(1) from e
    if rc != 0:
        raise typer.Exit(rc)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
