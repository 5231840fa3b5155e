"""Streamlit dashboard for the grid game.

Play against the random opponent in the browser. The page only reads engine
state and forwards clicks; all rules live in the engine.

    uv run streamlit run gridtac/app/game_dashboard.py
"""

import streamlit as st

from gridtac.ai.random_ai import RandomAI
from gridtac.core.bus import EventBus
from gridtac.core.config import MAX_BOARD_SIZE, get_settings
from gridtac.core.events import Event, EventType
from gridtac.core.types import GamePhase, Player
from gridtac.game.engine import GameEngine


MAX_LOG_ENTRIES = 100


def _format_event(event: Event) -> str | None:
    data = event.data or {}
    if event.type == EventType.MOVE_MADE:
        return f"{data['player']} played line {data['line']}, column {data['column']}"
    if event.type == EventType.GAME_WON:
        return f"🏆 {data['winner']} won"
    if event.type == EventType.GAME_DRAW:
        return "🤝 Draw"
    if event.type == EventType.GAME_RESET:
        return "🔄 Board cleared"
    if event.type == EventType.GAME_STARTED:
        return f"🆕 New {data['board_size']}×{data['board_size']} game"
    return None


def new_game(board_size: int) -> None:
    """Build a fresh engine with one human and one random opponent."""
    settings = get_settings()
    human = Player(settings.game.human_symbol)
    opponent = Player(
        settings.game.ai_symbol,
        agent=RandomAI(seed=settings.ai.seed, sample_empty_only=settings.ai.sample_empty_only),
    )
    players = (human, opponent) if settings.game.human_first else (opponent, human)

    log: list[str] = []

    def record(event: Event) -> None:
        entry = _format_event(event)
        if entry:
            log.append(entry)
            del log[:-MAX_LOG_ENTRIES]

    bus = EventBus()
    bus.subscribe_all(record)
    st.session_state.game_log = log
    st.session_state.engine = GameEngine(board_size, *players, bus=bus)
    st.session_state.engine_size = board_size
    st.session_state.engine.run_agents()


def init_session_state():
    """Initialize session state."""
    if "board_size" not in st.session_state:
        st.session_state.board_size = get_settings().game.board_size
    if "engine" not in st.session_state:
        new_game(int(st.session_state.board_size))


def on_cell_click(line: int, column: int) -> None:
    st.session_state.engine.make_move(line, column)


def on_start() -> None:
    st.session_state.game_log.clear()
    engine = st.session_state.engine
    engine.reset()
    engine.run_agents()


def render_board(engine: GameEngine) -> None:
    """Render the board as a grid of buttons (1-indexed lines/columns)."""
    winning = {(p.line, p.column) for p in engine.state.winning_positions}

    for line, row in enumerate(engine.board.rows(), start=1):
        cols = st.columns(engine.board_size)
        for column, cell in enumerate(row, start=1):
            with cols[column - 1]:
                st.button(
                    cell or " ",
                    key=f"cell_{line}_{column}",
                    on_click=on_cell_click,
                    args=(line, column),
                    type="primary" if (line, column) in winning else "secondary",
                    use_container_width=True,
                )


def render_sidebar() -> None:
    """Render sidebar controls."""
    st.sidebar.header("🎮 Game Controls")

    st.sidebar.number_input("Board size", min_value=1, max_value=MAX_BOARD_SIZE, step=1, key="board_size")
    if int(st.session_state.board_size) != st.session_state.get("engine_size"):
        new_game(int(st.session_state.board_size))

    st.sidebar.button("▶️ Start", on_click=on_start, use_container_width=True)

    engine = st.session_state.engine
    st.sidebar.markdown("---")
    for player in engine.players:
        kind = "👤 Human" if player.is_human else f"🤖 {player.agent.get_name()}"
        st.sidebar.markdown(f"**{player.symbol}**: {kind}")


def render_status_panel(engine: GameEngine) -> None:
    """Render game status panel."""
    st.subheader("📊 Game Status")
    status = engine.status_text()
    if engine.phase == GamePhase.WON:
        st.success(status)
    elif engine.phase == GamePhase.DRAW:
        st.warning(status)
    else:
        st.info(status)
    st.metric("Turn", engine.state.turn_number)


def render_game_log() -> None:
    """Render game event log."""
    st.subheader("📜 Game Log")

    log = st.session_state.game_log
    if log:
        for entry in log[-10:]:
            st.text(entry)
    else:
        st.info("No events yet")


def main():
    """Main dashboard entry point."""
    st.set_page_config(page_title="Tic-Tac-Toe", page_icon="🎮", layout="wide")
    st.title("🎮 Tic-Tac-Toe")

    init_session_state()
    render_sidebar()

    engine = st.session_state.engine
    col_board, col_status = st.columns([3, 1])

    with col_board:
        render_board(engine)

    with col_status:
        render_status_panel(engine)
        st.markdown("---")
        render_game_log()


if __name__ == "__main__":
    main()
