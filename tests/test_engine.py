"""Tests for the game engine."""

import logging

import pytest

from gridtac.core.events import EventType
from gridtac.core.types import DRAW, GamePhase, Move, Player
from gridtac.game.engine import GameEngine


def play_all(engine, moves):
    for line, column in moves:
        engine.make_move(line, column)
    return engine.state


def snapshot(engine):
    return engine.board.rows(), engine.current_player, engine.outcome


@pytest.fixture
def engine(bus):
    return GameEngine(3, Player("X"), Player("O"), bus=bus)


@pytest.mark.parametrize("size", [1, 2, 3, 4, 7])
def test_new_game_is_empty(size, bus):
    x, o = Player("X"), Player("O")
    engine = GameEngine(size, x, o, bus=bus)

    assert engine.board_size == size
    assert all(cell is None for row in engine.board.rows() for cell in row)
    assert len(engine.board.rows()) == size
    assert engine.current_player is x
    assert engine.outcome is None
    assert engine.phase == GamePhase.IN_PROGRESS


def test_default_players(bus):
    engine = GameEngine(bus=bus)
    assert engine.board_size == 3
    assert [p.symbol for p in engine.players] == ["X", "O"]
    assert all(p.is_human for p in engine.players)


@pytest.mark.parametrize("size", [0, -3, 2.5, True, "3"])
def test_rejects_bad_board_size(size, bus):
    with pytest.raises(ValueError):
        GameEngine(size, bus=bus)


def test_top_row_scenario(engine):
    play_all(engine, [(1, 1), (2, 2), (1, 2), (2, 1), (1, 3)])

    assert engine.outcome == "X"
    assert engine.winner == "X"
    assert engine.phase == GamePhase.WON
    assert engine.current_player.symbol == "X"
    assert [(p.line, p.column) for p in engine.state.winning_positions] == [(1, 1), (1, 2), (1, 3)]


def test_moves_after_win_are_ignored(engine):
    play_all(engine, [(1, 1), (2, 2), (1, 2), (2, 1), (1, 3)])
    before = snapshot(engine)

    for move in [(3, 3), (2, 3), (0, 0), (1, 1)]:
        engine.make_move(*move)

    assert snapshot(engine) == before


@pytest.mark.parametrize("move", [(0, 1), (1, 0), (-1, 2), (4, 1), (1, 4), (9, 9)])
def test_out_of_range_move_is_ignored(engine, move):
    before = snapshot(engine)
    engine.make_move(*move)
    assert snapshot(engine) == before


def test_occupied_cell_is_ignored(engine):
    engine.make_move(2, 2)
    before = snapshot(engine)

    engine.make_move(2, 2)

    assert snapshot(engine) == before
    assert engine.current_player.symbol == "O"


def test_non_integer_move_is_ignored(engine):
    before = snapshot(engine)
    engine.submit_move(Move(1.5, 1))
    engine.submit_move(Move(True, 1))
    assert snapshot(engine) == before


def test_turn_alternates(engine):
    engine.make_move(1, 1)
    assert engine.current_player.symbol == "O"
    engine.make_move(3, 3)
    assert engine.current_player.symbol == "X"
    assert engine.state.turn_number == 3


def test_column_win(engine):
    play_all(engine, [(1, 2), (1, 1), (2, 2), (3, 3), (3, 2)])
    assert engine.outcome == "X"


def test_main_diagonal_win(engine):
    play_all(engine, [(1, 2), (1, 1), (1, 3), (2, 2), (3, 2), (3, 3)])
    assert engine.outcome == "O"


def test_anti_diagonal_win(engine):
    play_all(engine, [(3, 1), (1, 1), (2, 2), (1, 2), (1, 3)])
    assert engine.outcome == "X"
    assert [(p.line, p.column) for p in engine.state.winning_positions] == [(3, 1), (2, 2), (1, 3)]


def test_larger_board_row_win(bus):
    engine = GameEngine(4, Player("X"), Player("O"), bus=bus)
    play_all(engine, [(4, 1), (1, 1), (4, 2), (1, 2), (4, 3), (1, 3)])
    assert engine.outcome is None
    engine.make_move(4, 4)
    assert engine.outcome == "X"


def test_draw(engine):
    play_all(engine, [
        (1, 1), (1, 2), (1, 3),
        (2, 2), (2, 1), (2, 3),
        (3, 2), (3, 1), (3, 3),
    ])

    assert engine.outcome == DRAW
    assert engine.is_draw
    assert engine.winner is None
    assert engine.status_text() == "draw"


def test_single_cell_board_first_move_wins(bus):
    engine = GameEngine(1, Player("X"), Player("O"), bus=bus)
    engine.make_move(1, 1)
    assert engine.outcome == "X"


def test_reset_restores_initial_state(engine):
    x = engine.player1
    play_all(engine, [(1, 1), (2, 2), (1, 2), (2, 1), (1, 3)])

    engine.reset()

    assert all(cell is None for row in engine.board.rows() for cell in row)
    assert engine.current_player is x
    assert engine.outcome is None
    assert engine.board_size == 3
    engine.make_move(2, 2)
    assert engine.board.cell(2, 2) == "X"


def test_status_text(engine):
    assert engine.status_text() == "it is X's turn"
    engine.make_move(1, 1)
    assert engine.status_text() == "it is O's turn"
    play_all(engine, [(2, 2), (1, 2), (2, 1), (1, 3)])
    assert engine.status_text() == "X won"


def test_to_text(engine):
    engine.make_move(1, 1)
    engine.make_move(2, 3)
    assert engine.to_text() == "X - -\n- - O\n- - -"

    play_all(engine, [(1, 2), (3, 3), (1, 3)])
    assert str(engine) == "X X X\n- - O\n- - O winner: X"


def test_states_are_snapshots(engine):
    first = engine.make_move(1, 1)
    engine.make_move(2, 2)
    assert first.board.cell(2, 2) is None


def test_agent_replies_in_same_call(bus, scripted_ai):
    ai = scripted_ai([(2, 2)])
    engine = GameEngine(3, Player("X"), Player("O", agent=ai), bus=bus)

    engine.make_move(1, 1)

    assert engine.board.cell(1, 1) == "X"
    assert engine.board.cell(2, 2) == "O"
    assert engine.current_player.symbol == "X"


def test_agent_retries_until_legal(bus, scripted_ai):
    ai = scripted_ai([(1, 1), (5, 5), (0, 2), (3, 3)])
    engine = GameEngine(3, Player("X"), Player("O", agent=ai), bus=bus)

    engine.make_move(1, 1)

    assert ai.calls == 4
    assert engine.board.cell(3, 3) == "O"
    rejected = [e for e in bus.get_event_log(100) if e.type == EventType.INVALID_MOVE]
    assert len(rejected) == 3


def test_agent_can_win_and_stop(bus, scripted_ai):
    ai = scripted_ai([(2, 1), (2, 2), (2, 3)])
    engine = GameEngine(3, Player("X"), Player("O", agent=ai), bus=bus)

    play_all(engine, [(1, 1), (3, 3), (1, 3)])

    assert engine.outcome == "O"
    engine.make_move(1, 2)
    assert engine.board.cell(1, 2) is None


def test_external_move_ignored_on_agent_turn(bus, scripted_ai):
    ai = scripted_ai([(3, 3)])
    engine = GameEngine(3, Player("O", agent=ai), Player("X"), bus=bus)
    assert engine.current_player.symbol == "O"

    engine.make_move(1, 1)

    assert engine.board.cell(1, 1) is None
    assert engine.board.cell(3, 3) == "O"
    assert engine.current_player.symbol == "X"


def test_run_agents_without_agents_is_noop(engine):
    before = snapshot(engine)
    engine.run_agents()
    assert snapshot(engine) == before


def test_two_agents_play_to_the_end(bus):
    from gridtac.ai.random_ai import RandomAI

    engine = GameEngine(
        4,
        Player("X", agent=RandomAI(seed=3)),
        Player("O", agent=RandomAI(seed=4)),
        bus=bus,
    )

    engine.run_agents()

    assert engine.is_game_over
    cells = [c for row in engine.board.rows() for c in row if c is not None]
    assert abs(cells.count("X") - cells.count("O")) <= 1


def test_events_published(engine, bus):
    play_all(engine, [(1, 1), (2, 2), (1, 2), (2, 1), (1, 3)])
    types = [e.type for e in bus.get_event_log(100)]

    assert types[0] == EventType.GAME_STARTED
    assert types.count(EventType.MOVE_MADE) == 5
    assert types.count(EventType.TURN_CHANGED) == 4
    assert types[-1] == EventType.GAME_WON


def test_failing_handler_does_not_break_engine(engine, bus):
    def boom(event):
        raise RuntimeError("handler failed")

    bus.subscribe(EventType.MOVE_MADE, boom)
    engine.make_move(1, 1)

    assert engine.board.cell(1, 1) == "X"
    assert engine.current_player.symbol == "O"


def test_identical_symbols_warn(bus, caplog):
    with caplog.at_level(logging.WARNING, logger="gridtac.game.engine"):
        GameEngine(3, Player("X"), Player("X"), bus=bus)
    assert "Both players use symbol" in caplog.text


def test_uses_global_bus_by_default():
    from gridtac.core.bus import get_event_bus

    GameEngine()
    assert get_event_bus().get_event_log()[-1].type == EventType.GAME_STARTED


def test_board_cannot_be_changed_from_outside(engine):
    engine.board.place(1, 1, "Z")
    engine.state.board.place(2, 2, "Z")

    assert engine.board.cell(1, 1) is None
    assert engine.board.cell(2, 2) is None
    engine.make_move(1, 1)
    assert engine.board.cell(1, 1) == "X"


def test_state_snapshot_is_detached(engine):
    snapshot_state = engine.state
    snapshot_state.winning_positions.append("bogus")
    snapshot_state.board.place(3, 3, "Z")

    assert engine.state.winning_positions == []
    assert engine.board.cell(3, 3) is None


def test_returned_state_is_detached(engine):
    returned = engine.make_move(1, 1)
    returned.board.place(1, 2, "Z")

    assert engine.board.cell(1, 2) is None
    engine.make_move(1, 2)
    assert engine.board.cell(1, 2) == "O"
