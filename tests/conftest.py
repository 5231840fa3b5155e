import pytest

from gridtac.ai.interface import AIInterface
from gridtac.core.bus import EventBus, reset_event_bus
from gridtac.core.config import reset_settings
from gridtac.core.types import Board, Move


class ScriptedAI(AIInterface):
    """Agent that replays a fixed list of proposals."""

    def __init__(self, moves):
        self.moves = [Move(*m) for m in moves]
        self.calls = 0

    def propose_move(self, board: Board) -> Move:
        move = self.moves[self.calls]
        self.calls += 1
        return move

    def get_name(self) -> str:
        return "Scripted AI"


@pytest.fixture(autouse=True)
def clean_singletons(monkeypatch):
    for key in ("GAME_BOARD_SIZE", "GAME_HUMAN_SYMBOL", "GAME_AI_SYMBOL", "GAME_HUMAN_FIRST",
                "AI_SEED", "AI_SAMPLE_EMPTY_ONLY", "UI_PORT", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    reset_settings()
    reset_event_bus()
    yield
    reset_settings()
    reset_event_bus()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def scripted_ai():
    """Factory for agents that replay fixed proposals."""
    return ScriptedAI
