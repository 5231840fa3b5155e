"""Core infrastructure for the gridtac game."""

from .bus import EventBus, get_event_bus, reset_event_bus
from .config import (
    AISettings,
    GameSettings,
    LogLevel,
    LogSettings,
    MAX_BOARD_SIZE,
    Settings,
    UISettings,
    get_settings,
    reset_settings,
)
from .events import Event, EventType
from .types import (
    DRAW,
    Board,
    GamePhase,
    GameState,
    Move,
    Player,
    Position,
)


__all__ = [
    # Config
    "get_settings",
    "reset_settings",
    "Settings",
    "GameSettings",
    "AISettings",
    "UISettings",
    "LogSettings",
    "LogLevel",
    "MAX_BOARD_SIZE",
    # Types
    "DRAW",
    "Player",
    "GamePhase",
    "Position",
    "Board",
    "Move",
    "GameState",
    # Events
    "Event",
    "EventType",
    "EventBus",
    "get_event_bus",
    "reset_event_bus",
]
