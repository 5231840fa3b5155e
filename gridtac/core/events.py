"""
Event definitions for the gridtac game.

Events enable loose coupling between the engine and its presentation layers.
The engine publishes events without knowing who consumes them.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class EventType(Enum):
    """Types of events in the system."""

    GAME_STARTED = auto()
    GAME_RESET = auto()
    AGENT_PROPOSED = auto()  # Agent suggested a move (may still be rejected)
    MOVE_MADE = auto()
    INVALID_MOVE = auto()  # Move rejected; the engine state is unchanged
    TURN_CHANGED = auto()
    GAME_WON = auto()
    GAME_DRAW = auto()


@dataclass
class Event:
    """
    Base event structure.

    Attributes:
        type: The type of event
        data: Event-specific payload
        timestamp: When the event was created
        source: Which module created the event
    """

    type: EventType
    data: Any = None
    timestamp: float = field(default_factory=time.time)
    source: str = "unknown"

    def __str__(self) -> str:
        return f"[{self.source}] {self.type.name}: {self.data}"
