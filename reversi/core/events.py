from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal

EventType = Literal[
    "TURN_CHANGED",
    "COUNTS_CHANGED",
    "PASS",
    "GAME_OVER",
    "PLAYER_BUSY",
    "PLAYER_IDLE",
]


@dataclass(frozen=True, slots=True)
class GameEvent:
    type: EventType
    payload: dict[str, Any]
    ts: datetime

    @staticmethod
    def now(*, type: EventType, payload: dict[str, Any]) -> "GameEvent":
        return GameEvent(type=type, payload=payload, ts=datetime.now(timezone.utc))
