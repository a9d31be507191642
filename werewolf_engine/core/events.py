"""
Game events broadcast by the engine to every living, role-bearing player.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class GameEventType(Enum):
    """Kinds of broadcast events."""
    GAME_STARTED = "GAME_STARTED"
    PHASE_CHANGED = "PHASE_CHANGED"
    PLAYER_DIED = "PLAYER_DIED"
    ACTION_SUBMITTED = "ACTION_SUBMITTED"
    ACTION_UNDONE = "ACTION_UNDONE"


class DeathCause(Enum):
    """Why a player died."""
    KILLED = "KILLED"
    VOTED_OUT = "VOTED_OUT"
    POISONED = "POISONED"
    SHOT = "SHOT"
    HEARTBREAK = "HEARTBREAK"


@dataclass
class GameEvent:
    """
    A single broadcast event.

    Payloads only hold plain values (ids, names, enum values) so the event
    log can be serialized as-is:
        GAME_STARTED      {"player_count"}
        PHASE_CHANGED     {"new_phase", "day"}
        PLAYER_DIED       {"player_id", "player_name", "cause"}
        ACTION_SUBMITTED  {"acting_role_name", "action_types"}
        ACTION_UNDONE     {"action_types"}
    """
    type: GameEventType
    payload: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "payload": dict(self.payload)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameEvent":
        return cls(type=GameEventType(data["type"]), payload=dict(data.get("payload") or {}))

    @classmethod
    def game_started(cls, player_count: int) -> "GameEvent":
        return cls(GameEventType.GAME_STARTED, {"player_count": player_count})

    @classmethod
    def phase_changed(cls, new_phase: str, day: int) -> "GameEvent":
        return cls(GameEventType.PHASE_CHANGED, {"new_phase": new_phase, "day": day})

    @classmethod
    def player_died(cls, player_id: str, player_name: str, cause: DeathCause) -> "GameEvent":
        return cls(GameEventType.PLAYER_DIED, {
            "player_id": player_id,
            "player_name": player_name,
            "cause": cause.value,
        })
