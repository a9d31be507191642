"""
Append-only game history used by callers for narration and review.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set, TYPE_CHECKING

from .types import GamePhase

if TYPE_CHECKING:
    from .actions import Action
    from .game_state import GameState
    from .player import Player


class HistoryEntryType(Enum):
    ACTION = "ACTION"
    GAME_EVENT = "GAME_EVENT"


class HistoryEventType(Enum):
    """Lifecycle events recorded by the engine."""
    FIRST_NIGHT_STARTED = "FIRST_NIGHT_STARTED"
    ROLE_ASSIGNED = "ROLE_ASSIGNED"
    NIGHT_STARTED = "NIGHT_STARTED"
    NIGHT_ENDED = "NIGHT_ENDED"
    DAY_STARTED = "DAY_STARTED"
    VOTING_STARTED = "VOTING_STARTED"
    DEFENSE_STARTED = "DEFENSE_STARTED"
    LAST_WORD_STARTED = "LAST_WORD_STARTED"
    VOTING_ENDED = "VOTING_ENDED"
    PLAYER_DIED = "PLAYER_DIED"
    ACTION_UNDONE = "ACTION_UNDONE"
    GAME_ENDED = "GAME_ENDED"


@dataclass(frozen=True)
class HistoryEntry:
    """A single immutable record."""
    type: HistoryEntryType
    phase: GamePhase
    day_number: int
    timestamp: float = field(default_factory=time.time)

    # ACTION entries
    actor_ids: List[str] = field(default_factory=list)
    actor_names: List[str] = field(default_factory=list)
    role_name: Optional[str] = None
    action_type: Optional[str] = None
    target_id: Optional[str] = None
    target_name: Optional[str] = None

    # GAME_EVENT entries
    event_type: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "phase": self.phase.value,
            "day_number": self.day_number,
            "timestamp": self.timestamp,
            "actor_ids": list(self.actor_ids),
            "actor_names": list(self.actor_names),
            "role_name": self.role_name,
            "action_type": self.action_type,
            "target_id": self.target_id,
            "target_name": self.target_name,
            "event_type": self.event_type,
            "data": dict(self.data),
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        return cls(
            type=HistoryEntryType(data["type"]),
            phase=GamePhase(data["phase"]),
            day_number=data["day_number"],
            timestamp=data.get("timestamp", 0.0),
            actor_ids=list(data.get("actor_ids") or []),
            actor_names=list(data.get("actor_names") or []),
            role_name=data.get("role_name"),
            action_type=data.get("action_type"),
            target_id=data.get("target_id"),
            target_name=data.get("target_name"),
            event_type=data.get("event_type"),
            data=dict(data.get("data") or {}),
            message=data.get("message", ""),
        )


class GameHistory:
    """Append-only log of actions and lifecycle events."""

    def __init__(self):
        self._entries: List[HistoryEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def add_action_entry(self, action: 'Action', actors: List['Player'], state: 'GameState') -> HistoryEntry:
        target_id = action.get_target_id()
        target = state.get_player_by_id(target_id) if target_id else None
        entry = HistoryEntry(
            type=HistoryEntryType.ACTION,
            phase=state.phase,
            day_number=state.day_number,
            actor_ids=[actor.id for actor in actors],
            actor_names=[actor.name for actor in actors],
            role_name=actors[0].role_name if actors else None,
            action_type=action.get_type(),
            target_id=target_id,
            target_name=target.name if target else None,
            data=action.payload(),
        )
        self._entries.append(entry)
        return entry

    def add_game_event(
        self,
        event_type: HistoryEventType,
        state: 'GameState',
        data: Optional[Dict[str, Any]] = None,
        message: str = "",
    ) -> HistoryEntry:
        entry = HistoryEntry(
            type=HistoryEntryType.GAME_EVENT,
            phase=state.phase,
            day_number=state.day_number,
            event_type=event_type.value,
            data=dict(data or {}),
            message=message,
        )
        self._entries.append(entry)
        return entry

    def get_entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def get_entries_by_phase(self, phase: GamePhase, day_number: Optional[int] = None) -> List[HistoryEntry]:
        return [
            e for e in self._entries
            if e.phase == phase and (day_number is None or e.day_number == day_number)
        ]

    def get_entries_by_role(self, role_name: str) -> List[HistoryEntry]:
        return [e for e in self._entries if e.role_name == role_name]

    def get_action_entries(self) -> List[HistoryEntry]:
        return [e for e in self._entries if e.type == HistoryEntryType.ACTION]

    def get_game_event_entries(self) -> List[HistoryEntry]:
        return [e for e in self._entries if e.type == HistoryEntryType.GAME_EVENT]

    def get_last_night_actions(self, current_day: Optional[int] = None) -> List[HistoryEntry]:
        """
        Actions of the most recently completed night.

        Entries reverted by an undo are left out. The log itself stays
        append-only; ACTION_UNDONE events list the reverted entry indices.

        The night before day N is recorded with day number N - 1. Without a
        day counter the day of the latest entry is used, which is only right
        while the game is in the day phase.
        """
        if current_day is None:
            if not self._entries:
                return []
            current_day = self._entries[-1].day_number
        night_day = current_day - 1
        undone = self.get_undone_indices()
        return [
            e for index, e in enumerate(self._entries)
            if e.type == HistoryEntryType.ACTION
            and index not in undone
            and e.phase == GamePhase.NIGHT
            and e.day_number == night_day
        ]

    def get_undone_indices(self) -> Set[int]:
        """Indices of action entries reverted by an undo."""
        undone: Set[int] = set()
        for e in self._entries:
            if e.event_type == HistoryEventType.ACTION_UNDONE.value:
                undone.update(e.data.get("undone_entries", []))
        return undone

    def clear(self) -> None:
        self._entries = []

    def to_list(self) -> List[Dict[str, Any]]:
        return [entry.to_dict() for entry in self._entries]

    @classmethod
    def from_list(cls, entries: List[Dict[str, Any]]) -> "GameHistory":
        history = cls()
        history._entries = [HistoryEntry.from_dict(data) for data in entries]
        return history
