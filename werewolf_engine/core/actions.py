"""
Actions: atomic, reversible mutations of the game state.

Each action is a one-shot command that carries only player ids, never
object references, so it stays valid across snapshot/restore cycles.
`execute` records whatever it overwrites so that `undo` can put the exact
prior values back.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Type, TYPE_CHECKING

from .events import DeathCause
from .exceptions import UnknownActionTypeError
from .types import SeerResult

if TYPE_CHECKING:
    from .game_state import GameState


class Action(ABC):
    """Base class for every command in the game."""

    # Cause reported when this action kills someone outright
    death_cause: ClassVar[Optional[DeathCause]] = None

    timestamp: float

    @abstractmethod
    def execute(self, state: 'GameState') -> None:
        """Apply the action, remembering overwritten values."""

    @abstractmethod
    def undo(self, state: 'GameState') -> None:
        """Restore the values captured by the last execute."""

    @abstractmethod
    def payload(self) -> Dict[str, Any]:
        """Ids of the parties involved."""

    def get_type(self) -> str:
        return type(self).__name__

    def get_target_id(self) -> Optional[str]:
        return self.payload().get("target_id")

    def serialize(self) -> Dict[str, Any]:
        return {
            "type": self.get_type(),
            "payload": self.payload(),
            "timestamp": self.timestamp,
        }


@dataclass
class KillAction(Action):
    """Werewolf bite: marks the target for death unless protected."""
    death_cause: ClassVar[Optional[DeathCause]] = DeathCause.KILLED

    target_id: str
    killer_id: str
    timestamp: float = field(default_factory=time.time)
    _previous: Optional[Dict[str, Any]] = field(default=None, init=False, repr=False, compare=False)

    def execute(self, state: 'GameState') -> None:
        target = state.get_player_by_id(self.target_id)
        if target is None or not target.is_alive:
            return

        self._previous = {
            "marked": target.is_marked_for_death,
            "had_attacker": self.target_id in state.nightly_kills,
            "attacker": state.nightly_kills.get(self.target_id),
        }
        # The attack is recorded even when the bite is absorbed
        state.nightly_kills[self.target_id] = self.killer_id
        if target.is_protected:
            return
        target.is_marked_for_death = True

    def undo(self, state: 'GameState') -> None:
        if self._previous is None:
            return
        target = state.get_player_by_id(self.target_id)
        if target is not None:
            target.is_marked_for_death = self._previous["marked"]
        if self._previous["had_attacker"]:
            state.nightly_kills[self.target_id] = self._previous["attacker"]
        else:
            state.nightly_kills.pop(self.target_id, None)
        self._previous = None

    def payload(self) -> Dict[str, Any]:
        return {"target_id": self.target_id, "killer_id": self.killer_id}


@dataclass
class ProtectAction(Action):
    """Bodyguard protection for the rest of the night."""
    target_id: str
    timestamp: float = field(default_factory=time.time)
    _previous: Optional[Dict[str, bool]] = field(default=None, init=False, repr=False, compare=False)

    def execute(self, state: 'GameState') -> None:
        target = state.get_player_by_id(self.target_id)
        if target is None:
            return
        self._previous = {
            "protected": target.is_protected,
            "listed": self.target_id in state.nightly_protected,
        }
        target.is_protected = True
        state.nightly_protected.add(self.target_id)

    def undo(self, state: 'GameState') -> None:
        if self._previous is None:
            return
        target = state.get_player_by_id(self.target_id)
        if target is not None:
            target.is_protected = self._previous["protected"]
        if not self._previous["listed"]:
            state.nightly_protected.discard(self.target_id)
        self._previous = None

    def payload(self) -> Dict[str, Any]:
        return {"target_id": self.target_id}


@dataclass
class HealAction(Action):
    """Witch heal: the only way to lift a death mark."""
    target_id: str
    timestamp: float = field(default_factory=time.time)
    _previous: Optional[Dict[str, Any]] = field(default=None, init=False, repr=False, compare=False)

    def execute(self, state: 'GameState') -> None:
        target = state.get_player_by_id(self.target_id)
        if target is None:
            return
        self._previous = {
            "healed": state.nightly_healed,
            "marked": target.is_marked_for_death,
        }
        state.nightly_healed = self.target_id
        target.is_marked_for_death = False

    def undo(self, state: 'GameState') -> None:
        if self._previous is None:
            return
        state.nightly_healed = self._previous["healed"]
        target = state.get_player_by_id(self.target_id)
        if target is not None:
            target.is_marked_for_death = self._previous["marked"]
        self._previous = None

    def payload(self) -> Dict[str, Any]:
        return {"target_id": self.target_id}


@dataclass
class PoisonAction(Action):
    """Witch poison: marks for death and ignores protection."""
    death_cause: ClassVar[Optional[DeathCause]] = DeathCause.POISONED

    target_id: str
    timestamp: float = field(default_factory=time.time)
    _previous: Optional[Dict[str, Any]] = field(default=None, init=False, repr=False, compare=False)

    def execute(self, state: 'GameState') -> None:
        target = state.get_player_by_id(self.target_id)
        if target is None or not target.is_alive:
            return
        self._previous = {
            "marked": target.is_marked_for_death,
            "poisoned": state.nightly_poisoned,
        }
        target.is_marked_for_death = True
        state.nightly_poisoned = self.target_id

    def undo(self, state: 'GameState') -> None:
        if self._previous is None:
            return
        target = state.get_player_by_id(self.target_id)
        if target is not None:
            target.is_marked_for_death = self._previous["marked"]
        state.nightly_poisoned = self._previous["poisoned"]
        self._previous = None

    def payload(self) -> Dict[str, Any]:
        return {"target_id": self.target_id}


@dataclass
class SeeAction(Action):
    """Seer check; the result is left on the state for the caller."""
    target_id: str
    seer_id: str
    timestamp: float = field(default_factory=time.time)
    _previous: Optional[Dict[str, Any]] = field(default=None, init=False, repr=False, compare=False)

    def execute(self, state: 'GameState') -> None:
        target = state.get_player_by_id(self.target_id)
        seer = state.get_player_by_id(self.seer_id)
        if target is None or seer is None or target.role is None:
            return
        self._previous = {"result": state.last_seer_result}
        state.last_seer_result = SeerResult(
            target_id=target.id,
            target_name=target.name,
            revealed_faction=target.role.faction,
        )

    def undo(self, state: 'GameState') -> None:
        if self._previous is None:
            return
        state.last_seer_result = self._previous["result"]
        self._previous = None

    def payload(self) -> Dict[str, Any]:
        return {"target_id": self.target_id, "seer_id": self.seer_id}


@dataclass
class CoupleAction(Action):
    """Cupid pairing. Cross-faction lovers get the lover role variant."""
    player1_id: str
    player2_id: str
    timestamp: float = field(default_factory=time.time)
    _previous: Optional[Dict[str, Any]] = field(default=None, init=False, repr=False, compare=False)

    def execute(self, state: 'GameState') -> None:
        player1 = state.get_player_by_id(self.player1_id)
        player2 = state.get_player_by_id(self.player2_id)
        if player1 is None or player2 is None:
            return

        self._previous = {
            "lover1": player1.lover,
            "lover2": player2.lover,
            "role1": player1.role,
            "role2": player2.role,
        }
        player1.lover = player2
        player2.lover = player1

        if player1.role and player2.role and player1.role.faction != player2.role.faction:
            player1.role = player1.role.as_lover()
            player2.role = player2.role.as_lover()

    def undo(self, state: 'GameState') -> None:
        if self._previous is None:
            return
        player1 = state.get_player_by_id(self.player1_id)
        player2 = state.get_player_by_id(self.player2_id)
        if player1 is not None:
            player1.lover = self._previous["lover1"]
            player1.role = self._previous["role1"]
        if player2 is not None:
            player2.lover = self._previous["lover2"]
            player2.role = self._previous["role2"]
        self._previous = None

    def payload(self) -> Dict[str, Any]:
        return {"player1_id": self.player1_id, "player2_id": self.player2_id}


class _ImmediateDeath(Action):
    """Shared body for actions that kill on execution, skipping the night marks."""

    @abstractmethod
    def _victim_id(self) -> str:
        """Id of the player this action kills."""

    def execute(self, state: 'GameState') -> None:
        victim = state.get_player_by_id(self._victim_id())
        if victim is None or not victim.is_alive:
            return
        self._previous = {
            "alive": victim.is_alive,
            "marked": victim.is_marked_for_death,
        }
        victim.eliminate()

    def undo(self, state: 'GameState') -> None:
        if self._previous is None:
            return
        victim = state.get_player_by_id(self._victim_id())
        if victim is not None:
            victim.is_alive = self._previous["alive"]
            victim.is_marked_for_death = self._previous["marked"]
        self._previous = None


@dataclass
class ShootAction(_ImmediateDeath):
    """Hunter's last shot: the target dies at once, protected or not."""
    death_cause: ClassVar[Optional[DeathCause]] = DeathCause.SHOT

    target_id: str
    shooter_id: str
    timestamp: float = field(default_factory=time.time)
    _previous: Optional[Dict[str, bool]] = field(default=None, init=False, repr=False, compare=False)

    def _victim_id(self) -> str:
        return self.target_id

    def payload(self) -> Dict[str, Any]:
        return {"target_id": self.target_id, "shooter_id": self.shooter_id}


@dataclass
class HeartbreakAction(_ImmediateDeath):
    """A lover dies of grief right after their partner."""
    death_cause: ClassVar[Optional[DeathCause]] = DeathCause.HEARTBREAK

    player_id: str
    lover_id: str
    timestamp: float = field(default_factory=time.time)
    _previous: Optional[Dict[str, bool]] = field(default=None, init=False, repr=False, compare=False)

    def _victim_id(self) -> str:
        return self.player_id

    def payload(self) -> Dict[str, Any]:
        return {"target_id": self.player_id, "lover_id": self.lover_id}

    @classmethod
    def _from_payload(cls, payload: Dict[str, Any], timestamp: float) -> "HeartbreakAction":
        return cls(player_id=payload["target_id"], lover_id=payload["lover_id"], timestamp=timestamp)


ACTION_TYPES: Dict[str, Type[Action]] = {
    cls.__name__: cls
    for cls in (
        KillAction,
        ProtectAction,
        HealAction,
        PoisonAction,
        SeeAction,
        CoupleAction,
        ShootAction,
        HeartbreakAction,
    )
}


def action_from_dict(data: Dict[str, Any]) -> Action:
    """Rebuild an action from the output of `Action.serialize`."""
    action_type = data.get("type")
    action_cls = ACTION_TYPES.get(action_type)
    if action_cls is None:
        raise UnknownActionTypeError(str(action_type))

    payload = dict(data.get("payload") or {})
    timestamp = data.get("timestamp") or time.time()
    if hasattr(action_cls, "_from_payload"):
        return action_cls._from_payload(payload, timestamp)
    return action_cls(**payload, timestamp=timestamp)
