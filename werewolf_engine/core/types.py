"""Common types and enums used across the engine."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Faction(Enum):
    """Player allegiance used for win conditions."""
    VILLAGER = "VILLAGER"
    WEREWOLF = "WEREWOLF"
    SOLO = "SOLO"  # Roles that win alone
    LOVERS = "LOVERS"  # Third side for a cross-faction couple


class RoleName(Enum):
    """Stable role identifiers."""
    VILLAGER = "Villager"
    WEREWOLF = "Werewolf"
    SEER = "Seer"
    BODYGUARD = "Bodyguard"
    WITCH = "Witch"
    HUNTER = "Hunter"
    CUPID = "Cupid"


class GamePhase(Enum):
    """Current stage of the day/night cycle."""
    SETUP = "SETUP"
    NIGHT = "NIGHT"
    DAY_DISCUSS = "DAY_DISCUSS"
    DAY_VOTE = "DAY_VOTE"
    DAY_DEFENSE = "DAY_DEFENSE"  # Most-voted player defends themself
    DAY_LAST_WORD = "DAY_LAST_WORD"
    FINISHED = "FINISHED"


@dataclass(frozen=True)
class SeerResult:
    """What the Seer learned tonight."""
    target_id: str
    target_name: str
    revealed_faction: Faction

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target_id": self.target_id,
            "target_name": self.target_name,
            "revealed_faction": self.revealed_faction.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeerResult":
        return cls(
            target_id=data["target_id"],
            target_name=data["target_name"],
            revealed_faction=Faction(data["revealed_faction"]),
        )


@dataclass
class ActionResult:
    """Result of a moderator command."""
    success: bool
    message: str = ""
    data: Optional[Dict[str, Any]] = None
