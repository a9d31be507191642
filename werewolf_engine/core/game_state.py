"""
Mutable game state: players, phase, day counter and per-night data.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, TYPE_CHECKING

from .player import Player
from .types import Faction, GamePhase, SeerResult

if TYPE_CHECKING:
    from .rules import RuleSet


@dataclass
class GameState:
    """Complete game state, owned and mutated by the engine."""
    players: List[Player] = field(default_factory=list)
    rule_set: Optional['RuleSet'] = None
    phase: GamePhase = GamePhase.SETUP
    day_number: int = 0

    # Night phase, cleared by reset_nightly_actions
    nightly_kills: Dict[str, str] = field(default_factory=dict)  # {target_id: killer_id}
    nightly_protected: Set[str] = field(default_factory=set)
    nightly_healed: Optional[str] = None
    nightly_poisoned: Optional[str] = None
    last_seer_result: Optional[SeerResult] = None

    # Day phase
    player_on_trial: Optional[str] = None

    winner: Optional[Faction] = None

    def get_player_by_id(self, player_id: Optional[str]) -> Optional[Player]:
        """Get player by id."""
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def get_living_players(self) -> List[Player]:
        """Get all alive players, in seating order."""
        return [p for p in self.players if p.is_alive]

    def get_dead_players(self) -> List[Player]:
        return [p for p in self.players if not p.is_alive]

    def get_players_with_role(self, role_name: str, include_dead: bool = False) -> List[Player]:
        """Players whose role (lover wrapping ignored) has the given name."""
        return [
            p for p in self.players
            if p.role is not None and p.role.name == role_name and (include_dead or p.is_alive)
        ]

    def find_player_with_role(self, role_name: str, include_dead: bool = False) -> Optional[Player]:
        players = self.get_players_with_role(role_name, include_dead)
        return players[0] if players else None

    def reset_nightly_actions(self) -> None:
        """Clear everything that only lives for one night."""
        self.nightly_kills = {}
        self.nightly_protected = set()
        self.nightly_healed = None
        self.nightly_poisoned = None
        self.player_on_trial = None
        self.last_seer_result = None
        for player in self.players:
            player.is_protected = False

    def create_snapshot(self) -> Dict[str, Any]:
        """
        Value copy of the state.

        Role summaries and lover ids are included for audit and for the engine
        to re-link; restore_from_snapshot itself only puts back scalar flags
        and night data.
        """
        return {
            "phase": self.phase.value,
            "day_number": self.day_number,
            "nightly_kills": dict(self.nightly_kills),
            "nightly_protected": sorted(self.nightly_protected),
            "nightly_healed": self.nightly_healed,
            "nightly_poisoned": self.nightly_poisoned,
            "last_seer_result": self.last_seer_result.to_dict() if self.last_seer_result else None,
            "player_on_trial": self.player_on_trial,
            "winner": self.winner.value if self.winner else None,
            "players": [player.to_snapshot() for player in self.players],
        }

    def restore_from_snapshot(self, snapshot: Dict[str, Any]) -> None:
        self.phase = GamePhase(snapshot["phase"])
        self.day_number = snapshot["day_number"]
        self.nightly_kills = dict(snapshot.get("nightly_kills") or {})
        self.nightly_protected = set(snapshot.get("nightly_protected") or [])
        self.nightly_healed = snapshot.get("nightly_healed")
        self.nightly_poisoned = snapshot.get("nightly_poisoned")
        seer_result = snapshot.get("last_seer_result")
        self.last_seer_result = SeerResult.from_dict(seer_result) if seer_result else None
        self.player_on_trial = snapshot.get("player_on_trial")
        winner = snapshot.get("winner")
        self.winner = Faction(winner) if winner else None

        for saved in snapshot.get("players", []):
            player = self.get_player_by_id(saved["id"])
            if player is None:
                continue
            player.is_alive = saved["is_alive"]
            player.is_protected = saved["is_protected"]
            player.is_marked_for_death = saved["is_marked_for_death"]
            player.is_silenced = saved["is_silenced"]
