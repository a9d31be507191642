"""
Rule sets: night turn order and win-condition policy.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, TYPE_CHECKING

from .roles import Role, create_role
from .types import Faction, RoleName
from ..config.game_config import GameConfig, default_config

if TYPE_CHECKING:
    from .game_state import GameState


class RuleSet(ABC):
    """Swappable policy consumed by the engine and by roles."""

    @abstractmethod
    def get_night_turn_order(self) -> List[Role]:
        """Roles in the order they wake up on a regular night."""

    @abstractmethod
    def get_first_night_turn_order(self) -> List[Role]:
        """Roles in the order they are assigned and act on the first night."""

    @abstractmethod
    def check_win_conditions(self, state: 'GameState') -> Optional[Faction]:
        """Winning faction, or None while the game goes on."""

    @abstractmethod
    def can_werewolf_kill_on_first_night(self) -> bool:
        pass

    def lovers_die_together(self) -> bool:
        return True

    def can_witch_heal_self(self) -> bool:
        return True


class StandardRuleSet(RuleSet):
    """Standard rules, tuned through GameConfig."""

    NIGHT_ORDER = [
        RoleName.CUPID,
        RoleName.BODYGUARD,
        RoleName.WEREWOLF,
        RoleName.WITCH,
        RoleName.SEER,
    ]
    FIRST_NIGHT_EXTRA = [RoleName.HUNTER]

    def __init__(self, config: GameConfig = default_config):
        self.config = config

    def get_night_turn_order(self) -> List[Role]:
        return [create_role(name.value) for name in self.NIGHT_ORDER]

    def get_first_night_turn_order(self) -> List[Role]:
        return [create_role(name.value) for name in self.NIGHT_ORDER + self.FIRST_NIGHT_EXTRA]

    def check_win_conditions(self, state: 'GameState') -> Optional[Faction]:
        living = state.get_living_players()
        if not living:
            return None

        # Lovers first: a surviving couple beats raw faction counts
        if len(living) == 2 and living[0].is_lover_of(living[1]):
            return Faction.LOVERS

        werewolves = [p for p in living if p.faction == Faction.WEREWOLF and not p.has_lover]
        villagers = [p for p in living if p.faction == Faction.VILLAGER and not p.has_lover]
        if werewolves and len(werewolves) > len(villagers):
            return Faction.WEREWOLF

        if not any(p.faction == Faction.WEREWOLF for p in living):
            return Faction.VILLAGER

        return None

    def can_werewolf_kill_on_first_night(self) -> bool:
        return self.config.can_werewolf_kill_on_first_night

    def lovers_die_together(self) -> bool:
        return self.config.lovers_die_together

    def can_witch_heal_self(self) -> bool:
        return self.config.can_witch_heal_self
