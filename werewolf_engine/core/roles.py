"""
Role definitions and abilities for the Werewolf game.

A role is a single tagged value: `role_type` selects the behaviour from
ROLE_BEHAVIOURS, `resources` carries the role's private counters, and
`wrapped` is set only on the lover variant, which overrides the faction and
delegates everything else to the role underneath.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, TYPE_CHECKING

from .actions import (
    Action,
    CoupleAction,
    HealAction,
    HeartbreakAction,
    KillAction,
    PoisonAction,
    ProtectAction,
    SeeAction,
    ShootAction,
)
from .events import GameEvent, GameEventType
from .types import Faction, RoleName

if TYPE_CHECKING:
    from .game_state import GameState
    from .player import Player


@dataclass
class PlayerTarget:
    """A player the role may pick, with the reason when it may not."""
    id: str
    name: str
    is_valid: bool = True
    reason: str = ""


@dataclass
class ActionOptions:
    """What a role can currently do. Pure description, no side effects."""
    can_act: bool
    available_targets: List[PlayerTarget] = field(default_factory=list)
    required_targets: int = 0
    message: str = ""
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def valid_targets(self) -> List[PlayerTarget]:
        return [target for target in self.available_targets if target.is_valid]

    def is_actionable(self) -> bool:
        """Check whether a caller should prompt this role for input."""
        if not self.can_act:
            return False
        if self.required_targets == 0:
            return True
        return len(self.valid_targets) >= self.required_targets


@dataclass
class Role:
    """Represents a player's role in the game."""
    role_type: RoleName
    faction: Faction
    description: str = ""
    resources: Dict[str, bool] = field(default_factory=dict)
    wrapped: Optional['Role'] = None

    def __str__(self) -> str:
        return f"{self.name} (Faction: {self.faction.value})"

    @property
    def name(self) -> str:
        return self.role_type.value

    @property
    def base(self) -> 'Role':
        """The innermost role, skipping any lover wrapping."""
        return self.wrapped.base if self.wrapped else self

    @property
    def is_lover_variant(self) -> bool:
        return self.wrapped is not None

    def as_lover(self) -> 'Role':
        """Wrap the base role in the lover variant."""
        base = self.base
        return Role(
            role_type=base.role_type,
            faction=Faction.LOVERS,
            description=base.description,
            wrapped=base,
        )

    def has_resource(self, key: str) -> bool:
        return bool(self.base.resources.get(key, False))

    def consume_resource(self, key: str) -> None:
        """One-way spend of a private counter."""
        self.base.resources[key] = False

    def on_game_event(self, event: GameEvent, state: 'GameState', owner: 'Player') -> Optional[List[Action]]:
        reaction = _lover_reaction(event, state, owner)
        if reaction:
            return reaction
        return _behaviour_for(self).on_game_event(self.base, event, state, owner)

    def create_action(self, owner: 'Player', payload: Any) -> Optional[List[Action]]:
        return _behaviour_for(self).create_action(self.base, owner, payload)

    def get_action_options(self, state: 'GameState', owner: 'Player') -> ActionOptions:
        return _behaviour_for(self).get_action_options(self.base, state, owner)

    def allows_action(self, state: 'GameState', owner: 'Player', payload: Any) -> bool:
        """False when the current options forbid acting or the payload breaks a rule variant."""
        if not self.get_action_options(state, owner).can_act:
            return False
        check = _behaviour_for(self).check_payload
        return check is None or check(self.base, state, owner, payload)

    def to_summary(self) -> Dict[str, Any]:
        """Audit copy used by snapshots and serialization."""
        return {
            "name": self.name,
            "faction": self.faction.value,
            "description": self.description,
            "resources": dict(self.base.resources),
        }


EventHook = Callable[[Role, GameEvent, 'GameState', 'Player'], Optional[List[Action]]]
ActionFactory = Callable[[Role, 'Player', Any], Optional[List[Action]]]
OptionsHook = Callable[[Role, 'GameState', 'Player'], ActionOptions]
PayloadCheck = Callable[[Role, 'GameState', 'Player', Any], bool]


@dataclass(frozen=True)
class RoleBehaviour:
    """Per-variant ability logic."""
    on_game_event: EventHook
    create_action: ActionFactory
    get_action_options: OptionsHook
    check_payload: Optional[PayloadCheck] = None


def _behaviour_for(role: Role) -> RoleBehaviour:
    return ROLE_BEHAVIOURS[role.base.role_type]


def _lover_reaction(event: GameEvent, state: 'GameState', owner: 'Player') -> Optional[List[Action]]:
    """A living lover follows their partner into death."""
    if event.type != GameEventType.PLAYER_DIED or not owner.is_alive or owner.lover is None:
        return None
    if event.payload.get("player_id") != owner.lover.id:
        return None
    if not state.rule_set.lovers_die_together():
        return None
    return [HeartbreakAction(player_id=owner.id, lover_id=owner.lover.id)]


# Payload helpers

def _single_target(payload: Any) -> Optional[str]:
    if isinstance(payload, str) and payload:
        return payload
    return None


def _pick(payload: Dict[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = payload.get(key)
        if value:
            return value
    return None


def _pair_targets(payload: Any) -> Optional[Tuple[str, str]]:
    if isinstance(payload, (list, tuple)):
        if len(payload) != 2:
            return None
        first, second = payload
    elif isinstance(payload, dict):
        first = _pick(payload, "target1_id", "target1Id")
        second = _pick(payload, "target2_id", "target2Id")
    else:
        return None
    if not isinstance(first, str) or not isinstance(second, str):
        return None
    if not first or not second or first == second:
        return None
    return first, second


def _targets(state: 'GameState', owner: 'Player', allow_self: bool = True) -> List[PlayerTarget]:
    targets = []
    for player in state.get_living_players():
        if player.id == owner.id and not allow_self:
            targets.append(PlayerTarget(player.id, player.name, False, "Cannot target yourself"))
        else:
            targets.append(PlayerTarget(player.id, player.name))
    return targets


def _no_reaction(role: Role, event: GameEvent, state: 'GameState', owner: 'Player') -> Optional[List[Action]]:
    return None


# Villager

def _villager_action(role: Role, owner: 'Player', payload: Any) -> Optional[List[Action]]:
    return None


def _villager_options(role: Role, state: 'GameState', owner: 'Player') -> ActionOptions:
    return ActionOptions(can_act=False, message="Villagers have no night action")


# Werewolf

def _werewolf_action(role: Role, owner: 'Player', payload: Any) -> Optional[List[Action]]:
    target_id = _single_target(payload)
    if target_id is None:
        return None
    return [KillAction(target_id=target_id, killer_id=owner.id)]


def _werewolf_options(role: Role, state: 'GameState', owner: 'Player') -> ActionOptions:
    if state.day_number == 0 and not state.rule_set.can_werewolf_kill_on_first_night():
        return ActionOptions(can_act=False, message="Werewolves do not kill on the first night")

    targets = []
    for player in state.get_living_players():
        if player.role is not None and player.role.base.role_type == RoleName.WEREWOLF:
            targets.append(PlayerTarget(player.id, player.name, False, "Fellow werewolf"))
        else:
            targets.append(PlayerTarget(player.id, player.name))
    return ActionOptions(
        can_act=True,
        available_targets=targets,
        required_targets=1,
        message="Choose a victim",
    )


# Seer

def _seer_action(role: Role, owner: 'Player', payload: Any) -> Optional[List[Action]]:
    target_id = _single_target(payload)
    if target_id is None or target_id == owner.id:
        return None
    return [SeeAction(target_id=target_id, seer_id=owner.id)]


def _seer_options(role: Role, state: 'GameState', owner: 'Player') -> ActionOptions:
    return ActionOptions(
        can_act=True,
        available_targets=_targets(state, owner, allow_self=False),
        required_targets=1,
        message="Choose a player to inspect",
    )


# Bodyguard

def _bodyguard_action(role: Role, owner: 'Player', payload: Any) -> Optional[List[Action]]:
    target_id = _single_target(payload)
    if target_id is None or target_id == owner.id:
        return None
    return [ProtectAction(target_id=target_id)]


def _bodyguard_options(role: Role, state: 'GameState', owner: 'Player') -> ActionOptions:
    return ActionOptions(
        can_act=True,
        available_targets=_targets(state, owner, allow_self=False),
        required_targets=1,
        message="Choose a player to protect",
    )


# Witch

def _witch_action(role: Role, owner: 'Player', payload: Any) -> Optional[List[Action]]:
    if not isinstance(payload, dict):
        return None
    heal_target = _pick(payload, "heal_target", "healTarget")
    poison_target = _pick(payload, "poison_target", "poisonTarget")

    actions: List[Action] = []
    if heal_target and role.has_resource("heal_potion"):
        actions.append(HealAction(target_id=heal_target))
        role.consume_resource("heal_potion")
    if poison_target and role.has_resource("poison_potion"):
        actions.append(PoisonAction(target_id=poison_target))
        role.consume_resource("poison_potion")
    return actions or None


def _witch_check(role: Role, state: 'GameState', owner: 'Player', payload: Any) -> bool:
    if not isinstance(payload, dict):
        return True
    heal_target = _pick(payload, "heal_target", "healTarget")
    return heal_target != owner.id or state.rule_set.can_witch_heal_self()


def _witch_options(role: Role, state: 'GameState', owner: 'Player') -> ActionOptions:
    has_heal = role.has_resource("heal_potion")
    has_poison = role.has_resource("poison_potion")

    heal_target = next(iter(state.nightly_kills), None)
    if heal_target == owner.id and not state.rule_set.can_witch_heal_self():
        heal_target = None
    poison_targets = [
        PlayerTarget(player.id, player.name)
        for player in state.get_living_players()
        if player.id != owner.id
    ]
    return ActionOptions(
        can_act=has_heal or has_poison,
        available_targets=poison_targets if has_poison else [],
        required_targets=0,
        message="Use a potion" if has_heal or has_poison else "No potions left",
        details={
            "heal_target": heal_target if has_heal else None,
            "has_heal_potion": has_heal,
            "has_poison_potion": has_poison,
        },
    )


# Cupid

def _cupid_action(role: Role, owner: 'Player', payload: Any) -> Optional[List[Action]]:
    pair = _pair_targets(payload)
    if pair is None:
        return None
    return [CoupleAction(player1_id=pair[0], player2_id=pair[1])]


def _cupid_options(role: Role, state: 'GameState', owner: 'Player') -> ActionOptions:
    if state.day_number != 0:
        return ActionOptions(can_act=False, message="Cupid only acts on the first night")
    return ActionOptions(
        can_act=True,
        available_targets=_targets(state, owner),
        required_targets=2,
        message="Choose two lovers",
    )


# Hunter

def _hunter_action(role: Role, owner: 'Player', payload: Any) -> Optional[List[Action]]:
    target_id = _single_target(payload)
    if target_id is None or target_id == owner.id:
        return None
    if owner.is_alive or not role.has_resource("can_shoot"):
        return None
    role.consume_resource("can_shoot")
    return [ShootAction(target_id=target_id, shooter_id=owner.id)]


def _hunter_options(role: Role, state: 'GameState', owner: 'Player') -> ActionOptions:
    can_shoot = role.has_resource("can_shoot")
    if owner.is_alive or not can_shoot:
        return ActionOptions(
            can_act=False,
            message="The Hunter shoots only once, after dying",
            details={"can_shoot": can_shoot},
        )
    return ActionOptions(
        can_act=True,
        available_targets=_targets(state, owner),
        required_targets=1,
        message="Take someone down",
        details={"can_shoot": can_shoot},
    )


ROLE_BEHAVIOURS: Dict[RoleName, RoleBehaviour] = {
    RoleName.VILLAGER: RoleBehaviour(_no_reaction, _villager_action, _villager_options),
    RoleName.WEREWOLF: RoleBehaviour(_no_reaction, _werewolf_action, _werewolf_options),
    RoleName.SEER: RoleBehaviour(_no_reaction, _seer_action, _seer_options),
    RoleName.BODYGUARD: RoleBehaviour(_no_reaction, _bodyguard_action, _bodyguard_options),
    RoleName.WITCH: RoleBehaviour(_no_reaction, _witch_action, _witch_options, _witch_check),
    RoleName.CUPID: RoleBehaviour(_no_reaction, _cupid_action, _cupid_options),
    RoleName.HUNTER: RoleBehaviour(_no_reaction, _hunter_action, _hunter_options),
}


_ROLE_DEFAULTS: Dict[RoleName, Tuple[Faction, str, Dict[str, bool]]] = {
    RoleName.VILLAGER: (Faction.VILLAGER, "Find and eliminate the werewolves", {}),
    RoleName.WEREWOLF: (Faction.WEREWOLF, "Each night, choose a villager to eliminate", {}),
    RoleName.SEER: (Faction.VILLAGER, "Each night, learn the faction of one player", {}),
    RoleName.BODYGUARD: (Faction.VILLAGER, "Each night, protect one player from the werewolves", {}),
    RoleName.WITCH: (
        Faction.VILLAGER,
        "Has one healing potion and one poison potion",
        {"heal_potion": True, "poison_potion": True},
    ),
    RoleName.HUNTER: (Faction.VILLAGER, "When killed, takes one player down too", {"can_shoot": True}),
    RoleName.CUPID: (Faction.VILLAGER, "On the first night, binds two players as lovers", {}),
}


def _factory(role_type: RoleName) -> Callable[[], Role]:
    def build() -> Role:
        faction, description, resources = _ROLE_DEFAULTS[role_type]
        return Role(
            role_type=role_type,
            faction=faction,
            description=description,
            resources=dict(resources),
        )
    return build


ROLE_FACTORIES: Dict[str, Callable[[], Role]] = {
    role_type.value: _factory(role_type) for role_type in RoleName
}


def create_role(name: str) -> Optional[Role]:
    """Create a fresh role instance by name, None for unknown names."""
    factory = ROLE_FACTORIES.get(name)
    return factory() if factory else None


def role_from_summary(summary: Dict[str, Any]) -> Optional[Role]:
    """Rebuild a role from `Role.to_summary`, including resources and lover wrapping."""
    role = create_role(summary.get("name", ""))
    if role is None:
        return None
    role.resources.update(summary.get("resources") or {})
    if summary.get("faction") == Faction.LOVERS.value:
        return role.as_lover()
    return role
