"""
Core game engine components: players, roles, actions, state, rules and history.
"""

from .types import ActionResult, Faction, GamePhase, RoleName, SeerResult
from .player import Player
from .events import DeathCause, GameEvent, GameEventType
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
    action_from_dict,
)
from .roles import ActionOptions, PlayerTarget, Role, ROLE_FACTORIES, create_role
from .game_state import GameState
from .rules import RuleSet, StandardRuleSet
from .history import GameHistory, HistoryEntry, HistoryEntryType, HistoryEventType
from .setups import expand_role_setup, get_suggested_role_setups
from .exceptions import SerializationError, UnknownActionTypeError
from .engine import GameEngine

__all__ = [
    'ActionResult',
    'Faction',
    'GamePhase',
    'RoleName',
    'SeerResult',
    'Player',
    'DeathCause',
    'GameEvent',
    'GameEventType',
    'Action',
    'CoupleAction',
    'HealAction',
    'HeartbreakAction',
    'KillAction',
    'PoisonAction',
    'ProtectAction',
    'SeeAction',
    'ShootAction',
    'action_from_dict',
    'ActionOptions',
    'PlayerTarget',
    'Role',
    'ROLE_FACTORIES',
    'create_role',
    'GameState',
    'RuleSet',
    'StandardRuleSet',
    'GameHistory',
    'HistoryEntry',
    'HistoryEntryType',
    'HistoryEventType',
    'expand_role_setup',
    'get_suggested_role_setups',
    'SerializationError',
    'UnknownActionTypeError',
    'GameEngine',
]
