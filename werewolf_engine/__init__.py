"""
Moderator rules engine for the Werewolf party game.
"""

from .core import (
    ActionResult,
    Faction,
    GameEngine,
    GamePhase,
    RoleName,
    StandardRuleSet,
)
from .config import GameConfig, load_config

__version__ = "0.1.0"

__all__ = [
    'ActionResult',
    'Faction',
    'GameEngine',
    'GamePhase',
    'RoleName',
    'StandardRuleSet',
    'GameConfig',
    'load_config',
]
