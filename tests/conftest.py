"""
Pytest fixtures for Werewolf engine tests.
"""

import pytest
from typing import Dict, List

from werewolf_engine.config.game_config import GameConfig
from werewolf_engine.core import GameEngine, GameState, Player, StandardRuleSet, create_role


PLAYER_NAMES = ["Alice", "Bob", "Carol", "Dave", "Erin", "Frank", "Grace", "Heidi"]

# Seat order p1..p8
STANDARD_SETUP = [
    "Werewolf", "Werewolf", "Seer", "Bodyguard",
    "Villager", "Villager", "Villager", "Villager",
]


def make_players(count: int) -> List[Dict[str, str]]:
    """Player roster as passed to GameEngine."""
    return [{"id": f"p{i + 1}", "name": PLAYER_NAMES[i]} for i in range(count)]


def make_engine(config: GameConfig, roles: List[str], start: bool = True) -> GameEngine:
    """Engine whose seat i gets roles[i], optionally already in the first night."""
    engine = GameEngine(make_players(len(roles)), config=config)
    for index, role_name in enumerate(roles):
        engine.assign_role_to_players([f"p{index + 1}"], role_name)
    if start:
        engine.start_first_night()
    return engine


def make_state(config: GameConfig, roles: List[str]) -> GameState:
    """Bare game state with roles attached, for action and rule tests."""
    players = [
        Player(id=p["id"], name=p["name"], role=create_role(role_name))
        for p, role_name in zip(make_players(len(roles)), roles)
    ]
    return GameState(players=players, rule_set=StandardRuleSet(config))


@pytest.fixture
def game_config():
    """Test game configuration."""
    return GameConfig(use_announcements=False)  # Disable for cleaner test output


@pytest.fixture
def players():
    """Eight seats, no roles."""
    return make_players(8)


@pytest.fixture
def engine(players, game_config):
    """Create a fresh engine in setup."""
    return GameEngine(players, config=game_config)


@pytest.fixture
def standard_engine(game_config):
    """2 Werewolf, Seer, Bodyguard, 4 Villager, first night started."""
    return make_engine(game_config, STANDARD_SETUP)


@pytest.fixture
def state(game_config):
    """Werewolf, Villager, Bodyguard, Witch, Seer, Hunter at p1..p6."""
    return make_state(game_config, ["Werewolf", "Villager", "Bodyguard", "Witch", "Seer", "Hunter"])


@pytest.fixture
def engine_with_roles(game_config):
    """Factory: engine_with_roles(["Werewolf", "Hunter", ...], start=True)."""
    def build(roles: List[str], start: bool = True) -> GameEngine:
        return make_engine(game_config, roles, start)
    return build


@pytest.fixture
def state_with_roles(game_config):
    """Factory: state_with_roles(["Werewolf", "Villager", ...])."""
    def build(roles: List[str]) -> GameState:
        return make_state(game_config, roles)
    return build
