"""
Tests for suggested role setups.
"""

import pytest

from werewolf_engine.core import RoleName, expand_role_setup, get_suggested_role_setups


@pytest.mark.parametrize("player_count", range(6, 17))
def test_setups_fill_the_table(player_count):
    """Test that every suggested setup has one role per player."""
    setups = get_suggested_role_setups(player_count)

    assert setups
    for setup in setups.values():
        assert sum(setup.values()) == player_count
        assert setup[RoleName.WEREWOLF.value] >= 1


@pytest.mark.parametrize("player_count", [0, 5, 17])
def test_no_setup_outside_range(player_count):
    """Test that unsupported table sizes get nothing."""
    assert get_suggested_role_setups(player_count) == {}


def test_suggestions_are_copies():
    """Test that callers cannot change the stored setups."""
    get_suggested_role_setups(6)["beginner"]["Werewolf"] = 5

    assert get_suggested_role_setups(6)["beginner"]["Werewolf"] == 1


def test_expand_orders_specials_first():
    """Test that expansion lists special roles in night order, villagers last."""
    roles = expand_role_setup({"Villager": 2, "Seer": 1, "Werewolf": 2, "Cupid": 1})

    assert roles == ["Cupid", "Werewolf", "Werewolf", "Seer", "Villager", "Villager"]
