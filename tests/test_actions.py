"""
Tests for action execution and undo.
"""

import pytest

from werewolf_engine.core import (
    CoupleAction,
    Faction,
    HealAction,
    HeartbreakAction,
    KillAction,
    PoisonAction,
    ProtectAction,
    SeeAction,
    ShootAction,
    UnknownActionTypeError,
    action_from_dict,
)
from werewolf_engine.core.actions import _ImmediateDeath


def test_kill_marks_unprotected_target(state):
    """Test that a bite marks the target and records the attacker."""
    KillAction(target_id="p2", killer_id="p1").execute(state)

    assert state.get_player_by_id("p2").is_marked_for_death
    assert state.nightly_kills == {"p2": "p1"}


def test_kill_absorbed_by_protection(state):
    """Test that protection absorbs the bite but the attack is still recorded."""
    ProtectAction(target_id="p2").execute(state)
    KillAction(target_id="p2", killer_id="p1").execute(state)

    target = state.get_player_by_id("p2")
    assert target.is_protected
    assert not target.is_marked_for_death
    assert state.nightly_kills == {"p2": "p1"}
    assert "p2" in state.nightly_protected


def test_kill_and_poison_on_protected_player(state):
    """Test that a bite is blocked by protection while poison is not."""
    target = state.get_player_by_id("p2")
    ProtectAction(target_id="p2").execute(state)

    KillAction(target_id="p2", killer_id="p1").execute(state)
    assert target.is_marked_for_death is False

    PoisonAction(target_id="p2").execute(state)
    assert target.is_marked_for_death is True
    assert state.nightly_poisoned == "p2"


def test_heal_clears_kill_mark(state):
    """Test that healing removes a bite mark."""
    KillAction(target_id="p2", killer_id="p1").execute(state)
    HealAction(target_id="p2").execute(state)

    assert not state.get_player_by_id("p2").is_marked_for_death
    assert state.nightly_healed == "p2"


def test_kill_on_dead_target_is_noop(state):
    """Test that dead players cannot be bitten."""
    target = state.get_player_by_id("p2")
    target.eliminate()

    KillAction(target_id="p2", killer_id="p1").execute(state)

    assert not target.is_marked_for_death
    assert state.nightly_kills == {}


def test_missing_target_is_noop(state):
    """Test that unknown ids change nothing."""
    KillAction(target_id="nobody", killer_id="p1").execute(state)
    ProtectAction(target_id="nobody").execute(state)
    PoisonAction(target_id="nobody").execute(state)

    assert state.nightly_kills == {}
    assert state.nightly_protected == set()
    assert state.nightly_poisoned is None


def test_see_reveals_faction(state):
    """Test that the Seer learns the target's faction."""
    SeeAction(target_id="p1", seer_id="p5").execute(state)

    result = state.last_seer_result
    assert result.target_id == "p1"
    assert result.target_name == "Alice"
    assert result.revealed_faction == Faction.WEREWOLF


def test_couple_same_faction_keeps_roles(state):
    """Test that same-faction lovers keep their own roles."""
    villager = state.get_player_by_id("p2")
    bodyguard = state.get_player_by_id("p3")
    original_role = villager.role

    CoupleAction(player1_id="p2", player2_id="p3").execute(state)

    assert villager.lover is bodyguard
    assert bodyguard.lover is villager
    assert villager.role is original_role
    assert villager.faction == Faction.VILLAGER


def test_couple_cross_faction_wraps_roles(state):
    """Test that cross-faction lovers switch to the Lovers faction."""
    werewolf = state.get_player_by_id("p1")
    villager = state.get_player_by_id("p2")

    CoupleAction(player1_id="p1", player2_id="p2").execute(state)

    assert werewolf.faction == Faction.LOVERS
    assert villager.faction == Faction.LOVERS
    assert werewolf.role.name == "Werewolf"
    assert werewolf.role.is_lover_variant


def test_couple_undo_restores_roles_and_lovers(state):
    """Test that undoing a couple restores the original roles."""
    werewolf = state.get_player_by_id("p1")
    original_role = werewolf.role
    action = CoupleAction(player1_id="p1", player2_id="p2")

    action.execute(state)
    action.undo(state)

    assert werewolf.role is original_role
    assert werewolf.lover is None
    assert state.get_player_by_id("p2").lover is None


def test_shoot_kills_immediately_even_if_protected(state):
    """Test that the Hunter's shot ignores protection and the night pipeline."""
    target = state.get_player_by_id("p2")
    target.is_protected = True

    ShootAction(target_id="p2", shooter_id="p6").execute(state)

    assert not target.is_alive
    assert not target.is_marked_for_death


def test_heartbreak_kills_grieving_lover(state):
    """Test heartbreak death."""
    HeartbreakAction(player_id="p2", lover_id="p3").execute(state)

    assert not state.get_player_by_id("p2").is_alive


def test_kill_undo_restores_previous_attacker(state):
    """Test that undo puts back the exact previous values."""
    state.nightly_kills["p2"] = "someone"
    action = KillAction(target_id="p2", killer_id="p1")

    action.execute(state)
    assert state.nightly_kills["p2"] == "p1"

    action.undo(state)
    assert state.nightly_kills == {"p2": "someone"}
    assert not state.get_player_by_id("p2").is_marked_for_death


def test_protect_undo(state):
    """Test that undoing protection clears the flag."""
    action = ProtectAction(target_id="p2")
    action.execute(state)
    action.undo(state)

    assert not state.get_player_by_id("p2").is_protected
    assert state.nightly_protected == set()


def test_heal_undo_restores_mark(state):
    """Test that undoing a heal puts the death mark back."""
    KillAction(target_id="p2", killer_id="p1").execute(state)
    heal = HealAction(target_id="p2")
    heal.execute(state)

    heal.undo(state)

    assert state.get_player_by_id("p2").is_marked_for_death
    assert state.nightly_healed is None


def test_shoot_undo_revives_target(state):
    """Test that undoing a shot brings the target back."""
    action = ShootAction(target_id="p2", shooter_id="p6")
    action.execute(state)
    action.undo(state)

    assert state.get_player_by_id("p2").is_alive


def test_get_type_and_serialize():
    """Test the serialized form."""
    action = KillAction(target_id="p2", killer_id="p1", timestamp=123.0)

    assert action.get_type() == "KillAction"
    assert action.serialize() == {
        "type": "KillAction",
        "payload": {"target_id": "p2", "killer_id": "p1"},
        "timestamp": 123.0,
    }


@pytest.mark.parametrize("action", [
    KillAction(target_id="p2", killer_id="p1", timestamp=1.0),
    CoupleAction(player1_id="p1", player2_id="p2", timestamp=2.0),
    HeartbreakAction(player_id="p2", lover_id="p1", timestamp=3.0),
])
def test_action_from_dict(action):
    """Test that serialized actions can be rebuilt."""
    assert action_from_dict(action.serialize()) == action


def test_action_from_dict_unknown_type():
    """Test that unknown action types are rejected."""
    with pytest.raises(UnknownActionTypeError, match="Unknown action type: FlyAction"):
        action_from_dict({"type": "FlyAction", "payload": {}})


def test_immediate_death_requires_victim():
    """Test that an immediate death action must name its victim."""
    class NamelessDeath(_ImmediateDeath):
        def payload(self):
            return {}

    with pytest.raises(TypeError, match="abstract"):
        NamelessDeath()
