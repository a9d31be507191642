"""
Integration tests for full game flow.
"""

import pytest

from werewolf_engine.core import Faction, GamePhase, get_suggested_role_setups, expand_role_setup


@pytest.mark.parametrize("protected_id, expect_dead", [("p5", False), ("p6", True)])
def test_first_night_kill_respects_protection(standard_engine, protected_id, expect_dead):
    """Test the eight-player first night with and without the Bodyguard's save."""
    assert standard_engine.game_state.phase == GamePhase.NIGHT
    assert standard_engine.game_state.day_number == 0

    assert standard_engine.submit_group_action("Bodyguard", protected_id).success
    assert standard_engine.submit_group_action("Werewolf", "p5").success
    victim = standard_engine.game_state.get_player_by_id("p5")
    assert victim.is_marked_for_death == expect_dead

    assert standard_engine.resolve_night().success
    assert standard_engine.game_state.phase == GamePhase.DAY_DISCUSS
    assert standard_engine.game_state.day_number == 1
    assert victim.is_alive != expect_dead


def test_standard_setup_matches_suggestion():
    """Test that the eight-player fixture uses the suggested standard setup."""
    setup = get_suggested_role_setups(8)["standard"]

    assert sorted(expand_role_setup(setup)) == sorted([
        "Werewolf", "Werewolf", "Seer", "Bodyguard",
        "Villager", "Villager", "Villager", "Villager",
    ])


def test_villagers_win_full_game(standard_engine):
    """Test a game that ends with both werewolves voted out."""
    engine = standard_engine

    # Night 0: Erin is bitten
    engine.submit_group_action("Bodyguard", "p3")
    engine.submit_group_action("Werewolf", "p5")
    engine.submit_group_action("Seer", "p1")
    engine.resolve_night()

    # Day 1: Alice is voted out
    engine.start_voting_phase()
    engine.resolve_voting("p1")
    assert engine.game_state.phase == GamePhase.NIGHT
    assert engine.game_state.day_number == 1

    # Night 1: Bob alone bites Frank
    engine.submit_group_action("Werewolf", "p6")
    engine.resolve_night()
    assert engine.game_state.day_number == 2
    assert [e.target_id for e in engine.get_last_night_actions()] == ["p6"]

    # Day 2: Bob is voted out
    engine.start_voting_phase()
    result = engine.resolve_voting("p2")

    assert result.data["winner"] == "VILLAGER"
    assert engine.game_state.winner == Faction.VILLAGER
    assert engine.game_state.phase == GamePhase.FINISHED
    assert [p.id for p in engine.game_state.get_living_players()] == ["p3", "p4", "p7", "p8"]


def test_werewolves_win_full_game(engine_with_roles):
    """Test a game the werewolves win at dawn."""
    engine = engine_with_roles(["Werewolf", "Werewolf", "Seer", "Villager", "Villager", "Villager"])

    engine.submit_group_action("Werewolf", "p3")
    engine.resolve_night()
    engine.start_voting_phase()
    engine.resolve_voting("p4")

    engine.submit_group_action("Werewolf", "p5")
    result = engine.resolve_night()

    assert result.data["winner"] == "WEREWOLF"
    assert engine.game_state.phase == GamePhase.FINISHED
    assert engine.game_state.day_number == 1


def test_lovers_win_full_game(engine_with_roles):
    """Test a cross-faction couple outliving everyone."""
    engine = engine_with_roles(["Werewolf", "Witch", "Werewolf", "Villager", "Cupid"])

    # Night 0: Alice (Werewolf) and Bob (Witch) fall in love, Erin is bitten
    engine.submit_group_action("Cupid", ["p1", "p2"])
    engine.submit_group_action("Werewolf", "p5")
    engine.resolve_night()
    assert engine.game_state.phase == GamePhase.DAY_DISCUSS

    engine.start_voting_phase()
    engine.resolve_voting(None)

    # Night 1: the last two outsiders die together
    engine.submit_group_action("Werewolf", "p4")
    engine.submit_group_action("Witch", {"poison_target": "p3"})
    result = engine.resolve_night()

    assert result.data["dead_players"] == ["p3", "p4"]
    assert result.data["winner"] == "LOVERS"
    assert engine.game_state.winner == Faction.LOVERS
