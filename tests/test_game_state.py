"""
Tests for game state queries, night reset and snapshots.
"""

import json

from werewolf_engine.core import CoupleAction, Faction, GamePhase, SeerResult


def test_get_player_by_id(state):
    """Test player lookup."""
    assert state.get_player_by_id("p1").name == "Alice"
    assert state.get_player_by_id("missing") is None
    assert state.get_player_by_id(None) is None


def test_living_players_keep_seat_order(state):
    """Test that living players come in seating order."""
    state.get_player_by_id("p2").eliminate()

    assert [p.id for p in state.get_living_players()] == ["p1", "p3", "p4", "p5", "p6"]
    assert [p.id for p in state.get_dead_players()] == ["p2"]


def test_players_with_role(state_with_roles):
    """Test role lookups, including dead players on request."""
    state = state_with_roles(["Werewolf", "Villager", "Werewolf"])
    state.get_player_by_id("p1").eliminate()

    assert [p.id for p in state.get_players_with_role("Werewolf")] == ["p3"]
    assert [p.id for p in state.get_players_with_role("Werewolf", include_dead=True)] == ["p1", "p3"]
    assert state.find_player_with_role("Seer") is None


def test_reset_nightly_actions(state):
    """Test that every per-night field is cleared."""
    state.nightly_kills = {"p2": "p1"}
    state.nightly_protected = {"p2"}
    state.nightly_healed = "p2"
    state.nightly_poisoned = "p3"
    state.player_on_trial = "p3"
    state.last_seer_result = SeerResult("p1", "Alice", Faction.WEREWOLF)
    state.get_player_by_id("p2").is_protected = True

    state.reset_nightly_actions()

    assert state.nightly_kills == {}
    assert state.nightly_protected == set()
    assert state.nightly_healed is None
    assert state.nightly_poisoned is None
    assert state.player_on_trial is None
    assert state.last_seer_result is None
    assert not any(p.is_protected for p in state.players)


def test_snapshot_round_trip_without_changes(state):
    """Test that restoring an untouched snapshot changes nothing."""
    state.phase = GamePhase.NIGHT
    state.day_number = 2
    state.winner = None
    state.get_player_by_id("p2").is_protected = True
    state.get_player_by_id("p3").is_marked_for_death = True
    state.get_player_by_id("p4").eliminate()
    before = state.create_snapshot()

    state.restore_from_snapshot(state.create_snapshot())

    assert state.create_snapshot() == before


def test_snapshot_restores_flags(state):
    """Test that a snapshot brings back scalar flags after mutation."""
    snapshot = state.create_snapshot()
    target = state.get_player_by_id("p2")

    state.phase = GamePhase.FINISHED
    state.winner = Faction.WEREWOLF
    state.nightly_kills["p2"] = "p1"
    target.is_marked_for_death = True
    target.eliminate()

    state.restore_from_snapshot(snapshot)

    assert state.phase == GamePhase.SETUP
    assert state.winner is None
    assert state.nightly_kills == {}
    assert target.is_alive
    assert not target.is_marked_for_death


def test_snapshot_records_roles_and_lovers(state):
    """Test that the snapshot keeps an audit copy of roles."""
    CoupleAction(player1_id="p1", player2_id="p2").execute(state)

    snapshot = state.create_snapshot()
    saved = snapshot["players"][0]

    assert saved["role"]["name"] == "Werewolf"
    assert saved["role"]["faction"] == "LOVERS"
    assert saved["lover"] == {"id": "p2", "name": "Bob"}
    witch = snapshot["players"][3]
    assert witch["role"]["resources"] == {"heal_potion": True, "poison_potion": True}


def test_snapshot_is_json_friendly(state):
    """Test that snapshots hold plain values only."""
    state.nightly_protected = {"p3", "p2"}
    state.last_seer_result = SeerResult("p1", "Alice", Faction.WEREWOLF)

    snapshot = json.loads(json.dumps(state.create_snapshot()))

    assert snapshot["nightly_protected"] == ["p2", "p3"]
    assert snapshot["last_seer_result"]["revealed_faction"] == "WEREWOLF"
