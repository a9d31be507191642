"""
Tests for the game history log.
"""

from werewolf_engine.core import (
    GameHistory,
    GamePhase,
    HistoryEntryType,
    HistoryEventType,
    KillAction,
    ProtectAction,
)


def _record_night(history, state, day_number):
    state.phase = GamePhase.NIGHT
    state.day_number = day_number
    werewolf = state.get_player_by_id("p1")
    bodyguard = state.get_player_by_id("p3")
    history.add_action_entry(ProtectAction(target_id="p2"), [bodyguard], state)
    history.add_action_entry(KillAction(target_id="p2", killer_id="p1"), [werewolf], state)


def test_action_entry_fields(state):
    """Test that action entries name actors, role and target."""
    history = GameHistory()
    state.phase = GamePhase.NIGHT
    werewolf = state.get_player_by_id("p1")

    entry = history.add_action_entry(KillAction(target_id="p2", killer_id="p1"), [werewolf], state)

    assert entry.type == HistoryEntryType.ACTION
    assert entry.actor_names == ["Alice"]
    assert entry.role_name == "Werewolf"
    assert entry.action_type == "KillAction"
    assert entry.target_name == "Bob"
    assert entry.phase == GamePhase.NIGHT


def test_game_event_entry(state):
    """Test lifecycle event entries."""
    history = GameHistory()

    entry = history.add_game_event(HistoryEventType.DAY_STARTED, state, {"day_number": 1}, "Day 1")

    assert entry.type == HistoryEntryType.GAME_EVENT
    assert entry.event_type == "DAY_STARTED"
    assert entry.data == {"day_number": 1}
    assert entry.message == "Day 1"


def test_queries(state):
    """Test the read-only queries."""
    history = GameHistory()
    _record_night(history, state, 0)
    state.phase = GamePhase.DAY_DISCUSS
    state.day_number = 1
    history.add_game_event(HistoryEventType.DAY_STARTED, state)

    assert len(history.get_entries()) == 3
    assert len(history.get_action_entries()) == 2
    assert len(history.get_game_event_entries()) == 1
    assert len(history.get_entries_by_phase(GamePhase.NIGHT)) == 2
    assert history.get_entries_by_phase(GamePhase.NIGHT, day_number=1) == []
    assert [e.action_type for e in history.get_entries_by_role("Bodyguard")] == ["ProtectAction"]


def test_last_night_actions_follow_day_counter(state):
    """Test that the previous night is found from the current day."""
    history = GameHistory()
    _record_night(history, state, 0)
    _record_night(history, state, 1)

    # During the night of day 1, the last completed night is night 0
    assert [e.day_number for e in history.get_last_night_actions(current_day=1)] == [0, 0]
    assert [e.day_number for e in history.get_last_night_actions(current_day=2)] == [1, 1]


def test_last_night_actions_default(state):
    """Test the fallback to the latest entry's day."""
    history = GameHistory()
    assert history.get_last_night_actions() == []

    _record_night(history, state, 0)
    state.phase = GamePhase.DAY_DISCUSS
    state.day_number = 1
    history.add_game_event(HistoryEventType.DAY_STARTED, state)

    assert len(history.get_last_night_actions()) == 2


def test_clear(state):
    """Test that clear empties the log."""
    history = GameHistory()
    _record_night(history, state, 0)

    history.clear()

    assert history.get_entries() == []


def test_to_list_from_list(state):
    """Test that the log survives serialization."""
    history = GameHistory()
    _record_night(history, state, 0)
    history.add_game_event(HistoryEventType.NIGHT_ENDED, state, {"total_deaths": 1})

    restored = GameHistory.from_list(history.to_list())

    assert restored.get_entries() == history.get_entries()


def test_last_night_actions_skip_undone_entries(state):
    """Test that entries listed by an undo event are left out."""
    history = GameHistory()
    _record_night(history, state, 0)
    history.add_game_event(HistoryEventType.ACTION_UNDONE, state, {"undone_entries": [1]})
    state.phase = GamePhase.DAY_DISCUSS
    state.day_number = 1

    last_night = history.get_last_night_actions(current_day=1)

    assert [e.action_type for e in last_night] == ["ProtectAction"]
    assert history.get_undone_indices() == {1}
    assert len(history.get_action_entries()) == 2
    assert GameHistory.from_list(history.to_list()).get_undone_indices() == {1}
