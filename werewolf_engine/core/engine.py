"""
Game engine: the moderator-facing command surface.

The engine owns one GameState and one RuleSet. Every command runs to
completion, including all chained reactions, before it returns.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, List, Optional, Tuple, Union, TYPE_CHECKING

from .actions import Action, action_from_dict
from .events import DeathCause, GameEvent, GameEventType
from .exceptions import SerializationError
from .game_state import GameState
from .history import GameHistory, HistoryEntry, HistoryEntryType, HistoryEventType
from .player import Player
from .roles import ActionOptions, ROLE_FACTORIES, Role, role_from_summary
from .rules import RuleSet, StandardRuleSet
from .types import ActionResult, GamePhase, RoleName
from ..config.game_config import GameConfig, default_config
from ..phases import DayPhaseHandler, NightPhaseHandler, VotingHandler

if TYPE_CHECKING:
    from ..recording.event_emitter import EventEmitter


@dataclass
class UndoEntry:
    """One undoable command: its actions and the state before them."""
    role_name: str
    actions: List[Action]
    snapshot: Dict[str, Any]
    history_indices: List[int] = field(default_factory=list)


class GameEngine:
    """Orchestrates state, actions, events and win detection."""

    def __init__(
        self,
        players: List[Dict[str, str]],
        rule_set: Optional[RuleSet] = None,
        config: GameConfig = default_config,
        event_emitter: Optional['EventEmitter'] = None,
    ):
        ids = [p["id"] for p in players]
        if len(set(ids)) != len(ids):
            raise ValueError("Player ids must be unique")

        self.config = config
        self.rule_set = rule_set or StandardRuleSet(config)
        self.event_emitter = event_emitter
        self.game_state = GameState(
            players=[Player(id=p["id"], name=p["name"]) for p in players],
            rule_set=self.rule_set,
        )

        self.history = GameHistory()
        self.events: List[GameEvent] = []
        self.action_log: List[Action] = []
        self.announcements: List[str] = []
        self.diagnostics: List[str] = []

        self._immediate_queue: Deque[Tuple[Player, Action]] = deque()
        self._undo_stack: List[UndoEntry] = []

        self.night_phase = NightPhaseHandler(self)
        self.day_phase = DayPhaseHandler(self)
        self.voting = VotingHandler(self)

        self._broadcast_event(GameEvent.game_started(len(self.game_state.players)))

    # Logging

    def announce(self, message: str) -> None:
        """Make a moderator announcement."""
        self.announcements.append(message)
        if self.config.use_announcements:
            print(f"[MODERATOR] {message}")
        if self.event_emitter:
            self.event_emitter.emit_announcement(
                message,
                self.game_state.phase.value,
                self.game_state.day_number,
            )

    def _warn(self, message: str) -> None:
        self.diagnostics.append(message)
        if self.config.use_announcements:
            print(f"[WARNING] {message}")

    # Event broadcast and immediate reactions

    def _broadcast_event(self, event: GameEvent) -> None:
        """Log the event and let every living, role-bearing player react."""
        self.events.append(event)
        if self.event_emitter:
            self.event_emitter.emit_game_event(
                event,
                self.game_state.phase.value,
                self.game_state.day_number,
            )

        for player in self.game_state.get_living_players():
            if player.role is None:
                continue
            actions = player.role.on_game_event(event, self.game_state, player)
            if actions:
                for action in actions:
                    self._immediate_queue.append((player, action))

    def _process_immediate_actions(self) -> List[Action]:
        """Drain the reaction queue to empty. Reactions may queue more reactions."""
        executed = []
        while self._immediate_queue:
            actor, action = self._immediate_queue.popleft()
            living_before = self._living_ids()
            action.execute(self.game_state)
            executed.append(action)
            self.action_log.append(action)
            self.history.add_action_entry(action, [actor], self.game_state)
            self._report_new_deaths(living_before, action.death_cause or DeathCause.KILLED)
        return executed

    def _living_ids(self) -> List[str]:
        return [p.id for p in self.game_state.get_living_players()]

    def _report_new_deaths(self, living_before: List[str], cause: DeathCause) -> List[Player]:
        died = [
            p for p in self.game_state.players
            if p.id in living_before and not p.is_alive
        ]
        for player in died:
            self._report_death(player, cause)
        return died

    def _report_death(self, player: Player, cause: DeathCause) -> None:
        self.history.add_game_event(HistoryEventType.PLAYER_DIED, self.game_state, {
            "player_id": player.id,
            "player_name": player.name,
            "cause": cause.value,
        })
        self.announce(f"{player.name} is dead ({cause.value.lower()}).")
        self._broadcast_event(GameEvent.player_died(player.id, player.name, cause))

    def _check_game_over(self) -> bool:
        """Apply the rule set's verdict. Returns True when the game ended."""
        winner = self.rule_set.check_win_conditions(self.game_state)
        if winner is None:
            return False

        self.game_state.winner = winner
        self.game_state.phase = GamePhase.FINISHED
        self.history.add_game_event(HistoryEventType.GAME_ENDED, self.game_state, {
            "winner": winner.value,
        })
        self.announce(f"Game over. {winner.value} wins.")
        if self.event_emitter:
            self.event_emitter.emit_game_over(winner.value, self.game_state.day_number)
        return True

    def _clear_undo(self) -> None:
        self._undo_stack = []

    # Role lookup

    @staticmethod
    def _role_key(role_name: Union[str, RoleName]) -> str:
        return role_name.value if isinstance(role_name, RoleName) else role_name

    def get_players_with_role(self, role_name: Union[str, RoleName], include_dead: bool = False) -> List[Player]:
        return self.game_state.get_players_with_role(self._role_key(role_name), include_dead)

    def find_player_with_role(self, role_name: Union[str, RoleName], include_dead: bool = False) -> Optional[Player]:
        return self.game_state.find_player_with_role(self._role_key(role_name), include_dead)

    def get_role_action_options(self, role_name: Union[str, RoleName]) -> Optional[ActionOptions]:
        """Options of the responsible player for the role, a dead one if nobody alive holds it."""
        key = self._role_key(role_name)
        player = self.game_state.find_player_with_role(key)
        if player is None:
            player = next((p for p in self.game_state.get_dead_players() if p.role_name == key), None)
        if player is None or player.role is None:
            return None
        return player.role.get_action_options(self.game_state, player)

    # Commands

    def start_first_night(self) -> ActionResult:
        return self.night_phase.start_first_night()

    def assign_role_to_players(self, player_ids: List[str], role_name: Union[str, RoleName]) -> ActionResult:
        """Give a fresh role instance to every listed player that has none yet."""
        key = self._role_key(role_name)
        factory = ROLE_FACTORIES.get(key)
        if factory is None:
            return ActionResult(False, f"Role {key} not found.")

        assigned: List[Player] = []
        for player_id in player_ids:
            player = self.game_state.get_player_by_id(player_id)
            if player is None:
                self._warn(f"Player with ID {player_id} not found. Skipping.")
                continue
            if player.role is not None:
                self._warn(f"Player {player.name} already has a role. Skipping.")
                continue
            player.role = factory()
            assigned.append(player)

        if assigned:
            self.history.add_game_event(HistoryEventType.ROLE_ASSIGNED, self.game_state, {
                "role_name": key,
                "player_names": [p.name for p in assigned],
                "count": len(assigned),
            })

        return ActionResult(
            True,
            f"Assigned {key} to {len(assigned)} players.",
            {"assigned_ids": [p.id for p in assigned], "count": len(assigned)},
        )

    def submit_group_action(self, role_name: Union[str, RoleName], payload: Any) -> ActionResult:
        """
        Act through the first living player holding the role.

        Actions run at once; the pre-action state goes on the undo stack.
        """
        key = self._role_key(role_name)
        failure = self._command_precondition(key)
        if failure:
            return failure

        responsible = self.game_state.find_player_with_role(key)
        if responsible is None or responsible.role is None:
            return ActionResult(False, f"No active player found with role {key} to perform the action.")
        if not responsible.role.allows_action(self.game_state, responsible, payload):
            return ActionResult(False, "Invalid action or payload for the group.")

        snapshot = self.game_state.create_snapshot()
        actions = responsible.role.create_action(responsible, payload)
        history_start = len(self.history)
        if not actions:
            return ActionResult(False, "Invalid action or payload for the group.")

        group = self.game_state.get_players_with_role(key)
        for action in actions:
            action.execute(self.game_state)
            self.action_log.append(action)
            self.history.add_action_entry(action, group, self.game_state)

        self._broadcast_event(GameEvent(GameEventType.ACTION_SUBMITTED, {
            "acting_role_name": key,
            "action_types": [a.get_type() for a in actions],
        }))
        reactions = self._process_immediate_actions()
        self._undo_stack.append(UndoEntry(
            key, list(actions) + reactions, snapshot, self._action_entry_indices(history_start),
        ))

        return ActionResult(True, "Group action submitted and executed.", self._action_data(actions))

    def submit_immediate_action(self, role_name: Union[str, RoleName], payload: Any) -> ActionResult:
        """
        Act right away, also through a dead player (the Hunter's last shot).

        Deaths are broadcast, reactions drained and win conditions re-checked.
        """
        key = self._role_key(role_name)
        failure = self._command_precondition(key)
        if failure:
            return failure

        responsible = self.game_state.find_player_with_role(key)
        if responsible is None:
            responsible = next(
                (p for p in self.game_state.get_dead_players() if p.role_name == key),
                None,
            )
        if responsible is None or responsible.role is None:
            return ActionResult(False, f"No active or eligible player found with role {key}.")
        if not responsible.role.allows_action(self.game_state, responsible, payload):
            return ActionResult(False, "Invalid action for immediate execution.")

        snapshot = self.game_state.create_snapshot()
        actions = responsible.role.create_action(responsible, payload)
        history_start = len(self.history)
        if not actions:
            return ActionResult(False, "Invalid action for immediate execution.")

        deaths: List[Tuple[Player, DeathCause]] = []
        for action in actions:
            living_before = self._living_ids()
            action.execute(self.game_state)
            self.action_log.append(action)
            self.history.add_action_entry(action, [responsible], self.game_state)
            for player in self.game_state.players:
                if player.id in living_before and not player.is_alive:
                    deaths.append((player, action.death_cause or DeathCause.KILLED))

        self._broadcast_event(GameEvent(GameEventType.ACTION_SUBMITTED, {
            "acting_role_name": key,
            "action_types": [a.get_type() for a in actions],
        }))
        for player, cause in deaths:
            self._report_death(player, cause)

        reactions = self._process_immediate_actions()
        self._undo_stack.append(UndoEntry(
            key, list(actions) + reactions, snapshot, self._action_entry_indices(history_start),
        ))
        self._check_game_over()

        data = self._action_data(actions)
        data["dead_players"] = [p.id for p, _ in deaths]
        return ActionResult(True, "Immediate action executed.", data)

    def _command_precondition(self, role_key: str) -> Optional[ActionResult]:
        if self.game_state.phase == GamePhase.FINISHED:
            return ActionResult(False, "The game is over.")
        if role_key not in ROLE_FACTORIES:
            return ActionResult(False, f"Role {role_key} not found.")
        return None

    def _action_data(self, actions: List[Action]) -> Dict[str, Any]:
        data: Dict[str, Any] = {"action_types": [a.get_type() for a in actions]}
        if self.game_state.last_seer_result and any(a.get_type() == "SeeAction" for a in actions):
            data["seer_result"] = self.game_state.last_seer_result.to_dict()
        return data

    def resolve_night(self) -> ActionResult:
        return self.night_phase.resolve_night()

    def start_voting_phase(self) -> ActionResult:
        return self.day_phase.start_voting_phase()

    def start_defense_phase(self, player_id: str) -> ActionResult:
        return self.day_phase.start_defense_phase(player_id)

    def start_last_word_phase(self) -> ActionResult:
        return self.day_phase.start_last_word_phase()

    def resolve_voting(self, voted_player_id: Optional[str]) -> ActionResult:
        return self.voting.resolve_voting(voted_player_id)

    def undo_last_action(self) -> ActionResult:
        """Revert the most recent submitted command within the current phase."""
        if not self._undo_stack:
            return ActionResult(False, "No actions to undo")

        entry = self._undo_stack.pop()
        for action in reversed(entry.actions):
            action.undo(self.game_state)
        self.game_state.restore_from_snapshot(entry.snapshot)
        self._restore_role_resources(entry.snapshot)

        undone = {id(action) for action in entry.actions}
        self.action_log = [a for a in self.action_log if id(a) not in undone]

        action_types = [a.get_type() for a in entry.actions]
        self.history.add_game_event(HistoryEventType.ACTION_UNDONE, self.game_state, {
            "role_name": entry.role_name,
            "action_types": action_types,
            "undone_entries": entry.history_indices,
        })
        self._broadcast_event(GameEvent(GameEventType.ACTION_UNDONE, {"action_types": action_types}))
        self._process_immediate_actions()

        return ActionResult(True, "Action undone successfully", {"action_types": action_types})

    def _action_entry_indices(self, start: int) -> List[int]:
        entries = self.history.get_entries()
        return [i for i in range(start, len(entries)) if entries[i].type == HistoryEntryType.ACTION]

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def _restore_role_resources(self, snapshot: Dict[str, Any]) -> None:
        for saved in snapshot.get("players", []):
            player = self.game_state.get_player_by_id(saved["id"])
            if player is None or player.role is None or not saved.get("role"):
                continue
            player.role.base.resources = dict(saved["role"].get("resources") or {})

    # Read surface

    def get_rule_set(self) -> RuleSet:
        return self.rule_set

    def get_action_history(self) -> GameHistory:
        return self.history

    def get_last_night_actions(self) -> List[HistoryEntry]:
        return self.history.get_last_night_actions(self.game_state.day_number)

    def get_first_night_turn_order(self) -> List[Role]:
        return self.rule_set.get_first_night_turn_order()

    def get_night_turn_order(self) -> List[Role]:
        return self.rule_set.get_night_turn_order()

    # Serialization

    def get_serializable_state(self) -> Dict[str, Any]:
        """Plain dict holding the state snapshot and the full action and event history."""
        return {
            "game_state": self.game_state.create_snapshot(),
            "action_history": [action.serialize() for action in self.action_log],
            "history": self.history.to_list(),
            "events": [event.to_dict() for event in self.events],
        }

    @staticmethod
    def from_serialized_state(
        data: Dict[str, Any],
        players: List[Dict[str, str]],
        rule_set: Optional[RuleSet] = None,
        config: GameConfig = default_config,
    ) -> 'GameEngine':
        """
        Rebuild an engine from get_serializable_state output.

        Roles, lovers and potions are restored; the undo stack is not.

        Raises:
            SerializationError: If the data cannot be turned back into a game
        """
        engine = GameEngine(players, rule_set=rule_set, config=config)
        try:
            snapshot = data["game_state"]
            engine.game_state.restore_from_snapshot(snapshot)
            engine._relink_players(snapshot)
            engine.history = GameHistory.from_list(data.get("history") or [])
            engine.events = [GameEvent.from_dict(e) for e in data.get("events") or []]
            engine.action_log = [action_from_dict(a) for a in data.get("action_history") or []]
        except (KeyError, TypeError, ValueError) as e:
            raise SerializationError(f"Invalid serialized game: {e}") from e
        return engine

    def _relink_players(self, snapshot: Dict[str, Any]) -> None:
        saved_players = snapshot.get("players", [])
        for saved in saved_players:
            player = self.game_state.get_player_by_id(saved["id"])
            if player is None or not saved.get("role"):
                continue
            role = role_from_summary(saved["role"])
            if role is None:
                raise SerializationError(f"Unknown role: {saved['role'].get('name')}", field_name="role")
            player.role = role

        for saved in saved_players:
            player = self.game_state.get_player_by_id(saved["id"])
            lover = saved.get("lover")
            if player is not None and lover:
                player.lover = self.game_state.get_player_by_id(lover["id"])
