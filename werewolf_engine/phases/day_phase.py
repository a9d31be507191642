"""
Day phase handler: discussion, voting, defense and last word.
"""

from typing import TYPE_CHECKING

from ..core.events import GameEvent
from ..core.history import HistoryEventType
from ..core.types import ActionResult, GamePhase

if TYPE_CHECKING:
    from ..core.engine import GameEngine


class DayPhaseHandler:
    """Handles the day sub-stages before the vote is resolved."""

    def __init__(self, engine: 'GameEngine'):
        self.engine = engine
        self.game_state = engine.game_state

    def _enter(self, phase: GamePhase, event_type: HistoryEventType, **data) -> None:
        self.engine._clear_undo()
        self.game_state.phase = phase
        self.engine.history.add_game_event(event_type, self.game_state, {
            "day_number": self.game_state.day_number,
            **data,
        })
        self.engine._broadcast_event(GameEvent.phase_changed(phase.value, self.game_state.day_number))
        self.engine._process_immediate_actions()

    def start_voting_phase(self) -> ActionResult:
        """Day_Discuss -> Day_Vote."""
        if self.game_state.phase != GamePhase.DAY_DISCUSS:
            return ActionResult(False, "Not in discussion phase")

        self.engine.announce("Discussion is over. Time to vote.")
        self._enter(GamePhase.DAY_VOTE, HistoryEventType.VOTING_STARTED)
        return ActionResult(True, "Voting phase started.")

    def start_defense_phase(self, player_id: str) -> ActionResult:
        """Day_Vote -> Day_Defense with the most-voted player on trial."""
        if self.game_state.phase != GamePhase.DAY_VOTE:
            return ActionResult(False, "Not in voting phase")

        player = self.game_state.get_player_by_id(player_id)
        if player is None:
            return ActionResult(False, f"Player {player_id} not found.")
        if not player.is_alive:
            return ActionResult(False, f"Player {player.name} is already dead.")

        self.game_state.player_on_trial = player.id
        self.engine.announce(f"{player.name} may now defend themself.")
        self._enter(GamePhase.DAY_DEFENSE, HistoryEventType.DEFENSE_STARTED, player_id=player.id)
        return ActionResult(True, "Defense phase started.")

    def start_last_word_phase(self) -> ActionResult:
        """Day_Defense -> Day_LastWord."""
        if self.game_state.phase != GamePhase.DAY_DEFENSE:
            return ActionResult(False, "Not in defense phase")

        self.engine.announce("Last words.")
        self._enter(
            GamePhase.DAY_LAST_WORD,
            HistoryEventType.LAST_WORD_STARTED,
            player_id=self.game_state.player_on_trial,
        )
        return ActionResult(True, "Last word phase started.")
