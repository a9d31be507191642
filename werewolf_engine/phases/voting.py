"""
Vote resolution: elimination, reactions and the move to night.
"""

from typing import Optional, TYPE_CHECKING

from ..core.events import DeathCause, GameEvent
from ..core.history import HistoryEventType
from ..core.types import ActionResult, GamePhase

if TYPE_CHECKING:
    from ..core.engine import GameEngine


VOTING_PHASES = (GamePhase.DAY_VOTE, GamePhase.DAY_DEFENSE, GamePhase.DAY_LAST_WORD)


class VotingHandler:
    """Handles the outcome of the day's vote."""

    def __init__(self, engine: 'GameEngine'):
        self.engine = engine
        self.game_state = engine.game_state

    def resolve_voting(self, voted_player_id: Optional[str]) -> ActionResult:
        """
        Eliminate the voted player (None means nobody) and move to night.

        The night keeps the current day number.
        """
        if self.game_state.phase not in VOTING_PHASES:
            return ActionResult(False, "Not in voting phase")

        voted_out = None
        if voted_player_id is not None:
            voted_out = self.game_state.get_player_by_id(voted_player_id)
            if voted_out is None:
                return ActionResult(False, f"Player {voted_player_id} not found.")
            if not voted_out.is_alive:
                return ActionResult(False, f"Player {voted_out.name} is already dead.")

        self.engine._clear_undo()
        living_before = self.engine._living_ids()

        self.engine.history.add_game_event(HistoryEventType.VOTING_ENDED, self.game_state, {
            "voted_out": {"id": voted_out.id, "name": voted_out.name} if voted_out else None,
            "day_number": self.game_state.day_number,
        })

        if voted_out is not None:
            voted_out.eliminate()
            self.engine._report_death(voted_out, DeathCause.VOTED_OUT)
            self.engine._process_immediate_actions()
        else:
            self.engine.announce("Nobody was voted out.")

        self.game_state.player_on_trial = None
        game_over = self.engine._check_game_over()
        if not game_over:
            self.game_state.phase = GamePhase.NIGHT
            self.engine.history.add_game_event(HistoryEventType.NIGHT_STARTED, self.game_state, {
                "day_number": self.game_state.day_number,
            })
            self.engine.announce("Night falls.")
            self.engine._broadcast_event(GameEvent.phase_changed(GamePhase.NIGHT.value, self.game_state.day_number))
            self.engine._process_immediate_actions()

        return ActionResult(True, "Voting processed.", {
            "dead_players": [
                p.id for p in self.game_state.players
                if p.id in living_before and not p.is_alive
            ],
            "winner": self.game_state.winner.value if self.game_state.winner else None,
        })
