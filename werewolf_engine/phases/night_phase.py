"""
Night phase handler: the first night and night resolution.
"""

from typing import TYPE_CHECKING

from ..core.events import DeathCause, GameEvent
from ..core.history import HistoryEventType
from ..core.types import ActionResult, GamePhase

if TYPE_CHECKING:
    from ..core.engine import GameEngine


class NightPhaseHandler:
    """Handles night transitions. Marks only become deaths here."""

    def __init__(self, engine: 'GameEngine'):
        self.engine = engine
        self.game_state = engine.game_state

    def start_first_night(self) -> ActionResult:
        """Setup -> Night, day 0."""
        if self.game_state.phase != GamePhase.SETUP:
            return ActionResult(False, "The game has already started.")

        self.game_state.phase = GamePhase.NIGHT
        self.game_state.day_number = 0
        self.game_state.reset_nightly_actions()

        self.engine.history.add_game_event(HistoryEventType.FIRST_NIGHT_STARTED, self.game_state, {
            "day_number": self.game_state.day_number,
        })
        self.engine.announce("Night falls. The first night begins.")
        self.engine._broadcast_event(GameEvent.phase_changed(GamePhase.NIGHT.value, self.game_state.day_number))
        self.engine._process_immediate_actions()
        return ActionResult(True, "First night started.")

    def resolve_night(self) -> ActionResult:
        """
        Turn death marks into deaths, let the dead trigger reactions, then
        either end the game or start the next day.
        """
        if self.game_state.phase != GamePhase.NIGHT:
            return ActionResult(False, "Not in night phase")

        self.engine._clear_undo()
        living_before = self.engine._living_ids()

        dead_players = []
        for player in self.game_state.players:
            if player.is_marked_for_death and player.is_alive:
                player.eliminate()
                dead_players.append(player)

        self.engine.history.add_game_event(HistoryEventType.NIGHT_ENDED, self.game_state, {
            "dead_players": [{"id": p.id, "name": p.name} for p in dead_players],
            "total_deaths": len(dead_players),
            "day_number": self.game_state.day_number,
        })
        if not dead_players:
            self.engine.announce("Nobody died tonight.")

        for player in dead_players:
            cause = DeathCause.POISONED if player.id == self.game_state.nightly_poisoned else DeathCause.KILLED
            self.engine._report_death(player, cause)

        self.engine._process_immediate_actions()

        game_over = self.engine._check_game_over()
        if not game_over:
            self.game_state.day_number += 1
            self.game_state.phase = GamePhase.DAY_DISCUSS
            self.engine.history.add_game_event(HistoryEventType.DAY_STARTED, self.game_state, {
                "day_number": self.game_state.day_number,
            })
            self.engine.announce(f"Day {self.game_state.day_number} begins.")
            self.engine._broadcast_event(
                GameEvent.phase_changed(GamePhase.DAY_DISCUSS.value, self.game_state.day_number)
            )
            self.engine._process_immediate_actions()

        self.game_state.reset_nightly_actions()

        return ActionResult(
            True,
            "Night ended, starting day discussion." if not game_over else "Night ended, the game is over.",
            {
                "dead_players": [
                    p.id for p in self.game_state.players
                    if p.id in living_before and not p.is_alive
                ],
                "winner": self.game_state.winner.value if self.game_state.winner else None,
            },
        )
