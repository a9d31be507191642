"""
Event emitter for recording engine events to files.
"""

from typing import Any, Dict, Optional, TYPE_CHECKING

from .run_recorder import RunRecorder

if TYPE_CHECKING:
    from ..core.events import GameEvent


class EventEmitter:
    """Event emitter that records game events to files."""

    def __init__(self, run_recorder: Optional[RunRecorder] = None):
        self.run_recorder = run_recorder or RunRecorder()

    def _emit(self, event_type: str, data: Dict[str, Any]) -> None:
        """Emit an event by recording it to file."""
        if self.run_recorder:
            try:
                self.run_recorder.record_event(event_type, data)
            except (OSError, TypeError, ValueError) as e:
                # Recording errors must not break the game
                print(f"Error recording event: {e}")

    def emit_game_event(self, event: 'GameEvent', phase: str, day_number: int) -> None:
        """Record a broadcast event with the phase it happened in."""
        self._emit(event.type.value.lower(), {
            "payload": dict(event.payload),
            "phase": phase,
            "day_number": day_number,
        })

    def emit_announcement(self, message: str, phase: str, day_number: int) -> None:
        self._emit("announcement", {
            "message": message,
            "phase": phase,
            "day_number": day_number,
        })

    def emit_game_over(self, winner: Optional[str], day_number: int) -> None:
        self._emit("game_over", {
            "winner": winner,
            "day_number": day_number,
        })
