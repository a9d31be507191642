"""
Run recorder that saves game events and serialized games to files.
"""

import json
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Optional


class RunRecorder:
    """Records game events to files in a run directory."""

    def __init__(self, runs_dir: str = "runs"):
        self.runs_dir = Path(runs_dir)
        self.runs_dir.mkdir(parents=True, exist_ok=True)
        self.current_run_dir: Optional[Path] = None
        self.events_file: Optional[Path] = None
        self.metadata_file: Optional[Path] = None
        self.state_file: Optional[Path] = None
        self._lock = Lock()
        self._event_count = 0

    def create_run(self, run_name: Optional[str] = None) -> str:
        """
        Create a new run directory.

        Args:
            run_name: Optional custom run name. If None, generates timestamp-based name.

        Returns:
            The run name (directory name)
        """
        if run_name is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            run_name = f"game_{timestamp}"

        self.current_run_dir = self.runs_dir / run_name
        self.current_run_dir.mkdir(exist_ok=True)

        self.events_file = self.current_run_dir / "events.jsonl"
        self.metadata_file = self.current_run_dir / "metadata.json"
        self.state_file = self.current_run_dir / "state.json"
        self._event_count = 0

        return run_name

    def record_event(self, event_type: str, data: Dict[str, Any]) -> None:
        """
        Append an event to the events file (JSONL format).

        Does nothing until a run has been created.
        """
        if not self.events_file:
            return

        with self._lock:
            event = {
                "timestamp": datetime.now().isoformat(),
                "event_type": event_type,
                "data": data,
                "sequence": self._event_count,
            }
            self._event_count += 1

            with open(self.events_file, 'a') as f:
                f.write(json.dumps(event) + '\n')

    def save_metadata(self, metadata: Dict[str, Any]) -> None:
        if not self.metadata_file:
            return

        with self._lock:
            with open(self.metadata_file, 'w') as f:
                json.dump(metadata, f, indent=2)

    def save_state(self, state: Dict[str, Any]) -> Optional[Path]:
        """Write the output of GameEngine.get_serializable_state for the current run."""
        if not self.state_file:
            return None

        with self._lock:
            with open(self.state_file, 'w') as f:
                json.dump(state, f, indent=2)
        return self.state_file

    def load_state(self, run_name: str) -> Dict[str, Any]:
        """
        Load a saved game state.

        Raises:
            FileNotFoundError: If the run has no saved state
        """
        state_file = self.runs_dir / run_name / "state.json"
        if not state_file.exists():
            raise FileNotFoundError(f"No saved state for run: {run_name}")

        with open(state_file, 'r') as f:
            return json.load(f)

    def load_events(self, run_name: str) -> List[Dict[str, Any]]:
        events_file = self.runs_dir / run_name / "events.jsonl"
        if not events_file.exists():
            return []

        with open(events_file, 'r') as f:
            return [json.loads(line) for line in f if line.strip()]

    def get_run_path(self) -> Optional[Path]:
        """Get the current run directory path."""
        return self.current_run_dir

    def list_runs(self) -> List[Dict[str, Any]]:
        """
        List all recorded runs, newest first.

        Returns:
            List of run info dictionaries
        """
        runs = []
        if not self.runs_dir.exists():
            return runs

        for run_dir in sorted(self.runs_dir.iterdir(), reverse=True):
            if not run_dir.is_dir():
                continue

            metadata_file = run_dir / "metadata.json"
            events = self.load_events(run_dir.name)

            run_info: Dict[str, Any] = {
                "name": run_dir.name,
                "path": str(run_dir),
                "has_metadata": metadata_file.exists(),
                "has_state": (run_dir / "state.json").exists(),
                "event_count": len(events),
            }

            if metadata_file.exists():
                with open(metadata_file, 'r') as f:
                    run_info["metadata"] = json.load(f)

            for event in events:
                if event.get("event_type") == "game_over":
                    run_info["winner"] = event.get("data", {}).get("winner")

            runs.append(run_info)

        return runs
