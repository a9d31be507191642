"""
Game configuration and constants.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class GameConfig:
    """Configuration for game parameters."""

    # Moderator announcements
    use_announcements: bool = True

    # Rule variants
    can_werewolf_kill_on_first_night: bool = True
    lovers_die_together: bool = True
    can_witch_heal_self: bool = True

    # Recording
    runs_dir: str = "runs"

    # Table setup (optional, used by the command line helper)
    player_names: List[str] = field(default_factory=list)
    role_setup: Optional[Dict[str, int]] = None  # {role_name: count}

    def __post_init__(self):
        """Validate the table setup."""
        if self.role_setup is None:
            return
        for role_name, count in self.role_setup.items():
            if not isinstance(count, int) or count < 0:
                raise ValueError(f"Invalid count for role '{role_name}': {count}")
        if self.player_names and sum(self.role_setup.values()) != len(self.player_names):
            raise ValueError(
                f"Role setup has {sum(self.role_setup.values())} roles "
                f"for {len(self.player_names)} players"
            )


# Default configuration instance
default_config = GameConfig()
