"""
Player class representing a seat at the table.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .roles import Role
    from .types import Faction


@dataclass
class Player:
    """Represents a player in the game."""
    id: str
    name: str
    role: Optional['Role'] = None

    # Core states
    is_alive: bool = True
    is_marked_for_death: bool = False  # Dies when the night is resolved
    is_protected: bool = False  # Bodyguard protection, reset every night
    is_silenced: bool = False  # Reserved for future roles

    # Mutual pairing set by Cupid; a relation, not ownership
    lover: Optional['Player'] = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        role_name = self.role.name if self.role else "unassigned"
        return f"{self.name} ({role_name})"

    @property
    def faction(self) -> Optional['Faction']:
        """Current faction of the player's role, None while unassigned."""
        return self.role.faction if self.role else None

    @property
    def role_name(self) -> Optional[str]:
        return self.role.name if self.role else None

    @property
    def has_lover(self) -> bool:
        return self.lover is not None

    def is_lover_of(self, other: 'Player') -> bool:
        """Check that both players point at each other."""
        return self.lover is other and other.lover is self

    def eliminate(self) -> None:
        """Mark player as dead. A dead player keeps its role."""
        self.is_alive = False
        self.is_marked_for_death = False

    def to_snapshot(self) -> Dict[str, Any]:
        """Value copy of the player used by game state snapshots."""
        return {
            "id": self.id,
            "name": self.name,
            "is_alive": self.is_alive,
            "is_protected": self.is_protected,
            "is_marked_for_death": self.is_marked_for_death,
            "is_silenced": self.is_silenced,
            "role": self.role.to_summary() if self.role else None,
            "lover": {"id": self.lover.id, "name": self.lover.name} if self.lover else None,
        }
