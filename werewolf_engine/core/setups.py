"""
Suggested role setups by player count.
"""

from typing import Dict, List

from .types import RoleName

_W = RoleName.WEREWOLF.value
_S = RoleName.SEER.value
_B = RoleName.BODYGUARD.value
_WI = RoleName.WITCH.value
_H = RoleName.HUNTER.value
_C = RoleName.CUPID.value
_V = RoleName.VILLAGER.value

MIN_PLAYERS = 6
MAX_PLAYERS = 16

SUGGESTED_SETUPS: Dict[int, Dict[str, Dict[str, int]]] = {
    6: {"beginner": {_W: 1, _S: 1, _V: 4}},
    7: {"starter": {_W: 2, _S: 1, _V: 4}},
    8: {
        "standard": {_W: 2, _S: 1, _B: 1, _V: 4},
        "chaos": {_W: 2, _S: 1, _WI: 1, _V: 4},
    },
    9: {"standard": {_W: 2, _S: 1, _B: 1, _WI: 1, _V: 4}},
    10: {
        "wolf_pack": {_W: 3, _S: 1, _B: 1, _WI: 1, _H: 1, _V: 3},
        "lovers": {_W: 2, _S: 1, _WI: 1, _C: 1, _V: 5},
    },
    11: {"standard": {_W: 3, _S: 1, _B: 1, _WI: 1, _V: 5}},
    12: {"full": {_W: 3, _S: 1, _B: 1, _WI: 1, _H: 1, _C: 1, _V: 4}},
    13: {"full": {_W: 3, _S: 1, _B: 1, _WI: 1, _H: 1, _C: 1, _V: 5}},
    14: {"standard": {_W: 4, _S: 1, _B: 1, _WI: 1, _H: 1, _V: 6}},
    15: {"full": {_W: 4, _S: 1, _B: 1, _WI: 1, _H: 1, _C: 1, _V: 6}},
    16: {"full": {_W: 4, _S: 1, _B: 1, _WI: 1, _H: 1, _C: 1, _V: 7}},
}


def get_suggested_role_setups(player_count: int) -> Dict[str, Dict[str, int]]:
    """Named setups for the table size, empty outside 6-16 players."""
    setups = SUGGESTED_SETUPS.get(player_count, {})
    return {name: dict(setup) for name, setup in setups.items()}


def expand_role_setup(setup: Dict[str, int]) -> List[str]:
    """
    Turn {role: count} into a flat list of role names.

    Special roles come first in night order, villagers last.
    """
    order = [_C, _B, _W, _WI, _S, _H]
    names: List[str] = []
    for role_name in order + [r for r in setup if r not in order and r != _V] + [_V]:
        names.extend([role_name] * setup.get(role_name, 0))
    return names
