"""Core data structures and definitions.

This package contains fundamental data types:
- data_structures.py: StatBlock and the default stat fallback
- game_enums.py: Battle phases, combat roles and log enums
"""

from .data_structures import StatBlock, DEFAULT_STAT_BLOCK
from .game_enums import BattlePhase, CombatRole, LogLevel, LogCategory

__all__ = [
    "StatBlock",
    "DEFAULT_STAT_BLOCK",
    "BattlePhase",
    "CombatRole",
    "LogLevel",
    "LogCategory",
]
