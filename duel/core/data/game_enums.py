"""Centralized enums for the duel engine."""

from enum import Enum, auto


class BattlePhase(Enum):
    """Lifecycle of a combat session."""

    ACTIVE = auto()  # Both combatants standing, attacks resolve
    OVER = auto()    # Terminal, further attacks are ignored


class CombatRole(Enum):
    """Role a combatant currently plays inside a session."""

    ATTACKER = auto()
    DEFENDER = auto()


class LogLevel(Enum):
    """Log levels for filtering."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


class LogCategory(Enum):
    """Categories for log messages."""

    SYSTEM = auto()  # Initialization, configuration loading
    BATTLE = auto()  # Combat resolution
    DEBUG = auto()
