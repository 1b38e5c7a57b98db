"""Turn-based duel engine built around data, context and interaction roles."""

from .core.data import BattlePhase, StatBlock, DEFAULT_STAT_BLOCK
from .core.engine import CombatSession, AttackResult
from .core.events import EventManager
from .game.combat import CombatEngine, BattleCalculator
from .game.entities import Combatant, StatsProvider, create_combatant, create_session
from .game.managers import LogManager

__version__ = "0.1.0"

__all__ = [
    "BattlePhase",
    "StatBlock",
    "DEFAULT_STAT_BLOCK",
    "CombatSession",
    "AttackResult",
    "EventManager",
    "CombatEngine",
    "BattleCalculator",
    "Combatant",
    "StatsProvider",
    "create_combatant",
    "create_session",
    "LogManager",
]
