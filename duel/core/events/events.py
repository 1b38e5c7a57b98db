"""Combat events published on the event bus.

Event Design Principles:
- Events are immutable dataclasses
- All events carry the session turn they were raised on
- Events name combatants instead of holding references, so a listener can
  never mutate combat state through an event
"""

from dataclasses import dataclass, field
from typing import Optional
from abc import ABC
from enum import Enum, auto

from ..data import LogCategory, LogLevel


class EventType(Enum):
    """Types of combat events that managers can subscribe to."""
    # Session lifecycle
    COMBAT_STARTED = auto()
    COMBAT_ENDED = auto()

    # Attack resolution
    UNIT_ATTACKED = auto()
    UNIT_DEFEATED = auto()
    ATTACK_IGNORED = auto()  # Attack requested on a finished session

    # Logging
    LOG_MESSAGE = auto()


@dataclass(frozen=True)
class CombatEvent(ABC):
    """Base class for all combat events."""
    turn: int
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class CombatStarted(CombatEvent):
    """Event emitted when an engine starts tracking a session."""
    attacker_name: str
    defender_name: str

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.COMBAT_STARTED)


@dataclass(frozen=True)
class UnitAttacked(CombatEvent):
    """Event emitted after one attack exchange has been resolved."""
    attacker_name: str
    defender_name: str
    damage: int
    defender_hp: int
    defender_hp_max: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_ATTACKED)


@dataclass(frozen=True)
class UnitDefeated(CombatEvent):
    """Event emitted when a defender's HP reaches zero."""
    unit_name: str
    defeated_by: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_DEFEATED)


@dataclass(frozen=True)
class CombatEnded(CombatEvent):
    """Event emitted when a session enters its terminal phase."""
    winner_name: str
    loser_name: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.COMBAT_ENDED)


@dataclass(frozen=True)
class AttackIgnored(CombatEvent):
    """Event emitted when an attack is requested after the combat is over."""
    attacker_name: str
    defender_name: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ATTACK_IGNORED)


@dataclass(frozen=True)
class LogMessage(CombatEvent):
    """Event emitted to route a message to the log manager."""
    message: str
    category: LogCategory = LogCategory.BATTLE
    level: LogLevel = LogLevel.INFO
    source: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)
