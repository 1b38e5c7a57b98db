"""Event system for combat notifications.

- events.py: Immutable combat event dataclasses and EventType
- event_manager.py: Publish/subscribe bus with queued and immediate delivery
"""

from .events import (
    EventType,
    CombatEvent,
    CombatStarted,
    UnitAttacked,
    UnitDefeated,
    CombatEnded,
    AttackIgnored,
    LogMessage,
)
from .event_manager import EventManager, EventPriority, EventSubscriber, QueuedEvent

__all__ = [
    "EventType",
    "CombatEvent",
    "CombatStarted",
    "UnitAttacked",
    "UnitDefeated",
    "CombatEnded",
    "AttackIgnored",
    "LogMessage",
    "EventManager",
    "EventPriority",
    "EventSubscriber",
    "QueuedEvent",
]
