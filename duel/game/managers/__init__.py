"""Managers that observe combat through the event bus.

- log_manager.py: Bounded, filterable combat log fed by LogMessage events
"""

from .log_manager import LogManager, LogEntry

__all__ = [
    "LogManager",
    "LogEntry",
]
