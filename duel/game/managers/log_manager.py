"""
Combat log management.

The log manager listens for ``LogMessage`` events on the bus and keeps a
bounded, filterable buffer of formatted lines for display.
"""
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, TYPE_CHECKING

from ...core.data import LogCategory, LogLevel
from ...core.events import EventType, LogMessage

if TYPE_CHECKING:
    from ...core.events import CombatEvent, EventManager


CATEGORY_TAGS = {
    LogCategory.SYSTEM: "SYS",
    LogCategory.BATTLE: "BTL",
    LogCategory.DEBUG: "DBG",
}


@dataclass
class LogEntry:
    """A single log line with metadata."""
    text: str
    category: LogCategory
    level: LogLevel = LogLevel.INFO
    turn: int = 0
    timestamp: datetime = field(default_factory=datetime.now)

    def format(self, include_timestamp: bool = False, include_category: bool = True) -> str:
        """Format the entry for display."""
        parts = []

        if include_timestamp:
            parts.append(f"[{self.timestamp.strftime('%H:%M:%S')}]")

        if include_category:
            parts.append(f"[{CATEGORY_TAGS.get(self.category, '???')}]")

        if self.level in (LogLevel.WARNING, LogLevel.ERROR):
            parts.append(f"{self.level.name}:")

        parts.append(self.text)
        return " ".join(parts)


class LogManager:
    """Collects combat log messages with level and category filtering."""

    def __init__(
        self,
        event_manager: "EventManager",
        max_messages: int = 1000,
        default_level: LogLevel = LogLevel.INFO
    ):
        """Initialize the log manager.

        Args:
            event_manager: Bus to receive ``LogMessage`` events from
            max_messages: Maximum number of entries kept in the buffer
            default_level: Minimum level returned by ``get_messages``
        """
        self.messages: deque[LogEntry] = deque(maxlen=max_messages)
        self.log_level = default_level
        self.enabled_categories = set(LogCategory)
        self.event_manager = event_manager

        self.event_manager.subscribe(
            EventType.LOG_MESSAGE,
            self._handle_log_message_event,
            subscriber_name="LogManager.log_message"
        )
        # Bus diagnostics (subscriber failures among them) land in the debug category
        self.event_manager.set_debug_callback(self.debug)

    def _handle_log_message_event(self, event: "CombatEvent") -> None:
        if isinstance(event, LogMessage):
            text = f"[{event.source}] {event.message}" if event.category is LogCategory.DEBUG else event.message
            self.messages.append(
                LogEntry(text=text, category=event.category, level=event.level, turn=event.turn)
            )

    def log(
        self,
        text: str,
        category: LogCategory = LogCategory.SYSTEM,
        level: LogLevel = LogLevel.INFO
    ) -> None:
        """Add a message to the log directly, bypassing the bus."""
        self.messages.append(LogEntry(text=text, category=category, level=level))

    def system(self, text: str) -> None:
        self.log(text, LogCategory.SYSTEM)

    def battle(self, text: str) -> None:
        self.log(text, LogCategory.BATTLE)

    def debug(self, text: str) -> None:
        self.log(text, LogCategory.DEBUG, LogLevel.DEBUG)

    def warning(self, text: str) -> None:
        self.log(text, LogCategory.SYSTEM, LogLevel.WARNING)

    def error(self, text: str) -> None:
        self.log(text, LogCategory.SYSTEM, LogLevel.ERROR)

    def get_messages(
        self,
        count: Optional[int] = None,
        categories: Optional[set[LogCategory]] = None
    ) -> list[LogEntry]:
        """Get recent entries that pass the current filters.

        Args:
            count: Maximum number of entries to return (None for all)
            categories: Restrict to these categories (None for all enabled)

        Returns:
            Matching entries, oldest first
        """
        wanted = self.enabled_categories if categories is None else categories & self.enabled_categories

        filtered = [
            entry for entry in self.messages
            if entry.category in wanted and entry.level.value >= self.log_level.value
        ]

        if count is not None:
            return filtered[-count:] if count > 0 else []
        return filtered

    def get_formatted_messages(self, count: Optional[int] = None, include_timestamp: bool = False) -> list[str]:
        """Formatted lines for the entries ``get_messages`` would return."""
        return [entry.format(include_timestamp=include_timestamp) for entry in self.get_messages(count)]

    def clear(self) -> None:
        self.messages.clear()

    def enable_category(self, category: LogCategory) -> None:
        self.enabled_categories.add(category)

    def disable_category(self, category: LogCategory) -> None:
        self.enabled_categories.discard(category)

    def set_log_level(self, level: LogLevel) -> None:
        """Set the minimum log level."""
        self.log_level = level

    def is_debug_enabled(self) -> bool:
        return LogCategory.DEBUG in self.enabled_categories and self.log_level == LogLevel.DEBUG

    def toggle_debug(self) -> None:
        """Toggle debug message visibility, including bus diagnostics."""
        if self.is_debug_enabled():
            self.set_log_level(LogLevel.INFO)
            self.event_manager.enable_debug_logging = False
        else:
            self.enable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.DEBUG)
            self.event_manager.enable_debug_logging = True
