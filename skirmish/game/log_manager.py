"""
Log management for combat messages and debugging.

This module provides centralized, categorised logging fed by the event bus,
with a bounded buffer for display by whatever host embeds the engine.
"""
import os
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.events import EventManager


class LogCategory(Enum):
    """Categories for log messages."""
    SYSTEM = auto()     # Initialization, saving, configuration
    BATTLE = auto()     # Damage and healing
    TURN = auto()       # Turn boundaries
    AI = auto()         # AI decision messages
    DEBUG = auto()      # Debug messages
    WARNING = auto()    # Warning messages
    ERROR = auto()      # Error messages


class LogLevel(Enum):
    """Log levels for filtering."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


CATEGORY_TAGS = {
    LogCategory.SYSTEM: "SYS",
    LogCategory.BATTLE: "BTL",
    LogCategory.TURN: "TRN",
    LogCategory.AI: "AI",
    LogCategory.DEBUG: "DBG",
    LogCategory.WARNING: "WRN",
    LogCategory.ERROR: "ERR",
}


@dataclass
class LogMessage:
    """A single log message with metadata."""
    text: str
    category: LogCategory
    timestamp: datetime = field(default_factory=datetime.now)

    def format(self, include_timestamp: bool = False, include_category: bool = True) -> str:
        """Format the message for display."""
        parts = []

        if include_timestamp:
            parts.append(f"[{self.timestamp.strftime('%H:%M:%S')}]")

        if include_category:
            parts.append(f"[{CATEGORY_TAGS.get(self.category, '???')}]")

        parts.append(self.text)
        return " ".join(parts)


class LogManager:
    """Manages combat logging with categorization and filtering."""

    def __init__(
        self,
        event_manager: "EventManager",
        max_messages: int = 200,
        default_level: LogLevel = LogLevel.INFO
    ):
        """Initialize the log manager.

        Args:
            event_manager: Event manager the log subscribes to
            max_messages: Maximum number of messages kept in the buffer
            default_level: Default log level for filtering
        """
        self.messages: deque[LogMessage] = deque(maxlen=max_messages)
        self.dropped_count = 0
        self.log_level = default_level
        self.enabled_categories = set(LogCategory)
        self.event_manager = event_manager

        self.category_levels = {
            LogCategory.DEBUG: LogLevel.DEBUG,
            LogCategory.AI: LogLevel.DEBUG,
            LogCategory.WARNING: LogLevel.WARNING,
            LogCategory.ERROR: LogLevel.ERROR,
            # SYSTEM, BATTLE, TURN default to INFO
        }

        self._setup_event_subscriptions()

    def _setup_event_subscriptions(self) -> None:
        from ..core.events import EventType

        handlers = {
            EventType.LOG_MESSAGE: self._handle_log_message_event,
            EventType.DEBUG_MESSAGE: self._handle_debug_message_event,
            EventType.LOG_SAVE_REQUESTED: self._handle_log_save_request,
            EventType.ENCOUNTER_STARTED: self._handle_encounter_started,
            EventType.TURN_STARTED: self._handle_turn_started,
            EventType.ABILITY_CHOSEN: self._handle_ability_chosen,
            EventType.ATTACK_RESOLVED: self._handle_attack_resolved,
            EventType.HEAL_RESOLVED: self._handle_heal_resolved,
            EventType.COMBATANT_DEFEATED: self._handle_combatant_defeated,
            EventType.ENCOUNTER_ENDED: self._handle_encounter_ended,
        }
        for event_type, handler in handlers.items():
            self.event_manager.subscribe(
                event_type,
                handler,
                subscriber_name=f"LogManager.{event_type.name.lower()}"
            )

    def _handle_log_message_event(self, event) -> None:
        from ..core.events import LogMessage as LogEvent
        if isinstance(event, LogEvent):
            try:
                category = LogCategory[event.category.upper()]
            except (KeyError, AttributeError):
                category = LogCategory.SYSTEM
            self.log(event.message, category)

    def _handle_debug_message_event(self, event) -> None:
        from ..core.events import DebugMessage
        if isinstance(event, DebugMessage):
            self.debug(f"[{event.source}] {event.message}")

    def _handle_log_save_request(self, event) -> None:
        from ..core.events import LogSaveRequested
        if isinstance(event, LogSaveRequested):
            self.save_log_to_file(event.directory)

    def _handle_encounter_started(self, event) -> None:
        self.system(f"{event.player_name} faces {event.monster_name}!")

    def _handle_turn_started(self, event) -> None:
        self.turn(f"--- Turn {event.turn}: {event.combatant_name} ---")

    def _handle_ability_chosen(self, event) -> None:
        self.ai(f"{event.combatant_name} chose {event.ability_name} ({event.tier}): {event.reasoning}")

    def _handle_attack_resolved(self, event) -> None:
        outcome = event.outcome
        self.battle(
            f"{outcome.attacker_name} uses {outcome.ability_used} on {outcome.defender_name} "
            f"for {outcome.damage} damage! ({outcome.defender_name} HP: {outcome.defender_hp_after})"
        )

    def _handle_heal_resolved(self, event) -> None:
        outcome = event.outcome
        self.battle(
            f"{outcome.caster_name} uses {outcome.ability_used} and heals {outcome.amount} HP! "
            f"({outcome.caster_name} HP: {outcome.hp_after})"
        )

    def _handle_combatant_defeated(self, event) -> None:
        self.battle(f"{event.combatant_name} has been defeated!")

    def _handle_encounter_ended(self, event) -> None:
        if event.winner_name is None:
            self.system(f"Encounter ended without a winner after {event.turns_taken} turns")
        else:
            self.system(f"{event.winner_name} wins after {event.turns_taken} turns")

    def log(self, text: str, category: LogCategory = LogCategory.SYSTEM) -> None:
        """Add a message to the log, evicting the oldest when the buffer is full."""
        if len(self.messages) == self.messages.maxlen:
            self.dropped_count += 1
        self.messages.append(LogMessage(text=text, category=category))

    # Convenience methods for common categories
    def system(self, text: str) -> None:
        self.log(text, LogCategory.SYSTEM)

    def battle(self, text: str) -> None:
        self.log(text, LogCategory.BATTLE)

    def turn(self, text: str) -> None:
        self.log(text, LogCategory.TURN)

    def ai(self, text: str) -> None:
        self.log(text, LogCategory.AI)

    def debug(self, text: str) -> None:
        self.log(text, LogCategory.DEBUG)

    def warning(self, text: str) -> None:
        self.log(text, LogCategory.WARNING)

    def error(self, text: str) -> None:
        self.log(text, LogCategory.ERROR)

    def get_messages(
        self,
        count: Optional[int] = None,
        categories: Optional[set[LogCategory]] = None
    ) -> list[LogMessage]:
        """Get recent messages, optionally filtered by category.

        Args:
            count: Maximum number of messages to return (None for all)
            categories: Categories to include (None applies enabled categories and log level)
        """
        if categories:
            filtered = [msg for msg in self.messages
                        if msg.category in categories and msg.category in self.enabled_categories]
        else:
            filtered = []
            for msg in self.messages:
                if msg.category not in self.enabled_categories:
                    continue
                message_level = self.category_levels.get(msg.category, LogLevel.INFO)
                if message_level.value < self.log_level.value:
                    continue
                filtered.append(msg)

        if count is not None and count < len(filtered):
            return filtered[-count:]
        return filtered

    def get_recent(self, count: int = 10) -> list[str]:
        """Formatted text of the most recent visible messages, oldest first."""
        return [msg.format() for msg in self.get_messages(count)]

    def clear(self) -> None:
        self.messages.clear()
        self.dropped_count = 0

    def enable_category(self, category: LogCategory) -> None:
        self.enabled_categories.add(category)

    def disable_category(self, category: LogCategory) -> None:
        self.enabled_categories.discard(category)

    def set_log_level(self, level: LogLevel) -> None:
        self.log_level = level

    def is_debug_enabled(self) -> bool:
        return (LogCategory.DEBUG in self.enabled_categories and
                self.log_level == LogLevel.DEBUG)

    def toggle_debug(self) -> None:
        """Toggle debug message visibility."""
        if self.is_debug_enabled():
            self.disable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.INFO)
        else:
            self.enable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.DEBUG)

    def save_log_to_file(self, directory: str = "logs") -> Optional[str]:
        """Save every buffered message to a timestamped log file.

        Returns:
            Path of the written file, or None if it could not be written
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        filepath = os.path.join(directory, f"combat_{timestamp}.log")

        try:
            os.makedirs(directory, exist_ok=True)
            with open(filepath, 'w', encoding='utf-8') as f:
                f.write("Skirmish - Combat Log\n")
                f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
                f.write("=" * 60 + "\n\n")

                if not self.messages:
                    f.write("No messages to save.\n")
                # Ignores current filters so debug lines are kept
                for msg in self.messages:
                    timestamp_str = msg.timestamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
                    f.write(f"[{timestamp_str}] [{msg.category.name}] {msg.text}\n")
        except OSError as e:
            self.error(f"Failed to save log file: {e}")
            return None

        self.system(f"Combat log saved to {filepath}")
        return filepath
