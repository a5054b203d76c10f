"""
Event management for decoupled combat systems.

This module provides a central event bus that lets encounter hosts, loggers
and any embedding application communicate through events instead of direct
dependencies, following the publisher-subscriber pattern.
"""

import threading
from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .events import GameEvent, EventType


class EventPriority(Enum):
    """Event processing priorities. Lower value is processed first."""
    CRITICAL = 0
    HIGH = 1
    NORMAL = 2
    LOW = 3


@dataclass
class QueuedEvent:
    """An event in the processing queue with metadata."""
    event: "GameEvent"
    priority: EventPriority = EventPriority.NORMAL
    timestamp: datetime = field(default_factory=datetime.now)
    sequence: int = 0
    source: Optional[str] = None  # For debugging

    def __lt__(self, other: "QueuedEvent") -> bool:
        """Compare events for priority queue ordering."""
        if self.priority.value != other.priority.value:
            return self.priority.value < other.priority.value
        # Same priority keeps publish order
        return self.sequence < other.sequence


EventSubscriber = Callable[["GameEvent"], None]


class EventManager:
    """Central event bus for combat system communication."""

    def __init__(self, enable_debug_logging: bool = False, history_size: int = 1000):
        """Initialize the event manager.

        Args:
            enable_debug_logging: Whether to report bus activity to the debug callback
            history_size: Number of processed events kept for inspection
        """
        self.enable_debug_logging = enable_debug_logging

        self._subscribers: dict["EventType", list[EventSubscriber]] = defaultdict(list)
        self._universal_subscribers: list[EventSubscriber] = []

        self._event_queue: deque[QueuedEvent] = deque()

        self._events_published = 0
        self._events_processed = 0
        self._subscriber_errors = 0
        self._event_history: deque[QueuedEvent] = deque(maxlen=history_size)

        self._lock = threading.RLock()

        self._debug_callback: Optional[Callable[[str], None]] = None

    def set_debug_callback(self, callback: Optional[Callable[[str], None]]) -> None:
        """Set a callback function for debug logging."""
        self._debug_callback = callback

    def _debug_log(self, message: str) -> None:
        if self.enable_debug_logging and self._debug_callback:
            self._debug_callback(f"[EVENT] {message}")

    def subscribe(
        self,
        event_type: "EventType",
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Subscribe to events of a specific type.

        Args:
            event_type: The type of events to subscribe to
            subscriber: Callback function to handle events
            subscriber_name: Optional name for debugging
        """
        with self._lock:
            self._subscribers[event_type].append(subscriber)

            subscriber_display = subscriber_name or getattr(subscriber, '__name__', 'anonymous')
            self._debug_log(f"Subscribed {subscriber_display} to {event_type.name} events")

    def subscribe_all(
        self,
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Subscribe to all events (universal subscriber)."""
        with self._lock:
            self._universal_subscribers.append(subscriber)

            subscriber_display = subscriber_name or getattr(subscriber, '__name__', 'anonymous')
            self._debug_log(f"Subscribed {subscriber_display} to ALL events")

    def unsubscribe(self, event_type: "EventType", subscriber: EventSubscriber) -> bool:
        """Unsubscribe from events of a specific type.

        Returns:
            True if subscriber was found and removed
        """
        with self._lock:
            try:
                self._subscribers[event_type].remove(subscriber)
                self._debug_log(f"Unsubscribed from {event_type.name} events")
                return True
            except ValueError:
                return False

    def publish(
        self,
        event: "GameEvent",
        priority: EventPriority = EventPriority.NORMAL,
        source: Optional[str] = None
    ) -> None:
        """Queue an event for the next ``process_events`` call."""
        with self._lock:
            self._events_published += 1
            queued_event = QueuedEvent(
                event=event,
                priority=priority,
                sequence=self._events_published,
                source=source or "unknown"
            )
            self._event_queue.append(queued_event)

            self._debug_log(
                f"Published {event.__class__.__name__} (priority: {priority.name}, source: {queued_event.source})"
            )

    def publish_immediate(self, event: "GameEvent", source: Optional[str] = None) -> None:
        """Publish and immediately deliver an event, bypassing the queue."""
        with self._lock:
            self._events_published += 1
            sequence = self._events_published
        queued_event = QueuedEvent(
            event=event,
            priority=EventPriority.CRITICAL,
            sequence=sequence,
            source=source or "immediate"
        )
        self._process_event(queued_event)

    def process_events(self, max_events: Optional[int] = None) -> int:
        """Deliver queued events in priority order.

        Args:
            max_events: Maximum number of events to process (None for all)

        Returns:
            Number of events processed
        """
        processed_count = 0

        with self._lock:
            sorted_events = sorted(self._event_queue)
            self._event_queue.clear()

        for queued_event in sorted_events:
            if max_events is not None and processed_count >= max_events:
                # Put remaining events back in queue
                with self._lock:
                    self._event_queue.extendleft(reversed(sorted_events[processed_count:]))
                break

            self._process_event(queued_event)
            processed_count += 1

        return processed_count

    def _process_event(self, queued_event: QueuedEvent) -> None:
        event = queued_event.event

        with self._lock:
            self._event_history.append(queued_event)
            self._events_processed += 1
            subscribers = list(self._subscribers.get(event.event_type, []))
            universal = list(self._universal_subscribers)

        self._debug_log(
            f"Processing {event.__class__.__name__} from {queued_event.source} (turn: {event.turn})"
        )

        # A failing subscriber must not starve the others
        for subscriber in subscribers + universal:
            try:
                subscriber(event)
            except Exception as e:
                with self._lock:
                    self._subscriber_errors += 1
                self._debug_log(
                    f"Error in subscriber {getattr(subscriber, '__name__', 'anonymous')}: {e}"
                )

    def clear_queue(self) -> int:
        """Clear all queued events and return how many were dropped."""
        with self._lock:
            count = len(self._event_queue)
            self._event_queue.clear()
            self._debug_log(f"Cleared {count} queued events")
            return count

    def get_statistics(self) -> dict[str, Any]:
        """Get event processing statistics."""
        with self._lock:
            return {
                'events_published': self._events_published,
                'events_processed': self._events_processed,
                'events_queued': len(self._event_queue),
                'subscriber_errors': self._subscriber_errors,
                'subscribers_count': sum(len(subs) for subs in self._subscribers.values()),
                'universal_subscribers_count': len(self._universal_subscribers),
                'event_history_size': len(self._event_history)
            }

    def get_recent_events(self, count: int = 10) -> list[dict[str, Any]]:
        """Describe the most recently processed events."""
        with self._lock:
            recent = list(self._event_history)[-count:]

            return [
                {
                    'event_type': queued.event.event_type.name,
                    'turn': queued.event.turn,
                    'priority': queued.priority.name,
                    'source': queued.source,
                    'timestamp': queued.timestamp.isoformat()
                }
                for queued in recent
            ]

    def has_queued_events(self) -> bool:
        with self._lock:
            return len(self._event_queue) > 0

    def shutdown(self) -> None:
        """Drop every subscriber, queued event and history entry."""
        with self._lock:
            self._subscribers.clear()
            self._universal_subscribers.clear()
            self._event_queue.clear()
            self._event_history.clear()
