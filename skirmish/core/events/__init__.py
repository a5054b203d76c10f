"""Event system for publisher-subscriber communication.

This package contains the event-driven plumbing around the combat core:
- event_manager.py: Publisher-subscriber event routing
- events.py: Event definitions emitted by encounter hosts
"""

from .event_manager import EventManager, EventPriority, QueuedEvent
from .events import (
    GameEvent,
    EventType,
    EncounterStarted,
    EncounterEnded,
    TurnStarted,
    TurnEnded,
    AbilityChosen,
    AttackResolved,
    HealResolved,
    CombatantDefeated,
    LogMessage,
    DebugMessage,
    LogSaveRequested,
)

__all__ = [
    "EventManager",
    "EventPriority",
    "QueuedEvent",
    "GameEvent",
    "EventType",
    "EncounterStarted",
    "EncounterEnded",
    "TurnStarted",
    "TurnEnded",
    "AbilityChosen",
    "AttackResolved",
    "HealResolved",
    "CombatantDefeated",
    "LogMessage",
    "DebugMessage",
    "LogSaveRequested",
]
