"""Combat events published on the event bus.

Hosts drive encounters and publish these events; managers such as the
LogManager subscribe to them instead of depending on the host directly.

Event Design Principles:
- Events are immutable dataclasses
- All events carry the turn number they happened on
- Outcome events wrap the resolver's own records (CombatEvent, HealEvent)
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from ..data import CombatEvent, HealEvent, Side


class EventType(Enum):
    """Types of events that managers can subscribe to."""
    # Turn Events
    TURN_STARTED = auto()
    TURN_ENDED = auto()

    # Combat Events
    ABILITY_CHOSEN = auto()
    ATTACK_RESOLVED = auto()
    HEAL_RESOLVED = auto()
    COMBATANT_DEFEATED = auto()

    # Encounter Events
    ENCOUNTER_STARTED = auto()
    ENCOUNTER_ENDED = auto()

    # Logging Events
    LOG_MESSAGE = auto()
    DEBUG_MESSAGE = auto()
    LOG_SAVE_REQUESTED = auto()


@dataclass(frozen=True)
class GameEvent(ABC):
    """Base class for all events."""
    turn: int
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class EncounterStarted(GameEvent):
    """Event emitted when a duel begins."""
    player_name: str
    monster_name: str

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.ENCOUNTER_STARTED)


@dataclass(frozen=True)
class TurnStarted(GameEvent):
    """Event emitted when a combatant's turn begins."""
    side: Side
    combatant_name: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.TURN_STARTED)


@dataclass(frozen=True)
class TurnEnded(GameEvent):
    """Event emitted when a combatant's turn ends."""
    side: Side
    combatant_name: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.TURN_ENDED)


@dataclass(frozen=True)
class AbilityChosen(GameEvent):
    """Event emitted after an AI behavior picks an ability."""
    combatant_name: str
    ability_name: str
    tier: str
    reasoning: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ABILITY_CHOSEN)


@dataclass(frozen=True)
class AttackResolved(GameEvent):
    """Event emitted when a damaging ability has been resolved."""
    outcome: CombatEvent

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ATTACK_RESOLVED)


@dataclass(frozen=True)
class HealResolved(GameEvent):
    """Event emitted when a healing ability has been resolved."""
    outcome: HealEvent

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.HEAL_RESOLVED)


@dataclass(frozen=True)
class CombatantDefeated(GameEvent):
    """Event emitted when a combatant's HP drops to zero or below."""
    combatant_name: str
    final_hp: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.COMBATANT_DEFEATED)


@dataclass(frozen=True)
class EncounterEnded(GameEvent):
    """Event emitted when a duel finishes. ``winner_name`` is None on timeout."""
    winner_name: Optional[str]
    turns_taken: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ENCOUNTER_ENDED)


# Logging Events
@dataclass(frozen=True)
class LogMessage(GameEvent):
    """Event emitted when a log message is created."""
    message: str
    category: str = "BATTLE"
    level: str = "INFO"
    source: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)


@dataclass(frozen=True)
class DebugMessage(GameEvent):
    """Event emitted for debug-specific messages."""
    message: str
    source: str
    context: Optional[dict] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DEBUG_MESSAGE)


@dataclass(frozen=True)
class LogSaveRequested(GameEvent):
    """Event emitted when the combat log should be written to disk."""
    directory: str = "logs"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_SAVE_REQUESTED)
