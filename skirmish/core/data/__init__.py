"""Core data structures and definitions.

This package contains the fundamental combat value types:
- data_structures.py: Stats, Character, Ability, slots, and outcome events
- game_enums.py: Centralized enums for ability kinds, effects, and sides
"""

from .data_structures import (
    Stats,
    Character,
    Ability,
    AbilitySlot,
    AbilitySet,
    CombatEvent,
    HealEvent,
    AbilityOutcome,
    SerializableMixin,
)
from .game_enums import AbilityKind, EffectKind, Side, ABILITY_KIND_NAMES

__all__ = [
    "Stats",
    "Character",
    "Ability",
    "AbilitySlot",
    "AbilitySet",
    "CombatEvent",
    "HealEvent",
    "AbilityOutcome",
    "SerializableMixin",
    "AbilityKind",
    "EffectKind",
    "Side",
    "ABILITY_KIND_NAMES",
]
