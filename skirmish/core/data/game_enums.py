"""Centralized combat enums.

This module contains the closed sets of kinds shared by the domain model,
the resolver and the AI, providing a single source of truth.
"""

from enum import Enum, auto


class AbilityKind(Enum):
    """Role of an equipped ability, used by the AI to pick a strategy tier."""
    BASIC_ATTACK = auto()
    POWERFUL_ATTACK = auto()
    HEAL = auto()


class EffectKind(Enum):
    """What resolving an ability does to its target."""
    DAMAGE = auto()  # Subtracts from the opponent's HP
    HEAL = auto()    # Adds to the caster's own HP


class Side(Enum):
    """Sides of a duel."""
    PLAYER = 0
    MONSTER = 1

    @property
    def opponent(self) -> "Side":
        return Side.MONSTER if self is Side.PLAYER else Side.PLAYER


ABILITY_KIND_NAMES = {
    AbilityKind.BASIC_ATTACK: "Basic Attack",
    AbilityKind.POWERFUL_ATTACK: "Powerful Attack",
    AbilityKind.HEAL: "Heal",
}
