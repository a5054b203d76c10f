"""AI Behavior Strategy Classes

This module implements the Strategy design pattern for AI behaviors.
Each AI behavior represents a different approach to picking the ability an
autonomous combatant uses on its turn.

Behaviors are stateless: every decision is evaluated fresh from the
combatant's current HP and the slots that are off cooldown.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, Sequence

from ...core.data import ABILITY_KIND_NAMES, Ability, AbilityKind, AbilitySlot, Character


# Used when no equipped slot qualifies; needs no slot and has no cooldown
DEFAULT_ABILITY = Ability(name="Basic Attack", power=5)

# Tier thresholds as whole percentages of max HP
LOW_HP_PERCENT = 30
HIGH_HP_PERCENT = 70


class AIType(Enum):
    """Available AI behavior types."""
    TIERED = auto()
    BASIC_ONLY = auto()


@dataclass(frozen=True)
class StrategyTier:
    """One rule of the tiered policy: when ``applies`` holds, prefer ``preferred``.

    ``applies`` receives current and max HP as exact integers.
    """
    name: str
    applies: Callable[[int, int], bool]
    preferred: AbilityKind


# Evaluated top to bottom; the last tier always applies.
# A non-positive max HP counts as 0% HP.
STRATEGY_TIERS: tuple[StrategyTier, ...] = (
    StrategyTier(
        "defensive",
        lambda hp, max_hp: max_hp <= 0 or hp * 100 < LOW_HP_PERCENT * max_hp,
        AbilityKind.HEAL,
    ),
    StrategyTier(
        "aggressive",
        lambda hp, max_hp: max_hp > 0 and hp * 100 > HIGH_HP_PERCENT * max_hp,
        AbilityKind.POWERFUL_ATTACK,
    ),
    StrategyTier("balanced", lambda hp, max_hp: True, AbilityKind.BASIC_ATTACK),
)

FALLBACK_KIND = AbilityKind.BASIC_ATTACK


@dataclass(frozen=True)
class AIDecision:
    """Represents an AI decision with reasoning.

    ``slot_index`` points into the slot sequence the behavior was given and is
    None when the default ability was chosen.
    """
    ability: Ability
    slot_index: Optional[int] = None
    tier: str = "default"
    reasoning: str = ""

    @property
    def uses_default(self) -> bool:
        return self.slot_index is None


def _first_usable(slots: Sequence[AbilitySlot], kind: AbilityKind) -> Optional[int]:
    """Index of the first off-cooldown slot of ``kind``, keeping sequence order."""
    for index, slot in enumerate(slots):
        if slot.kind is kind and slot.cooldown_current == 0:
            return index
    return None


class AIBehavior(ABC):
    """Abstract base class for AI behavior strategies."""

    @abstractmethod
    def decide(
        self,
        self_character: Character,
        opponent: Character,
        slots: Sequence[AbilitySlot]
    ) -> AIDecision:
        """Choose the ability this combatant uses this turn.

        Args:
            self_character: The combatant making the decision
            opponent: The combatant it is fighting
            slots: Equipped slots; only those with no cooldown left are eligible

        Returns:
            AIDecision naming exactly one ability
        """
        pass

    @abstractmethod
    def get_behavior_name(self) -> str:
        """Get the name of this AI behavior."""
        pass


class TieredAI(AIBehavior):
    """Defensive / aggressive / balanced policy driven by the HP ratio."""

    def __init__(self, tiers: Sequence[StrategyTier] = STRATEGY_TIERS):
        self.tiers = tuple(tiers)

    def select_tier(self, character: Character) -> Optional[StrategyTier]:
        for tier in self.tiers:
            if tier.applies(character.hp, character.max_hp):
                return tier
        return None

    def decide(
        self,
        self_character: Character,
        opponent: Character,
        slots: Sequence[AbilitySlot]
    ) -> AIDecision:
        hp_text = f"HP at {self_character.hp_ratio:.0%}"
        tier = self.select_tier(self_character)

        if tier is not None:
            index = _first_usable(slots, tier.preferred)
            if index is not None:
                return AIDecision(
                    ability=slots[index].ability,
                    slot_index=index,
                    tier=tier.name,
                    reasoning=f"{hp_text}, {tier.name} tier prefers {ABILITY_KIND_NAMES[tier.preferred]}"
                )

        index = _first_usable(slots, FALLBACK_KIND)
        if index is not None:
            preferred = ABILITY_KIND_NAMES[tier.preferred] if tier else "nothing"
            return AIDecision(
                ability=slots[index].ability,
                slot_index=index,
                tier="balanced",
                reasoning=f"{hp_text}, {preferred} unavailable, falling back to {ABILITY_KIND_NAMES[FALLBACK_KIND]}"
            )

        return AIDecision(
            ability=DEFAULT_ABILITY,
            tier="default",
            reasoning=f"{hp_text}, no usable slot, using default {DEFAULT_ABILITY.name}"
        )

    def get_behavior_name(self) -> str:
        return "Tiered"


class BasicAttackAI(AIBehavior):
    """AI that only ever uses its basic attack."""

    def decide(
        self,
        self_character: Character,
        opponent: Character,
        slots: Sequence[AbilitySlot]
    ) -> AIDecision:
        index = _first_usable(slots, AbilityKind.BASIC_ATTACK)
        if index is not None:
            return AIDecision(
                ability=slots[index].ability,
                slot_index=index,
                tier="balanced",
                reasoning="Basic-only AI always uses its basic attack"
            )
        return AIDecision(
            ability=DEFAULT_ABILITY,
            tier="default",
            reasoning="Basic attack slot unavailable, using default"
        )

    def get_behavior_name(self) -> str:
        return "Basic Only"


def choose_action(
    self_character: Character,
    opponent_character: Character,
    usable_ability_slots: Sequence[AbilitySlot]
) -> Ability:
    """Pick the ability an autonomous combatant uses this turn.

    Never fails: when nothing suitable is off cooldown the default Basic
    Attack (power 5) is returned.
    """
    return TieredAI().decide(self_character, opponent_character, usable_ability_slots).ability


def create_ai_behavior(ai_type: AIType) -> AIBehavior:
    """Factory function to create AI behavior instances.

    Raises:
        ValueError: If ai_type is not supported
    """
    if ai_type == AIType.TIERED:
        return TieredAI()
    elif ai_type == AIType.BASIC_ONLY:
        return BasicAttackAI()
    else:
        raise ValueError(f"Unsupported AI type: {ai_type}")
