"""Combat system components.

This package contains the core combat logic with clear separation of concerns:
- combat_resolver.py: Damage and heal outcome calculation
- cooldowns.py: Per-slot cooldown rules and the turn model
"""

from .combat_resolver import (
    MIN_DAMAGE,
    apply_event,
    calculate_damage,
    resolve_ability,
    resolve_attack,
    resolve_attack_batch,
    resolve_heal,
)
from .cooldowns import (
    activate,
    activate_ability,
    activate_slot,
    advance_all,
    advance_turn,
    cooldown_progress,
    is_usable,
    usable_slots,
)

__all__ = [
    "MIN_DAMAGE",
    "apply_event",
    "calculate_damage",
    "resolve_ability",
    "resolve_attack",
    "resolve_attack_batch",
    "resolve_heal",
    "activate",
    "activate_ability",
    "activate_slot",
    "advance_all",
    "advance_turn",
    "cooldown_progress",
    "is_usable",
    "usable_slots",
]
