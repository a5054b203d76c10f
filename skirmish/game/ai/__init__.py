"""AI system components.

This package contains AI behavior definitions:
- ai_behaviors.py: Tiered and basic-only decision strategies
"""

from .ai_behaviors import (
    AIBehavior,
    AIDecision,
    AIType,
    BasicAttackAI,
    DEFAULT_ABILITY,
    STRATEGY_TIERS,
    StrategyTier,
    TieredAI,
    choose_action,
    create_ai_behavior,
)

__all__ = [
    "AIBehavior",
    "AIDecision",
    "AIType",
    "BasicAttackAI",
    "DEFAULT_ABILITY",
    "STRATEGY_TIERS",
    "StrategyTier",
    "TieredAI",
    "choose_action",
    "create_ai_behavior",
]
