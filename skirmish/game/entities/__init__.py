"""Entity presets.

This package contains canonical combatant definitions:
- presets.py: YAML-backed character, ability and loadout presets
"""

from .presets import (
    AbilityTemplate,
    CharacterTemplate,
    PresetCatalog,
    PRESETS,
    basic_attack,
    create_ability_set,
    create_character,
    create_slot,
    get_ability,
    heal,
    load_presets,
    monster_ability_set,
    new_monster,
    new_player,
    player_ability_set,
    powerful_attack,
    quick_strike,
)

__all__ = [
    "AbilityTemplate",
    "CharacterTemplate",
    "PresetCatalog",
    "PRESETS",
    "basic_attack",
    "create_ability_set",
    "create_character",
    "create_slot",
    "get_ability",
    "heal",
    "load_presets",
    "monster_ability_set",
    "new_monster",
    "new_player",
    "player_ability_set",
    "powerful_attack",
    "quick_strike",
]
