"""Canonical combatant and ability presets.

Presets are loaded from a YAML file and converted to template data
structures that build fresh Characters, Abilities and AbilitySets. The
bundled file defines the "new player" and "new monster" combatants, the
standard abilities and each side's default loadout.
"""

import os
from dataclasses import dataclass
from typing import Optional

import yaml

from ...core.data import (
    Ability,
    AbilityKind,
    AbilitySet,
    AbilitySlot,
    Character,
    EffectKind,
    Stats,
)

DEFAULT_PRESETS_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
    "assets", "data", "presets.yaml"
)


@dataclass(frozen=True)
class CharacterTemplate:
    """Baseline stats for a kind of combatant. Characters start at full HP."""
    hp: int
    attack: int
    defense: int

    def to_stats(self) -> Stats:
        return Stats(hp=self.hp, attack=self.attack, defense=self.defense)


@dataclass(frozen=True)
class AbilityTemplate:
    """An ability together with the slot data it is equipped with."""
    name: str
    power: int
    kind: AbilityKind
    effect: EffectKind = EffectKind.DAMAGE
    cooldown: int = 0

    def to_ability(self) -> Ability:
        return Ability(name=self.name, power=self.power, effect=self.effect)

    def to_slot(self) -> AbilitySlot:
        return AbilitySlot(ability=self.to_ability(), kind=self.kind, cooldown_max=self.cooldown)


@dataclass(frozen=True)
class PresetCatalog:
    """All presets read from one file, keyed by upper-case identifiers."""
    characters: dict[str, CharacterTemplate]
    abilities: dict[str, AbilityTemplate]
    loadouts: dict[str, tuple[str, ...]]

    def character_template(self, key: str) -> CharacterTemplate:
        """Raises KeyError if ``key`` is not a known character preset."""
        if key not in self.characters:
            raise KeyError(f"No character preset found: {key}")
        return self.characters[key]

    def ability_template(self, key: str) -> AbilityTemplate:
        """Raises KeyError if ``key`` is not a known ability preset."""
        if key not in self.abilities:
            raise KeyError(f"No ability preset found: {key}")
        return self.abilities[key]

    def loadout(self, key: str) -> tuple[str, ...]:
        """Raises KeyError if ``key`` is not a known loadout."""
        if key not in self.loadouts:
            raise KeyError(f"No loadout found: {key}")
        return self.loadouts[key]


def _parse_int(value, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{where} must be an integer, got {value!r}")
    return value


def load_presets(path: Optional[str] = None) -> PresetCatalog:
    """Load presets from YAML.

    Args:
        path: Preset file to read; the bundled file when None

    Returns:
        PresetCatalog with every character, ability and loadout

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid YAML or has an invalid structure
    """
    yaml_path = path or DEFAULT_PRESETS_PATH

    try:
        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Preset file not found: {yaml_path}")
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML presets: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"Preset file must contain a mapping: {yaml_path}")

    try:
        characters = {
            key: CharacterTemplate(
                hp=_parse_int(entry["hp"], f"characters.{key}.hp"),
                attack=_parse_int(entry["attack"], f"characters.{key}.attack"),
                defense=_parse_int(entry["defense"], f"characters.{key}.defense"),
            )
            for key, entry in data["characters"].items()
        }

        abilities = {
            key: AbilityTemplate(
                name=str(entry["name"]),
                power=_parse_int(entry["power"], f"abilities.{key}.power"),
                kind=AbilityKind[entry["kind"]],
                effect=EffectKind[entry.get("effect", "DAMAGE")],
                cooldown=_parse_int(entry.get("cooldown", 0), f"abilities.{key}.cooldown"),
            )
            for key, entry in data["abilities"].items()
        }

        loadouts = {
            key: tuple(entries)
            for key, entries in (data.get("loadouts") or {}).items()
        }
    except KeyError as e:
        raise ValueError(f"Invalid preset structure in {yaml_path}: missing or unknown {e}")
    except (AttributeError, TypeError) as e:
        raise ValueError(f"Invalid preset structure in {yaml_path}: {e}")

    for key, entries in loadouts.items():
        unknown = [entry for entry in entries if entry not in abilities]
        if unknown:
            raise ValueError(f"Loadout {key} references unknown abilities: {', '.join(unknown)}")

    for key, template in abilities.items():
        if template.cooldown < 0:
            raise ValueError(f"abilities.{key}.cooldown must be >= 0, got {template.cooldown}")

    return PresetCatalog(characters=characters, abilities=abilities, loadouts=loadouts)


# Load presets from the bundled YAML file
PRESETS: PresetCatalog = load_presets()


def create_character(name: str, preset: str, catalog: PresetCatalog = PRESETS) -> Character:
    """Create a full-health character from a character preset."""
    stats = catalog.character_template(preset).to_stats()
    return Character(name=name, hp=stats.hp, stats=stats)


def new_player(name: str = "Hero", catalog: PresetCatalog = PRESETS) -> Character:
    return create_character(name, "PLAYER", catalog)


def new_monster(name: str = "Goblin", catalog: PresetCatalog = PRESETS) -> Character:
    return create_character(name, "MONSTER", catalog)


def get_ability(preset: str, catalog: PresetCatalog = PRESETS) -> Ability:
    return catalog.ability_template(preset).to_ability()


def basic_attack() -> Ability:
    return get_ability("BASIC_ATTACK")


def powerful_attack() -> Ability:
    return get_ability("POWERFUL_ATTACK")


def heal() -> Ability:
    return get_ability("HEAL")


def quick_strike() -> Ability:
    return get_ability("QUICK_STRIKE")


def create_slot(preset: str, catalog: PresetCatalog = PRESETS) -> AbilitySlot:
    """Create a ready (off-cooldown) slot from an ability preset."""
    return catalog.ability_template(preset).to_slot()


def create_ability_set(loadout: str, catalog: PresetCatalog = PRESETS) -> AbilitySet:
    """Create a ready AbilitySet from a named loadout, keeping its order."""
    return AbilitySet(tuple(create_slot(key, catalog) for key in catalog.loadout(loadout)))


def player_ability_set(catalog: PresetCatalog = PRESETS) -> AbilitySet:
    return create_ability_set("PLAYER", catalog)


def monster_ability_set(catalog: PresetCatalog = PRESETS) -> AbilitySet:
    return create_ability_set("MONSTER", catalog)
