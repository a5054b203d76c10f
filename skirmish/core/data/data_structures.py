"""Immutable combat data structures and conversion utilities.

This module defines the value types shared by every combat layer:

1. Stats / Character describe a combatant (baseline stats and current HP)
2. Ability / AbilitySlot / AbilitySet describe what a combatant can do
3. CombatEvent / HealEvent record the outcome of one resolved ability

All structures are frozen dataclasses. Changing a value means building a new
one (``Character.with_hp``, ``AbilitySet.replace_slot``); the host decides
where the authoritative copy lives.

Every structure round-trips through ``to_dict``/``from_dict`` and
``to_json``/``from_json`` with field names and integers preserved exactly.
"""

import json
import math
from dataclasses import dataclass, field, replace
from typing import Any, Iterator, Optional, Union

from .game_enums import AbilityKind, EffectKind


def _require(data: dict[str, Any], key: str, owner: str) -> Any:
    """Fetch a required key from a serialized payload."""
    if not isinstance(data, dict):
        raise ValueError(f"{owner} payload must be a mapping, got {type(data).__name__}")
    if key not in data:
        raise ValueError(f"{owner} payload is missing field '{key}'")
    return data[key]


def _require_int(data: dict[str, Any], key: str, owner: str) -> int:
    value = _require(data, key, owner)
    # bool is an int subclass but never a valid stat
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{owner}.{key} must be an integer, got {value!r}")
    return value


def _require_str(data: dict[str, Any], key: str, owner: str) -> str:
    value = _require(data, key, owner)
    if not isinstance(value, str):
        raise ValueError(f"{owner}.{key} must be a string, got {value!r}")
    return value


def _parse_enum(enum_cls, value: Any, owner: str):
    try:
        return enum_cls[value]
    except (KeyError, TypeError):
        valid = ", ".join(member.name for member in enum_cls)
        raise ValueError(f"{owner}: unknown {enum_cls.__name__} {value!r} (expected one of {valid})")


class SerializableMixin:
    """Mixin adding JSON conversion on top of ``to_dict``/``from_dict``."""

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        raise NotImplementedError

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_json(cls, text: Union[str, bytes]):
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse {cls.__name__} JSON: {e}")
        return cls.from_dict(data)


@dataclass(frozen=True)
class Stats(SerializableMixin):
    """Baseline combat values. ``hp`` is the maximum/reference health."""
    hp: int
    attack: int
    defense: int

    def to_dict(self) -> dict[str, Any]:
        return {"hp": self.hp, "attack": self.attack, "defense": self.defense}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Stats":
        return cls(
            hp=_require_int(data, "hp", "Stats"),
            attack=_require_int(data, "attack", "Stats"),
            defense=_require_int(data, "defense", "Stats"),
        )


@dataclass(frozen=True)
class Character(SerializableMixin):
    """A combatant with current health.

    ``hp`` has no floor: overkill leaves it negative, which hosts read as
    defeated. ``stats.hp`` never changes and anchors percentage maths.
    """
    name: str
    hp: int
    stats: Stats

    @property
    def max_hp(self) -> int:
        return self.stats.hp

    @property
    def hp_ratio(self) -> float:
        """Current HP over max HP, for display.

        A non-positive max HP reads as 0.0 and a quotient beyond float range
        reads as +/-inf. Decisions compare the integers directly.
        """
        if self.stats.hp <= 0:
            return 0.0
        try:
            return self.hp / self.stats.hp
        except OverflowError:
            return math.inf if self.hp > 0 else -math.inf

    @property
    def is_defeated(self) -> bool:
        return self.hp <= 0

    def with_hp(self, hp: int) -> "Character":
        """Return a copy of this character with a new current HP."""
        return replace(self, hp=hp)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "hp": self.hp, "stats": self.stats.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Character":
        return cls(
            name=_require_str(data, "name", "Character"),
            hp=_require_int(data, "hp", "Character"),
            stats=Stats.from_dict(_require(data, "stats", "Character")),
        )


@dataclass(frozen=True)
class Ability(SerializableMixin):
    """A named ability. ``power`` may be zero or negative (debuffs)."""
    name: str
    power: int
    effect: EffectKind = EffectKind.DAMAGE

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "power": self.power, "effect": self.effect.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ability":
        effect = data.get("effect", EffectKind.DAMAGE.name) if isinstance(data, dict) else None
        return cls(
            name=_require_str(data, "name", "Ability"),
            power=_require_int(data, "power", "Ability"),
            effect=_parse_enum(EffectKind, effect, "Ability"),
        )


@dataclass(frozen=True)
class AbilitySlot(SerializableMixin):
    """An equipped ability together with its own cooldown clock."""
    ability: Ability
    kind: AbilityKind
    cooldown_max: int = 0
    cooldown_current: int = 0

    def __post_init__(self):
        if self.cooldown_max < 0:
            raise ValueError(f"cooldown_max must be >= 0, got {self.cooldown_max}")
        if not 0 <= self.cooldown_current <= self.cooldown_max:
            raise ValueError(
                f"cooldown_current must be within [0, {self.cooldown_max}], "
                f"got {self.cooldown_current}"
            )

    @property
    def name(self) -> str:
        return self.ability.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "ability": self.ability.to_dict(),
            "kind": self.kind.name,
            "cooldown_max": self.cooldown_max,
            "cooldown_current": self.cooldown_current,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AbilitySlot":
        return cls(
            ability=Ability.from_dict(_require(data, "ability", "AbilitySlot")),
            kind=_parse_enum(AbilityKind, _require(data, "kind", "AbilitySlot"), "AbilitySlot"),
            cooldown_max=_require_int(data, "cooldown_max", "AbilitySlot"),
            cooldown_current=_require_int(data, "cooldown_current", "AbilitySlot"),
        )


@dataclass(frozen=True)
class AbilitySet(SerializableMixin):
    """Ordered sequence of ability slots. Order decides AI tie-breaks."""
    slots: tuple[AbilitySlot, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable but always store a tuple
        object.__setattr__(self, "slots", tuple(self.slots))

    def __iter__(self) -> Iterator[AbilitySlot]:
        return iter(self.slots)

    def __len__(self) -> int:
        return len(self.slots)

    def __getitem__(self, index: int) -> AbilitySlot:
        return self.slots[index]

    def index_of(self, ability_name: str) -> Optional[int]:
        """Index of the first slot holding the named ability, if any."""
        for index, slot in enumerate(self.slots):
            if slot.ability.name == ability_name:
                return index
        return None

    def replace_slot(self, index: int, slot: AbilitySlot) -> "AbilitySet":
        slots = list(self.slots)
        slots[index] = slot
        return AbilitySet(tuple(slots))

    def to_dict(self) -> dict[str, Any]:
        return {"slots": [slot.to_dict() for slot in self.slots]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AbilitySet":
        raw_slots = _require(data, "slots", "AbilitySet")
        if not isinstance(raw_slots, list):
            raise ValueError(f"AbilitySet.slots must be a list, got {raw_slots!r}")
        return cls(tuple(AbilitySlot.from_dict(slot) for slot in raw_slots))


@dataclass(frozen=True)
class CombatEvent(SerializableMixin):
    """Outcome of one resolved attack. Names are copies of the combatants'."""
    attacker_name: str
    defender_name: str
    damage: int
    defender_hp_after: int
    ability_used: Optional[str] = None

    def __post_init__(self):
        if self.damage < 1:
            raise ValueError(f"CombatEvent damage must be >= 1, got {self.damage}")

    @property
    def target_name(self) -> str:
        return self.defender_name

    @property
    def hp_after(self) -> int:
        return self.defender_hp_after

    def to_dict(self) -> dict[str, Any]:
        return {
            "attacker_name": self.attacker_name,
            "defender_name": self.defender_name,
            "damage": self.damage,
            "defender_hp_after": self.defender_hp_after,
            "ability_used": self.ability_used,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CombatEvent":
        ability_used = data.get("ability_used") if isinstance(data, dict) else None
        if ability_used is not None and not isinstance(ability_used, str):
            raise ValueError(f"CombatEvent.ability_used must be a string or null, got {ability_used!r}")
        return cls(
            attacker_name=_require_str(data, "attacker_name", "CombatEvent"),
            defender_name=_require_str(data, "defender_name", "CombatEvent"),
            damage=_require_int(data, "damage", "CombatEvent"),
            defender_hp_after=_require_int(data, "defender_hp_after", "CombatEvent"),
            ability_used=ability_used,
        )


@dataclass(frozen=True)
class HealEvent(SerializableMixin):
    """Outcome of one resolved self-heal. ``amount`` is HP actually restored."""
    caster_name: str
    amount: int
    hp_after: int
    ability_used: Optional[str] = None

    def __post_init__(self):
        if self.amount < 0:
            raise ValueError(f"HealEvent amount must be >= 0, got {self.amount}")

    @property
    def target_name(self) -> str:
        return self.caster_name

    def to_dict(self) -> dict[str, Any]:
        return {
            "caster_name": self.caster_name,
            "amount": self.amount,
            "hp_after": self.hp_after,
            "ability_used": self.ability_used,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HealEvent":
        ability_used = data.get("ability_used") if isinstance(data, dict) else None
        if ability_used is not None and not isinstance(ability_used, str):
            raise ValueError(f"HealEvent.ability_used must be a string or null, got {ability_used!r}")
        return cls(
            caster_name=_require_str(data, "caster_name", "HealEvent"),
            amount=_require_int(data, "amount", "HealEvent"),
            hp_after=_require_int(data, "hp_after", "HealEvent"),
            ability_used=ability_used,
        )


# Type aliases for cleaner code
AbilityOutcome = Union[CombatEvent, HealEvent]
