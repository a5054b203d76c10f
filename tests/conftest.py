"""
Basic test fixtures for the skirmish test suite.

Provides canonical combatants, slots and an event bus for testing the
combat core and its reference host.
"""

import sys
import os
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from skirmish.core.data import (
    Ability,
    AbilityKind,
    AbilitySet,
    AbilitySlot,
    Character,
    EffectKind,
    Stats,
)
from skirmish.core.events import EventManager


def make_character(name: str = "Tester", hp: int = 20, max_hp: int = 20,
                   attack: int = 0, defense: int = 0) -> Character:
    """Build a character with explicit stats."""
    return Character(name=name, hp=hp, stats=Stats(hp=max_hp, attack=attack, defense=defense))


def make_slot(kind: AbilityKind, name: str = "", power: int = 5,
              cooldown_max: int = 0, cooldown_current: int = 0) -> AbilitySlot:
    """Build a slot for an ability of the given kind."""
    effect = EffectKind.HEAL if kind is AbilityKind.HEAL else EffectKind.DAMAGE
    ability = Ability(name=name or kind.name.title(), power=power, effect=effect)
    return AbilitySlot(ability=ability, kind=kind,
                       cooldown_max=cooldown_max, cooldown_current=cooldown_current)


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager(enable_debug_logging=False)


@pytest.fixture
def hero():
    """The canonical player: hp 30, attack 10, defense 2."""
    return Character(name="Hero", hp=30, stats=Stats(hp=30, attack=10, defense=2))


@pytest.fixture
def goblin():
    """The canonical monster: hp 20, attack 6, defense 1."""
    return Character(name="Goblin", hp=20, stats=Stats(hp=20, attack=6, defense=1))


@pytest.fixture
def basic_slot():
    return make_slot(AbilityKind.BASIC_ATTACK, "Basic Attack", power=5)


@pytest.fixture
def powerful_slot():
    return make_slot(AbilityKind.POWERFUL_ATTACK, "Powerful Attack", power=12, cooldown_max=3)


@pytest.fixture
def heal_slot():
    return make_slot(AbilityKind.HEAL, "Heal", power=10, cooldown_max=4)


@pytest.fixture
def monster_slots(basic_slot, powerful_slot, heal_slot):
    """All three ability kinds, ready to use."""
    return AbilitySet((basic_slot, powerful_slot, heal_slot))
