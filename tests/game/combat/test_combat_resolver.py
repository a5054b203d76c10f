"""
Unit tests for combat resolution.

Tests the damage formula, the minimum-damage clamp, heal resolution and
the vectorized batch path.
"""
import itertools

import pytest

from skirmish.core.data import Ability, CombatEvent, EffectKind, HealEvent
from skirmish.game.combat import (
    MIN_DAMAGE,
    apply_event,
    calculate_damage,
    resolve_ability,
    resolve_attack,
    resolve_attack_batch,
    resolve_heal,
)
from tests.conftest import make_character


INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1
BOUNDARY_VALUES = [INT32_MIN, -1, 0, 50, INT32_MAX]


class TestResolveAttack:
    """Test single-target attack resolution."""

    def test_canonical_basic_attack(self, hero, goblin):
        """Attack 10 + power 5 against defense 1 deals 14."""
        event = resolve_attack(hero, goblin, Ability("Basic Attack", 5))

        assert event.damage == 14
        assert event.defender_hp_after == 6
        assert event.attacker_name == "Hero"
        assert event.defender_name == "Goblin"
        assert event.ability_used == "Basic Attack"

    def test_minimum_damage_clamp(self):
        """Defense far above attack still deals 1."""
        attacker = make_character(attack=0)
        defender = make_character(hp=20, defense=50)

        event = resolve_attack(attacker, defender, Ability("Tap", 0))

        assert event.damage == MIN_DAMAGE == 1
        assert event.defender_hp_after == 19

    def test_negative_power_is_clamped(self):
        attacker = make_character(attack=3)
        defender = make_character(defense=0)

        assert resolve_attack(attacker, defender, Ability("Debuff", -40)).damage == 1

    def test_overkill_leaves_negative_hp(self):
        attacker = make_character(attack=100)
        defender = make_character(hp=5)

        assert resolve_attack(attacker, defender, Ability("Smash", 0)).defender_hp_after == -95

    def test_inputs_not_mutated(self, hero, goblin):
        before = (hero, goblin)
        resolve_attack(hero, goblin, Ability("Basic Attack", 5))

        assert (hero, goblin) == before
        assert goblin.hp == 20

    @pytest.mark.parametrize(
        "attack,power,defense",
        list(itertools.product(BOUNDARY_VALUES, repeat=3))
    )
    def test_formula_holds_for_boundary_values(self, attack, power, defense):
        attacker = make_character(attack=attack)
        defender = make_character(hp=10, defense=defense)

        event = resolve_attack(attacker, defender, Ability("Probe", power))

        assert event.damage >= 1
        assert event.damage == max(1, attack + power - defense)
        assert event.defender_hp_after == defender.hp - event.damage

    def test_calculate_damage_matches_event(self, hero, goblin):
        ability = Ability("Powerful Attack", 12)
        assert calculate_damage(hero, goblin, ability) == resolve_attack(hero, goblin, ability).damage


class TestResolveAttackBatch:
    """Test the vectorized multi-target path."""

    def test_matches_scalar_resolution(self, hero):
        defenders = [
            make_character(name=f"Target {i}", hp=hp, defense=defense)
            for i, (hp, defense) in enumerate([(20, 1), (5, 50), (-3, 0), (100, -10)])
        ]
        ability = Ability("Sweep", 4)

        batch = resolve_attack_batch(hero, defenders, ability)

        assert batch == [resolve_attack(hero, d, ability) for d in defenders]

    def test_results_are_python_ints(self, hero, goblin):
        event = resolve_attack_batch(hero, [goblin], Ability("Basic Attack", 5))[0]

        assert type(event.damage) is int
        assert type(event.defender_hp_after) is int

    def test_huge_values_use_scalar_path(self):
        attacker = make_character(attack=2 ** 70)
        defenders = [make_character(hp=2 ** 65, defense=1)]
        ability = Ability("Cosmic", 2 ** 70)

        assert resolve_attack_batch(attacker, defenders, ability) == [
            resolve_attack(attacker, defenders[0], ability)
        ]

    def test_empty_defenders(self, hero):
        assert resolve_attack_batch(hero, [], Ability("Basic Attack", 5)) == []


class TestResolveHeal:
    """Test self-heal resolution."""

    def test_heal_restores_power(self):
        caster = make_character(name="Goblin", hp=5, max_hp=20)
        event = resolve_heal(caster, Ability("Heal", 10, EffectKind.HEAL))

        assert isinstance(event, HealEvent)
        assert event.amount == 10
        assert event.hp_after == 15
        assert event.caster_name == "Goblin"

    def test_heal_capped_at_max_hp(self):
        caster = make_character(hp=15, max_hp=20)
        event = resolve_heal(caster, Ability("Heal", 10, EffectKind.HEAL))

        assert event.amount == 5
        assert event.hp_after == 20

    def test_heal_never_lowers_hp(self):
        over_max = make_character(hp=25, max_hp=20)
        assert resolve_heal(over_max, Ability("Heal", 10, EffectKind.HEAL)).hp_after == 25

        negative_power = make_character(hp=10, max_hp=20)
        assert resolve_heal(negative_power, Ability("Curse", -8, EffectKind.HEAL)).amount == 0


class TestResolveAbility:
    """Test dispatch on the ability's effect kind."""

    def test_damage_effect_targets_opponent(self, goblin, hero):
        event = resolve_ability(goblin, hero, Ability("Powerful Attack", 12))

        assert isinstance(event, CombatEvent)
        assert event.defender_name == "Hero"
        assert event.damage == 16

    def test_heal_effect_targets_caster(self, hero):
        hurt_goblin = make_character(name="Goblin", hp=4, max_hp=20)
        event = resolve_ability(hurt_goblin, hero, Ability("Heal", 10, EffectKind.HEAL))

        assert isinstance(event, HealEvent)
        assert event.caster_name == "Goblin"
        assert event.hp_after == 14


class TestApplyEvent:
    def test_apply_combat_event(self, hero, goblin):
        event = resolve_attack(hero, goblin, Ability("Basic Attack", 5))
        updated = apply_event(goblin, event)

        assert updated.hp == 6
        assert updated.stats.hp == 20

    def test_apply_heal_event(self):
        caster = make_character(hp=3, max_hp=20)
        updated = apply_event(caster, resolve_heal(caster, Ability("Heal", 10, EffectKind.HEAL)))

        assert updated.hp == 13
