"""
Combat resolution for abilities used by one combatant against another.

This module computes outcomes only. Nothing here mutates a Character: every
function returns a fresh CombatEvent or HealEvent and the host applies it
(``apply_event``) when it decides to.

Damage formula: ``max(1, attacker.attack + ability.power - defender.defense)``.
The floor of 1 holds for every integer input, including negative power and
defense far above attack.
"""
from typing import Sequence

import numpy as np

from ...core.data import (
    Ability,
    AbilityOutcome,
    Character,
    CombatEvent,
    EffectKind,
    HealEvent,
)

MIN_DAMAGE = 1

# Inputs inside this range cannot overflow int64 when summed pairwise
_VECTOR_SAFE_LIMIT = 2 ** 31


def calculate_damage(attacker: Character, defender: Character, ability: Ability) -> int:
    """Damage dealt by ``ability`` before it is applied to the defender."""
    raw = attacker.stats.attack + ability.power
    return max(MIN_DAMAGE, raw - defender.stats.defense)


def resolve_attack(attacker: Character, defender: Character, ability: Ability) -> CombatEvent:
    """Resolve one attack.

    Args:
        attacker: The character using the ability
        defender: The character receiving the damage
        ability: The ability being used

    Returns:
        CombatEvent with damage >= 1 and the defender's resulting HP
    """
    damage = calculate_damage(attacker, defender, ability)
    return CombatEvent(
        attacker_name=attacker.name,
        defender_name=defender.name,
        damage=damage,
        defender_hp_after=defender.hp - damage,
        ability_used=ability.name,
    )


def resolve_attack_batch(
    attacker: Character,
    defenders: Sequence[Character],
    ability: Ability
) -> list[CombatEvent]:
    """Resolve one ability against several defenders at once.

    Uses vectorized numpy operations when every value fits comfortably in
    int64 arithmetic and the scalar path otherwise, so results always match
    ``resolve_attack`` element by element.
    """
    if not defenders:
        return []

    raw = attacker.stats.attack + ability.power
    values = [raw] + [d.stats.defense for d in defenders] + [d.hp for d in defenders]
    if any(abs(v) >= _VECTOR_SAFE_LIMIT for v in values):
        return [resolve_attack(attacker, defender, ability) for defender in defenders]

    defenses = np.array([d.stats.defense for d in defenders], dtype=np.int64)
    current_hps = np.array([d.hp for d in defenders], dtype=np.int64)

    damages = np.maximum(MIN_DAMAGE, raw - defenses)
    hps_after = current_hps - damages

    return [
        CombatEvent(
            attacker_name=attacker.name,
            defender_name=defender.name,
            damage=int(damages[idx]),
            defender_hp_after=int(hps_after[idx]),
            ability_used=ability.name,
        )
        for idx, defender in enumerate(defenders)
    ]


def resolve_heal(caster: Character, ability: Ability) -> HealEvent:
    """Resolve a healing ability on its own caster.

    The caster regains ``max(0, power)`` HP capped at max HP. A caster already
    above max HP is left where it is.
    """
    restore = max(0, ability.power)
    hp_after = max(caster.hp, min(caster.stats.hp, caster.hp + restore))
    return HealEvent(
        caster_name=caster.name,
        amount=hp_after - caster.hp,
        hp_after=hp_after,
        ability_used=ability.name,
    )


def resolve_ability(user: Character, opponent: Character, ability: Ability) -> AbilityOutcome:
    """Resolve an ability according to its effect kind."""
    if ability.effect is EffectKind.DAMAGE:
        return resolve_attack(user, opponent, ability)
    elif ability.effect is EffectKind.HEAL:
        return resolve_heal(user, ability)
    else:
        # Unreachable while every EffectKind member has a branch above
        raise AssertionError(f"Unhandled effect kind: {ability.effect}")


def apply_event(character: Character, event: AbilityOutcome) -> Character:
    """Return ``character`` with the HP recorded in ``event``."""
    if isinstance(event, CombatEvent):
        return character.with_hp(event.defender_hp_after)
    return character.with_hp(event.hp_after)
