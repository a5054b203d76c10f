"""Turn-based cooldown rules for ability slots.

Turn model: when a combatant's turn starts every slot it owns advances by one
(``advance_all``); the AI chooses among the slots that are then usable; the
chosen slot is activated once its ability has been resolved. A slot with
``cooldown_max = N`` used on turn ``t`` is usable again on turn ``t + N``.
"""
from dataclasses import replace

from ...core.data import AbilitySet, AbilitySlot


def is_usable(slot: AbilitySlot) -> bool:
    return slot.cooldown_current == 0


def advance_turn(slot: AbilitySlot) -> AbilitySlot:
    """One turn elapses for ``slot``. Never goes below zero."""
    if slot.cooldown_current == 0:
        return slot
    return replace(slot, cooldown_current=slot.cooldown_current - 1)


def activate(slot: AbilitySlot) -> AbilitySlot:
    """Put ``slot`` on its full cooldown after its ability was used."""
    return replace(slot, cooldown_current=slot.cooldown_max)


def cooldown_progress(slot: AbilitySlot) -> float:
    """Fraction of the cooldown still remaining, in [0, 1]."""
    if slot.cooldown_max <= 0:
        return 0.0
    return slot.cooldown_current / slot.cooldown_max


def usable_slots(ability_set: AbilitySet) -> list[AbilitySlot]:
    """Slots whose cooldown has elapsed, in set order."""
    return [slot for slot in ability_set if is_usable(slot)]


def advance_all(ability_set: AbilitySet) -> AbilitySet:
    return AbilitySet(tuple(advance_turn(slot) for slot in ability_set))


def activate_slot(ability_set: AbilitySet, index: int) -> AbilitySet:
    return ability_set.replace_slot(index, activate(ability_set[index]))


def activate_ability(ability_set: AbilitySet, ability_name: str) -> AbilitySet:
    """Activate the first slot holding ``ability_name``.

    Abilities that are not equipped (such as the AI's default attack) leave
    the set unchanged.
    """
    index = ability_set.index_of(ability_name)
    if index is None:
        return ability_set
    return activate_slot(ability_set, index)
