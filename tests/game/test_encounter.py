"""
Tests for the reference duel host.

Drives the combat core turn by turn and checks that outcomes, cooldowns
and published events line up.
"""
from unittest.mock import Mock

import pytest

from skirmish.core.data import AbilitySet, HealEvent, Side
from skirmish.core.events import EventType
from skirmish.game.ai import BasicAttackAI, TieredAI
from skirmish.game.encounter import (
    Combatant,
    Encounter,
    EncounterConfig,
    default_monster,
    default_player,
)
from tests.conftest import make_character


def _wall(name: str, side: Side) -> Combatant:
    """A combatant that deals and takes the minimum damage."""
    character = make_character(name=name, hp=1000, max_hp=1000, attack=0, defense=100)
    return Combatant(character, AbilitySet(), BasicAttackAI(), side)


class TestEncounterConfig:
    def test_defaults(self):
        config = EncounterConfig()
        assert config.max_turns == 100
        assert config.log_capacity == 200

    @pytest.mark.parametrize("kwargs", [{"max_turns": 0}, {"log_capacity": 0}])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            EncounterConfig(**kwargs)


class TestDefaultDuel:
    """Test the canonical Hero vs Goblin duel."""

    def test_player_wins_in_one_turn(self):
        """The Hero opens with Powerful Attack for 21 against 20 HP."""
        result = Encounter(default_player(), default_monster()).run()

        assert result.winner is Side.PLAYER
        assert result.winner_name == "Hero"
        assert result.turns == 1
        assert result.monster.hp == -1
        assert result.monster.is_defeated
        assert not result.player.is_defeated
        assert len(result.outcomes) == 1
        assert result.outcomes[0].ability_used == "Powerful Attack"

    def test_events_published_in_order(self, event_manager):
        subscriber = Mock()
        event_manager.subscribe_all(subscriber)

        Encounter(default_player(), default_monster(), event_manager=event_manager).run()

        event_types = [call.args[0].event_type for call in subscriber.call_args_list]
        assert event_types == [
            EventType.ENCOUNTER_STARTED,
            EventType.TURN_STARTED,
            EventType.ABILITY_CHOSEN,
            EventType.ATTACK_RESOLVED,
            EventType.COMBATANT_DEFEATED,
            EventType.TURN_ENDED,
            EventType.ENCOUNTER_ENDED,
        ]

    def test_take_turn_after_end_returns_none(self):
        encounter = Encounter(default_player(), default_monster())
        encounter.run()

        assert encounter.is_over
        assert encounter.take_turn() is None


class TestTurnLoop:
    """Test cooldown handling and healing across turns."""

    def test_sides_alternate_and_rounds_advance(self):
        encounter = Encounter(_wall("Left", Side.PLAYER), _wall("Right", Side.MONSTER))

        first = encounter.take_turn()
        assert first.attacker_name == "Left"
        assert encounter.active_side is Side.MONSTER
        assert encounter.round == 1

        second = encounter.take_turn()
        assert second.attacker_name == "Right"
        assert encounter.active_side is Side.PLAYER
        assert encounter.round == 2

    def test_turn_limit_is_a_draw(self):
        config = EncounterConfig(max_turns=5)
        result = Encounter(_wall("Left", Side.PLAYER), _wall("Right", Side.MONSTER), config).run()

        assert result.is_draw
        assert result.winner_name is None
        assert result.turns == 5
        assert len(result.outcomes) == 10
        assert result.player.hp == 995
        assert result.monster.hp == 995

    def test_powerful_attack_cooldown_cycle(self, monster_slots):
        player = Combatant(
            make_character(name="Striker", hp=100, max_hp=100),
            monster_slots,
            TieredAI(),
            Side.PLAYER,
        )
        encounter = Encounter(player, _wall("Target", Side.MONSTER), EncounterConfig(max_turns=4))

        encounter.take_turn()
        assert encounter.player.ability_set[1].cooldown_current == 3

        result = encounter.run()
        used = [outcome.ability_used for outcome in result.outcomes if outcome.attacker_name == "Striker"]

        assert used == ["Powerful Attack", "Basic Attack", "Basic Attack", "Powerful Attack"]

    def test_low_hp_monster_heals(self, monster_slots):
        player = Combatant(
            make_character(name="Pacifist", hp=30, max_hp=30, defense=100),
            AbilitySet(),
            BasicAttackAI(),
            Side.PLAYER,
        )
        monster = Combatant(
            make_character(name="Goblin", hp=5, max_hp=20, attack=6, defense=4),
            monster_slots,
            TieredAI(),
            Side.MONSTER,
        )
        encounter = Encounter(player, monster)

        hit = encounter.take_turn()
        assert hit.damage == 1
        assert encounter.monster.character.hp == 4

        heal = encounter.take_turn()
        assert isinstance(heal, HealEvent)
        assert heal.amount == 10
        assert encounter.monster.character.hp == 14
        assert encounter.monster.ability_set[2].cooldown_current == 4

    def test_default_ability_leaves_slots_untouched(self, heal_slot):
        from skirmish.game.combat import activate

        cooling = AbilitySet((activate(heal_slot),))
        player = Combatant(make_character(name="Empty", hp=50, max_hp=50), cooling, TieredAI(), Side.PLAYER)
        encounter = Encounter(player, _wall("Target", Side.MONSTER))

        outcome = encounter.take_turn()

        assert outcome.ability_used == "Basic Attack"
        # Advanced once at turn start, not re-activated
        assert encounter.player.ability_set[0].cooldown_current == 3
