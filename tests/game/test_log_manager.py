"""
Tests for LogManager.

Covers event-driven message formatting, filtering and saving.
"""
import os

from skirmish.core.data import CombatEvent, HealEvent
from skirmish.core.events import (
    AttackResolved,
    CombatantDefeated,
    DebugMessage,
    EncounterEnded,
    HealResolved,
    LogMessage,
    LogSaveRequested,
)
from skirmish.game.encounter import Encounter, default_monster, default_player
from skirmish.game.log_manager import LogCategory, LogLevel, LogManager


def _deliver(event_manager, event):
    event_manager.publish(event)
    event_manager.process_events()


class TestEventFormatting:
    """Test that bus events become readable log lines."""

    def test_attack_resolved(self, event_manager):
        log = LogManager(event_manager)
        outcome = CombatEvent("Hero", "Goblin", damage=14, defender_hp_after=6, ability_used="Basic Attack")

        _deliver(event_manager, AttackResolved(turn=1, outcome=outcome))

        assert log.get_recent(1) == ["[BTL] Hero uses Basic Attack on Goblin for 14 damage! (Goblin HP: 6)"]

    def test_heal_resolved(self, event_manager):
        log = LogManager(event_manager)
        outcome = HealEvent("Goblin", amount=10, hp_after=14, ability_used="Heal")

        _deliver(event_manager, HealResolved(turn=2, outcome=outcome))

        assert log.get_recent(1) == ["[BTL] Goblin uses Heal and heals 10 HP! (Goblin HP: 14)"]

    def test_defeat_and_encounter_end(self, event_manager):
        log = LogManager(event_manager)

        _deliver(event_manager, CombatantDefeated(turn=3, combatant_name="Goblin", final_hp=-2))
        _deliver(event_manager, EncounterEnded(turn=3, winner_name="Hero", turns_taken=3))
        _deliver(event_manager, EncounterEnded(turn=9, winner_name=None, turns_taken=9))

        assert log.get_recent(3) == [
            "[BTL] Goblin has been defeated!",
            "[SYS] Hero wins after 3 turns",
            "[SYS] Encounter ended without a winner after 9 turns",
        ]

    def test_log_message_category(self, event_manager):
        log = LogManager(event_manager)

        _deliver(event_manager, LogMessage(turn=1, message="watch out", category="warning"))
        _deliver(event_manager, LogMessage(turn=1, message="mystery", category="nonsense"))

        messages = log.get_messages()
        assert [msg.category for msg in messages] == [LogCategory.WARNING, LogCategory.SYSTEM]

    def test_full_duel_log(self, event_manager):
        log = LogManager(event_manager)

        Encounter(default_player(), default_monster(), event_manager=event_manager).run()

        assert log.get_recent(10) == [
            "[SYS] Hero faces Goblin!",
            "[TRN] --- Turn 1: Hero ---",
            "[BTL] Hero uses Powerful Attack on Goblin for 21 damage! (Goblin HP: -1)",
            "[BTL] Goblin has been defeated!",
            "[SYS] Hero wins after 1 turns",
        ]


class TestFiltering:
    """Test buffer bounds and visibility rules."""

    def test_buffer_is_bounded(self, event_manager):
        log = LogManager(event_manager, max_messages=3)
        for i in range(5):
            log.battle(f"hit {i}")

        assert [msg.text for msg in log.get_messages()] == ["hit 2", "hit 3", "hit 4"]
        assert log.dropped_count == 2

    def test_clear_resets_dropped_count(self, event_manager):
        log = LogManager(event_manager, max_messages=1)
        log.battle("first")
        log.battle("second")

        log.clear()

        assert log.dropped_count == 0

    def test_debug_and_ai_hidden_by_default(self, event_manager):
        log = LogManager(event_manager)
        log.debug("internal")
        log.ai("thinking")
        log.battle("visible")

        assert [msg.text for msg in log.get_messages()] == ["visible"]

    def test_toggle_debug(self, event_manager):
        log = LogManager(event_manager)
        _deliver(event_manager, DebugMessage(turn=1, message="tick", source="Test"))

        log.toggle_debug()
        assert log.is_debug_enabled()
        assert log.get_recent(1) == ["[DBG] [Test] tick"]

        log.toggle_debug()
        assert not log.is_debug_enabled()
        assert log.get_messages() == []

    def test_explicit_categories(self, event_manager):
        log = LogManager(event_manager)
        log.ai("thinking")
        log.battle("hit")

        assert [msg.text for msg in log.get_messages(categories={LogCategory.AI})] == ["thinking"]

    def test_disabled_category(self, event_manager):
        log = LogManager(event_manager)
        log.disable_category(LogCategory.BATTLE)
        log.battle("hit")

        assert log.get_messages() == []

    def test_log_level(self, event_manager):
        log = LogManager(event_manager)
        log.system("startup")
        log.error("broken")

        log.set_log_level(LogLevel.ERROR)

        assert [msg.text for msg in log.get_messages()] == ["broken"]

    def test_clear(self, event_manager):
        log = LogManager(event_manager)
        log.system("startup")
        log.clear()

        assert log.get_messages() == []


class TestSaveLog:
    def test_save_writes_every_message(self, event_manager, tmp_path):
        log = LogManager(event_manager)
        log.battle("Hero hits")
        log.debug("hidden detail")

        path = log.save_log_to_file(str(tmp_path))

        assert path is not None
        assert os.path.dirname(path) == str(tmp_path)
        with open(path, encoding="utf-8") as f:
            content = f.read()
        assert "[BATTLE] Hero hits" in content
        assert "[DEBUG] hidden detail" in content

    def test_save_requested_event(self, event_manager, tmp_path):
        log = LogManager(event_manager)
        log.battle("Hero hits")

        _deliver(event_manager, LogSaveRequested(turn=1, directory=str(tmp_path / "logs")))

        assert len(os.listdir(tmp_path / "logs")) == 1
        assert log.get_recent(1)[0].startswith("[SYS] Combat log saved to")

    def test_save_failure_returns_none(self, event_manager, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("")
        log = LogManager(event_manager)

        assert log.save_log_to_file(str(blocker)) is None
        assert log.get_recent(1)[0].startswith("[ERR] Failed to save log file")
