"""
Reference host that drives a duel turn by turn.

The combat core never stores state; this module plays the embedding
application's part. It owns the authoritative Character and AbilitySet of
each side, applies resolved outcomes, advances cooldowns and publishes
events so loggers and UIs can follow along.

Turn order: the player acts first in every round, then the monster. Each
combatant's turn runs:
1. Advance all of its ability slots by one turn
2. Ask its AI behavior for a decision
3. Resolve the chosen ability and apply the outcome
4. Activate the chosen slot (the default ability has no slot)
"""

from dataclasses import dataclass, field
from typing import Optional

from ..core.data import AbilityOutcome, AbilitySet, Character, CombatEvent, Side
from ..core.events import (
    AbilityChosen,
    AttackResolved,
    CombatantDefeated,
    EncounterEnded,
    EncounterStarted,
    EventManager,
    HealResolved,
    TurnEnded,
    TurnStarted,
)
from .ai.ai_behaviors import AIBehavior, TieredAI
from .combat.combat_resolver import apply_event, resolve_ability
from .combat.cooldowns import activate_slot, advance_all
from .entities.presets import monster_ability_set, new_monster, new_player, player_ability_set


@dataclass
class EncounterConfig:
    """Tunables for a single duel."""
    max_turns: int = 100
    log_capacity: int = 200

    def __post_init__(self):
        if self.max_turns < 1:
            raise ValueError(f"max_turns must be at least 1, got {self.max_turns}")
        if self.log_capacity < 1:
            raise ValueError(f"log_capacity must be at least 1, got {self.log_capacity}")


@dataclass
class Combatant:
    """Host-side record of one side of a duel. Updated in place by Encounter."""
    character: Character
    ability_set: AbilitySet
    behavior: AIBehavior
    side: Side

    @property
    def name(self) -> str:
        return self.character.name

    @property
    def is_defeated(self) -> bool:
        return self.character.is_defeated


@dataclass
class EncounterResult:
    """Final state of a duel. ``winner`` is None when the turn limit was hit."""
    winner: Optional[Side]
    winner_name: Optional[str]
    turns: int
    player: Character
    monster: Character
    outcomes: list[AbilityOutcome] = field(default_factory=list)

    @property
    def is_draw(self) -> bool:
        return self.winner is None


def default_player(name: str = "Hero") -> Combatant:
    return Combatant(new_player(name), player_ability_set(), TieredAI(), Side.PLAYER)


def default_monster(name: str = "Goblin") -> Combatant:
    return Combatant(new_monster(name), monster_ability_set(), TieredAI(), Side.MONSTER)


class Encounter:
    """Runs a duel between a player combatant and a monster combatant."""

    def __init__(
        self,
        player: Combatant,
        monster: Combatant,
        config: Optional[EncounterConfig] = None,
        event_manager: Optional[EventManager] = None
    ):
        self.combatants = {Side.PLAYER: player, Side.MONSTER: monster}
        self.config = config or EncounterConfig()
        self.event_manager = event_manager or EventManager()

        self.round = 1
        self.last_round = 0
        self.active_side = Side.PLAYER
        self.outcomes: list[AbilityOutcome] = []
        self.started = False

    @property
    def player(self) -> Combatant:
        return self.combatants[Side.PLAYER]

    @property
    def monster(self) -> Combatant:
        return self.combatants[Side.MONSTER]

    @property
    def is_over(self) -> bool:
        return (
            self.player.is_defeated
            or self.monster.is_defeated
            or self.round > self.config.max_turns
        )

    def _publish(self, event) -> None:
        self.event_manager.publish(event, source="Encounter")

    def start(self) -> None:
        if self.started:
            return
        self.started = True
        self._publish(EncounterStarted(turn=0, player_name=self.player.name, monster_name=self.monster.name))
        self.event_manager.process_events()

    def take_turn(self) -> Optional[AbilityOutcome]:
        """Play the active combatant's turn. Returns None once the duel is over."""
        if self.is_over:
            return None
        self.start()

        actor = self.combatants[self.active_side]
        target = self.combatants[self.active_side.opponent]
        turn = self.round

        self._publish(TurnStarted(turn=turn, side=actor.side, combatant_name=actor.name))

        actor.ability_set = advance_all(actor.ability_set)
        decision = actor.behavior.decide(actor.character, target.character, actor.ability_set.slots)
        self._publish(AbilityChosen(
            turn=turn,
            combatant_name=actor.name,
            ability_name=decision.ability.name,
            tier=decision.tier,
            reasoning=decision.reasoning
        ))

        outcome = resolve_ability(actor.character, target.character, decision.ability)
        if isinstance(outcome, CombatEvent):
            target.character = apply_event(target.character, outcome)
            self._publish(AttackResolved(turn=turn, outcome=outcome))
            if target.is_defeated:
                self._publish(CombatantDefeated(turn=turn, combatant_name=target.name, final_hp=target.character.hp))
        else:
            actor.character = apply_event(actor.character, outcome)
            self._publish(HealResolved(turn=turn, outcome=outcome))

        if decision.slot_index is not None:
            actor.ability_set = activate_slot(actor.ability_set, decision.slot_index)

        self._publish(TurnEnded(turn=turn, side=actor.side, combatant_name=actor.name))
        self.outcomes.append(outcome)
        self.last_round = turn

        self.active_side = self.active_side.opponent
        if self.active_side is Side.PLAYER:
            self.round += 1

        self.event_manager.process_events()
        return outcome

    def winner(self) -> Optional[Combatant]:
        if self.monster.is_defeated:
            return self.player
        if self.player.is_defeated:
            return self.monster
        return None

    def run(self) -> EncounterResult:
        """Play turns until one side is defeated or the turn limit is reached."""
        self.start()
        while not self.is_over:
            self.take_turn()

        winner = self.winner()
        self._publish(EncounterEnded(
            turn=self.last_round,
            winner_name=winner.name if winner else None,
            turns_taken=self.last_round
        ))
        self.event_manager.process_events()

        return EncounterResult(
            winner=winner.side if winner else None,
            winner_name=winner.name if winner else None,
            turns=self.last_round,
            player=self.player.character,
            monster=self.monster.character,
            outcomes=list(self.outcomes),
        )
