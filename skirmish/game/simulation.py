"""
Headless batch simulation of many duels.

Runs independent encounters and aggregates win rates and duel lengths with
numpy. Encounters are deterministic, so variety comes from jittering the
monster's stats with a seeded numpy generator.
"""
from dataclasses import dataclass, replace
from typing import Callable, Optional

import numpy as np

from ..core.data import Side
from .encounter import (
    Combatant,
    Encounter,
    EncounterConfig,
    EncounterResult,
    default_monster,
    default_player,
)

CombatantFactory = Callable[[int], Combatant]


@dataclass(frozen=True)
class SimulationStats:
    """Aggregate results over a batch of encounters."""
    total: int
    player_wins: int
    monster_wins: int
    draws: int
    average_turns: float
    min_turns: int
    max_turns: int

    @property
    def player_win_rate(self) -> float:
        return self.player_wins / self.total if self.total else 0.0

    @property
    def monster_win_rate(self) -> float:
        return self.monster_wins / self.total if self.total else 0.0

    def format(self) -> str:
        lines = [
            "Simulation Results",
            "=" * 40,
            f"Total Simulations: {self.total}",
            f"Player Wins: {self.player_wins} ({self.player_win_rate:.1%})",
            f"Monster Wins: {self.monster_wins} ({self.monster_win_rate:.1%})",
            f"Draws: {self.draws}",
            f"Average Turns: {self.average_turns:.1f} (min {self.min_turns}, max {self.max_turns})",
        ]
        return "\n".join(lines)


def summarize(results: list[EncounterResult]) -> SimulationStats:
    """Aggregate encounter results. An empty batch yields all-zero stats."""
    if not results:
        return SimulationStats(0, 0, 0, 0, 0.0, 0, 0)

    turns = np.array([r.turns for r in results], dtype=np.int64)
    winners = np.array(
        [-1 if r.winner is None else r.winner.value for r in results],
        dtype=np.int8
    )

    return SimulationStats(
        total=len(results),
        player_wins=int(np.count_nonzero(winners == Side.PLAYER.value)),
        monster_wins=int(np.count_nonzero(winners == Side.MONSTER.value)),
        draws=int(np.count_nonzero(winners == -1)),
        average_turns=float(turns.mean()),
        min_turns=int(turns.min()),
        max_turns=int(turns.max()),
    )


def jittered_monster_factory(variance: int, seed: Optional[int] = None) -> CombatantFactory:
    """Build monsters whose hp, attack and defense vary by up to ``variance``.

    Max HP never drops below 1 and the monster starts at full health.
    """
    rng = np.random.default_rng(seed)

    def factory(index: int) -> Combatant:
        combatant = default_monster(f"Goblin #{index + 1}")
        if variance <= 0:
            return combatant
        offsets = rng.integers(-variance, variance + 1, size=3)
        stats = combatant.character.stats
        stats = replace(
            stats,
            hp=max(1, stats.hp + int(offsets[0])),
            attack=stats.attack + int(offsets[1]),
            defense=stats.defense + int(offsets[2]),
        )
        combatant.character = replace(combatant.character, hp=stats.hp, stats=stats)
        return combatant

    return factory


def run_simulations(
    count: int,
    config: Optional[EncounterConfig] = None,
    player_factory: Optional[CombatantFactory] = None,
    monster_factory: Optional[CombatantFactory] = None
) -> SimulationStats:
    """Run ``count`` independent duels and aggregate their results.

    Args:
        count: Number of encounters to run
        config: Encounter tunables shared by every duel
        player_factory: Builds the player for run ``index``; default preset when None
        monster_factory: Builds the monster for run ``index``; default preset when None
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")

    config = config or EncounterConfig()
    player_factory = player_factory or (lambda index: default_player())
    monster_factory = monster_factory or (lambda index: default_monster())

    results = [
        Encounter(player_factory(index), monster_factory(index), config).run()
        for index in range(count)
    ]
    return summarize(results)
