#!/usr/bin/env python3

import argparse
import sys

from skirmish.core.events import EventManager
from skirmish.game.encounter import Encounter, EncounterConfig, default_monster, default_player
from skirmish.game.log_manager import LogManager
from skirmish.game.simulation import jittered_monster_factory, run_simulations


# Turn header, AI choice, outcome and defeat for each of the two turns in a round
LOG_LINES_PER_ROUND = 8
# Encounter start and end lines plus the optional save notice
LOG_EXTRA_LINES = 3


def duel_log_capacity(config: EncounterConfig) -> int:
    """Buffer size that holds a whole duel of up to ``config.max_turns`` rounds."""
    return max(config.log_capacity, LOG_LINES_PER_ROUND * config.max_turns + LOG_EXTRA_LINES)


def run_duel(args: argparse.Namespace) -> int:
    config = EncounterConfig(max_turns=args.max_turns)
    capacity = duel_log_capacity(config)
    event_manager = EventManager()
    log = LogManager(event_manager, max_messages=capacity)
    if args.debug:
        log.toggle_debug()

    encounter = Encounter(default_player(args.player), default_monster(args.monster), config, event_manager)
    result = encounter.run()

    if log.dropped_count:
        print(f"({log.dropped_count} earlier log lines were dropped)")
    for line in log.get_recent(capacity):
        print(line)

    if args.save_log:
        log.save_log_to_file(args.save_log)

    return 0 if result.winner_name is not None else 1


def run_batch(args: argparse.Namespace) -> int:
    config = EncounterConfig(max_turns=args.max_turns)
    stats = run_simulations(
        args.count,
        config,
        monster_factory=jittered_monster_factory(args.variance, args.seed),
    )
    print(stats.format())
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="Skirmish turn-based combat engine")
    subparsers = parser.add_subparsers(dest="command", required=True)

    duel = subparsers.add_parser("duel", help="Run one AI-vs-AI duel and print its log")
    duel.add_argument("--player", default="Hero", help="Player name")
    duel.add_argument("--monster", default="Goblin", help="Monster name")
    duel.add_argument("--max-turns", type=int, default=100, help="Round limit before a draw")
    duel.add_argument("--debug", action="store_true", help="Include AI reasoning in the log")
    duel.add_argument("--save-log", metavar="DIR", help="Also write the log to a file in DIR")
    duel.set_defaults(handler=run_duel)

    simulate = subparsers.add_parser("simulate", help="Run many duels and print statistics")
    simulate.add_argument("--count", type=int, default=100, help="Number of duels")
    simulate.add_argument("--max-turns", type=int, default=100, help="Round limit per duel")
    simulate.add_argument("--variance", type=int, default=0, help="Monster stat jitter")
    simulate.add_argument("--seed", type=int, default=None, help="Seed for the stat jitter")
    simulate.set_defaults(handler=run_batch)

    args = parser.parse_args(argv)

    try:
        return args.handler(args)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except ValueError as e:
        print(f"\n\nError: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
