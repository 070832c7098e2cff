"""Headless autoplay entry point.

Wires a level, world, event bus and the game flow system, then plays random
legal moves until the game ends. Handy for eyeballing balance tweaks.
"""
from __future__ import annotations

import argparse
import logging
import random

from crunch.components.cell_mask import CellMask
from crunch.components.game_state import GameMode, GameState
from crunch.constants import DEFAULT_MAXIMUM_MOVES, DEFAULT_TARGET_SCORE, NUM_COLUMNS, NUM_ROWS
from crunch.events.bus import EVENT_GAME_OVER, EVENT_MATCH_CLEARED, EventBus
from crunch.level import Level
from crunch.systems.game_flow_system import GameFlowSystem
from crunch.utils.game_state import get_game_state
from crunch.world import create_world

logger = logging.getLogger(__name__)


def run_autoplay(
    seed: int | None = None,
    *,
    target_score: int = DEFAULT_TARGET_SCORE,
    maximum_moves: int = DEFAULT_MAXIMUM_MOVES,
) -> GameState:
    rng = random.Random(seed)
    level = Level(
        CellMask.full(NUM_COLUMNS, NUM_ROWS),
        target_score,
        maximum_moves,
        rng=random.Random(rng.getrandbits(32)),
    )
    event_bus = EventBus()
    world = create_world(level)
    flow = GameFlowSystem(world, event_bus, level)

    def on_match_cleared(sender, **payload):
        for chain in sorted(payload["chains"], key=lambda c: c.positions):
            logger.debug(
                "depth %d: %s %s x%d for %d",
                payload["depth"],
                chain.chain_type.name.lower(),
                chain.cookies[0].name,
                len(chain),
                chain.score,
            )

    event_bus.subscribe(EVENT_MATCH_CLEARED, on_match_cleared)
    event_bus.subscribe(
        EVENT_GAME_OVER,
        lambda sender, **payload: logger.info(
            "%s with %d points", "Won" if payload["won"] else "Lost", payload["score"]
        ),
    )

    flow.begin_game()
    state = get_game_state(world)
    while state.mode == GameMode.PLAYING:
        moves = sorted(flow.possible_swaps, key=lambda m: sorted((m.a, m.b)))
        flow.handle_swap(rng.choice(moves))
    return state


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Play a level with random legal moves.")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--target", type=int, default=DEFAULT_TARGET_SCORE)
    parser.add_argument("--moves", type=int, default=DEFAULT_MAXIMUM_MOVES)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    state = run_autoplay(args.seed, target_score=args.target, maximum_moves=args.moves)
    print(f"{state.mode.name}: score {state.score}, moves left {state.moves_left}")
    return 0 if state.mode == GameMode.WON else 1


if __name__ == "__main__":
    raise SystemExit(main())
