"""Turn controller driving a Level and reporting every transition on the bus."""
from __future__ import annotations

import logging
from typing import Set

from esper import World

from crunch.components.game_state import GameMode
from crunch.components.move import Move
from crunch.events.bus import (
    EVENT_BOARD_SHUFFLED,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_GAME_OVER,
    EVENT_GAME_START_REQUEST,
    EVENT_GAME_STARTED,
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_CLEARED,
    EVENT_MOVES_CHANGED,
    EVENT_MOVES_EXHAUSTED,
    EVENT_NO_MOVES,
    EVENT_OBJECTIVE_REACHED,
    EVENT_REFILL_COMPLETED,
    EVENT_SCORE_CHANGED,
    EVENT_SHUFFLE_REQUEST,
    EVENT_SWAP_APPLIED,
    EVENT_SWAP_INVALID,
    EVENT_SWAP_REQUEST,
    EventBus,
)
from crunch.level import Level
from crunch.systems.turn_state_utils import get_or_create_turn_state
from crunch.utils.game_state import get_game_state, get_level_objective, set_game_mode

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Runs the turn loop: swap, cascade, scoring, reshuffle and game over."""

    def __init__(self, world: World, event_bus: EventBus, level: Level) -> None:
        self.world = world
        self.event_bus = event_bus
        self.level = level
        self._possible_swaps: Set[Move] = set()

        self.event_bus.subscribe(EVENT_GAME_START_REQUEST, self._on_game_start_request)
        self.event_bus.subscribe(EVENT_SWAP_REQUEST, self._on_swap_request)
        self.event_bus.subscribe(EVENT_SHUFFLE_REQUEST, self._on_shuffle_request)

    @property
    def possible_swaps(self) -> Set[Move]:
        """Legal moves for the current turn, e.g. for showing a hint."""
        return set(self._possible_swaps)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_game_start_request(self, sender, **payload) -> None:
        self.begin_game()

    def _on_swap_request(self, sender, **payload) -> None:
        src = payload.get("src")
        dst = payload.get("dst")
        if src is None or dst is None:
            return
        self.handle_swap(Move(tuple(src), tuple(dst)))

    def _on_shuffle_request(self, sender, **payload) -> None:
        if get_game_state(self.world).mode != GameMode.PLAYING:
            return
        self._shuffle(reason="player")
        self._begin_next_turn(consume_move=True)

    # ------------------------------------------------------------------
    # Flow
    # ------------------------------------------------------------------

    def begin_game(self) -> None:
        objective = get_level_objective(self.world)
        state = get_game_state(self.world)
        state.score = 0
        state.moves_left = objective.maximum_moves
        turn_state = get_or_create_turn_state(self.world)
        turn_state.turns_taken = 0
        turn_state.cascade_depth = 0
        turn_state.cascade_active = False
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        self.level.reset_combo_multiplier()
        logger.info(
            "Game started: target %d in %d moves", objective.target_score, objective.maximum_moves
        )
        self.event_bus.emit(
            EVENT_GAME_STARTED, target_score=objective.target_score, moves_left=state.moves_left
        )
        self._shuffle(reason="new_game")

    def handle_swap(self, move: Move) -> bool:
        """Apply move if it is legal and resolve its cascade. Returns whether it was applied."""
        if get_game_state(self.world).mode != GameMode.PLAYING:
            return False
        if not self.level.is_possible_swap(move):
            self.event_bus.emit(EVENT_SWAP_INVALID, move=move)
            return False
        cookies = self.level.perform_swap(move)
        self.event_bus.emit(EVENT_SWAP_APPLIED, move=move, cookies=cookies)
        self._resolve_cascade()
        self._begin_next_turn(consume_move=True)
        return True

    def _resolve_cascade(self) -> int:
        state = get_game_state(self.world)
        turn_state = get_or_create_turn_state(self.world)
        turn_state.cascade_active = True
        turn_state.cascade_depth = 0
        while True:
            chains = self.level.remove_matches()
            if not chains:
                break
            turn_state.cascade_depth += 1
            depth = turn_state.cascade_depth
            delta = sum(chain.score for chain in chains)
            state.score += delta
            self.event_bus.emit(EVENT_MATCH_CLEARED, chains=chains, depth=depth, score_delta=delta)
            self.event_bus.emit(EVENT_SCORE_CHANGED, score=state.score, delta=delta)
            self.event_bus.emit(EVENT_GRAVITY_APPLIED, columns=self.level.fill_holes())
            self.event_bus.emit(EVENT_REFILL_COMPLETED, columns=self.level.top_up_cookies())
            self.event_bus.emit(EVENT_CASCADE_STEP, depth=depth)
        turn_state.cascade_active = False
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=turn_state.cascade_depth)
        return turn_state.cascade_depth

    def _begin_next_turn(self, *, consume_move: bool) -> None:
        state = get_game_state(self.world)
        objective = get_level_objective(self.world)
        turn_state = get_or_create_turn_state(self.world)
        self.level.reset_combo_multiplier()
        if consume_move:
            state.moves_left = max(0, state.moves_left - 1)
            turn_state.turns_taken += 1
            self.event_bus.emit(EVENT_MOVES_CHANGED, moves_left=state.moves_left)
        if state.score >= objective.target_score:
            self.event_bus.emit(
                EVENT_OBJECTIVE_REACHED, score=state.score, target_score=objective.target_score
            )
            self._end_game(won=True)
            return
        if state.moves_left == 0:
            self.event_bus.emit(EVENT_MOVES_EXHAUSTED, score=state.score)
            self._end_game(won=False)
            return
        self._possible_swaps = self.level.detect_possible_swaps()
        if not self._possible_swaps:
            logger.info("No legal moves left, reshuffling")
            self.event_bus.emit(EVENT_NO_MOVES)
            self._shuffle(reason="no_moves")

    def _shuffle(self, *, reason: str) -> None:
        cookies = self.level.shuffle()
        self._possible_swaps = self.level.detect_possible_swaps()
        self.event_bus.emit(EVENT_BOARD_SHUFFLED, cookies=cookies, reason=reason)

    def _end_game(self, *, won: bool) -> None:
        state = get_game_state(self.world)
        self._possible_swaps = set()
        set_game_mode(self.world, self.event_bus, GameMode.WON if won else GameMode.LOST)
        logger.info("Game over (%s) with score %d", "won" if won else "lost", state.score)
        self.event_bus.emit(EVENT_GAME_OVER, won=won, score=state.score)
