"""Grid engine: owns the cookies of one level and every rule that moves them."""
from __future__ import annotations

import logging
import random
from typing import List, Set, Tuple

from crunch.components.cell_mask import CellMask
from crunch.components.chain import Chain
from crunch.components.cookie import Cookie
from crunch.components.move import Move
from crunch.components.tile import Tile
from crunch.constants import (
    BASE_CHAIN_SCORE,
    MAX_SHUFFLE_ATTEMPTS,
    MIN_CHAIN_LENGTH,
    NUM_COLUMNS,
    NUM_COOKIE_TYPES,
    NUM_ROWS,
)
from crunch.errors import GridContractError, LevelConfigError, ShuffleExhaustedError
from crunch.systems.board_ops import (
    EMPTY,
    GravityMove,
    Position,
    apply_gravity_moves,
    cell_index,
    compute_gravity_moves,
    find_runs,
    generate_layout,
    has_line_match,
)

logger = logging.getLogger(__name__)


class Level:
    """Live grid of a level.

    Cookie types are kept in a flat list indexed by ``row * columns + column``
    with 0 for an empty cell. Nothing outside this class gets a reference to
    that list; every accessor returns Cookie/Chain/GravityMove snapshots.
    Coordinates are validated here, at the public boundary, and trusted
    internally.
    """

    def __init__(
        self,
        cell_mask: CellMask,
        target_score: int,
        maximum_moves: int,
        *,
        columns: int = NUM_COLUMNS,
        rows: int = NUM_ROWS,
        num_cookie_types: int = NUM_COOKIE_TYPES,
        rng: random.Random | None = None,
        chain_base_score: int = BASE_CHAIN_SCORE,
        max_shuffle_attempts: int = MAX_SHUFFLE_ATTEMPTS,
    ) -> None:
        if cell_mask.columns != columns or cell_mask.rows != rows:
            raise LevelConfigError(
                f"Cell mask is {cell_mask.columns}x{cell_mask.rows}, level expects {columns}x{rows}"
            )
        if num_cookie_types < MIN_CHAIN_LENGTH:
            raise LevelConfigError(
                f"At least {MIN_CHAIN_LENGTH} cookie types are needed, got {num_cookie_types}"
            )
        if target_score < 0 or maximum_moves < 0:
            raise LevelConfigError("Target score and maximum moves must not be negative")
        if max_shuffle_attempts < 1:
            raise LevelConfigError("max_shuffle_attempts must be at least 1")
        self._mask = cell_mask
        self._columns = columns
        self._rows = rows
        self._num_types = num_cookie_types
        self._target_score = target_score
        self._maximum_moves = maximum_moves
        self._chain_base_score = chain_base_score
        self._max_shuffle_attempts = max_shuffle_attempts
        self._rng = rng or random.Random()
        self._grid: List[int] = [EMPTY] * (columns * rows)
        self._combo_multiplier = 1

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cell_mask(self) -> CellMask:
        return self._mask

    @property
    def num_cookie_types(self) -> int:
        return self._num_types

    @property
    def target_score(self) -> int:
        return self._target_score

    @property
    def maximum_moves(self) -> int:
        return self._maximum_moves

    @property
    def combo_multiplier(self) -> int:
        return self._combo_multiplier

    @property
    def rng(self) -> random.Random:
        return self._rng

    def cookie_at(self, column: int, row: int) -> Cookie | None:
        self._check_bounds(column, row)
        cookie_type = self._grid[cell_index(self._columns, column, row)]
        if cookie_type == EMPTY:
            return None
        return Cookie(column, row, cookie_type)

    def tile_at(self, column: int, row: int) -> Tile | None:
        self._check_bounds(column, row)
        if not self._mask.is_playable(column, row):
            return None
        return Tile(column, row)

    def cookies(self) -> Set[Cookie]:
        """Snapshot of every cookie currently on the grid."""
        cookies: Set[Cookie] = set()
        for column, row in self._mask.playable_cells():
            cookie_type = self._grid[cell_index(self._columns, column, row)]
            if cookie_type != EMPTY:
                cookies.add(Cookie(column, row, cookie_type))
        return cookies

    # ------------------------------------------------------------------
    # Fill
    # ------------------------------------------------------------------

    def shuffle(self) -> Set[Cookie]:
        """Replace the whole grid with a match-free layout that has a legal move.

        Raises ShuffleExhaustedError, leaving the grid as it was, when the
        mask is too constrained to produce such a layout.
        """
        previous = self._grid
        for attempt in range(1, self._max_shuffle_attempts + 1):
            self._grid = generate_layout(self._mask, self._num_types, self._rng)
            if self.detect_possible_swaps():
                if attempt > 1:
                    logger.debug("Shuffle found a playable layout after %d attempts", attempt)
                return self.cookies()
            logger.debug("Shuffle attempt %d produced no legal moves, retrying", attempt)
        self._grid = previous
        logger.warning("Shuffle gave up after %d attempts", self._max_shuffle_attempts)
        raise ShuffleExhaustedError(
            f"No layout with a legal move found in {self._max_shuffle_attempts} attempts"
        )

    # ------------------------------------------------------------------
    # Swaps
    # ------------------------------------------------------------------

    def perform_swap(self, move: Move) -> Tuple[Cookie, Cookie]:
        """Exchange the cookies named by move without judging whether it matches.

        Returns the cookie now at move.a followed by the cookie now at move.b.
        """
        self._check_move(move)
        index_a = cell_index(self._columns, *move.a)
        index_b = cell_index(self._columns, *move.b)
        self._grid[index_a], self._grid[index_b] = self._grid[index_b], self._grid[index_a]
        return (
            Cookie(move.a[0], move.a[1], self._grid[index_a]),
            Cookie(move.b[0], move.b[1], self._grid[index_b]),
        )

    def is_possible_swap(self, move: Move) -> bool:
        """Would exchanging the two cookies create at least one chain?"""
        self._check_move(move)
        return self._swap_creates_match(move.a, move.b)

    def detect_possible_swaps(self) -> Set[Move]:
        """Every adjacent swap on the grid that produces a chain."""
        swaps: Set[Move] = set()
        for column, row in self._mask.playable_cells():
            if self._grid[cell_index(self._columns, column, row)] == EMPTY:
                continue
            for other in ((column + 1, row), (column, row + 1)):
                if not self._mask.is_playable(*other):
                    continue
                if self._grid[cell_index(self._columns, *other)] == EMPTY:
                    continue
                if self._swap_creates_match((column, row), other):
                    swaps.add(Move((column, row), other))
        return swaps

    def _swap_creates_match(self, a: Position, b: Position) -> bool:
        grid = self._grid
        index_a = cell_index(self._columns, *a)
        index_b = cell_index(self._columns, *b)
        if grid[index_a] == grid[index_b]:
            return False
        grid[index_a], grid[index_b] = grid[index_b], grid[index_a]
        try:
            return (
                has_line_match(grid, self._columns, self._rows, a)
                or has_line_match(grid, self._columns, self._rows, b)
            )
        finally:
            grid[index_a], grid[index_b] = grid[index_b], grid[index_a]

    # ------------------------------------------------------------------
    # Matches, gravity, refill
    # ------------------------------------------------------------------

    def remove_matches(self) -> Set[Chain]:
        """Detect all chains, take their cookies off the grid and score them.

        Crossing chains are scored separately, so the shared cookie counts
        for both; it is removed once. A non-empty result bumps the combo
        multiplier for the next cascade step of the turn.
        """
        runs = find_runs(self._grid, self._columns, self._rows)
        if not runs:
            return set()
        chains: Set[Chain] = set()
        for chain_type, positions in runs:
            cookies = tuple(
                Cookie(column, row, self._grid[cell_index(self._columns, column, row)])
                for column, row in positions
            )
            chains.add(Chain(chain_type=chain_type, cookies=cookies, score=self._score_for(len(cookies))))
        for chain in chains:
            for cookie in chain.cookies:
                self._grid[cell_index(self._columns, cookie.column, cookie.row)] = EMPTY
        self._combo_multiplier += 1
        return chains

    def _score_for(self, length: int) -> int:
        return self._chain_base_score * (length - 2) * self._combo_multiplier

    def fill_holes(self) -> List[List[GravityMove]]:
        """Let cookies fall into the empty cells below them.

        Returns one list per column that changed, each ordered from the
        lowest landing cell upward.
        """
        moves = compute_gravity_moves(self._grid, self._mask)
        apply_gravity_moves(self._grid, self._columns, moves)
        return moves

    def top_up_cookies(self) -> List[List[Cookie]]:
        """Spawn random cookies into every empty playable cell.

        Returns one list per column that received cookies, ordered top-down.
        New matches are allowed here; the caller resolves them.
        """
        columns: List[List[Cookie]] = []
        for column in range(self._columns):
            spawned: List[Cookie] = []
            for row in range(self._rows):
                if not self._mask.is_playable(column, row):
                    continue
                index = cell_index(self._columns, column, row)
                if self._grid[index] != EMPTY:
                    continue
                cookie_type = self._rng.randint(1, self._num_types)
                self._grid[index] = cookie_type
                spawned.append(Cookie(column, row, cookie_type))
            if spawned:
                columns.append(spawned)
        return columns

    def reset_combo_multiplier(self) -> None:
        self._combo_multiplier = 1

    # ------------------------------------------------------------------
    # Contract checks
    # ------------------------------------------------------------------

    def _check_bounds(self, column: int, row: int) -> None:
        if not self._mask.in_bounds(column, row):
            raise GridContractError(
                f"({column}, {row}) is outside the {self._columns}x{self._rows} grid"
            )

    def _check_move(self, move: Move) -> None:
        if move.a == move.b:
            raise GridContractError(f"Cannot swap {move.a} with itself")
        for column, row in (move.a, move.b):
            self._check_bounds(column, row)
            if not self._mask.is_playable(column, row):
                raise GridContractError(f"({column}, {row}) is not a playable cell")
            if self._grid[cell_index(self._columns, column, row)] == EMPTY:
                raise GridContractError(f"No cookie at ({column}, {row})")
        if not move.is_adjacent():
            raise GridContractError(f"{move.a} and {move.b} are not adjacent")
