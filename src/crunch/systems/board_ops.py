from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from crunch.components.cell_mask import CellMask
from crunch.components.chain import ChainType
from crunch.components.cookie import Cookie
from crunch.constants import MIN_CHAIN_LENGTH

Position = Tuple[int, int]  # (column, row)
Run = Tuple[ChainType, List[Position]]

# Flat cell array value for a cell without a cookie.
EMPTY = 0


@dataclass(frozen=True, slots=True)
class GravityMove:
    """A cookie that fell; cookie carries the landing position."""
    cookie: Cookie
    from_row: int

    @property
    def to_row(self) -> int:
        return self.cookie.row

    @property
    def distance(self) -> int:
        return self.cookie.row - self.from_row


def cell_index(columns: int, column: int, row: int) -> int:
    return row * columns + column


def find_runs(
    grid: Sequence[int], columns: int, rows: int, *, min_length: int = MIN_CHAIN_LENGTH
) -> List[Run]:
    """Detect every maximal horizontal, then vertical, run of equal types.

    Empty cells break runs. Runs crossing each other are both reported.
    """
    runs: List[Run] = []
    # Horizontal runs
    for row in range(rows):
        run: List[Position] = []
        last_type = EMPTY
        for column in range(columns):
            tval = grid[cell_index(columns, column, row)]
            if tval != EMPTY and tval == last_type:
                run.append((column, row))
            else:
                if len(run) >= min_length:
                    runs.append((ChainType.HORIZONTAL, run))
                run = [(column, row)] if tval != EMPTY else []
                last_type = tval
        if len(run) >= min_length:
            runs.append((ChainType.HORIZONTAL, run))
    # Vertical runs
    for column in range(columns):
        run = []
        last_type = EMPTY
        for row in range(rows):
            tval = grid[cell_index(columns, column, row)]
            if tval != EMPTY and tval == last_type:
                run.append((column, row))
            else:
                if len(run) >= min_length:
                    runs.append((ChainType.VERTICAL, run))
                run = [(column, row)] if tval != EMPTY else []
                last_type = tval
        if len(run) >= min_length:
            runs.append((ChainType.VERTICAL, run))
    return runs


def has_line_match(
    grid: Sequence[int],
    columns: int,
    rows: int,
    pos: Position,
    *,
    min_length: int = MIN_CHAIN_LENGTH,
) -> bool:
    """Return True if a horizontal or vertical run through pos reaches min_length."""
    column, row = pos
    tval = grid[cell_index(columns, column, row)]
    if tval == EMPTY:
        return False
    # Horizontal sweep
    h_len = 1
    c_left = column - 1
    while c_left >= 0 and grid[cell_index(columns, c_left, row)] == tval:
        h_len += 1
        c_left -= 1
    c_right = column + 1
    while c_right < columns and grid[cell_index(columns, c_right, row)] == tval:
        h_len += 1
        c_right += 1
    if h_len >= min_length:
        return True
    # Vertical sweep
    v_len = 1
    r_up = row - 1
    while r_up >= 0 and grid[cell_index(columns, column, r_up)] == tval:
        v_len += 1
        r_up -= 1
    r_down = row + 1
    while r_down < rows and grid[cell_index(columns, column, r_down)] == tval:
        v_len += 1
        r_down += 1
    return v_len >= min_length


def completes_run(grid: Sequence[int], columns: int, pos: Position, cookie_type: int) -> bool:
    """Would cookie_type at pos finish a triple with the two cells left of it or above it?

    Only the left and upper neighbours are inspected, which is all that is
    filled when a layout is generated row by row from the top-left.
    """
    column, row = pos
    if column >= 2:
        left1 = grid[cell_index(columns, column - 1, row)]
        left2 = grid[cell_index(columns, column - 2, row)]
        if left1 == left2 == cookie_type:
            return True
    if row >= 2:
        up1 = grid[cell_index(columns, column, row - 1)]
        up2 = grid[cell_index(columns, column, row - 2)]
        if up1 == up2 == cookie_type:
            return True
    return False


def generate_layout(mask: CellMask, num_types: int, rng: random.Random) -> List[int]:
    """Fill every playable cell with a type that does not complete a run.

    Each cell gets num_types random draws; when all of them collide the
    lowest non-colliding type is used instead. With three or more types one
    always exists since at most two types are excluded per cell.
    """
    columns = mask.columns
    layout = [EMPTY] * (columns * mask.rows)
    for pos in mask.playable_cells():
        chosen = EMPTY
        for _ in range(num_types):
            candidate = rng.randint(1, num_types)
            if not completes_run(layout, columns, pos, candidate):
                chosen = candidate
                break
        if chosen == EMPTY:
            for candidate in range(1, num_types + 1):
                if not completes_run(layout, columns, pos, candidate):
                    chosen = candidate
                    break
        layout[cell_index(columns, pos[0], pos[1])] = chosen
    return layout


def compute_gravity_moves(grid: Sequence[int], mask: CellMask) -> List[List[GravityMove]]:
    """Work out where cookies land when every column is packed downward.

    Row 0 is the top, so cookies move toward higher row numbers. Cells that
    are not playable are skipped over. Per column, moves are listed from the
    lowest landing cell upward; columns where nothing moves are left out.
    """
    columns = mask.columns
    result: List[List[GravityMove]] = []
    for column in range(columns):
        playable_rows = [row for row in range(mask.rows - 1, -1, -1) if mask.is_playable(column, row)]
        filled_rows = [row for row in playable_rows if grid[cell_index(columns, column, row)] != EMPTY]
        moves: List[GravityMove] = []
        for target_row, original_row in zip(playable_rows, filled_rows):
            if target_row == original_row:
                continue
            cookie_type = grid[cell_index(columns, column, original_row)]
            moves.append(GravityMove(cookie=Cookie(column, target_row, cookie_type), from_row=original_row))
        if moves:
            result.append(moves)
    return result


def apply_gravity_moves(grid: List[int], columns: int, moves: Sequence[Sequence[GravityMove]]) -> None:
    for column_moves in moves:
        for move in column_moves:
            grid[cell_index(columns, move.cookie.column, move.from_row)] = EMPTY
        for move in column_moves:
            grid[cell_index(columns, move.cookie.column, move.cookie.row)] = move.cookie.cookie_type
