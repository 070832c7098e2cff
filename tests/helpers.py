from __future__ import annotations

import random
from typing import Sequence

from crunch.components.cookie import Cookie
from crunch.level import Level
from crunch.systems.board_ops import EMPTY, cell_index


class ScriptedRandom(random.Random):
    """Random source that serves queued randint results before the seeded stream."""

    def randint(self, a, b):
        pending = getattr(self, "pending", None)
        if pending:
            return pending.pop(0)
        return super().randint(a, b)


def cyclic_rows(columns: int = 9, rows: int = 9) -> list[str]:
    """Five-type pattern with no runs; type 6 is left free for planting chains."""
    return [
        "".join(str((column + 2 * row) % 5 + 1) for column in range(columns))
        for row in range(rows)
    ]


def deadlock_rows(columns: int = 9, rows: int = 9) -> list[str]:
    """Three-type diagonal pattern that has neither runs nor legal swaps."""
    return [
        "".join(str((column + row) % 3 + 1) for column in range(columns))
        for row in range(rows)
    ]


def replace_cells(rows: Sequence[str], row: int, column: int, text: str) -> list[str]:
    updated = list(rows)
    line = updated[row]
    updated[row] = line[:column] + text + line[column + len(text):]
    return updated


def load_layout(level: Level, rows: Sequence[str]) -> None:
    """Overwrite the level's grid; digits are cookie types, '.' or ' ' an empty cell."""
    assert len(rows) == level.rows, f"Layout has {len(rows)} rows, level has {level.rows}"
    grid = [EMPTY] * (level.columns * level.rows)
    for row, line in enumerate(rows):
        assert len(line) == level.columns, f"Row {row} has {len(line)} cells"
        for column, char in enumerate(line):
            if char in ". ":
                continue
            assert level.cell_mask.is_playable(column, row), f"({column}, {row}) is not playable"
            grid[cell_index(level.columns, column, row)] = int(char)
    level._grid = grid


def snapshot(level: Level) -> tuple[frozenset[Cookie], int]:
    return frozenset(level.cookies()), level.combo_multiplier


def column_types_bottom_up(level: Level, column: int) -> list[int]:
    types = []
    for row in range(level.rows - 1, -1, -1):
        if not level.cell_mask.is_playable(column, row):
            continue
        cookie = level.cookie_at(column, row)
        if cookie is not None:
            types.append(cookie.cookie_type)
    return types
