import random
from collections import Counter

from crunch.components.cell_mask import CellMask
from crunch.components.cookie import Cookie
from crunch.level import Level
from crunch.systems.board_ops import GravityMove
from tests.helpers import column_types_bottom_up, cyclic_rows, load_layout


def test_single_gap_drops_the_cookie_above_it():
    level = Level(CellMask.full(1, 4), 0, 0, columns=1, rows=4, rng=random.Random(0))
    load_layout(level, ["2", ".", "3", "1"])
    falls = level.fill_holes()
    assert falls == [[GravityMove(cookie=Cookie(0, 1, 2), from_row=0)]]
    assert falls[0][0].distance == 1
    assert level.cookie_at(0, 0) is None
    assert level.cookie_at(0, 1) == Cookie(0, 1, 2)
    assert level.cookie_at(0, 2) == Cookie(0, 2, 3)
    assert level.cookie_at(0, 3) == Cookie(0, 3, 1)


def test_fill_holes_orders_moves_bottom_up_and_skips_settled_columns():
    level = Level(CellMask.full(3, 5), 0, 0, columns=3, rows=5, rng=random.Random(0))
    load_layout(level, [
        "1..",
        "2.2",
        ".13",
        "3.4",
        "..5",
    ])
    falls = level.fill_holes()
    assert len(falls) == 2, "Column 2 is already packed and should be omitted"
    first, second = falls
    assert [(m.from_row, m.to_row, m.cookie.cookie_type) for m in first] == [(3, 4, 3), (1, 3, 2), (0, 2, 1)]
    assert [(m.from_row, m.to_row, m.cookie.column) for m in second] == [(2, 4, 1)]


def test_fill_holes_preserves_column_order_and_types():
    level = Level(CellMask.full(9, 9), 0, 0, rng=random.Random(0))
    rows = cyclic_rows()
    holes = {(0, 8), (0, 3), (2, 0), (4, 4), (4, 5), (4, 6), (7, 2), (8, 8), (8, 7)}
    rows = [
        "".join("." if (column, row) in holes else char for column, char in enumerate(line))
        for row, line in enumerate(rows)
    ]
    load_layout(level, rows)
    before = [column_types_bottom_up(level, column) for column in range(9)]
    level.fill_holes()
    after = [column_types_bottom_up(level, column) for column in range(9)]
    assert after == before
    for column in range(9):
        assert Counter(after[column]) == Counter(before[column])
        filled = [row for row in range(9) if level.cookie_at(column, row) is not None]
        assert filled == list(range(9 - len(filled), 9)), f"Column {column} not packed"


def test_fill_holes_jumps_over_missing_cells():
    mask = CellMask.from_rows([[1], [1], [0], [1]])
    level = Level(mask, 0, 0, columns=1, rows=4, rng=random.Random(0))
    load_layout(level, ["5", "6", " ", "."])
    falls = level.fill_holes()
    assert [(m.from_row, m.to_row) for m in falls[0]] == [(1, 3), (0, 1)]
    assert level.cookie_at(0, 3) == Cookie(0, 3, 6)
    assert level.cookie_at(0, 1) == Cookie(0, 1, 5)
    assert level.cookie_at(0, 2) is None


def test_top_up_fills_from_the_top_down():
    mask = CellMask.from_rows([[1, 1], [1, 0], [1, 1]])
    level = Level(mask, 0, 0, columns=2, rows=3, rng=random.Random(0))
    load_layout(level, ["..", ". ", "12"])
    spawned = level.top_up_cookies()
    assert [[cookie.position for cookie in column] for column in spawned] == [
        [(0, 0), (0, 1)],
        [(1, 0)],
    ]
    assert len(level.cookies()) == 5
    assert all(1 <= cookie.cookie_type <= 6 for column in spawned for cookie in column)
    assert level.top_up_cookies() == []
