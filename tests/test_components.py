import pytest

from crunch.components.cell_mask import CellMask, mask_from_strings
from crunch.components.chain import Chain, ChainType
from crunch.components.cookie import Cookie
from crunch.components.move import Move
from crunch.errors import LevelConfigError


def test_move_equality_ignores_direction():
    forward = Move((1, 2), (2, 2))
    backward = Move((2, 2), (1, 2))
    assert forward == backward
    assert hash(forward) == hash(backward)
    assert len({forward, backward}) == 1
    assert forward.reversed().a == (2, 2)


def test_move_adjacency():
    assert Move((0, 0), (0, 1)).is_adjacent()
    assert Move((0, 0), (1, 0)).is_adjacent()
    assert not Move((0, 0), (1, 1)).is_adjacent()
    assert not Move((0, 0), (2, 0)).is_adjacent()
    assert not Move((0, 0), (0, 0)).is_adjacent()


def test_cookie_names_follow_type():
    assert Cookie(0, 0, 1).name == "Croissant"
    assert Cookie(0, 0, 6).sprite_name == "SugarCookie"
    assert Cookie(0, 0, 4).highlighted_sprite_name == "Donut-Highlighted"
    assert Cookie(3, 5, 2).position == (3, 5)


def test_cookie_is_immutable():
    cookie = Cookie(0, 0, 1)
    with pytest.raises(AttributeError):
        cookie.row = 3


def test_chain_reports_members():
    cookies = (Cookie(2, 4, 6), Cookie(3, 4, 6), Cookie(4, 4, 6))
    chain = Chain(ChainType.HORIZONTAL, cookies, score=60)
    assert len(chain) == 3
    assert chain.cookie_type == 6
    assert chain.positions == [(2, 4), (3, 4), (4, 4)]


def test_cell_mask_from_rows():
    mask = CellMask.from_rows([
        [0, 1, 1],
        [1, 1, 0],
    ])
    assert (mask.columns, mask.rows) == (3, 2)
    assert not mask.is_playable(0, 0)
    assert mask.is_playable(1, 0)
    assert not mask.is_playable(2, 1)
    assert not mask.is_playable(5, 5)
    assert list(mask.playable_cells()) == [(1, 0), (2, 0), (0, 1), (1, 1)]
    assert mask.count() == 4


def test_cell_mask_from_strings():
    mask = mask_from_strings(["x x", "xxx"])
    assert not mask.is_playable(1, 0)
    assert mask.count() == 5


def test_cell_mask_rejects_ragged_rows():
    with pytest.raises(LevelConfigError):
        CellMask.from_rows([[1, 1, 1], [1, 1]])
    with pytest.raises(LevelConfigError):
        CellMask.from_rows([])


def test_cell_mask_rejects_wrong_cell_count():
    with pytest.raises(LevelConfigError):
        CellMask(columns=2, rows=2, cells=(True, True, True))
