from crunch.components.game_state import GameMode
from crunch.main import main, run_autoplay


def test_autoplay_runs_until_the_game_ends():
    state = run_autoplay(7, target_score=100_000, maximum_moves=5)
    assert state.mode == GameMode.LOST
    assert state.moves_left == 0
    assert state.score > 0


def test_autoplay_can_win_an_easy_level():
    state = run_autoplay(3, target_score=60, maximum_moves=5)
    assert state.mode == GameMode.WON
    assert state.moves_left == 4


def test_autoplay_is_reproducible():
    first = run_autoplay(21, target_score=100_000, maximum_moves=4)
    second = run_autoplay(21, target_score=100_000, maximum_moves=4)
    assert first.score == second.score


def test_main_reports_outcome(capsys):
    exit_code = main(["--seed", "5", "--target", "60", "--moves", "3"])
    out = capsys.readouterr().out
    assert exit_code == 0
    assert out.startswith("WON")
