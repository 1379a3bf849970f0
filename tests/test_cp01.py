import importlib.util
from pathlib import Path

import numpy as np
import pytest

pytest.importorskip("arcengine")
arc_agi = pytest.importorskip("arc_agi")

from arcengine import GameAction  # noqa: E402

from cubepaint.constants import GameStatus  # noqa: E402

ENVIRONMENTS_DIR = Path(__file__).resolve().parent.parent / "environment_files"
GAME_PY = ENVIRONMENTS_DIR / "cp01" / "v1" / "cp01.py"


@pytest.fixture(scope="module")
def cp01():
    spec = importlib.util.spec_from_file_location("cp01", GAME_PY)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def env():
    arc = arc_agi.Arcade(
        operation_mode=arc_agi.OperationMode.OFFLINE,
        environments_dir=str(ENVIRONMENTS_DIR),
    )
    env = arc.make("cp01-v1", seed=0)
    assert env is not None
    env.reset()
    return env


def test_moves_map_to_cardinal_directions(cp01):
    assert sorted(cp01.ACTION_DIRS.values()) == [(-1, 0), (0, -1), (0, 1), (1, 0)]
    assert len(cp01.LEVELS) == 12


def test_overlay_draws_cube_and_coverage(cp01):
    overlay = cp01.CubeOverlay()
    overlay.grid_w, overlay.grid_h = 4, 1
    overlay.cube_x, overlay.cube_y = 0, 0
    overlay.cube_color = 8
    overlay.painted, overlay.total = 1, 4

    frame = overlay.render_interface(np.zeros((64, 64), dtype=np.int8))

    # 16 px tiles, grid centred vertically at y=24
    assert frame[24 + 4, 4] == cp01.CUBE_BORDER
    assert frame[24 + 8, 8] == 8
    assert frame[63, 0] == cp01.BAR_DONE
    assert frame[63, 15] == cp01.BAR_DONE
    assert frame[63, 16] == cp01.BAR_TODO


def test_game_starts_on_first_level(env):
    game = env._game
    assert game.session.level_number == 1
    assert game.session.cube_position == (0, 0, 0)
    assert game.overlay.painted == 1
    assert game.overlay.total == 4


def test_moves_and_win_advance_the_level(env):
    game = env._game
    env.step(GameAction.ACTION4)
    assert game.session.cube_position == (1, 0, 0)
    assert game.overlay.cube_x == 1
    assert game.overlay.painted == 2

    env.step(GameAction.ACTION4)
    frame = env.step(GameAction.ACTION4)

    assert frame.levels_completed == 1
    assert game.level_index == 1
    assert game.session.level_number == 2
    assert game.session.cube_position == (0, 1, 0)
    assert game.session.status is GameStatus.PLAYING


def test_rejected_move_leaves_the_board(env):
    game = env._game
    env.step(GameAction.ACTION3)
    assert game.session.cube_position == (0, 0, 0)
    assert game.session.board.moves == 0


def test_tap_steps_towards_the_tile(env):
    game = env._game
    # Level 1 is 4x1: 16 px tiles, row centred at y=24..39
    env.step(GameAction.ACTION6, data={"x": 56, "y": 32})
    assert game.session.cube_position == (1, 0, 0)


def test_dead_end_loses(env, monkeypatch):
    game = env._game
    calls = []
    lose = game.lose

    def record_lose():
        calls.append(game.session.status)
        lose()

    monkeypatch.setattr(game, "lose", record_lose)

    for _ in range(3):
        env.step(GameAction.ACTION4)
    assert game.session.level_number == 2

    # Level 2: along the bottom, up, then left into the corner
    for action in (GameAction.ACTION4, GameAction.ACTION4, GameAction.ACTION4,
                   GameAction.ACTION1, GameAction.ACTION3):
        env.step(action)

    assert calls == [GameStatus.LOST]
