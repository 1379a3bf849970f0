import pytest

from cubepaint.constants import GameStatus
from cubepaint.path import (
    build_path,
    is_cardinal_step,
    iter_replay,
    parse_point,
    point_to_tile,
    replay,
    swipe_direction,
    tap_direction,
)

ORIGIN = (20, 20)
SIZE = 35


def centre(x, y):
    """Canvas point in the middle of tile (x, y)."""
    return ORIGIN[0] + x * SIZE + SIZE / 2, ORIGIN[1] + y * SIZE + SIZE / 2


def test_point_to_tile_floors():
    assert point_to_tile((20, 20), ORIGIN, SIZE) == (0, 0)
    assert point_to_tile((54.9, 20), ORIGIN, SIZE) == (0, 0)
    assert point_to_tile((55, 90), ORIGIN, SIZE) == (1, 2)
    assert point_to_tile((19, 20), ORIGIN, SIZE) == (-1, 0)


def test_is_cardinal_step():
    assert is_cardinal_step((1, 1), (1, 0))
    assert is_cardinal_step((1, 1), (2, 1))
    assert not is_cardinal_step((1, 1), (2, 2))
    assert not is_cardinal_step((1, 1), (1, 1))
    assert not is_cardinal_step((1, 1), (3, 1))


def test_chain_starts_at_cube(corridor, make_engine):
    engine = make_engine(corridor)
    assert build_path([], ORIGIN, SIZE, engine.board) == [(0, 0)]


def test_repeated_samples_collapse(corridor, make_engine):
    engine = make_engine(corridor)
    samples = [centre(0, 0), centre(1, 0), (ORIGIN[0] + SIZE + 1, 30), centre(2, 0)]
    assert build_path(samples, ORIGIN, SIZE, engine.board) == [(0, 0), (1, 0), (2, 0)]


def test_path_retraction(corridor, make_engine):
    engine = make_engine(corridor)
    samples = [centre(1, 0), centre(2, 0), centre(1, 0)]
    assert build_path(samples, ORIGIN, SIZE, engine.board) == [(0, 0), (1, 0)]


def test_retraction_to_start(corridor, make_engine):
    engine = make_engine(corridor)
    samples = [centre(1, 0), centre(2, 0), centre(0, 0), centre(1, 0)]
    assert build_path(samples, ORIGIN, SIZE, engine.board) == [(0, 0), (1, 0)]


def test_diagonal_and_skipping_samples_are_ignored(make_level, make_engine):
    level = make_level([[1, 1, 1], [1, 1, 1], [1, 1, 1]])
    engine = make_engine(level)
    samples = [centre(1, 1), centre(2, 0), centre(1, 0), centre(1, 1)]
    assert build_path(samples, ORIGIN, SIZE, engine.board) == [(0, 0), (1, 0), (1, 1)]


def test_off_grid_samples_are_ignored(corridor, make_engine):
    engine = make_engine(corridor)
    samples = [(0, 0), centre(1, 0), centre(1, 3), centre(2, 0), (5000, 5000)]
    assert build_path(samples, ORIGIN, SIZE, engine.board) == [(0, 0), (1, 0), (2, 0)]


def test_degenerate_tile_size(corridor, make_engine):
    engine = make_engine(corridor)
    assert build_path([centre(1, 0)], ORIGIN, 0, engine.board) == [(0, 0)]


def test_replay_whole_chain(corridor, make_engine):
    engine = make_engine(corridor)
    chain = [(0, 0), (1, 0), (2, 0), (3, 0)]

    outcome = replay(chain, engine)

    assert outcome.accepted_tiles == [(1, 0), (2, 0), (3, 0)]
    assert outcome.status is GameStatus.WON


def test_replay_stops_at_first_illegal_tile(make_level, make_engine):
    level = make_level([[1, 1, 2, 1]])
    engine = make_engine(level)
    chain = build_path([centre(1, 0), centre(2, 0), centre(3, 0)], ORIGIN, SIZE, engine.board)
    assert chain == [(0, 0), (1, 0), (2, 0), (3, 0)]

    outcome = replay(chain, engine)

    assert outcome.accepted_tiles == [(1, 0)]
    assert outcome.status is GameStatus.LOST
    assert engine.board.cube.position == (1, 0, 0)


def test_replay_matches_direct_steps(make_level, make_engine):
    level = make_level([[1, 1, 1], [1, 1, 1]])
    direct = make_engine(level)
    gesture = make_engine(level)

    for dx, dy in [(1, 0), (1, 0), (0, 1), (-1, 0)]:
        direct.attempt_step(dx, dy)
    replay([(0, 0), (1, 0), (2, 0), (2, 1), (1, 1)], gesture)

    assert direct.board.painted == gesture.board.painted
    assert direct.board.cube.position == gesture.board.cube.position
    assert direct.status is gesture.status


def test_replay_of_empty_path_is_a_no_op(corridor, make_engine):
    engine = make_engine(corridor)
    outcome = replay([], engine)
    assert outcome.accepted_tiles == []
    assert outcome.status is GameStatus.PLAYING
    assert engine.board.moves == 0


def test_replay_after_game_over_is_a_no_op(make_level, make_engine):
    level = make_level([[1, 1]])
    engine = make_engine(level)
    engine.attempt_step(1, 0)

    outcome = replay([(1, 0), (0, 0)], engine)

    assert outcome.accepted_tiles == []
    assert outcome.status is GameStatus.WON


def test_iter_replay_yields_each_attempt(make_level, make_engine):
    level = make_level([[1, 1, 2, 1]])
    engine = make_engine(level)

    steps = list(iter_replay([(0, 0), (1, 0), (2, 0), (3, 0)], engine))

    assert [tile for tile, _ in steps] == [(1, 0), (2, 0)]
    assert [outcome.accepted for _, outcome in steps] == [True, False]


def test_swipe_direction():
    assert swipe_direction((100, 100), (110, 120), 30) is None
    assert swipe_direction((100, 100), (140, 110), 30) == (1, 0)
    assert swipe_direction((100, 100), (60, 90), 30) == (-1, 0)
    assert swipe_direction((100, 100), (95, 140), 30) == (0, 1)
    assert swipe_direction((100, 100), (100, 50), 30) == (0, -1)


def test_tap_direction(corridor, make_engine):
    engine = make_engine(corridor)
    engine.board.cube.move_to(1, 0)
    # Cube centre is at (72.5, 37.5)
    assert tap_direction(centre(3, 0), engine.board, ORIGIN, SIZE) == (1, 0)
    assert tap_direction((30, 40), engine.board, ORIGIN, SIZE) == (-1, 0)
    assert tap_direction((75, 100), engine.board, ORIGIN, SIZE) == (0, 1)
    assert tap_direction((70, 0), engine.board, ORIGIN, SIZE) == (0, -1)


def test_parse_point_accepts_lists_and_dicts():
    assert parse_point([3, 4]) == (3.0, 4.0)
    assert parse_point({"x": "1.5", "y": 2}) == (1.5, 2.0)
    assert parse_point(None) is None


@pytest.mark.parametrize("value", [{"x": 1}, {"y": 1}, [1], [1, 2, 3], ["a", 1], 7, {"x": None, "y": 0}])
def test_parse_point_rejects_malformed(value):
    with pytest.raises(ValueError):
        parse_point(value)
