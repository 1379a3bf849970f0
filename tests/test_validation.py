import logging

from cubepaint.levels import builtin_levels, get_level
from cubepaint.validation import (
    filter_valid_levels,
    is_fully_paintable,
    reachable_paintable,
    unenterable_tiles,
    validate_level,
    validate_levels,
)


def test_corridor_is_fully_paintable(corridor):
    assert reachable_paintable(corridor) == {(0, 0, 0), (1, 0, 0), (2, 0, 0), (3, 0, 0)}
    assert is_fully_paintable(corridor)
    assert validate_level(corridor) == []


def test_split_floor_is_not_fully_paintable(make_level):
    level = make_level([[1, 1, 2, 1]])
    assert reachable_paintable(level) == {(0, 0, 0), (1, 0, 0)}
    assert not is_fully_paintable(level)


def test_start_on_pillar_is_reported():
    level = get_level(9)
    problems = validate_level(level)
    assert any("pillar" in p for p in problems)
    assert reachable_paintable(level) == set()


def test_start_outside_grid_is_reported(make_level):
    level = make_level([[1, 1]], start=(5, 0, 0))
    problems = validate_level(level)
    assert any("outside the grid" in p for p in problems)


def test_jump_pad_islands_are_not_followed():
    # The four corners of the jump pad level are only connected by pads
    assert not is_fully_paintable(get_level(5))


def test_builtin_easy_levels_validate():
    for idx in (0, 1, 2):
        assert validate_level(get_level(idx)) == []


def test_validate_levels_logs_each_problem(caplog):
    levels = builtin_levels()
    with caplog.at_level(logging.WARNING, logger="cubepaint.validation"):
        report = validate_levels(levels)

    assert 0 not in report
    assert 9 in report
    assert len(caplog.records) == sum(len(p) for p in report.values())
    assert all(r.levelno == logging.WARNING for r in caplog.records)


def test_filter_valid_levels(corridor, make_level):
    broken = make_level([[1, 2, 1]])
    assert filter_valid_levels([corridor, broken]) == [corridor]


def test_isolated_landing_tiles_cannot_be_entered():
    # Layer 1 tiles of the holes level only ever receive a drop, which does not paint
    level = get_level(6)
    assert unenterable_tiles(level) == [(2, 0, 1), (0, 2, 1), (3, 3, 1)]
    assert any("cannot be won" in p for p in validate_level(level))


def test_start_counts_as_a_neighbour(make_level):
    level = make_level([[2, 1]], start=(0, 0, 0))
    assert unenterable_tiles(level) == []

    walled = make_level([[1, 2, 1]])
    assert unenterable_tiles(walled) == [(2, 0, 0)]


def test_open_floor_has_no_unenterable_tiles(corridor):
    assert unenterable_tiles(corridor) == []
    assert unenterable_tiles(get_level(2)) == []
