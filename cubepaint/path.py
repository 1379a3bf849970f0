"""
Path sequencing for drag gestures.

A drag arrives as raw pointer samples in canvas pixels. ``build_path`` turns
them into a chain of cardinally adjacent tiles starting at the cube, and
``replay`` feeds the chain to the rules engine one step at a time.

Walking the chain:
    - a sample on the last accepted tile is ignored;
    - a sample one cardinal step from the last tile is appended;
    - a sample on a tile already in the chain truncates the chain back to
      that tile, so dragging backwards retracts the path;
    - any other sample (diagonal, skipped tiles, off-grid) is ignored.
"""

import logging
import math
from collections import namedtuple
from typing import Iterator, List, Optional, Sequence, Tuple

from cubepaint.board import BoardState
from cubepaint.constants import DIRECTIONS
from cubepaint.rules import RulesEngine, StepOutcome

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
Tile = Tuple[int, int]

PathOutcome = namedtuple("PathOutcome", ["accepted_tiles", "status"])


def parse_point(value) -> Optional[Point]:
    """``[x, y]`` or ``{"x": .., "y": ..}`` as floats; None passes through.

    Raises ValueError for anything else.
    """
    if value is None:
        return None
    try:
        if isinstance(value, dict):
            return float(value["x"]), float(value["y"])
        x, y = value
        return float(x), float(y)
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Bad point {value!r}") from e


def point_to_tile(point: Point, grid_origin: Point, tile_size: float) -> Tile:
    px, py = point
    ox, oy = grid_origin
    return math.floor((px - ox) / tile_size), math.floor((py - oy) / tile_size)


def is_cardinal_step(a: Tile, b: Tile) -> bool:
    return (b[0] - a[0], b[1] - a[1]) in DIRECTIONS


def build_path(
    raw_points: Sequence[Point],
    grid_origin: Point,
    tile_size: float,
    board: BoardState,
) -> List[Tile]:
    """Return the accepted tile chain, starting with the cube's own tile."""
    level = board.level
    chain = [(board.cube.x, board.cube.y)]
    if tile_size <= 0:
        return chain

    for point in raw_points:
        tile = point_to_tile(point, grid_origin, tile_size)
        if not (0 <= tile[0] < level.width and 0 <= tile[1] < level.height):
            continue
        if tile == chain[-1]:
            continue
        if tile in chain:
            chain = chain[:chain.index(tile) + 1]
            continue
        if is_cardinal_step(chain[-1], tile):
            chain.append(tile)

    return chain


def iter_replay(path_tiles: Sequence[Tile], engine: RulesEngine) -> Iterator[Tuple[Tile, StepOutcome]]:
    """Yield ``(tile, outcome)`` for every step attempted along the path.

    Stops after the first rejected step. A leading tile equal to the cube's
    position is skipped. Presentation code can pace the steps by sleeping
    between iterations; the board is consistent after every yield.
    """
    cube = engine.board.cube
    tiles = list(path_tiles)
    if tiles and tiles[0] == (cube.x, cube.y):
        tiles = tiles[1:]

    for tile in tiles:
        outcome = engine.attempt_move_to(*tile)
        yield tile, outcome
        if not outcome.accepted:
            break


def replay(path_tiles: Sequence[Tile], engine: RulesEngine) -> PathOutcome:
    accepted = []
    for tile, outcome in iter_replay(path_tiles, engine):
        if not outcome.accepted:
            logger.debug(f"Path stopped at {tile} after {len(accepted)} steps")
            break
        accepted.append(tile)

    status = engine.evaluate_status() if path_tiles else engine.status
    return PathOutcome(accepted, status)


# ---------------------------------------------------------------------------
# Single-step gestures
# ---------------------------------------------------------------------------

def swipe_direction(start: Point, end: Point, min_distance: float) -> Optional[Tuple[int, int]]:
    """Dominant-axis direction of a swipe, or None if it is too short."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if abs(dx) < min_distance and abs(dy) < min_distance:
        return None
    if abs(dx) > abs(dy):
        return (1, 0) if dx > 0 else (-1, 0)
    return (0, 1) if dy > 0 else (0, -1)


def tap_direction(point: Point, board: BoardState, grid_origin: Point,
                  tile_size: float) -> Tuple[int, int]:
    """Direction from the centre of the cube's tile towards a tap."""
    cx = board.cube.x * tile_size + grid_origin[0] + tile_size / 2
    cy = board.cube.y * tile_size + grid_origin[1] + tile_size / 2
    dx = point[0] - cx
    dy = point[1] - cy
    if abs(dx) > abs(dy):
        return (1, 0) if dx > 0 else (-1, 0)
    return (0, 1) if dy > 0 else (0, -1)

