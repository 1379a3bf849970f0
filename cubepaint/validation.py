"""
Authoring checks for level data.

None of this is enforced at play time: an invalid level still loads and
plays, it just may not be winnable.
"""

import logging
from collections import deque
from typing import Dict, List, Sequence, Set

from cubepaint.constants import DIRECTIONS, EMPTY, PAINTABLE, PAINTABLE_TILES, PILLAR, TILE_NAMES
from cubepaint.level import Coord, Level

logger = logging.getLogger(__name__)


def reachable_paintable(level: Level) -> Set[Coord]:
    """Flood fill over plain paintable tiles from the start, on the start layer.

    Holes and jump pads are not followed.
    """
    sx, sy, sl = level.start_position
    if level.tile_at(sx, sy, sl) != PAINTABLE:
        return set()

    visited = {(sx, sy, sl)}
    queue = deque([(sx, sy, sl)])
    while queue:
        cx, cy, cl = queue.popleft()
        for ddx, ddy in [(0, -1), (0, 1), (-1, 0), (1, 0)]:
            nxt = (cx + ddx, cy + ddy, cl)
            if nxt not in visited and level.tile_at(*nxt) == PAINTABLE:
                visited.add(nxt)
                queue.append(nxt)
    return visited


def is_fully_paintable(level: Level) -> bool:
    reachable = reachable_paintable(level)
    return all((x, y, layer) in reachable
               for x, y, layer, code in level.iter_tiles() if code == PAINTABLE)


def unenterable_tiles(level: Level) -> List[Coord]:
    """Paintable tiles the cube can never step onto.

    Painting needs a step from a same-layer neighbour, and the cube can only
    stand on non-empty, non-pillar tiles or its start. A hole landing does
    not paint, so a tile with no such neighbour keeps the level unwinnable.
    """
    start = tuple(level.start_position)
    stuck = []
    for x, y, layer, code in level.iter_tiles():
        if code not in PAINTABLE_TILES or (x, y, layer) == start:
            continue
        neighbours = [(x + ddx, y + ddy, layer) for ddx, ddy in DIRECTIONS]
        if not any(n == start or level.tile_at(*n) not in (EMPTY, PILLAR)
                   for n in neighbours):
            stuck.append((x, y, layer))
    return stuck


def validate_level(level: Level) -> List[str]:
    problems = []
    x, y, layer = level.start_position
    if not level.in_bounds(x, y, layer):
        problems.append(f"start position {level.start_position} is outside the grid")
    else:
        tile = level.tile_at(x, y, layer)
        if tile in (EMPTY, PILLAR):
            problems.append(
                f"start position {level.start_position} is on a {TILE_NAMES[tile]} tile")

    if not is_fully_paintable(level):
        problems.append("not every paintable tile is reachable from the start position")

    stuck = unenterable_tiles(level)
    if stuck:
        problems.append(f"cannot be won: {len(stuck)} tile(s) can never be stepped onto {stuck}")
    return problems


def validate_levels(levels: Sequence[Level]) -> Dict[int, List[str]]:
    report = {}
    for idx, level in enumerate(levels):
        problems = validate_level(level)
        if problems:
            report[idx] = problems
            for problem in problems:
                logger.warning(f"Level {idx + 1} ({level.name}): {problem}")
    return report


def filter_valid_levels(levels: Sequence[Level]) -> List[Level]:
    valid = []
    for idx, level in enumerate(levels):
        problems = validate_level(level)
        if problems:
            logger.warning(f"Level {idx + 1} removed: {'; '.join(problems)}")
        else:
            valid.append(level)
    return valid
