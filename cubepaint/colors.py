"""
Colour resolution.

Every paintable, colour-changer and switch tile has a target colour derived
from the level alone:

1. the first colour zone containing (x, y), if the level defines zones;
2. the start colour, if the level has no colour changers or switches;
3. otherwise a positional pick from the level palette, which is the start
   colour followed by the positional colour of every changer/switch tile
   (layer, row, column order, duplicates skipped).

The positional index is ``x + y*width + layer*width*height``.
"""

from functools import lru_cache
from typing import Optional, Tuple

from cubepaint.constants import PALETTE, RECOLOR_TILES
from cubepaint.level import Level


def positional_index(level: Level, x: int, y: int, layer: int) -> int:
    return x + y * level.width + layer * level.width * level.height


def switch_color(level: Level, x: int, y: int, layer: int) -> str:
    """Colour a changer/switch at this coordinate contributes to the palette."""
    return PALETTE[positional_index(level, x, y, layer) % len(PALETTE)]


@lru_cache(maxsize=128)
def has_recolor_tiles(level: Level) -> bool:
    return any(code in RECOLOR_TILES for _, _, _, code in level.iter_tiles())


@lru_cache(maxsize=128)
def level_palette(level: Level) -> Tuple[str, ...]:
    colors = [level.start_color]
    for x, y, layer, code in level.iter_tiles():
        if code in RECOLOR_TILES:
            c = switch_color(level, x, y, layer)
            if c not in colors:
                colors.append(c)
    return tuple(colors)


def zone_color(level: Level, x: int, y: int) -> Optional[str]:
    # Zones are layer independent
    for zone in level.color_zones or ():
        if zone.contains(x, y):
            return zone.color
    return None


def resolve_target_color(level: Level, x: int, y: int, layer: int) -> str:
    if level.color_zones:
        color = zone_color(level, x, y)
        if color is not None:
            return color

    if not has_recolor_tiles(level):
        return level.start_color

    palette = level_palette(level)
    return palette[positional_index(level, x, y, layer) % len(palette)]
