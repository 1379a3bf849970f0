"""
Board rendering for the presentation layers.

``render_board`` produces an RGB numpy image for the web runner;
``arc_grid`` produces a grid of ARC palette indices for the arcengine game.
"""

import base64
import io

import numpy as np
from PIL import Image

from cubepaint.board import BoardState
from cubepaint.constants import (
    COLOR_CHANGER,
    EMPTY,
    HOLE,
    JUMP_PAD,
    PAINTABLE,
    PILLAR,
    SWITCH,
)
from cubepaint.level import Level

# ---------------------------------------------------------------------------
# Base tile colours (unpainted)
# ---------------------------------------------------------------------------
TILE_COLORS = {
    EMPTY:         "#f5f5f5",
    PAINTABLE:     "#ffffff",
    PILLAR:        "#666666",
    COLOR_CHANGER: "#ffd700",
    SWITCH:        "#ff8c00",
    JUMP_PAD:      "#00ff00",
    HOLE:          "#333333",
}

GRID_LINE = "#dddddd"
CUBE_BORDER = "#333333"
INACTIVE_LAYER_ALPHA = 0.3

# ---------------------------------------------------------------------------
# ARC 16-colour palette indices
# 0=white 1=light gray 2=gray 3=dark gray 4=charcoal 5=black 6=magenta
# 7=pink 8=red 9=blue 10=cyan 11=yellow 12=orange 13=crimson 14=green 15=purple
# ---------------------------------------------------------------------------
ARC_COLORS = {
    "#ff6b6b": 8,
    "#4ecdc4": 10,
    "#45b7d1": 9,
    "#f9ca24": 11,
    "#6c5ce7": 15,
    "#fd79a8": 7,
    "#00b894": 14,
    "#e17055": 12,
    "#a29bfe": 6,
}

ARC_TILES = {
    EMPTY:         5,
    PAINTABLE:     0,
    PILLAR:        3,
    COLOR_CHANGER: 1,
    SWITCH:        2,
    JUMP_PAD:      13,
    HOLE:          4,
}


def hex_to_rgb(color: str) -> tuple:
    value = color.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def arc_color(color: str) -> int:
    """Closest ARC index for a palette colour; unknown colours map to gray."""
    return ARC_COLORS.get(color.lower() if color else color, 2)


def tile_color(level: Level, board: BoardState, x: int, y: int, layer: int) -> str:
    tile = level.tile_at(x, y, layer)
    painted = board.painted_color(x, y, layer)
    if painted and tile in (PAINTABLE, COLOR_CHANGER, SWITCH):
        return painted
    return TILE_COLORS[tile]


def render_board(level: Level, board: BoardState, scale: int = 8) -> np.ndarray:
    """RGB image of the board, ``scale`` pixels per tile.

    Layers are drawn top to bottom: the cube's layer opaque, every other
    layer blended at 30% over what is already there.
    The cube is a half-tile square centred on its tile.
    """
    h, w = level.height * scale, level.width * scale
    frame = np.zeros((h, w, 3), dtype=np.float32)
    frame[:] = hex_to_rgb(TILE_COLORS[EMPTY])

    active = board.cube.layer
    for layer in range(level.layer_count):
        alpha = 1.0 if layer == active else INACTIVE_LAYER_ALPHA
        for y in range(level.height):
            for x in range(level.width):
                if level.tile_at(x, y, layer) == EMPTY and layer != active:
                    continue
                rgb = np.array(hex_to_rgb(tile_color(level, board, x, y, layer)),
                               dtype=np.float32)
                cell = frame[y * scale:(y + 1) * scale, x * scale:(x + 1) * scale]
                cell[:] = cell * (1.0 - alpha) + rgb * alpha

    if scale >= 4:
        line = np.array(hex_to_rgb(GRID_LINE), dtype=np.float32)
        frame[::scale, :] = line
        frame[:, ::scale] = line

    # Cube
    cube = board.cube
    quarter = scale // 4
    half = max(1, scale // 2)
    cx = cube.x * scale + quarter
    cy = cube.y * scale + quarter
    frame[cy:cy + half, cx:cx + half] = hex_to_rgb(CUBE_BORDER)
    if half > 2:
        frame[cy + 1:cy + half - 1, cx + 1:cx + half - 1] = hex_to_rgb(cube.color)

    return frame.astype(np.uint8)


def frame_to_png_base64(frame: np.ndarray) -> str:
    img = Image.fromarray(frame, "RGB")
    buf = io.BytesIO()
    img.save(buf, format="PNG", optimize=False)
    buf.seek(0)
    return base64.b64encode(buf.read()).decode("ascii")


def arc_grid(level: Level, board: BoardState) -> list:
    """ARC palette indices for the cube's layer, one cell per tile."""
    layer = board.cube.layer
    rows = []
    for y in range(level.height):
        row = []
        for x in range(level.width):
            tile = level.tile_at(x, y, layer)
            painted = board.painted_color(x, y, layer)
            if painted and tile in (PAINTABLE, COLOR_CHANGER, SWITCH):
                row.append(arc_color(painted))
            else:
                row.append(ARC_TILES[tile])
        rows.append(row)
    return rows
