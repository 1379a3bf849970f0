import base64
import io

import numpy as np
from PIL import Image

from cubepaint.board import BoardState
from cubepaint.constants import PALETTE
from cubepaint.render import (
    ARC_TILES,
    arc_color,
    arc_grid,
    frame_to_png_base64,
    hex_to_rgb,
    render_board,
    tile_color,
)


def test_hex_to_rgb():
    assert hex_to_rgb("#ff6b6b") == (255, 107, 107)
    assert hex_to_rgb("00b894") == (0, 184, 148)


def test_every_palette_color_has_a_distinct_arc_index():
    indices = [arc_color(c) for c in PALETTE]
    assert len(set(indices)) == len(PALETTE)
    assert arc_color("#123456") == 2
    assert arc_color(None) == 2


def test_tile_color_prefers_paint(corridor):
    board = BoardState(corridor)
    assert tile_color(corridor, board, 0, 0, 0) == "#ff6b6b"
    assert tile_color(corridor, board, 1, 0, 0) == "#ffffff"


def test_render_board_shape_and_cube(corridor):
    board = BoardState(corridor)
    frame = render_board(corridor, board, scale=8)

    assert frame.shape == (8, 32, 3)
    assert frame.dtype == np.uint8
    # Cube border on the start tile, plain floor on the next one
    assert tuple(frame[2, 2]) == hex_to_rgb("#333333")
    assert tuple(frame[4, 12]) == (255, 255, 255)


def test_render_board_blends_other_layers(make_level):
    level = make_level([[[1, 6]], [[0, 2]]])
    board = BoardState(level)
    frame = render_board(level, board, scale=8)
    # Hole on the active layer, with the pillar below drawn over it at 30%
    assert tuple(frame[4, 12]) == (66, 66, 66)

    board.cube.move_to(0, 0, 1)
    frame = render_board(level, board, scale=8)
    # Empty cells of the active layer hide the layer above
    assert tuple(frame[6, 6]) == hex_to_rgb("#f5f5f5")


def test_frame_to_png_base64(corridor):
    frame = render_board(corridor, BoardState(corridor), scale=4)
    data = base64.b64decode(frame_to_png_base64(frame))
    assert data[:8] == b"\x89PNG\r\n\x1a\n"
    img = Image.open(io.BytesIO(data))
    assert img.size == (16, 4)


def test_arc_grid_shows_cube_layer(make_level):
    level = make_level([[[1, 6]], [[0, 1]]])
    board = BoardState(level)
    assert arc_grid(level, board) == [[arc_color("#ff6b6b"), ARC_TILES[6]]]

    board.cube.move_to(1, 0, 1)
    assert arc_grid(level, board) == [[ARC_TILES[0], ARC_TILES[1]]]
