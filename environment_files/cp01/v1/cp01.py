"""cp01 - Cube Paint, an ARC-AGI-3 puzzle game.

Roll the cube over every floor tile exactly once. Plain floor only accepts
the cube when it carries the tile's colour; colour changers and switches
recolour the cube, jump pads teleport it to another pad, and holes drop it
to the layer below. Step onto a tile you already painted and you can't;
run out of moves before everything is painted and the level is lost.

Controls:
    ACTION1-4  = up / down / left / right
    ACTION6    = tap a tile; the cube steps towards it
"""

import random

from arcengine import ARCBaseGame, Camera, GameAction, Level, Sprite
from arcengine.enums import BlockingMode
from arcengine.interfaces import RenderableUserDisplay

from cubepaint.constants import GameStatus
from cubepaint.levels import builtin_levels
from cubepaint.path import tap_direction
from cubepaint.render import arc_color, arc_grid
from cubepaint.session import PlaySession

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

BACKGROUND = 5      # palette: black (outside the grid)
LETTER_BOX = 5
CUBE_BORDER = 4     # palette: charcoal
BAR_DONE = 14       # palette: green
BAR_TODO = 3        # palette: dark gray

ACTION_DIRS = {
    GameAction.ACTION1: (0, -1),
    GameAction.ACTION2: (0, 1),
    GameAction.ACTION3: (-1, 0),
    GameAction.ACTION4: (1, 0),
}

LEVELS = builtin_levels()


# ---------------------------------------------------------------------------
# Display overlay
# ---------------------------------------------------------------------------


class CubeOverlay(RenderableUserDisplay):
    """Draws the cube and the coverage bar on top of the board sprite."""

    def __init__(self):
        self.grid_w = LEVELS[0].width
        self.grid_h = LEVELS[0].height
        self.cube_x = 0
        self.cube_y = 0
        self.cube_color = 0
        self.painted = 0
        self.total = 0

    def _scale_info(self):
        s = min(64 // self.grid_w, 64 // self.grid_h)
        ox = (64 - self.grid_w * s) // 2
        oy = (64 - self.grid_h * s) // 2
        return s, ox, oy

    def _set_px(self, frame, x, y, color):
        if 0 <= x < 64 and 0 <= y < 64:
            frame[y, x] = color

    def render_interface(self, frame):
        s, ox, oy = self._scale_info()
        self._draw_cube(frame, s, ox, oy)
        self._draw_coverage_bar(frame)
        return frame

    def _draw_cube(self, frame, s, ox, oy):
        size = max(1, s // 2)
        sx = ox + self.cube_x * s + s // 4
        sy = oy + self.cube_y * s + s // 4
        for dy in range(size):
            for dx in range(size):
                edge = dx in (0, size - 1) or dy in (0, size - 1)
                clr = CUBE_BORDER if edge and size > 2 else self.cube_color
                self._set_px(frame, sx + dx, sy + dy, clr)

    def _draw_coverage_bar(self, frame):
        if self.total <= 0:
            return
        filled = int(round(self.painted / self.total * 64))
        for col in range(64):
            self._set_px(frame, col, 63, BAR_DONE if col < filled else BAR_TODO)


# ---------------------------------------------------------------------------
# Main game class
# ---------------------------------------------------------------------------


class Cp01(ARCBaseGame):
    """cp01 puzzle game - Cube Paint."""

    def __init__(self, seed: int = 0):
        self.rng = random.Random(seed)
        self.overlay = CubeOverlay()
        self.session = PlaySession(levels=LEVELS, rng=self.rng)
        self.board_sprite = None

        levels = [
            Level(sprites=[], grid_size=(lvl.width, lvl.height), name=f"Level {i + 1}")
            for i, lvl in enumerate(LEVELS)
        ]

        camera = Camera(
            background=BACKGROUND,
            letter_box=LETTER_BOX,
            width=LEVELS[0].width,
            height=LEVELS[0].height,
            interfaces=[self.overlay],
        )

        super().__init__(
            game_id="cp01",
            levels=levels,
            camera=camera,
            available_actions=[1, 2, 3, 4, 6],
            seed=seed,
        )

    # ------------------------------------------------------------------
    # Level lifecycle
    # ------------------------------------------------------------------

    def on_set_level(self, level):
        self.session.load_level(self.level_index)
        self.board_sprite = self._make_board_sprite()
        level.add_sprite(self.board_sprite)
        self._sync_overlay()

    # ------------------------------------------------------------------
    # Core game loop
    # ------------------------------------------------------------------

    def step(self):
        aid = self.action.id

        if aid in ACTION_DIRS:
            self.session.attempt_step(*ACTION_DIRS[aid])
        elif aid == GameAction.ACTION6:
            self._handle_tap()

        self._refresh_board()
        self._sync_overlay()

        if self.session.status is GameStatus.WON:
            self.next_level()
        elif self.session.status is GameStatus.LOST:
            self.lose()

        self.complete_action()

    def _handle_tap(self):
        display_x = self.action.data.get("x", None)
        display_y = self.action.data.get("y", None)
        if display_x is None or display_y is None:
            return
        grid_coords = self.camera.display_to_grid(display_x, display_y)
        if grid_coords is None:
            return
        gx, gy = grid_coords
        if (gx, gy) == self.session.cube_position[:2]:
            return
        # Tile units: origin 0, one unit per tile, aim at the tile centre
        dx, dy = tap_direction((gx + 0.5, gy + 0.5), self.session.board, (0, 0), 1)
        self.session.attempt_step(dx, dy)

    # ------------------------------------------------------------------
    # Board rendering
    # ------------------------------------------------------------------

    def _make_board_sprite(self):
        return Sprite(
            pixels=arc_grid(self.session.level, self.session.board),
            name="board", x=0, y=0, layer=0,
            blocking=BlockingMode.NOT_BLOCKED, collidable=False,
        )

    def _refresh_board(self):
        if self.board_sprite is None:
            return
        grid = arc_grid(self.session.level, self.session.board)
        for y, row in enumerate(grid):
            for x, value in enumerate(row):
                self.board_sprite.pixels[y, x] = value

    def _sync_overlay(self):
        level = self.session.level
        cx, cy, _ = self.session.cube_position
        painted, total = self.session.coverage
        self.overlay.grid_w = level.width
        self.overlay.grid_h = level.height
        self.overlay.cube_x = cx
        self.overlay.cube_y = cy
        self.overlay.cube_color = arc_color(self.session.cube_color)
        self.overlay.painted = painted
        self.overlay.total = total
