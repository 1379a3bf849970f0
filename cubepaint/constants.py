"""Tile codes, colours and directions shared by every cubepaint module."""

from enum import Enum

# ---------------------------------------------------------------------------
# Tile codes
# ---------------------------------------------------------------------------
EMPTY         = 0   # nothing to stand on
PAINTABLE     = 1   # floor tile, needs the matching cube colour
PILLAR        = 2   # blocking
COLOR_CHANGER = 3   # recolours the cube the first time it is entered
SWITCH        = 4   # recolours the cube every time
JUMP_PAD      = 5   # teleports to another jump pad
HOLE          = 6   # drops through to the layer below

TILE_NAMES = {
    EMPTY: "empty",
    PAINTABLE: "paintable",
    PILLAR: "pillar",
    COLOR_CHANGER: "color_changer",
    SWITCH: "switch",
    JUMP_PAD: "jump_pad",
    HOLE: "hole",
}

# Tiles counted towards level coverage
PAINTABLE_TILES = frozenset((PAINTABLE, COLOR_CHANGER, SWITCH))

# Tiles whose presence switches colour resolution to the positional palette
RECOLOR_TILES = frozenset((COLOR_CHANGER, SWITCH))

# ---------------------------------------------------------------------------
# Colours
# ---------------------------------------------------------------------------
PALETTE = [
    "#ff6b6b",  # red
    "#4ecdc4",  # teal
    "#45b7d1",  # blue
    "#f9ca24",  # yellow
    "#6c5ce7",  # purple
    "#fd79a8",  # pink
    "#00b894",  # green
    "#e17055",  # orange
    "#a29bfe",  # lavender
]

# ---------------------------------------------------------------------------
# Directions (dx, dy); y grows downwards
# ---------------------------------------------------------------------------
DIRECTIONS = [(0, -1), (0, 1), (-1, 0), (1, 0)]

DIRECTION_NAMES = {
    "up":    (0, -1),
    "down":  (0, 1),
    "left":  (-1, 0),
    "right": (1, 0),
}


class GameStatus(Enum):
    PLAYING = "PLAYING"
    WON = "WON"
    LOST = "LOST"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.PLAYING
