"""Built-in level tables.

Tile codes: 0 empty, 1 paintable, 2 pillar, 3 colour changer, 4 switch,
5 jump pad, 6 hole.
"""

from typing import List

from cubepaint.level import Level

# ---------------------------------------------------------------------------
# Level tables
# ---------------------------------------------------------------------------

LEVEL_DEFS = [
    # ── Level 1 (4×1): linear movement ──────────────────────────────────
    {
        "name": "First Steps",
        "width": 4,
        "height": 1,
        "layers": [
            [
                [1, 1, 1, 1],
            ],
        ],
        "startPos": {"x": 0, "y": 0, "layer": 0},
        "startColor": "#ff6b6b",
    },

    # ── Level 2 (6×2): more directions ──────────────────────────────────
    {
        "name": "Turning Corners",
        "width": 6,
        "height": 2,
        "layers": [
            [
                [0, 0, 1, 1, 0, 0],
                [1, 1, 1, 1, 1, 1],
            ],
        ],
        "startPos": {"x": 0, "y": 1, "layer": 0},
        "startColor": "#4ecdc4",
    },

    # ── Level 3 (5×5): pillars ──────────────────────────────────────────
    {
        "name": "Pillars",
        "width": 5,
        "height": 5,
        "layers": [
            [
                [1, 1, 1, 1, 1],
                [1, 1, 2, 1, 1],
                [1, 1, 2, 1, 1],
                [1, 1, 1, 1, 1],
                [1, 1, 1, 1, 1],
            ],
        ],
        "startPos": {"x": 0, "y": 0, "layer": 0},
        "startColor": "#ff6b6b",
    },

    # ── Level 4 (6×4): colour changer with authored zones ───────────────
    # Left half teal (start colour), right half red (changer colour).
    {
        "name": "Color Changer",
        "width": 6,
        "height": 4,
        "layers": [
            [
                [1, 1, 1, 1, 1, 1],
                [1, 1, 1, 3, 1, 1],
                [1, 1, 1, 1, 1, 1],
                [1, 1, 1, 1, 1, 1],
            ],
        ],
        "startPos": {"x": 0, "y": 0, "layer": 0},
        "startColor": "#4ecdc4",
        "colorZones": [
            {"x": 0, "y": 0, "width": 3, "height": 4, "color": "#4ecdc4"},
            {"x": 3, "y": 0, "width": 3, "height": 4, "color": "#ff6b6b"},
        ],
    },

    # ── Level 5 (5×5): switches ─────────────────────────────────────────
    {
        "name": "Switches",
        "width": 5,
        "height": 5,
        "layers": [
            [
                [1, 1, 1, 1, 1],
                [1, 4, 1, 4, 1],
                [1, 1, 1, 1, 1],
                [1, 4, 1, 4, 1],
                [1, 1, 1, 1, 1],
            ],
        ],
        "startPos": {"x": 2, "y": 2, "layer": 0},
        "startColor": "#45b7d1",
    },

    # ── Level 6 (7×5): jump pads ────────────────────────────────────────
    {
        "name": "Jump Pads",
        "width": 7,
        "height": 5,
        "layers": [
            [
                [1, 1, 0, 0, 0, 1, 1],
                [1, 5, 0, 1, 0, 5, 1],
                [0, 0, 0, 1, 0, 0, 0],
                [1, 5, 0, 1, 0, 5, 1],
                [1, 1, 0, 0, 0, 1, 1],
            ],
        ],
        "startPos": {"x": 0, "y": 0, "layer": 0},
        "startColor": "#f9ca24",
    },

    # ── Level 7 (4×4, 2 layers): holes ──────────────────────────────────
    {
        "name": "Falling Through",
        "width": 4,
        "height": 4,
        "layers": [
            [
                [1, 1, 6, 1],
                [1, 2, 1, 1],
                [6, 1, 2, 1],
                [1, 1, 1, 6],
            ],
            [
                [0, 0, 1, 0],
                [0, 0, 0, 0],
                [1, 0, 0, 0],
                [0, 0, 0, 1],
            ],
        ],
        "startPos": {"x": 0, "y": 0, "layer": 0},
        "startColor": "#6c5ce7",
    },

    # ── Level 8 (8×6): maze ─────────────────────────────────────────────
    {
        "name": "Maze",
        "width": 8,
        "height": 6,
        "layers": [
            [
                [1, 2, 1, 1, 1, 2, 1, 1],
                [1, 1, 2, 1, 2, 1, 1, 1],
                [2, 1, 1, 3, 1, 1, 2, 1],
                [1, 1, 2, 1, 2, 1, 1, 1],
                [1, 2, 1, 1, 1, 2, 1, 1],
                [1, 1, 1, 4, 1, 1, 1, 1],
            ],
        ],
        "startPos": {"x": 0, "y": 0, "layer": 0},
        "startColor": "#fd79a8",
    },

    # ── Level 9 (6×6): jump puzzle ──────────────────────────────────────
    {
        "name": "Jump Puzzle",
        "width": 6,
        "height": 6,
        "layers": [
            [
                [1, 0, 1, 0, 1, 0],
                [0, 5, 0, 5, 0, 5],
                [1, 0, 1, 0, 1, 0],
                [0, 5, 0, 5, 0, 5],
                [1, 0, 1, 0, 1, 0],
                [0, 5, 0, 5, 0, 1],
            ],
        ],
        "startPos": {"x": 0, "y": 0, "layer": 0},
        "startColor": "#00b894",
    },

    # ── Level 10 (5×5, 2 layers): multi-layer ───────────────────────────
    {
        "name": "Two Floors",
        "width": 5,
        "height": 5,
        "layers": [
            [
                [1, 1, 6, 1, 1],
                [1, 3, 1, 4, 1],
                [6, 1, 2, 1, 6],
                [1, 4, 1, 3, 1],
                [1, 1, 6, 1, 1],
            ],
            [
                [0, 0, 1, 0, 0],
                [0, 0, 0, 0, 0],
                [1, 0, 0, 0, 1],
                [0, 0, 0, 0, 0],
                [0, 0, 1, 0, 0],
            ],
        ],
        "startPos": {"x": 2, "y": 2, "layer": 0},
        "startColor": "#e17055",
    },

    # ── Level 11 (7×7): switch challenge ────────────────────────────────
    {
        "name": "Switch Challenge",
        "width": 7,
        "height": 7,
        "layers": [
            [
                [1, 1, 1, 4, 1, 1, 1],
                [1, 2, 1, 1, 1, 2, 1],
                [1, 1, 2, 3, 2, 1, 1],
                [4, 1, 3, 1, 3, 1, 4],
                [1, 1, 2, 3, 2, 1, 1],
                [1, 2, 1, 1, 1, 2, 1],
                [1, 1, 1, 4, 1, 1, 1],
            ],
        ],
        "startPos": {"x": 3, "y": 3, "layer": 0},
        "startColor": "#a29bfe",
    },

    # ── Level 12 (8×8, 2 layers): final challenge ───────────────────────
    {
        "name": "Final Challenge",
        "width": 8,
        "height": 8,
        "layers": [
            [
                [1, 2, 1, 6, 1, 2, 1, 1],
                [1, 1, 2, 1, 2, 1, 1, 1],
                [2, 1, 3, 1, 3, 1, 2, 1],
                [6, 1, 1, 4, 1, 1, 1, 6],
                [1, 2, 1, 1, 1, 2, 1, 1],
                [1, 1, 2, 5, 2, 1, 1, 1],
                [2, 1, 1, 1, 1, 1, 2, 1],
                [1, 1, 1, 6, 1, 1, 1, 1],
            ],
            [
                [0, 0, 0, 1, 0, 0, 0, 0],
                [0, 0, 0, 0, 0, 0, 0, 0],
                [0, 0, 0, 0, 0, 0, 0, 0],
                [1, 0, 0, 0, 0, 0, 0, 1],
                [0, 0, 0, 0, 0, 0, 0, 0],
                [0, 0, 0, 0, 0, 0, 0, 0],
                [0, 0, 0, 0, 0, 0, 0, 0],
                [0, 0, 0, 1, 0, 0, 0, 0],
            ],
        ],
        "startPos": {"x": 0, "y": 0, "layer": 0},
        "startColor": "#fd79a8",
    },
]


def builtin_levels() -> List[Level]:
    return [Level.from_dict(d) for d in LEVEL_DEFS]


def get_level(index: int) -> Level:
    if not 0 <= index < len(LEVEL_DEFS):
        raise IndexError(f"Unknown level {index}. Available: 0-{len(LEVEL_DEFS) - 1}")
    return Level.from_dict(LEVEL_DEFS[index])
