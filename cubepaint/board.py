"""Mutable per-playthrough state: the cube and the painted tiles."""

from typing import Dict, Optional, Tuple

from cubepaint.constants import PAINTABLE_TILES, GameStatus
from cubepaint.level import Coord, Level


class Cube:
    def __init__(self, x: int, y: int, layer: int, color: str):
        self.x = x
        self.y = y
        self.layer = layer
        self.color = color

    @property
    def position(self) -> Coord:
        return self.x, self.y, self.layer

    def move_to(self, x: int, y: int, layer: Optional[int] = None) -> None:
        self.x = x
        self.y = y
        if layer is not None:
            self.layer = layer

    def __repr__(self):
        return f"Cube(x={self.x}, y={self.y}, layer={self.layer}, color={self.color!r})"


class BoardState:
    """
    One board per level playthrough.

    ``painted`` maps (x, y, layer) to the colour the tile was painted with.
    Membership means "already visited": a painted coordinate can never be
    entered again.
    """

    def __init__(self, level: Level):
        x, y, layer = level.start_position
        self.level = level
        self.cube = Cube(x, y, layer, level.start_color)
        self.painted: Dict[Coord, str] = {}
        self.status = GameStatus.PLAYING
        self.moves = 0

        # The start tile counts as visited from the first frame
        self.painted[self.cube.position] = self.cube.color

    def is_painted(self, x: int, y: int, layer: int) -> bool:
        return (x, y, layer) in self.painted

    def mark_painted(self, x: int, y: int, layer: int, color: str) -> None:
        self.painted[(x, y, layer)] = color

    def painted_color(self, x: int, y: int, layer: int) -> Optional[str]:
        return self.painted.get((x, y, layer))

    def snapshot(self) -> Dict[Coord, str]:
        return dict(self.painted)

    def to_dict(self) -> dict:
        return {
            "cube": {
                "x": self.cube.x,
                "y": self.cube.y,
                "layer": self.cube.layer,
                "color": self.cube.color,
            },
            "painted": [
                {"x": x, "y": y, "layer": layer, "color": color}
                for (x, y, layer), color in self.painted.items()
            ],
            "status": self.status.value,
            "moves": self.moves,
        }

    def __repr__(self):
        return (f"BoardState({self.cube!r}, painted={len(self.painted)}, "
                f"status={self.status.value})")


def coverage(level: Level, painted: Dict[Coord, str]) -> Tuple[int, int]:
    """Return (painted, total) over every paintable/changer/switch tile."""
    total = 0
    done = 0
    for x, y, layer, code in level.iter_tiles():
        if code in PAINTABLE_TILES:
            total += 1
            if (x, y, layer) in painted:
                done += 1
    return done, total
