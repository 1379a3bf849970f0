"""
Level data model.

A level is a stack of equally sized tile grids. Layer 0 is the top layer;
holes drop the cube to the next layer down. Every coordinate is addressed as
(x, y, layer) and anything outside the grid reads as EMPTY.
"""

from typing import Iterator, List, Optional, Sequence, Tuple

from cubepaint.constants import EMPTY, JUMP_PAD, TILE_NAMES

Coord = Tuple[int, int, int]


class LevelFormatError(ValueError):
    """Raised when level data cannot be turned into an addressable grid."""


class ColorZone:
    """Axis-aligned rectangle that assigns one colour to every tile inside it."""

    def __init__(self, x: int, y: int, width: int, height: int, color: str):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.color = color

    def contains(self, x: int, y: int) -> bool:
        return (self.x <= x < self.x + self.width
                and self.y <= y < self.y + self.height)

    @classmethod
    def from_dict(cls, data: dict) -> "ColorZone":
        try:
            return cls(int(data["x"]), int(data["y"]),
                       int(data["width"]), int(data["height"]),
                       data["color"])
        except KeyError as e:
            raise LevelFormatError(f"Color zone is missing {e}") from e

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width,
                "height": self.height, "color": self.color}

    def __repr__(self):
        return (f"ColorZone({self.x}, {self.y}, {self.width}, {self.height}, "
                f"{self.color!r})")


class Level:
    """Immutable description of one puzzle."""

    def __init__(
        self,
        width: int,
        height: int,
        layers: Sequence[Sequence[Sequence[int]]],
        start_position: Coord,
        start_color: str,
        color_zones: Optional[Sequence[ColorZone]] = None,
        name: str = "",
    ):
        if width <= 0 or height <= 0:
            raise LevelFormatError(f"Grid size must be positive, got {width}x{height}")
        if not layers:
            raise LevelFormatError("A level needs at least one layer")

        grid = []
        for li, layer in enumerate(layers):
            if len(layer) != height:
                raise LevelFormatError(
                    f"Layer {li} has {len(layer)} rows, expected {height}")
            rows = []
            for ri, row in enumerate(layer):
                if len(row) != width:
                    raise LevelFormatError(
                        f"Layer {li} row {ri} has {len(row)} tiles, expected {width}")
                for code in row:
                    if code not in TILE_NAMES:
                        raise LevelFormatError(
                            f"Unknown tile code {code!r} in layer {li} row {ri}")
                rows.append(tuple(row))
            grid.append(tuple(rows))

        self.width = width
        self.height = height
        self.layers = tuple(grid)
        self.start_position = tuple(start_position)
        self.start_color = start_color
        self.color_zones = tuple(color_zones) if color_zones is not None else None
        self.name = name

    # ------------------------------------------------------------------
    # Tile access
    # ------------------------------------------------------------------
    @property
    def layer_count(self) -> int:
        return len(self.layers)

    def in_bounds(self, x: int, y: int, layer: int = 0) -> bool:
        return (0 <= x < self.width and 0 <= y < self.height
                and 0 <= layer < len(self.layers))

    def tile_at(self, x: int, y: int, layer: int = 0) -> int:
        if not self.in_bounds(x, y, layer):
            return EMPTY
        return self.layers[layer][y][x]

    def iter_tiles(self) -> Iterator[Tuple[int, int, int, int]]:
        """Yield (x, y, layer, code) in layer, row, column order."""
        for layer, rows in enumerate(self.layers):
            for y, row in enumerate(rows):
                for x, code in enumerate(row):
                    yield x, y, layer, code

    def count_tiles(self, codes) -> int:
        return sum(1 for _, _, _, code in self.iter_tiles() if code in codes)

    def jump_pads(self) -> List[Coord]:
        return [(x, y, layer) for x, y, layer, code in self.iter_tiles()
                if code == JUMP_PAD]

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    @classmethod
    def from_dict(cls, data: dict) -> "Level":
        """Build a level from the authoring format.

        Both the camelCase keys of the level tables (``startPos``,
        ``startColor``, ``colorZones``) and snake_case keys are accepted.
        """
        try:
            width = int(data["width"])
            height = int(data["height"])
            layers = data["layers"]
            start = data.get("startPos", data.get("start_position"))
            start_color = data.get("startColor", data.get("start_color"))
        except KeyError as e:
            raise LevelFormatError(f"Level is missing {e}") from e

        if start is None:
            raise LevelFormatError("Level is missing a start position")
        if start_color is None:
            raise LevelFormatError("Level is missing a start colour")

        try:
            if isinstance(start, dict):
                start = (int(start["x"]), int(start["y"]), int(start.get("layer", 0)))
            else:
                start = tuple(int(v) for v in start)
                if len(start) == 2:
                    start = start + (0,)
                elif len(start) != 3:
                    raise ValueError(f"expected 2 or 3 coordinates, got {len(start)}")
        except KeyError as e:
            raise LevelFormatError(f"Start position is missing {e}") from e
        except (TypeError, ValueError) as e:
            raise LevelFormatError(f"Bad start position {start!r}: {e}") from e

        zones = data.get("colorZones", data.get("color_zones"))
        if zones is not None:
            zones = [z if isinstance(z, ColorZone) else ColorZone.from_dict(z)
                     for z in zones]

        return cls(
            width=width,
            height=height,
            layers=layers,
            start_position=start,
            start_color=start_color,
            color_zones=zones,
            name=data.get("name", ""),
        )

    def to_dict(self) -> dict:
        x, y, layer = self.start_position
        data = {
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "layers": [[list(row) for row in layer_rows] for layer_rows in self.layers],
            "startPos": {"x": x, "y": y, "layer": layer},
            "startColor": self.start_color,
        }
        if self.color_zones is not None:
            data["colorZones"] = [z.to_dict() for z in self.color_zones]
        return data

    def __repr__(self):
        return (f"Level(name={self.name!r}, {self.width}x{self.height}, "
                f"layers={self.layer_count})")
