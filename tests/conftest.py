import random

import pytest

from cubepaint.board import BoardState
from cubepaint.level import ColorZone, Level
from cubepaint.rules import RulesEngine

RED = "#ff6b6b"
TEAL = "#4ecdc4"


def build_level(layers, start=(0, 0, 0), color=RED, zones=None, name="test"):
    """Level from a single grid (list of rows) or a list of layer grids."""
    if layers and isinstance(layers[0][0], int):
        layers = [layers]
    height = len(layers[0])
    width = len(layers[0][0])
    if zones is not None:
        zones = [z if isinstance(z, ColorZone) else ColorZone(*z) for z in zones]
    return Level(width, height, layers, start, color, color_zones=zones, name=name)


def build_engine(level, seed=0):
    board = BoardState(level)
    return RulesEngine(level, board, rng=random.Random(seed))


@pytest.fixture
def make_level():
    return build_level


@pytest.fixture
def make_engine():
    return build_engine


@pytest.fixture
def corridor():
    """4x1 corridor of plain floor, cube at the left end."""
    return build_level([[1, 1, 1, 1]])
