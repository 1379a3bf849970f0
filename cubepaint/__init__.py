"""cubepaint - rules engine for a cube-rolling grid painting puzzle."""

from cubepaint.board import BoardState, Cube
from cubepaint.colors import resolve_target_color
from cubepaint.constants import PALETTE, GameStatus
from cubepaint.level import ColorZone, Level, LevelFormatError
from cubepaint.levels import builtin_levels, get_level
from cubepaint.path import build_path, replay
from cubepaint.rules import RulesEngine, StepOutcome
from cubepaint.session import PlaySession, SessionRegistry

__version__ = "1.0.0"

__all__ = [
    "BoardState",
    "ColorZone",
    "Cube",
    "GameStatus",
    "Level",
    "LevelFormatError",
    "PALETTE",
    "PlaySession",
    "RulesEngine",
    "SessionRegistry",
    "StepOutcome",
    "build_path",
    "builtin_levels",
    "get_level",
    "replay",
    "resolve_target_color",
]
