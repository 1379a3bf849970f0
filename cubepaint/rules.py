"""
Rules engine.

Owns the legality check for entering a tile, the per-tile effects, and the
win/loss evaluation. Every state change of a board goes through
``attempt_step``; illegal moves are rejected without touching the board.
"""

import logging
import math
import random
from collections import namedtuple
from typing import Optional, Tuple

from cubepaint.board import BoardState, coverage
from cubepaint.colors import resolve_target_color
from cubepaint.constants import (
    COLOR_CHANGER,
    DIRECTIONS,
    EMPTY,
    HOLE,
    JUMP_PAD,
    PAINTABLE,
    PALETTE,
    PILLAR,
    SWITCH,
    TILE_NAMES,
    GameStatus,
)
from cubepaint.level import Level

logger = logging.getLogger(__name__)

StepOutcome = namedtuple("StepOutcome", ["accepted", "status"])


class RulesEngine:
    """Applies the puzzle rules to one board.

    ``rng`` drives the two random choices of the game (jump pad target and
    the colour-changer fallback colour); pass a seeded ``random.Random`` to
    make them reproducible.
    """

    def __init__(self, level: Level, board: BoardState,
                 rng: Optional[random.Random] = None) -> None:
        self.level = level
        self.board = board
        self._rng = rng if rng is not None else random.Random()

    @property
    def status(self) -> GameStatus:
        return self.board.status

    # ------------------------------------------------------------------
    # Legality
    # ------------------------------------------------------------------
    def can_enter(self, x: int, y: int, layer: Optional[int] = None) -> bool:
        if layer is None:
            layer = self.board.cube.layer

        tile = self.level.tile_at(x, y, layer)
        if tile == EMPTY or tile == PILLAR:
            return False

        # One visit per tile, whatever its type
        if self.board.is_painted(x, y, layer):
            return False

        # Only plain floor tiles demand a matching colour
        if tile == PAINTABLE:
            return self.board.cube.color == resolve_target_color(self.level, x, y, layer)

        return True

    def has_valid_move(self) -> bool:
        cube = self.board.cube
        return any(self.can_enter(cube.x + dx, cube.y + dy) for dx, dy in DIRECTIONS)

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------
    def attempt_step(self, dx: int, dy: int) -> StepOutcome:
        board = self.board
        if board.status.is_terminal:
            return StepOutcome(False, board.status)
        if (dx, dy) not in DIRECTIONS:
            logger.debug(f"Ignoring non-cardinal step ({dx}, {dy})")
            return StepOutcome(False, board.status)

        cube = board.cube
        nx, ny = cube.x + dx, cube.y + dy
        if not self.can_enter(nx, ny):
            logger.debug(f"Rejected step to ({nx}, {ny}, {cube.layer})")
            return StepOutcome(False, board.status)

        cube.move_to(nx, ny)
        board.moves += 1
        logger.debug(f"Cube moved to ({nx}, {ny}, {cube.layer})")

        self.apply_tile_effect(nx, ny, cube.layer)
        return StepOutcome(True, self.evaluate_status())

    def attempt_move_to(self, x: int, y: int) -> StepOutcome:
        """Step onto an explicit neighbouring tile.

        Same transition as ``attempt_step``; a destination that is not one
        cardinal step away from the cube is rejected.
        """
        cube = self.board.cube
        return self.attempt_step(x - cube.x, y - cube.y)

    # ------------------------------------------------------------------
    # Tile effects
    # ------------------------------------------------------------------
    def apply_tile_effect(self, x: int, y: int, layer: int) -> None:
        tile = self.level.tile_at(x, y, layer)
        board = self.board

        if tile == PAINTABLE:
            board.mark_painted(x, y, layer, resolve_target_color(self.level, x, y, layer))

        elif tile == COLOR_CHANGER:
            target = resolve_target_color(self.level, x, y, layer)
            if not board.is_painted(x, y, layer):
                board.cube.color = target if target else self._rng.choice(PALETTE)
                logger.debug(f"Color changer at ({x}, {y}, {layer}) -> {board.cube.color}")
            board.mark_painted(x, y, layer, target)

        elif tile == SWITCH:
            target = resolve_target_color(self.level, x, y, layer)
            if target:
                board.cube.color = target
            board.mark_painted(x, y, layer, target)
            logger.debug(f"Switch at ({x}, {y}, {layer}) -> {board.cube.color}")

        elif tile == JUMP_PAD:
            self._jump(x, y, layer)

        elif tile == HOLE:
            self._drop(x, y, layer)

    def _jump(self, x: int, y: int, layer: int) -> None:
        targets = [pad for pad in self.level.jump_pads() if pad != (x, y, layer)]
        if not targets:
            return
        tx, ty, tlayer = self._rng.choice(targets)
        self.board.cube.move_to(tx, ty, tlayer)
        logger.debug(f"Jumped from ({x}, {y}, {layer}) to ({tx}, {ty}, {tlayer})")

    def _drop(self, x: int, y: int, layer: int) -> None:
        if layer + 1 >= self.level.layer_count:
            return
        cube = self.board.cube
        cube.layer = layer + 1
        if not self.can_enter(x, y, cube.layer):
            cube.layer = layer
            logger.debug(f"Hole at ({x}, {y}, {layer}) has nothing to land on")
        else:
            logger.debug(f"Dropped through ({x}, {y}) to layer {cube.layer}")

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------
    def coverage(self) -> Tuple[int, int]:
        return coverage(self.level, self.board.painted)

    def percentage(self) -> int:
        painted, total = self.coverage()
        if total == 0:
            return 100
        # Halves round up
        return int(math.floor(painted / total * 100 + 0.5))

    def evaluate_status(self) -> GameStatus:
        board = self.board
        if board.status.is_terminal:
            return board.status

        painted, total = self.coverage()
        if painted == total:
            board.status = GameStatus.WON
        elif not self.has_valid_move():
            board.status = GameStatus.LOST

        if board.status.is_terminal:
            cube = board.cube
            logger.info(
                f"Level {self.level.name or '?'} {board.status.value.lower()} "
                f"after {board.moves} moves: painted {painted}/{total} "
                f"({self.percentage()}%), cube on "
                f"{TILE_NAMES[self.level.tile_at(*cube.position)]} at {cube.position}"
            )
        return board.status
