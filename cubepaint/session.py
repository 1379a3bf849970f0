"""
Play sessions.

A ``PlaySession`` is the only thing presentation code talks to. It owns the
level list, the active ``BoardState`` and the ``RulesEngine`` bound to it,
and exposes the load / step / path entry points plus read accessors.
``SessionRegistry`` keeps many sessions side by side for the web runner.
"""

import logging
import random
import time
import uuid
from typing import Dict, List, Optional, Sequence, Tuple, Union

from cubepaint import config
from cubepaint.board import BoardState
from cubepaint.constants import DIRECTION_NAMES, GameStatus
from cubepaint.level import Coord, Level
from cubepaint.levels import builtin_levels
from cubepaint.path import (
    Point,
    build_path,
    iter_replay,
    replay,
    swipe_direction,
    tap_direction,
)
from cubepaint.rules import RulesEngine

logger = logging.getLogger(__name__)


class PlaySession:
    def __init__(self, levels: Optional[Sequence[Level]] = None,
                 rng: Optional[random.Random] = None, seed: int = 0) -> None:
        self.levels: List[Level] = list(levels) if levels is not None else builtin_levels()
        if not self.levels:
            raise ValueError("A play session needs at least one level")
        self._rng = rng if rng is not None else random.Random(seed)
        self.level_index = 0
        self.level: Level = self.levels[0]
        self.board: BoardState = None
        self.engine: RulesEngine = None
        self.completed = False
        self.load_level(0)

    # ------------------------------------------------------------------
    # Level lifecycle
    # ------------------------------------------------------------------
    def load_level(self, level: Union[Level, int, None] = None) -> BoardState:
        """Start a fresh board.

        ``level`` is a ``Level``, an index into ``self.levels``, or None to
        replay the current level. A ``Level`` that is not in ``self.levels``
        plays standalone: it has no level number and no next level.
        """
        if level is None:
            level = self.level
        if isinstance(level, Level):
            self.level = level
            self.level_index = next(
                (i for i, known in enumerate(self.levels) if known is level), None)
        else:
            if not 0 <= level < len(self.levels):
                raise IndexError(f"Unknown level {level}. Available: 0-{len(self.levels) - 1}")
            self.level_index = level
            self.level = self.levels[level]

        self.board = BoardState(self.level)
        self.engine = RulesEngine(self.level, self.board, rng=self._rng)
        self.completed = False

        logger.info(f"Loaded level {self.level_number or '-'} ({self.level.name}) "
                    f"start={self.level.start_position} color={self.level.start_color}")
        return self.board

    def replay(self) -> BoardState:
        return self.load_level(None)

    def next_level(self) -> bool:
        """Advance after a win. Returns False when there is nothing to advance to."""
        if self.board.status is not GameStatus.WON or self.is_standalone:
            return False
        if self.is_last_level:
            self.completed = True
            logger.info("All levels completed")
            return False
        self.load_level(self.level_index + 1)
        return True

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------
    def attempt_step(self, dx: int, dy: int) -> dict:
        outcome = self.engine.attempt_step(dx, dy)
        return {"accepted": outcome.accepted, "status": outcome.status}

    def attempt_direction(self, name: str) -> dict:
        delta = DIRECTION_NAMES.get(name)
        if delta is None:
            return {"accepted": False, "status": self.status}
        return self.attempt_step(*delta)

    def build_path(self, points: Sequence[Point], origin_offset: Point,
                   tile_size: float) -> List[Tuple[int, int]]:
        return build_path(points, origin_offset, tile_size, self.board)

    def attempt_path(self, points: Sequence[Point], origin_offset: Point = None,
                     tile_size: float = None) -> dict:
        if origin_offset is None:
            origin_offset = (config.GRID_ORIGIN, config.GRID_ORIGIN)
        if tile_size is None:
            tile_size = config.TILE_SIZE
        if self.status.is_terminal:
            return {"accepted_tiles": [], "status": self.status}

        chain = self.build_path(points, origin_offset, tile_size)
        if len(chain) < 2:
            return {"accepted_tiles": [], "status": self.status}

        outcome = replay(chain, self.engine)
        logger.debug(f"Path of {len(chain) - 1} tiles, {len(outcome.accepted_tiles)} accepted")
        return {"accepted_tiles": outcome.accepted_tiles, "status": outcome.status}

    def iter_path(self, points: Sequence[Point], origin_offset: Point = None,
                  tile_size: float = None):
        """Step-by-step variant of ``attempt_path`` for paced presentation."""
        if origin_offset is None:
            origin_offset = (config.GRID_ORIGIN, config.GRID_ORIGIN)
        if tile_size is None:
            tile_size = config.TILE_SIZE
        chain = self.build_path(points, origin_offset, tile_size)
        if self.status.is_terminal or len(chain) < 2:
            return
        yield from iter_replay(chain, self.engine)
        self.engine.evaluate_status()

    def attempt_swipe(self, start: Point, end: Point,
                      min_distance: float = None) -> dict:
        if min_distance is None:
            min_distance = config.MIN_SWIPE_DISTANCE
        delta = swipe_direction(start, end, min_distance)
        if delta is None:
            return {"accepted": False, "status": self.status}
        return self.attempt_step(*delta)

    def attempt_tap(self, point: Point, origin_offset: Point = None,
                    tile_size: float = None) -> dict:
        if origin_offset is None:
            origin_offset = (config.GRID_ORIGIN, config.GRID_ORIGIN)
        if tile_size is None:
            tile_size = config.TILE_SIZE
        return self.attempt_step(*tap_direction(point, self.board, origin_offset, tile_size))

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------
    @property
    def status(self) -> GameStatus:
        return self.board.status

    @property
    def cube_position(self) -> Coord:
        return self.board.cube.position

    @property
    def cube_color(self) -> str:
        return self.board.cube.color

    @property
    def cube_layer(self) -> int:
        return self.board.cube.layer

    @property
    def painted_tiles(self) -> Dict[Coord, str]:
        return self.board.snapshot()

    @property
    def coverage(self) -> Tuple[int, int]:
        return self.engine.coverage()

    @property
    def percentage(self) -> int:
        return self.engine.percentage()

    @property
    def is_standalone(self) -> bool:
        return self.level_index is None

    @property
    def level_number(self) -> Optional[int]:
        if self.is_standalone:
            return None
        return self.level_index + 1

    @property
    def is_last_level(self) -> bool:
        return self.is_standalone or self.level_index >= len(self.levels) - 1

    @property
    def is_complete(self) -> bool:
        return self.completed

    def result_message(self) -> str:
        if self.completed:
            return "Congratulations! You completed all levels!"
        if self.status is GameStatus.WON:
            if self.is_standalone:
                return "Level Complete! Painted: 100%"
            return f"Level {self.level_number} Complete! Painted: 100%"
        if self.status is GameStatus.LOST:
            return f"Game Over! Painted: {self.percentage}%"
        return ""

    def to_dict(self) -> dict:
        painted, total = self.coverage
        state = self.board.to_dict()
        state.update({
            "level": self.level_number,
            "level_name": self.level.name,
            "total_levels": len(self.levels),
            "width": self.level.width,
            "height": self.level.height,
            "layers": self.level.layer_count,
            "painted_count": painted,
            "paintable_count": total,
            "percentage": self.percentage,
            "message": self.result_message(),
            "completed": self.completed,
        })
        return state


class SessionRegistry:
    """In-memory session store with idle expiry."""

    def __init__(self, timeout: float = None) -> None:
        self.timeout = timeout if timeout is not None else config.SESSION_TIMEOUT
        self._sessions: Dict[str, dict] = {}

    def create(self, seed: int = 0, levels: Optional[Sequence[Level]] = None,
               player_name: Optional[str] = None) -> Tuple[str, PlaySession]:
        session_id = str(uuid.uuid4())[:8]
        now = time.time()
        self._sessions[session_id] = {
            "session": PlaySession(levels=levels, seed=seed),
            "seed": seed,
            "player_name": player_name,
            "created_at": now,
            "last_active": now,
        }
        logger.info(f"Session {session_id} created seed={seed}")
        return session_id, self._sessions[session_id]["session"]

    def get(self, session_id: str) -> PlaySession:
        entry = self._sessions.get(session_id)
        if entry is None:
            raise KeyError(f"Session not found: {session_id}")
        entry["last_active"] = time.time()
        return entry["session"]

    def info(self, session_id: str) -> dict:
        entry = self._sessions.get(session_id)
        if entry is None:
            raise KeyError(f"Session not found: {session_id}")
        session = entry["session"]
        return {
            "id": session_id,
            "seed": entry["seed"],
            "player_name": entry["player_name"],
            "level": session.level_number,
            "status": session.status.value,
            "created_at": entry["created_at"],
            "last_active": entry["last_active"],
        }

    def remove(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def cleanup(self, now: Optional[float] = None) -> List[str]:
        now = time.time() if now is None else now
        stale = [sid for sid, s in self._sessions.items()
                 if now - s["last_active"] > self.timeout]
        for sid in stale:
            del self._sessions[sid]
            logger.info(f"Cleaned up stale session {sid}")
        return stale

    def __contains__(self, session_id):
        return session_id in self._sessions

    def __len__(self):
        return len(self._sessions)

    def __iter__(self):
        return iter(list(self._sessions))
