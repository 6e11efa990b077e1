"""Game controller: piece commands, locking, scoring and gravity.

:class:`TetrisGame` owns one session.  Every command and query runs under a
re-entrant lock that the gravity timer shares, so a timer tick and a player
command never observe a half-updated board.  Commands never raise for game
reasons: an illegal move, a blocked rotation, a second hold or anything issued
while paused or after game over simply returns ``False`` (or does nothing).
"""

from __future__ import annotations

import logging
import random
import threading
import time
from dataclasses import replace
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Tuple, Union

from .board import Board
from .config import GameConfig
from .game_state import GameSnapshot, GameState
from .scheduler import DropScheduler, SchedulerFactory, ThreadedDropScheduler
from .scoring import (
    HARD_DROP_POINTS,
    SOFT_DROP_POINTS,
    drop_interval_ms,
    level_for_lines,
    line_clear_score,
)
from .tetromino import ROTATION_COUNT, Tetromino, TetrominoType


LOGGER = logging.getLogger(__name__)


class Direction(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    DOWN = "down"


_OFFSETS = {
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
}

# Tried in order after the plain rotation fails.  The same list is used for
# every piece and every rotation transition.
WALL_KICKS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (-2, 0), (2, 0))

StateCallback = Callable[[GameSnapshot], None]
LineClearCallback = Callable[[int], None]
ConfigLike = Union[GameConfig, Mapping[str, Any], None]


def _coerce_config(config: ConfigLike) -> GameConfig:
    if config is None:
        return GameConfig()
    if isinstance(config, GameConfig):
        return config
    return GameConfig.from_mapping(config)


class TetrisGame:
    """A single game session and its command API."""

    def __init__(
        self,
        config: ConfigLike = None,
        *,
        on_state_change: Optional[StateCallback] = None,
        on_line_clear: Optional[LineClearCallback] = None,
        scheduler_factory: Optional[SchedulerFactory] = None,
        clock: Optional[Callable[[], float]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._config = _coerce_config(config)
        self._on_state_change = on_state_change
        self._on_line_clear = on_line_clear
        self._clock = clock or time.time
        self._rng = rng or random.Random()
        self._lock = threading.RLock()
        factory = scheduler_factory or ThreadedDropScheduler
        self._scheduler = factory(self._gravity_tick, self._lock)
        self._state = self._create_initial_state()

    # Setup ------------------------------------------------------------
    def _create_initial_state(self) -> GameState:
        return GameState(
            board=Board(self._config.width, self._config.height),
            next_piece=self._random_kind(),
            level=self._config.initial_level,
            start_time=self._clock(),
        )

    def _random_kind(self) -> TetrominoType:
        """Return a uniformly random tetromino type."""

        return self._rng.choice(list(TetrominoType))

    def set_on_state_change(self, callback: Optional[StateCallback]) -> None:
        self._on_state_change = callback

    def set_on_line_clear(self, callback: Optional[LineClearCallback]) -> None:
        self._on_line_clear = callback

    @property
    def scheduler(self) -> DropScheduler:
        """The gravity timer owned by this game."""

        return self._scheduler

    # Queries ----------------------------------------------------------
    def get_state(self) -> GameSnapshot:
        """Return an immutable snapshot of the current state."""

        with self._lock:
            return self._state.snapshot()

    def get_config(self) -> GameConfig:
        return replace(self._config)

    def get_ghost_position(self) -> Optional[Tuple[int, int]]:
        """Return the ``(x, y)`` the active piece would land at, if any."""

        with self._lock:
            piece = self._state.current_piece
            if piece is None:
                return None
            return piece.x, piece.y + self._drop_distance(piece)

    def get_play_time(self) -> int:
        """Return whole seconds elapsed since the session started."""

        with self._lock:
            return int(self._clock() - self._state.start_time)

    # Session lifecycle ------------------------------------------------
    def new_game(self, config: ConfigLike = None) -> None:
        """Start a fresh session, optionally with a new configuration."""

        with self._lock:
            self._scheduler.stop()
            if config is not None:
                self._config = _coerce_config(config)
            self._state = self._create_initial_state()
            LOGGER.info(
                "New game %dx%d starting at level %d",
                self._config.width,
                self._config.height,
                self._config.initial_level,
            )
            self._spawn_piece()
            if not self._state.game_over:
                self._start_gravity()
            self._notify_state_change()

    def toggle_pause(self) -> None:
        with self._lock:
            state = self._state
            if state.game_over or state.current_piece is None:
                return
            state.is_paused = not state.is_paused
            if state.is_paused:
                self._scheduler.stop()
                LOGGER.info("Paused")
            else:
                self._start_gravity()
                LOGGER.info("Resumed")
            self._notify_state_change()

    def destroy(self) -> None:
        """Release the gravity timer."""

        with self._lock:
            self._scheduler.stop()

    # Commands ---------------------------------------------------------
    def move(self, direction: Union[Direction, str]) -> bool:
        """Move the active piece one cell.

        A blocked downward move locks the piece and returns ``False``.

        Raises:
            ValueError: If ``direction`` is not left, right or down.
        """

        direction = Direction(direction)
        with self._lock:
            piece = self._controllable_piece()
            if piece is None:
                return False
            dx, dy = _OFFSETS[direction]
            if self._state.board.is_valid_position(piece, dx, dy):
                piece.move(dx, dy)
                if direction is Direction.DOWN:
                    self._state.score += SOFT_DROP_POINTS
                self._notify_state_change()
                return True
            if direction is Direction.DOWN:
                self._lock_piece()
            return False

    def rotate(self, clockwise: bool = True) -> bool:
        """Rotate the active piece, falling back to the wall-kick list.

        Either the rotation and position change together to the first valid
        candidate, or nothing changes.
        """

        with self._lock:
            piece = self._controllable_piece()
            if piece is None:
                return False
            step = 1 if clockwise else -1
            rotation = (piece.rotation + step) % ROTATION_COUNT
            board = self._state.board
            for dx, dy in ((0, 0),) + WALL_KICKS:
                if board.is_valid_position(piece, dx, dy, rotation):
                    if (dx, dy) != (0, 0):
                        LOGGER.debug("Rotation of %s kicked by (%d, %d)", piece.shape.value, dx, dy)
                    piece.move(dx, dy)
                    piece.rotation = rotation
                    self._notify_state_change()
                    return True
            return False

    def hard_drop(self) -> None:
        """Drop the active piece to its landing row and lock it."""

        with self._lock:
            piece = self._controllable_piece()
            if piece is None:
                return
            distance = self._drop_distance(piece)
            piece.move(0, distance)
            self._state.score += distance * HARD_DROP_POINTS
            self._lock_piece()

    def hold(self) -> None:
        """Set the active piece aside, once per piece.

        The first hold stores the active kind and spawns from the next piece;
        later holds swap the active and held kinds.
        """

        with self._lock:
            state = self._state
            piece = self._controllable_piece()
            if piece is None or not state.can_hold:
                return
            current = piece.shape
            if state.hold_piece is None:
                state.hold_piece = current
                self._spawn_piece()
            else:
                held = state.hold_piece
                state.hold_piece = current
                state.current_piece = Tetromino(held, 0, state.spawn_position(held))
            state.can_hold = False
            self._notify_state_change()

    # Internals --------------------------------------------------------
    def _controllable_piece(self) -> Optional[Tetromino]:
        state = self._state
        if state.is_paused or state.game_over:
            return None
        return state.current_piece

    def _drop_distance(self, piece: Tetromino) -> int:
        board = self._state.board
        distance = 0
        while board.is_valid_position(piece, 0, distance + 1):
            distance += 1
        return distance

    def _gravity_tick(self) -> None:
        self.move(Direction.DOWN)

    def _start_gravity(self) -> None:
        self._scheduler.start(drop_interval_ms(self._state.level))

    def _spawn_piece(self) -> None:
        state = self._state
        kind = state.next_piece
        piece = Tetromino(kind, 0, state.spawn_position(kind))
        state.current_piece = piece
        state.next_piece = self._random_kind()
        state.can_hold = True
        LOGGER.debug("Spawned %s at %s, next %s", kind.value, piece.position, state.next_piece.value)
        if not state.board.is_valid_position(piece):
            state.game_over = True
            self._scheduler.stop()
            LOGGER.info("Game over: score=%d level=%d lines=%d", state.score, state.level, state.lines)

    def _lock_piece(self) -> None:
        state = self._state
        piece = state.current_piece
        if piece is None:
            return
        state.board.lock_piece(piece)
        cleared = state.board.clear_lines()
        if cleared:
            self._score_lines(cleared)
            self._notify_line_clear(cleared)
        self._spawn_piece()
        self._notify_state_change()

    def _score_lines(self, cleared: int) -> None:
        state = self._state
        state.score += line_clear_score(cleared, state.level)
        state.lines += cleared
        LOGGER.debug("Cleared %d line(s), score=%d", cleared, state.score)
        new_level = level_for_lines(state.lines)
        if new_level > state.level:
            state.level = new_level
            LOGGER.info("Level up: %d", new_level)
            if not state.is_paused and not state.game_over:
                self._start_gravity()

    def _notify_line_clear(self, cleared: int) -> None:
        if self._on_line_clear is None:
            return
        try:
            self._on_line_clear(cleared)
        except Exception:
            LOGGER.exception("Line-clear callback failed")

    def _notify_state_change(self) -> None:
        if self._on_state_change is not None:
            self._on_state_change(self._state.snapshot())
