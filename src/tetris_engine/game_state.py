"""Session aggregate and the read-only snapshots handed to observers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

import numpy as np

from .board import Board, Grid
from .tetromino import Tetromino, TetrominoType, shape_width


@dataclass(frozen=True)
class GameSnapshot:
    """Immutable copy of the game state at one point in time.

    ``board`` is a read-only copy of the grid and ``current_piece`` a copy of
    the active piece, so nothing done to a snapshot reaches the engine.
    """

    board: Grid = field(compare=False, repr=False)
    current_piece: Optional[Tetromino]
    next_piece: TetrominoType
    hold_piece: Optional[TetrominoType]
    can_hold: bool
    score: int
    level: int
    lines: int
    game_over: bool
    is_paused: bool
    start_time: float


@dataclass
class GameState:
    """Mutable state for a game session."""

    board: Board
    next_piece: TetrominoType
    current_piece: Optional[Tetromino] = None
    hold_piece: Optional[TetrominoType] = None
    can_hold: bool = True
    score: int = 0
    level: int = 1
    lines: int = 0
    game_over: bool = False
    is_paused: bool = False
    start_time: float = 0.0

    def spawn_position(self, shape: TetrominoType) -> tuple[int, int]:
        """Return the ``(x, y)`` a fresh ``shape`` enters the board at."""

        return ((self.board.width - shape_width(shape)) // 2, 0)

    def snapshot(self) -> GameSnapshot:
        grid = self.board.grid.copy()
        grid.setflags(write=False)
        piece = replace(self.current_piece) if self.current_piece is not None else None
        return GameSnapshot(
            board=grid,
            current_piece=piece,
            next_piece=self.next_piece,
            hold_piece=self.hold_piece,
            can_hold=self.can_hold,
            score=self.score,
            level=self.level,
            lines=self.lines,
            game_over=self.game_over,
            is_paused=self.is_paused,
            start_time=self.start_time,
        )


def boards_equal(a: GameSnapshot, b: GameSnapshot) -> bool:
    """Return ``True`` when two snapshots hold identical grids."""

    return bool(np.array_equal(a.board, b.board))
