"""Rendering helpers for hosts of the engine."""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from .board import PIECE_VALUES
from .game_state import GameSnapshot
from .tetromino import Tetromino


# Grid value used for ghost cells; outside the range of ``PIECE_VALUES``.
GHOST_VALUE = 255


def render_grid(
    snapshot: GameSnapshot,
    ghost: Optional[Tuple[int, int]] = None,
) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    Cells occupied by the active piece receive the mapped integer value for
    the piece's shape.  When ``ghost`` is given, empty cells covered by the
    piece at that position are marked with :data:`GHOST_VALUE`.  Cells above
    the visible board are skipped.
    """

    grid = np.array(snapshot.board, dtype=np.uint8)
    height, width = grid.shape
    active = snapshot.current_piece
    if active is not None:
        if ghost is not None:
            shadow = Tetromino(active.shape, active.rotation, ghost)
            for x, y in shadow.blocks():
                if 0 <= y < height and 0 <= x < width and grid[y, x] == 0:
                    grid[y, x] = GHOST_VALUE
        value = PIECE_VALUES[active.shape]
        for x, y in active.blocks():
            if 0 <= y < height and 0 <= x < width:
                grid[y, x] = value
    return grid.tolist()


def format_grid(grid: List[List[int]]) -> str:
    """Return an ASCII picture of ``grid``: ``#`` filled, ``:`` ghost."""

    symbols = {0: ".", GHOST_VALUE: ":"}
    return "\n".join("".join(symbols.get(cell, "#") for cell in row) for row in grid)
