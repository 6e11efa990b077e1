"""Board representation for the playfield."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .tetromino import Tetromino, TetrominoType


LOGGER = logging.getLogger(__name__)

# Dimensions of the standard board.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]

# Mapping from ``TetrominoType`` to the integer stored in the grid.  ``0``
# represents an empty cell; any other value identifies the kind that locked
# there so renderers can look up its colour.
PIECE_VALUES = {t: i + 1 for i, t in enumerate(TetrominoType)}
VALUE_PIECES = {v: t for t, v in PIECE_VALUES.items()}


def create_empty_grid(width: int = WIDTH, height: int = HEIGHT) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((height, width), dtype=np.uint8)


class Board:
    """Grid of locked cells.

    The dimensions are fixed when the board is created.  Only
    :meth:`lock_piece` and :meth:`clear_lines` change cell contents during
    play; :meth:`set_cell` exists for setting up positions in tools and tests.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        self.width = width
        self.height = height
        self.grid: Grid = create_empty_grid(width, height)

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def cell_kind(self, row: int, col: int) -> Optional[TetrominoType]:
        """Return the kind locked at ``(row, col)`` or ``None`` when empty."""

        return VALUE_PIECES.get(self.get_cell(row, col))

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is empty.

        Any coordinates outside the board are treated as occupied.
        """

        if 0 <= row < self.height and 0 <= col < self.width:
            return bool(self.grid[row, col] == 0)
        return False

    def is_valid_position(
        self,
        piece: Tetromino,
        offset_x: int = 0,
        offset_y: int = 0,
        rotation: Optional[int] = None,
    ) -> bool:
        """Return ``True`` if ``piece`` fits at the given offset and rotation.

        Cells above the board (``y < 0``) are only checked against the side
        walls, which lets a piece spawn partly above the visible playfield.
        Every other cell must be inside the board and unoccupied.
        """

        for x, y in piece.blocks(offset_x, offset_y, rotation):
            if x < 0 or x >= self.width or y >= self.height:
                return False
            if y >= 0 and self.grid[y, x] != 0:
                return False
        return True

    def lock_piece(self, piece: Tetromino) -> None:
        """Write the piece's cells into the grid.

        Cells still above the board are dropped without error.
        """

        value = np.uint8(PIECE_VALUES[piece.shape])
        discarded = 0
        for x, y in piece.blocks():
            if y >= 0:
                self.grid[y, x] = value
            else:
                discarded += 1
        if discarded:
            LOGGER.debug("Discarded %d above-board cell(s) of %s", discarded, piece.shape.value)

    def clear_lines(self) -> int:
        """Clear completed rows and return how many were removed.

        Rows are scanned from the bottom up.  A full row is deleted, an empty
        row is inserted at the top and the same index is examined again since
        the row above has moved into it.
        """

        cleared = 0
        y = self.height - 1
        while y >= 0:
            if np.all(self.grid[y] != 0):
                remaining = np.delete(self.grid, y, axis=0)
                empty = np.zeros((1, self.width), dtype=self.grid.dtype)
                self.grid = np.vstack((empty, remaining))
                cleared += 1
            else:
                y -= 1
        return cleared
