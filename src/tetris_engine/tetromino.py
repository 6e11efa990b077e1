"""Tetromino definitions and the active piece.

Each of the seven piece kinds has exactly four rotation states.  A rotation
state is a small square mask of ``0``/``1`` cells; the masks are static data
shared by every piece instance and are never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

Mask = Tuple[Tuple[int, ...], ...]


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


def _masks(*states: List[List[int]]) -> Tuple[Mask, ...]:
    return tuple(tuple(tuple(row) for row in state) for state in states)


# Rotation states in clockwise order, index 0 being the spawn orientation.
TETROMINO_SHAPES: Dict[TetrominoType, Tuple[Mask, ...]] = {
    TetrominoType.I: _masks(
        [[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]],
        [[0, 0, 1, 0], [0, 0, 1, 0], [0, 0, 1, 0], [0, 0, 1, 0]],
        [[0, 0, 0, 0], [0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0]],
        [[0, 1, 0, 0], [0, 1, 0, 0], [0, 1, 0, 0], [0, 1, 0, 0]],
    ),
    TetrominoType.O: _masks(
        [[1, 1], [1, 1]],
        [[1, 1], [1, 1]],
        [[1, 1], [1, 1]],
        [[1, 1], [1, 1]],
    ),
    TetrominoType.T: _masks(
        [[0, 1, 0], [1, 1, 1], [0, 0, 0]],
        [[0, 1, 0], [0, 1, 1], [0, 1, 0]],
        [[0, 0, 0], [1, 1, 1], [0, 1, 0]],
        [[0, 1, 0], [1, 1, 0], [0, 1, 0]],
    ),
    TetrominoType.S: _masks(
        [[0, 1, 1], [1, 1, 0], [0, 0, 0]],
        [[0, 1, 0], [0, 1, 1], [0, 0, 1]],
        [[0, 0, 0], [0, 1, 1], [1, 1, 0]],
        [[1, 0, 0], [1, 1, 0], [0, 1, 0]],
    ),
    TetrominoType.Z: _masks(
        [[1, 1, 0], [0, 1, 1], [0, 0, 0]],
        [[0, 0, 1], [0, 1, 1], [0, 1, 0]],
        [[0, 0, 0], [1, 1, 0], [0, 1, 1]],
        [[0, 1, 0], [1, 1, 0], [1, 0, 0]],
    ),
    TetrominoType.J: _masks(
        [[1, 0, 0], [1, 1, 1], [0, 0, 0]],
        [[0, 1, 1], [0, 1, 0], [0, 1, 0]],
        [[0, 0, 0], [1, 1, 1], [0, 0, 1]],
        [[0, 1, 0], [0, 1, 0], [1, 1, 0]],
    ),
    TetrominoType.L: _masks(
        [[0, 0, 1], [1, 1, 1], [0, 0, 0]],
        [[0, 1, 0], [0, 1, 0], [0, 1, 1]],
        [[0, 0, 0], [1, 1, 1], [1, 0, 0]],
        [[1, 1, 0], [0, 1, 0], [0, 1, 0]],
    ),
}

ROTATION_COUNT = 4

# Hex colours handed to renderers for each kind.
TETROMINO_COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "#00f0f0",
    TetrominoType.O: "#f0f000",
    TetrominoType.T: "#a000f0",
    TetrominoType.S: "#00f000",
    TetrominoType.Z: "#f00000",
    TetrominoType.J: "#0000f0",
    TetrominoType.L: "#f0a000",
}


def shape_mask(shape: TetrominoType, rotation: int) -> Mask:
    """Return the mask for ``shape`` at ``rotation``.

    Rotation values are wrapped so any integer is accepted.
    """

    states = TETROMINO_SHAPES[shape]
    return states[rotation % len(states)]


def shape_cells(shape: TetrominoType, rotation: int) -> List[Tuple[int, int]]:
    """Return the ``(dx, dy)`` offsets of the filled cells of a mask."""

    mask = shape_mask(shape, rotation)
    return [
        (dx, dy)
        for dy, row in enumerate(mask)
        for dx, filled in enumerate(row)
        if filled
    ]


def shape_width(shape: TetrominoType, rotation: int = 0) -> int:
    """Width of the bounding box of ``shape`` (masks are square)."""

    return len(shape_mask(shape, rotation)[0])


@dataclass
class Tetromino:
    """Active falling piece in the game.

    ``position`` is ``(x, y)``: the top-left corner of the piece's bounding
    box in board coordinates.  ``y`` may be negative while the piece is above
    the visible board.
    """

    shape: TetrominoType
    rotation: int = 0
    position: Tuple[int, int] = (0, 0)  # (x, y)

    @property
    def x(self) -> int:
        return self.position[0]

    @property
    def y(self) -> int:
        return self.position[1]

    def move(self, dx: int, dy: int) -> None:
        """Move the piece by the given offsets."""

        x, y = self.position
        self.position = (x + dx, y + dy)

    def blocks(
        self, offset_x: int = 0, offset_y: int = 0, rotation: int | None = None
    ) -> List[Tuple[int, int]]:
        """Return the board ``(x, y)`` coordinates covered by this piece.

        The optional offsets and rotation describe a candidate placement
        without touching the piece itself.
        """

        state = self.rotation if rotation is None else rotation
        x, y = self.position
        return [
            (x + offset_x + dx, y + offset_y + dy)
            for dx, dy in shape_cells(self.shape, state)
        ]
