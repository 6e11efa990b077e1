"""In-memory falling-tetromino engine."""

from .board import Board, PIECE_VALUES, VALUE_PIECES
from .config import GameConfig
from .game import Direction, TetrisGame, WALL_KICKS
from .game_state import GameSnapshot, GameState
from .scheduler import DropScheduler, ManualDropScheduler, ThreadedDropScheduler
from .scoring import drop_interval_ms, level_for_lines, line_clear_score
from .tetromino import TETROMINO_COLORS, Tetromino, TetrominoType, shape_cells, shape_mask
from .utils import format_grid, render_grid

__all__ = [
    "Board",
    "PIECE_VALUES",
    "VALUE_PIECES",
    "GameConfig",
    "Direction",
    "TetrisGame",
    "WALL_KICKS",
    "GameSnapshot",
    "GameState",
    "DropScheduler",
    "ManualDropScheduler",
    "ThreadedDropScheduler",
    "drop_interval_ms",
    "level_for_lines",
    "line_clear_score",
    "TETROMINO_COLORS",
    "Tetromino",
    "TetrominoType",
    "shape_cells",
    "shape_mask",
    "format_grid",
    "render_grid",
]
