import numpy as np
import pytest

from tetris_engine.board import Board, PIECE_VALUES
from tetris_engine.tetromino import Tetromino, TetrominoType

from conftest import fill_row


def test_o_piece_fits_at_spawn_on_empty_board():
    board = Board()
    piece = Tetromino(TetrominoType.O, position=(4, 0))
    assert board.is_valid_position(piece)


def test_walls_and_floor_reject_piece():
    board = Board()
    piece = Tetromino(TetrominoType.O, position=(0, 0))
    assert not board.is_valid_position(piece, -1, 0)
    piece = Tetromino(TetrominoType.O, position=(8, 0))
    assert not board.is_valid_position(piece, 1, 0)
    piece = Tetromino(TetrominoType.O, position=(4, 18))
    assert board.is_valid_position(piece)
    assert not board.is_valid_position(piece, 0, 1)


def test_cells_above_board_skip_occupancy_but_not_walls():
    board = Board()
    # Occupied cells in row 0 do not matter for cells at y < 0.
    fill_row(board, 0)
    piece = Tetromino(TetrominoType.O, position=(4, -2))
    assert board.is_valid_position(piece)
    assert not board.is_valid_position(piece, 0, 1)
    # ...but the side walls still apply above the board.
    assert not board.is_valid_position(Tetromino(TetrominoType.O, position=(-1, -2)))
    assert not board.is_valid_position(Tetromino(TetrominoType.O, position=(9, -2)))


def test_empty_mask_columns_may_hang_over_wall():
    board = Board()
    # Rotation 1 of T leaves mask column 0 empty.
    piece = Tetromino(TetrominoType.T, rotation=1, position=(-1, 5))
    assert board.is_valid_position(piece)
    assert not board.is_valid_position(piece, rotation=2)


def test_locked_cell_blocks_position():
    board = Board()
    board.set_cell(10, 5, 1)
    piece = Tetromino(TetrominoType.O, position=(4, 8))
    assert board.is_valid_position(piece)
    assert not board.is_valid_position(piece, 0, 1)


def test_lock_piece_writes_kind_value():
    board = Board()
    piece = Tetromino(TetrominoType.S, position=(0, 18))
    board.lock_piece(piece)
    value = PIECE_VALUES[TetrominoType.S]
    assert board.get_cell(18, 1) == value
    assert board.get_cell(18, 2) == value
    assert board.get_cell(19, 0) == value
    assert board.get_cell(19, 1) == value
    assert board.cell_kind(19, 0) is TetrominoType.S
    assert board.cell_kind(0, 0) is None
    assert int(np.count_nonzero(board.grid)) == 4


def test_lock_piece_discards_cells_above_board():
    board = Board()
    piece = Tetromino(TetrominoType.I, rotation=1, position=(0, -2))
    board.lock_piece(piece)
    # Only rows 0 and 1 of the vertical I are on the board.
    assert int(np.count_nonzero(board.grid)) == 2
    assert board.get_cell(0, 2) != 0
    assert board.get_cell(1, 2) != 0


def test_clear_lines_removes_full_rows_and_shifts_down():
    board = Board()
    fill_row(board, 19)
    fill_row(board, 18, skip={3})
    fill_row(board, 17)
    board.set_cell(16, 7, 2)
    cleared = board.clear_lines()
    assert cleared == 2
    # Row 18 (with the gap) drops by one, row 16 by two.
    assert board.get_cell(19, 3) == 0
    assert all(board.get_cell(19, c) == 1 for c in range(board.width) if c != 3)
    assert board.get_cell(18, 7) == 2
    assert not board.grid[:18].any()


def test_clear_lines_handles_adjacent_full_rows():
    board = Board()
    for row in range(16, 20):
        fill_row(board, row)
    board.set_cell(15, 0, 3)
    assert board.clear_lines() == 4
    assert board.get_cell(19, 0) == 3
    assert int(np.count_nonzero(board.grid)) == 1


def test_clear_lines_preserves_rows_with_gaps():
    rng = np.random.default_rng(7)
    for _ in range(50):
        board = Board()
        grid = (rng.random((board.height, board.width)) < 0.85).astype(np.uint8)
        full_rows = rng.random(board.height) < 0.3
        grid[full_rows] = 1
        board.grid = grid.copy()

        is_full = np.all(grid != 0, axis=1)
        kept = grid[~is_full]
        expected = np.vstack((np.zeros((int(is_full.sum()), board.width), dtype=np.uint8), kept))

        assert board.clear_lines() == int(is_full.sum())
        assert np.array_equal(board.grid, expected)


def test_cell_accessors_bounds():
    board = Board(6, 8)
    assert board.grid.shape == (8, 6)
    with pytest.raises(IndexError):
        board.get_cell(8, 0)
    with pytest.raises(IndexError):
        board.set_cell(0, 6, 1)
    assert not board.is_empty(-1, 0)
