import numpy as np
import pytest

from catris.game import GameGrid, Piece, Position, TetrominoType, compact_rows, is_valid_move, rotate

O = Piece.of(TetrominoType.O)
I = Piece.of(TetrominoType.I)


@pytest.fixture
def grid():
    return GameGrid(10, 20)


def test_empty_board_accepts_spawn(grid):
    assert grid.is_valid_move(O, Position(4, -2))


def test_rows_above_board_are_always_valid(grid):
    grid.cells[:] = 1
    assert grid.is_valid_move(O, Position(4, -5))
    assert not grid.is_valid_move(O, Position(4, -1))


@pytest.mark.parametrize("x", [-1, 9])
def test_walls_reject(grid, x):
    assert not grid.is_valid_move(O, Position(x, 5))


def test_walls_reject_even_above_board(grid):
    assert not grid.is_valid_move(O, Position(-1, -5))


def test_floor(grid):
    assert grid.is_valid_move(O, Position(4, 18))
    assert not grid.is_valid_move(O, Position(4, 19))


def test_occupied_cell_blocks(grid):
    grid.cells[10, 5] = int(TetrominoType.Z)
    assert not grid.is_valid_move(O, Position(4, 9))
    assert grid.is_valid_move(O, Position(4, 8))


def test_unfilled_shape_cells_impose_nothing(grid):
    # I fills only matrix row 1; rows 0, 2 and 3 map onto occupied cells here
    grid.cells[17, 3:7] = 1
    grid.cells[19, 3:7] = 1
    assert grid.is_valid_move(I, Position(3, 17))
    # and past the right wall for the empty columns of a vertical I
    vertical = rotate(I)
    assert grid.is_valid_move(vertical, Position(-2, 0))
    assert grid.is_valid_move(vertical, Position(7, 0))
    assert not grid.is_valid_move(vertical, Position(8, 0))


def test_module_function_matches_method(grid):
    grid.cells[19, :] = 2
    pos = Position(4, 17)
    assert is_valid_move(grid.cells, O, pos) == grid.is_valid_move(O, pos) is True
    assert not is_valid_move(grid.cells, O, pos.moved(dy=1))


def test_merge_writes_identity_and_drops_spawn_buffer(grid):
    written = grid.merge(O, Position(4, -1))
    assert written == 2
    assert grid.cells[0, 4] == grid.cells[0, 5] == int(TetrominoType.O)
    assert np.count_nonzero(grid.cells) == 2


def test_compact_rows_without_full_rows_is_identity(grid):
    grid.cells[19, :9] = 3
    board, rows = compact_rows(grid.cells)
    assert rows == []
    assert np.array_equal(board, grid.cells)
    assert board is not grid.cells


def test_compact_rows_reports_bottom_to_top(grid):
    grid.cells[19, :] = 1
    grid.cells[17, :] = 1
    grid.cells[18, 0] = 5
    board, rows = compact_rows(grid.cells)
    assert rows == [19, 17]
    assert board[19, 0] == 5
    assert np.count_nonzero(board) == 1
    assert board.shape == (20, 10)


def test_rows_occupied(grid):
    assert not grid.rows_occupied(2)
    grid.cells[1, 3] = 4
    assert grid.rows_occupied(2)
    assert not grid.rows_occupied(1)
    assert not grid.rows_occupied(0)


def test_replace_checks_shape(grid):
    with pytest.raises(ValueError):
        grid.replace(np.zeros((19, 10), dtype=np.int8))


def test_reset_clears(grid):
    grid.cells[5, 5] = 1
    grid.reset()
    assert not grid.cells.any()


@pytest.mark.parametrize("w,h", [(0, 20), (10, 0), (-1, 5)])
def test_invalid_dimensions(w, h):
    with pytest.raises(ValueError):
        GameGrid(w, h)
