import numpy as np
import pytest

from catris.game import ScoringRules, clear_lines


def _board():
    return np.zeros((20, 10), dtype=np.int8)


def test_no_full_rows_leaves_board_unchanged():
    cells = _board()
    cells[19, :9] = 1
    cells[10, 4] = 2
    result = clear_lines(cells)
    assert np.array_equal(result.board, cells)
    assert result.lines_cleared == 0
    assert result.score_delta == 0
    assert result.rows == []


@pytest.mark.parametrize("k,points", [(1, 100), (2, 300), (3, 500), (4, 800)])
def test_clearing_k_bottom_rows(k, points):
    cells = _board()
    cells[20 - k:, :] = 1
    cells[19 - k, 3] = 7  # marker sitting on the stack
    cells[0, 0] = 6  # marker at the very top
    result = clear_lines(cells)
    assert result.lines_cleared == k
    assert result.score_delta == points
    assert result.board[19, 3] == 7
    assert result.board[k, 0] == 6
    assert not result.board[:k].any()
    assert np.count_nonzero(result.board) == 2


def test_rows_shift_by_cleared_rows_below_them():
    cells = _board()
    cells[19, :] = 1
    cells[17, :] = 1
    cells[18, 2] = 3  # one cleared row below
    cells[16, 5] = 4  # two cleared rows below
    result = clear_lines(cells)
    assert result.rows == [19, 17]
    assert result.board[19, 2] == 3
    assert result.board[18, 5] == 4
    assert np.count_nonzero(result.board) == 2


def test_input_is_not_mutated():
    cells = _board()
    cells[19, :] = 1
    before = cells.copy()
    clear_lines(cells)
    assert np.array_equal(cells, before)


@pytest.mark.parametrize("lines,points", [(-1, 0), (0, 0), (5, 1200), (6, 1600)])
def test_score_table_edges(lines, points):
    assert ScoringRules().score_for_lines(lines) == points


def test_custom_table():
    rules = ScoringRules(line_clear_scores=(40, 100, 300, 1200))
    cells = _board()
    cells[19, :] = 1
    assert clear_lines(cells, rules).score_delta == 40
