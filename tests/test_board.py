import numpy as np
import pytest

from tetris_core.game import Board, IllegalPlacementError


def fill_row(board: Board, row: int, tag: int = 7, skip=()) -> None:
    board.lock_piece([(c, row) for c in range(board.width) if c not in skip], tag)


def test_bounds_count_as_not_free():
    board = Board(10, 20, hidden_rows=2)
    assert board.is_cell_free(0, 0)
    assert board.is_cell_free(9, 19)
    assert board.is_cell_free(5, -2)
    assert not board.is_cell_free(-1, 0)
    assert not board.is_cell_free(10, 0)
    assert not board.is_cell_free(0, 20)
    assert not board.is_cell_free(0, -3)


def test_lock_piece_marks_cells_with_tag():
    board = Board(10, 20)
    board.lock_piece([(0, 19), (1, 19), (1, 18)], 3)
    assert not board.is_cell_free(1, 18)
    assert board.cell_tag(0, 19) == 3
    assert board.row_counts[19] == 2
    assert board.row_counts[18] == 1


@pytest.mark.parametrize(
    "cells",
    [[(0, 0), (10, 0)], [(0, 0), (0, 20)], [(5, 5), (4, 4)], [(0, 0), (0, 0), (1, 0)]],
)
def test_lock_piece_rejects_bad_cells_without_writing(cells):
    board = Board(10, 20)
    board.lock_piece([(4, 4)], 1)
    before = board.grid.copy()
    with pytest.raises(IllegalPlacementError):
        board.lock_piece(cells, 2)
    assert np.array_equal(board.grid, before)
    assert board.row_counts.sum() == 1


def test_clear_without_full_rows_is_noop():
    board = Board(10, 20)
    fill_row(board, 19, skip={4})
    before = board.grid.copy()
    assert board.clear_full_rows() == 0
    assert np.array_equal(board.grid, before)


def test_clear_non_adjacent_rows_shifts_against_original_rows():
    board = Board(10, 20)
    board.lock_piece([(0, 0)], 1)
    board.lock_piece([(1, 1)], 2)
    board.lock_piece([(2, 2)], 3)
    fill_row(board, 3)
    board.lock_piece([(4, 4)], 4)
    fill_row(board, 5)
    board.lock_piece([(6, 6)], 5)

    assert board.clear_full_rows() == 2

    grid = board.visible_state()
    assert grid.shape == (20, 10)
    assert not grid[0].any() and not grid[1].any()
    assert board.cell_tag(0, 2) == 1
    assert board.cell_tag(1, 3) == 2
    assert board.cell_tag(2, 4) == 3
    assert board.cell_tag(4, 5) == 4
    assert board.cell_tag(6, 6) == 5
    assert np.count_nonzero(grid) == 5
    assert list(board.row_counts) == [int(np.count_nonzero(r)) for r in board.grid]


def test_hidden_rows_shift_into_view():
    board = Board(4, 4, hidden_rows=2)
    board.lock_piece([(3, -1)], 6)
    fill_row(board, 3)
    assert board.clear_full_rows() == 1
    assert board.cell_tag(3, 0) == 6
    assert board.is_cell_free(3, -1)
    assert board.visible_state().shape == (4, 4)


def test_reset_empties_board():
    board = Board(10, 20, hidden_rows=2)
    fill_row(board, 10)
    board.reset()
    assert not board.grid.any()
    assert not board.row_counts.any()


def test_repeated_cell_cannot_inflate_row_count():
    board = Board(4, 4)
    with pytest.raises(IllegalPlacementError):
        board.lock_piece([(0, 3), (0, 3), (1, 3), (2, 3)], 1)
    board.lock_piece([(0, 3), (1, 3), (2, 3)], 1)
    assert board.row_counts[3] == 3
    assert board.clear_full_rows() == 0
