import numpy as np
import pytest

from tetris_core.game import pieces
from tetris_core.game.pieces import TetrominoType


@pytest.mark.parametrize("kind", list(TetrominoType))
@pytest.mark.parametrize("rotation", range(4))
def test_every_rotation_has_four_cells_inside_box(kind, rotation):
    offsets = pieces.cells(kind, rotation)
    size = pieces.box_size(kind)
    assert len(offsets) == 4
    assert len(set(offsets)) == 4
    for col, row in offsets:
        assert 0 <= col < size
        assert 0 <= row < size


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_four_clockwise_turns_return_to_start(kind):
    for start in range(4):
        rotation = start
        for _ in range(4):
            rotation = (rotation + 1) % 4
        assert pieces.cells(kind, rotation) == pieces.cells(kind, start)
    assert np.array_equal(np.rot90(pieces.shape(kind, 3), 1, axes=(1, 0)), pieces.shape(kind, 0))


def test_rotation_index_is_taken_modulo_four():
    assert pieces.cells(TetrominoType.J, 5) == pieces.cells(TetrominoType.J, 1)
    assert pieces.cells(TetrominoType.J, -1) == pieces.cells(TetrominoType.J, 3)


def test_t_rotates_clockwise():
    assert set(pieces.cells(TetrominoType.T, 0)) == {(1, 0), (0, 1), (1, 1), (2, 1)}
    assert set(pieces.cells(TetrominoType.T, 1)) == {(1, 0), (1, 1), (2, 1), (1, 2)}
    assert set(pieces.cells(TetrominoType.T, 3)) == {(1, 0), (0, 1), (1, 1), (1, 2)}


def test_o_is_rotation_invariant_and_i_spans_the_box():
    assert len({pieces.cells(TetrominoType.O, r) for r in range(4)}) == 1
    assert pieces.box_size(TetrominoType.I) == 4
    assert set(pieces.cells(TetrominoType.I, 0)) == {(0, 1), (1, 1), (2, 1), (3, 1)}
    assert set(pieces.cells(TetrominoType.I, 1)) == {(2, 0), (2, 1), (2, 2), (2, 3)}
