from __future__ import annotations

from enum import IntEnum
from typing import Dict, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Offset = Tuple[int, int]  # (col, row) relative to the bounding box origin
Shape = np.ndarray


# Rotation 0 of every piece, laid out in its square bounding box.
BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: np.array(
        [[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]], dtype=np.int8
    ),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[0, 1, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0], [0, 0, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
}


def _rot90(shape: Shape, k: int) -> Shape:
    k = k % 4
    if k == 0:
        return shape
    return np.rot90(shape, k, axes=(1, 0))  # rotate clockwise when k>0


def _offsets(shape: Shape) -> Tuple[Offset, ...]:
    rows, cols = np.nonzero(shape)
    return tuple((int(c), int(r)) for r, c in zip(rows, cols))


# Square boxes keep the pivot fixed, so four clockwise turns give back rotation 0.
_ROTATIONS: Dict[TetrominoType, Tuple[Tuple[Offset, ...], ...]] = {
    kind: tuple(_offsets(_rot90(base, r)) for r in range(4))
    for kind, base in BASE_SHAPES.items()
}


def shape(kind: TetrominoType, rotation: int = 0) -> Shape:
    """Bitmap of ``kind`` at ``rotation`` inside its bounding box."""
    return _rot90(BASE_SHAPES[kind], rotation)


def cells(kind: TetrominoType, rotation: int = 0) -> Tuple[Offset, ...]:
    """Occupied ``(col, row)`` offsets of ``kind`` at ``rotation`` (taken mod 4)."""
    return _ROTATIONS[kind][rotation % 4]


def box_size(kind: TetrominoType) -> int:
    return int(BASE_SHAPES[kind].shape[0])
