from __future__ import annotations

import logging
from typing import Iterable, Tuple

import numpy as np


logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]  # (col, row)


class IllegalPlacementError(RuntimeError):
    """Raised when cells are locked out of bounds or on top of occupied cells."""


class Board:
    """Discrete 2D grid the pieces lock into.

    The grid uses 0 for empty cells and positive integers for filled cells.
    Integer values are tetromino tags for optional coloring.

    Row 0 is the topmost visible row and rows grow downward. ``hidden_rows``
    extra rows sit above row 0 and are addressed with negative row indices,
    so a piece may spawn partially off-screen. Alongside the grid the board
    keeps a per-row count of occupied cells.
    """

    def __init__(self, width: int, height: int, hidden_rows: int = 0) -> None:
        self.width = int(width)
        self.height = int(height)
        self.hidden_rows = int(hidden_rows)
        self.grid = np.zeros((self.hidden_rows + self.height, self.width), dtype=np.int8)
        self.row_counts = np.zeros(self.hidden_rows + self.height, dtype=np.int16)

    def reset(self) -> None:
        self.grid.fill(0)
        self.row_counts.fill(0)

    def is_inside(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and -self.hidden_rows <= row < self.height

    def is_cell_free(self, col: int, row: int) -> bool:
        if not self.is_inside(col, row):
            return False
        return self.grid[row + self.hidden_rows, col] == 0

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        return all(self.is_cell_free(col, row) for col, row in cells)

    def cell_tag(self, col: int, row: int) -> int:
        if not self.is_inside(col, row):
            raise IndexError(f"cell ({col}, {row}) is outside the board")
        return int(self.grid[row + self.hidden_rows, col])

    def lock_piece(self, cells: Iterable[Coordinate], tag: int) -> None:
        """Mark ``cells`` as occupied with ``tag``.

        Every cell must be inside the board and free; callers validate with
        :meth:`can_place` first. Nothing is written if the check fails.
        """
        cells = list(cells)
        if tag <= 0:
            raise ValueError(f"tag must be positive, got {tag}")
        if len(set(cells)) != len(cells):
            raise IllegalPlacementError(f"duplicate cells in {cells}")
        for col, row in cells:
            if not self.is_cell_free(col, row):
                raise IllegalPlacementError(f"cannot lock cell ({col}, {row})")
        for col, row in cells:
            self.grid[row + self.hidden_rows, col] = tag
            self.row_counts[row + self.hidden_rows] += 1

    def clear_full_rows(self) -> int:
        """Remove every full row and shift the rows above it down.

        Full rows are collected before anything moves, so clearing several
        non-adjacent rows shifts each remaining row by the number of cleared
        rows below it. Returns the number of rows cleared.
        """
        full_rows = np.flatnonzero(self.row_counts == self.width)
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        # Remove full rows and add empty rows at the top
        kept = np.delete(self.grid, full_rows, axis=0)
        kept_counts = np.delete(self.row_counts, full_rows)
        self.grid = np.vstack((np.zeros((num, self.width), dtype=np.int8), kept))
        self.row_counts = np.concatenate((np.zeros(num, dtype=np.int16), kept_counts))
        logger.debug("cleared rows %s", [int(r) - self.hidden_rows for r in full_rows])
        return num

    def visible_state(self) -> np.ndarray:
        return self.grid[self.hidden_rows :].copy()

    def hidden_state(self) -> np.ndarray:
        return self.grid[: self.hidden_rows].copy()

    def full_state(self) -> np.ndarray:
        """Hidden rows followed by visible rows; index 0 is row ``-hidden_rows``."""
        return self.grid.copy()
