from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from .grid import Board, Coordinate
from .pieces import TetrominoType, cells


logger = logging.getLogger(__name__)

# Every piece spawns left-aligned in a centered 4-column frame
SPAWN_FRAME_WIDTH = 4


@dataclass(frozen=True)
class ActivePiece:
    kind: TetrominoType
    rotation: int = 0  # 0..3
    col: int = 0
    row: int = 0

    def cells(self) -> List[Coordinate]:
        return [(self.col + dc, self.row + dr) for dc, dr in cells(self.kind, self.rotation)]

    def moved(self, dcol: int, drow: int) -> "ActivePiece":
        return replace(self, col=self.col + dcol, row=self.row + drow)

    def rotated(self, delta: int) -> "ActivePiece":
        return replace(self, rotation=(self.rotation + delta) % 4)


class PieceController:
    """Owns the falling piece and validates every transform against the board.

    A transform is committed only when all resulting cells are free;
    otherwise the piece is left exactly as it was. Out-of-bounds cells count
    as blocked. Rotations are tried at the same anchor only (no wall kicks).
    """

    def __init__(self, board: Board, spawn_row: int = 0) -> None:
        self.board = board
        self.spawn_row = spawn_row
        self.piece: Optional[ActivePiece] = None

    def fits(self, piece: ActivePiece) -> bool:
        return self.board.can_place(piece.cells())

    def spawn(self, kind: TetrominoType) -> bool:
        """Place ``kind`` at the top-center spawn anchor with rotation 0.

        Returns False, leaving no active piece, when the spawn cells are taken.
        """
        candidate = ActivePiece(
            kind=kind,
            rotation=0,
            col=(self.board.width - SPAWN_FRAME_WIDTH) // 2,
            row=self.spawn_row,
        )
        if not self.fits(candidate):
            self.piece = None
            return False
        self.piece = candidate
        logger.debug("spawned %s at (%d, %d)", kind.name, candidate.col, candidate.row)
        return True

    def _try(self, candidate: ActivePiece) -> bool:
        if self.fits(candidate):
            self.piece = candidate
            return True
        return False

    def move(self, dcol: int, drow: int) -> bool:
        if self.piece is None:
            return False
        return self._try(self.piece.moved(dcol, drow))

    def rotate(self, delta: int) -> bool:
        """Rotate clockwise for ``delta=1`` and counterclockwise for ``delta=-1``."""
        if self.piece is None:
            return False
        return self._try(self.piece.rotated(delta))

    def drop_distance(self) -> int:
        if self.piece is None:
            return 0
        distance = 0
        while self.fits(self.piece.moved(0, distance + 1)):
            distance += 1
        return distance

    def hard_drop(self) -> int:
        """Drop to the resting position and lock. Returns the rows dropped."""
        if self.piece is None:
            return 0
        distance = self.drop_distance()
        self.piece = self.piece.moved(0, distance)
        self.lock()
        return distance

    def lock(self) -> ActivePiece:
        assert self.piece is not None
        piece = self.piece
        self.board.lock_piece(piece.cells(), int(piece.kind))
        self.piece = None
        logger.debug("locked %s at (%d, %d) r%d", piece.kind.name, piece.col, piece.row, piece.rotation)
        return piece

    def active_cells(self) -> Tuple[Coordinate, ...]:
        if self.piece is None:
            return ()
        return tuple(self.piece.cells())

    def ghost_cells(self) -> Tuple[Coordinate, ...]:
        """Cells the active piece would occupy after a hard drop."""
        if self.piece is None:
            return ()
        return tuple(self.piece.moved(0, self.drop_distance()).cells())
