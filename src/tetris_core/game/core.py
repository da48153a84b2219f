from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Protocol, Tuple

import numpy as np

from .controller import PieceController
from .grid import Board, Coordinate
from .pieces import TetrominoType
from .spawner import PieceSpawner, SpawnPolicy


logger = logging.getLogger(__name__)


class Command(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5


class GameState(Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


class GameOverError(RuntimeError):
    """Raised when the session is advanced after the game has ended."""


class Spawner(Protocol):
    def next_piece(self) -> TetrominoType: ...

    def preview(self) -> Tuple[TetrominoType, ...]: ...


@dataclass
class GameConfig:
    board_width: int = 10
    board_height: int = 20
    hidden_rows: int = 2
    gravity_interval: int = 30  # ticks per gravity drop
    spawn_policy: SpawnPolicy = SpawnPolicy.BAG
    random_seed: Optional[int] = None
    spawn_row: int = -1
    preview_size: int = 1

    def __post_init__(self) -> None:
        self.spawn_policy = SpawnPolicy(self.spawn_policy)
        if self.board_width < 4:
            raise ValueError(f"board_width must be at least 4, got {self.board_width}")
        if self.board_height < 1:
            raise ValueError(f"board_height must be positive, got {self.board_height}")
        if self.hidden_rows < 0:
            raise ValueError(f"hidden_rows must be non-negative, got {self.hidden_rows}")
        if self.gravity_interval < 1:
            raise ValueError(f"gravity_interval must be at least 1, got {self.gravity_interval}")
        if not -self.hidden_rows <= self.spawn_row < self.board_height:
            raise ValueError(f"spawn_row {self.spawn_row} is outside the board")
        if self.preview_size < 0:
            raise ValueError(f"preview_size must be non-negative, got {self.preview_size}")


@dataclass(frozen=True)
class StepResult:
    moved: bool = False  # the piece moved or rotated
    locked: bool = False
    lines_cleared: int = 0
    game_over: bool = False


@dataclass(frozen=True)
class Snapshot:
    grid: np.ndarray  # visible rows only
    hidden_grid: np.ndarray  # rows above row 0, topmost first
    active_cells: Tuple[Coordinate, ...]
    active_kind: Optional[TetrominoType]
    active_rotation: Optional[int]
    active_position: Optional[Coordinate]
    ghost_cells: Tuple[Coordinate, ...]
    next_pieces: Tuple[TetrominoType, ...]
    state: GameState
    lines_cleared_total: int
    pieces_locked: int
    ticks: int

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER


class GameEngine:
    """Deterministic single-board simulation driven by ticks and commands.

    The caller owns the clock: ``on_tick`` is invoked at a fixed cadence and
    every ``gravity_interval`` ticks the active piece falls one row. Commands
    arrive through ``on_input``. A piece locks when a gravity drop is blocked
    or on hard drop; full rows are then cleared and the next piece spawns.
    If that spawn collides the engine enters ``GameState.GAME_OVER``, after
    which only :meth:`reset` is allowed to change anything.
    """

    def __init__(self, config: Optional[GameConfig] = None, spawner: Optional[Spawner] = None) -> None:
        self.config = config or GameConfig()
        self._spawner_override = spawner
        self.reset()

    def reset(self) -> None:
        cfg = self.config
        self.board = Board(cfg.board_width, cfg.board_height, cfg.hidden_rows)
        self.controller = PieceController(self.board, spawn_row=cfg.spawn_row)
        if self._spawner_override is not None:
            self.spawner: Spawner = self._spawner_override
        else:
            self.spawner = PieceSpawner(cfg.spawn_policy, cfg.random_seed, cfg.preview_size)
        self.state = GameState.RUNNING
        self.gravity_counter = 0
        self.ticks = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        logger.info(
            "new game %dx%d, policy=%s, gravity every %d ticks",
            cfg.board_width,
            cfg.board_height,
            cfg.spawn_policy.value,
            cfg.gravity_interval,
        )
        self._spawn_next()

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    def _ensure_running(self) -> None:
        if self.state is GameState.GAME_OVER:
            raise GameOverError("game is over; call reset() to start a new game")

    def _spawn_next(self) -> bool:
        kind = self.spawner.next_piece()
        if self.controller.spawn(kind):
            return True
        self.state = GameState.GAME_OVER
        logger.info(
            "game over: %s blocked at spawn after %d pieces, %d lines",
            kind.name,
            self.pieces_locked,
            self.lines_cleared_total,
        )
        return False

    def _settle(self) -> StepResult:
        # Runs after the controller has locked the piece
        self.pieces_locked += 1
        lines = self.board.clear_full_rows()
        self.lines_cleared_total += lines
        if lines:
            logger.debug("%d line(s) cleared, total %d", lines, self.lines_cleared_total)
        spawned = self._spawn_next()
        return StepResult(moved=False, locked=True, lines_cleared=lines, game_over=not spawned)

    def on_tick(self) -> StepResult:
        """Advance the gravity clock by one tick."""
        self._ensure_running()
        self.ticks += 1
        self.gravity_counter += 1
        if self.gravity_counter < self.config.gravity_interval:
            return StepResult()
        self.gravity_counter = 0
        if self.controller.move(0, 1):
            return StepResult(moved=True)
        self.controller.lock()
        return self._settle()

    def on_input(self, command: Command | int) -> StepResult:
        self._ensure_running()
        command = Command(command)
        ctl = self.controller
        if command is Command.MOVE_LEFT:
            return StepResult(moved=ctl.move(-1, 0))
        if command is Command.MOVE_RIGHT:
            return StepResult(moved=ctl.move(1, 0))
        if command is Command.SOFT_DROP:
            return StepResult(moved=ctl.move(0, 1))
        if command is Command.ROTATE_CW:
            return StepResult(moved=ctl.rotate(1))
        if command is Command.ROTATE_CCW:
            return StepResult(moved=ctl.rotate(-1))
        # HARD_DROP
        ctl.hard_drop()
        return self._settle()

    def snapshot(self) -> Snapshot:
        piece = self.controller.piece
        return Snapshot(
            grid=self.board.visible_state(),
            hidden_grid=self.board.hidden_state(),
            active_cells=self.controller.active_cells(),
            active_kind=piece.kind if piece else None,
            active_rotation=piece.rotation if piece else None,
            active_position=(piece.col, piece.row) if piece else None,
            ghost_cells=self.controller.ghost_cells(),
            next_pieces=tuple(self.spawner.preview()),
            state=self.state,
            lines_cleared_total=self.lines_cleared_total,
            pieces_locked=self.pieces_locked,
            ticks=self.ticks,
        )

    def get_state(self, include_hidden: bool = False) -> np.ndarray:
        """Grid copy with the falling piece drawn as negative tags.

        With ``include_hidden`` the rows above row 0 are stacked on top, so
        cells locked off-screen stay observable.
        """
        if include_hidden:
            state = self.board.full_state()
            offset = self.board.hidden_rows
        else:
            state = self.board.visible_state()
            offset = 0
        if self.controller.piece is not None and not self.game_over:
            kind = int(self.controller.piece.kind)
            for col, row in self.controller.active_cells():
                if 0 <= row + offset < state.shape[0]:
                    # Use negative to indicate falling piece overlay
                    state[row + offset, col] = -kind
        return state
