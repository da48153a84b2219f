"""Game module for Tetris Core.

Exports the simulation and supporting classes:
- TetrominoType: Enum of the seven piece types (catalog in ``pieces``)
- PieceSpawner / SpawnPolicy: Upcoming piece sequence
- Board: Grid representation and line clearing
- ActivePiece / PieceController: Falling piece movement and rotation
- GameEngine: Tick and command driven state machine
"""

from .pieces import TetrominoType
from .spawner import PieceSpawner, SpawnPolicy
from .grid import Board, IllegalPlacementError
from .controller import ActivePiece, PieceController
from .core import (
    Command,
    GameConfig,
    GameEngine,
    GameOverError,
    GameState,
    Snapshot,
    StepResult,
)

__all__ = [
    "TetrominoType",
    "PieceSpawner",
    "SpawnPolicy",
    "Board",
    "IllegalPlacementError",
    "ActivePiece",
    "PieceController",
    "Command",
    "GameConfig",
    "GameEngine",
    "GameOverError",
    "GameState",
    "Snapshot",
    "StepResult",
]
