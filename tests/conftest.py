from __future__ import annotations

from typing import Iterable, List, Tuple

import pytest

from tetris_core.game import GameConfig, GameEngine, TetrominoType


class ScriptedSpawner:
    """Hands out a fixed list of pieces, then repeats ``fill`` forever."""

    def __init__(self, kinds: Iterable[TetrominoType], fill: TetrominoType = TetrominoType.O) -> None:
        self.kinds: List[TetrominoType] = list(kinds)
        self.fill = fill

    def next_piece(self) -> TetrominoType:
        if self.kinds:
            return self.kinds.pop(0)
        return self.fill

    def preview(self) -> Tuple[TetrominoType, ...]:
        return (self.kinds[0] if self.kinds else self.fill,)


@pytest.fixture
def make_engine():
    def _make(*kinds: TetrominoType, fill: TetrominoType = TetrominoType.O, **config) -> GameEngine:
        return GameEngine(GameConfig(**config), spawner=ScriptedSpawner(kinds, fill))

    return _make
