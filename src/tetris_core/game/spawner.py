from __future__ import annotations

import random
from collections import deque
from enum import Enum
from typing import Deque, List, Optional, Tuple

from .pieces import TetrominoType


class SpawnPolicy(str, Enum):
    RANDOM = "random"  # uniform choice per spawn
    BAG = "bag"  # each of the 7 shapes once per 7 spawns


class PieceSpawner:
    """Infinite source of upcoming piece types.

    The policy is fixed at construction and applies for the whole session.
    A ``preview_size`` of upcoming pieces is kept queued so a presentation
    layer can show what comes next without advancing the sequence.
    """

    def __init__(
        self,
        policy: SpawnPolicy = SpawnPolicy.BAG,
        seed: Optional[int] = None,
        preview_size: int = 1,
    ) -> None:
        self.policy = SpawnPolicy(policy)
        self.preview_size = max(0, int(preview_size))
        self.rng = random.Random(seed)
        self._bag: List[TetrominoType] = []
        self._queue: Deque[TetrominoType] = deque()
        self._fill_queue()

    def _draw(self) -> TetrominoType:
        if self.policy is SpawnPolicy.RANDOM:
            return self.rng.choice(list(TetrominoType))
        if not self._bag:
            self._bag = list(TetrominoType)
            self.rng.shuffle(self._bag)
        return self._bag.pop()

    def _fill_queue(self) -> None:
        # Always hold at least one piece so next_piece() never draws lazily
        while len(self._queue) < max(1, self.preview_size):
            self._queue.append(self._draw())

    def next_piece(self) -> TetrominoType:
        kind = self._queue.popleft()
        self._fill_queue()
        return kind

    def preview(self) -> Tuple[TetrominoType, ...]:
        return tuple(self._queue)[: self.preview_size]
