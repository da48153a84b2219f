from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_core.game import Command, GameConfig, GameEngine, TetrominoType
from tetris_core.visualization.palette import color_for_value


NOOP = len(Command)


class TetrisEnv(gym.Env):
    """Drives a :class:`GameEngine` one command per step.

    Actions (7 total): the six engine commands by value, plus ``NOOP`` (6)
    which only lets time pass. After the command, ``ticks_per_step`` gravity
    ticks are applied. Reward is the number of lines cleared during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        ticks_per_step: int = 1,
    ) -> None:
        super().__init__()
        # Private copy: reseeding on reset must not touch the caller's config
        self.game = GameEngine(replace(config) if config is not None else None)
        self.render_mode = render_mode
        self.ticks_per_step = int(ticks_per_step)

        h = self.game.config.hidden_rows + self.game.config.board_height
        w = self.game.config.board_width
        k = len(TetrominoType)
        # Hidden rows on top, then visible rows. Locked cells are positive
        # tags, the falling piece is drawn negative
        self.observation_space = spaces.Box(low=-k, high=k, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Command) + 1)

    def _get_obs(self) -> np.ndarray:
        return self.game.get_state(include_hidden=True)

    def _get_info(self, accepted: bool = False) -> Dict[str, Any]:
        return {
            "lines_cleared_total": self.game.lines_cleared_total,
            "pieces_locked": self.game.pieces_locked,
            "accepted": accepted,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        # Piece sequence follows the env RNG, so a seeded reset replays exactly
        self.game.config = replace(self.game.config, random_seed=int(self.np_random.integers(0, 2**31 - 1)))
        self.game.reset()
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        action = int(action)
        if self.game.game_over:
            return self._get_obs(), 0.0, True, False, self._get_info()

        lines = 0
        accepted = False
        if action != NOOP:
            result = self.game.on_input(Command(action))
            accepted = result.moved or result.locked
            lines += result.lines_cleared
        for _ in range(self.ticks_per_step):
            if self.game.game_over:
                break
            lines += self.game.on_tick().lines_cleared

        terminated = bool(self.game.game_over)
        return self._get_obs(), float(lines), terminated, False, self._get_info(accepted)

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self._get_obs()
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(grid[y, x]))
            return img
        return None

    def close(self) -> None:
        pass
