from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from netris.game import Action, GameConfig, NetrisGame
from netris.game.grid import PIECE_CELL


class NetrisEnv(gym.Env):
    """Single local board driven one input event plus one fixed tick per step."""

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 5000) -> None:
        super().__init__()
        self.game = NetrisGame(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.game.bounds.height, self.game.bounds.width
        self.observation_space = spaces.Box(low=0, high=PIECE_CELL, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_info(self) -> Dict[str, Any]:
        return {
            "rows_cleared_total": self.game.rows_cleared_total,
            "chunk_size": len(self.game.chunk),
            "outcome": int(self.game.last_outcome),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        return self.game.get_state(), self._get_info()

    def step(self, action: int):
        rows_before = self.game.rows_cleared_total
        self.game.step(Action(int(action)))
        self.game.fixed_update()
        self._steps += 1

        reward = float(self.game.rows_cleared_total - rows_before)
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps
        return self.game.get_state(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self.game.get_state()
        cell = 12
        palette = np.array([(30, 30, 36), (70, 200, 120), (240, 160, 0)], dtype=np.uint8)
        img = palette[grid.astype(np.intp)]
        return np.repeat(np.repeat(img, cell, axis=0), cell, axis=1)

    def close(self) -> None:
        pass
