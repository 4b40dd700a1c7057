from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_rl.game import COLORS, Command, GameConfig, TetrisGame, TetrominoType

# Index 0 lets the piece fall without input. Restart is left to reset().
ACTIONS: Tuple[Optional[Command], ...] = (
    None,
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.ROTATE,
    Command.SOFT_DROP,
    Command.HARD_DROP,
)


class TetrisEnv(gym.Env):
    """Falling-block Tetris with one gravity tick per step.

    Observation is the board with the falling piece overlaid as negative type
    ids. Reward is the change in engine score.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 10000, cell_size: int = 12) -> None:
        super().__init__()
        self.game = TetrisGame(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.cell_size = int(cell_size)

        h, w = self.game.grid.height, self.game.grid.width
        n_types = len(TetrominoType)
        self.observation_space = spaces.Box(low=-n_types, high=n_types, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(ACTIONS))

        self._steps = 0

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines_cleared_total": self.game.lines_cleared_total,
            "pieces_locked": self.game.pieces_locked,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        self.game.restart(seed)
        self._steps = 0
        return self.game.get_state(), self._get_info()

    def step(self, action):
        command = ACTIONS[int(action)]
        before = self.game.score

        if command is not None:
            self.game.apply(command)
        self.game.tick()

        self._steps += 1
        terminated = bool(self.game.game_over)
        truncated = not terminated and self._steps >= self.max_episode_steps
        reward = float(self.game.score - before)
        return self.game.get_state(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.game.get_state()
        cell = self.cell_size
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        img[:] = (30, 30, 36)
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                if v:
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = COLORS[TetrominoType(abs(v))]
        return img

    def close(self) -> None:
        pass
