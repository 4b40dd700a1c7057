from __future__ import annotations

import gymnasium as gym
import numpy as np

import tetris_rl.env  # noqa: F401
from tetris_rl.env.tetris_env import ACTIONS, TetrisEnv
from tetris_rl.game import Command, GameConfig
from tetris_rl.rl.random_agent import run_random


def test_registered_env_reset_and_step():
    env = gym.make("Tetris-10x20-v0")
    obs, info = env.reset(seed=0)
    assert obs.shape == (20, 10)
    assert obs.dtype == np.int8
    assert env.observation_space.contains(obs)
    assert info["score"] == 0

    obs, reward, terminated, truncated, info = env.step(0)
    assert env.observation_space.contains(obs)
    assert reward == 0.0
    assert not terminated and not truncated
    env.close()


def test_hard_drops_eventually_top_out():
    env = TetrisEnv()
    env.reset(seed=1)
    hard_drop = ACTIONS.index(Command.HARD_DROP)
    terminated = False
    for _ in range(200):
        _, reward, terminated, _, info = env.step(hard_drop)
        assert reward >= 0
        if terminated:
            break
    assert terminated
    assert info["pieces_locked"] > 0


def test_truncates_at_step_limit():
    env = TetrisEnv(max_episode_steps=3)
    env.reset(seed=2)
    results = [env.step(0) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]


def test_reset_with_same_seed_is_reproducible():
    env = TetrisEnv()
    first, _ = env.reset(seed=5)
    env.step(ACTIONS.index(Command.HARD_DROP))
    again, _ = env.reset(seed=5)
    assert np.array_equal(first, again)


def test_rgb_render_shape():
    env = TetrisEnv(GameConfig(), render_mode="rgb_array", cell_size=4)
    env.reset(seed=0)
    img = env.render()
    assert img.shape == (80, 40, 3)
    assert img.dtype == np.uint8


def test_random_agent_runs():
    assert isinstance(run_random(steps=50, seed=0), float)
