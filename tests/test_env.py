"""Tests for the Gymnasium environment."""

import gymnasium as gym
import numpy as np

import netris.env  # noqa: F401
from netris.game import Action


def test_reset_and_spaces():
    env = gym.make("Netris-v0")
    obs, info = env.reset(seed=0)
    assert obs.shape == (20, 10)
    assert env.observation_space.contains(obs)
    assert env.action_space.n == len(Action)
    assert info["rows_cleared_total"] == 0
    env.close()


def test_repeated_drops_terminate():
    env = gym.make("Netris-v0")
    env.reset(seed=1)
    terminated = False
    for _ in range(200):
        obs, reward, terminated, truncated, info = env.step(int(Action.DROP))
        assert reward == 0.0
        if terminated:
            break
    assert terminated
    env.close()


def test_rgb_render():
    env = gym.make("Netris-v0", render_mode="rgb_array")
    env.reset(seed=2)
    img = env.render()
    assert img.shape == (240, 120, 3)
    assert img.dtype == np.uint8
    env.close()


def test_random_agent_runs():
    from netris.rl.random_agent import run_random

    total = run_random(steps=50, seed=0)
    assert total >= 0.0
