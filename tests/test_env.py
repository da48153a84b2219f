import gymnasium as gym
import numpy as np

import tetris_core.env  # noqa: F401
from tetris_core.env.tetris_env import NOOP, TetrisEnv
from tetris_core.game import Command, GameConfig


def test_reset_and_noop_step():
    env = TetrisEnv()
    obs, info = env.reset(seed=0)
    assert obs.shape == (22, 10)
    assert env.observation_space.contains(obs)
    assert info["pieces_locked"] == 0

    obs, reward, terminated, truncated, info = env.step(NOOP)
    assert reward == 0.0
    assert not terminated and not truncated
    assert env.game.ticks == 1


def test_hard_drops_eventually_terminate():
    env = TetrisEnv()
    env.reset(seed=1)
    terminated = False
    for _ in range(500):
        _, _, terminated, _, info = env.step(int(Command.HARD_DROP))
        if terminated:
            break
    assert terminated
    assert info["pieces_locked"] > 0
    _, reward, terminated, _, _ = env.step(NOOP)
    assert terminated and reward == 0.0


def test_seeded_reset_is_reproducible():
    a, b = TetrisEnv(), TetrisEnv()
    a.reset(seed=123)
    b.reset(seed=123)
    for _ in range(20):
        assert a.game.snapshot().active_kind is b.game.snapshot().active_kind
        a.step(int(Command.HARD_DROP))
        b.step(int(Command.HARD_DROP))


def test_rgb_render():
    env = TetrisEnv(render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert img.shape == (264, 120, 3)
    assert img.dtype == np.uint8


def test_registered_env():
    env = gym.make("Tetris-10x20-v0")
    obs, _ = env.reset(seed=0)
    obs, *_ = env.step(env.action_space.sample())
    assert obs.shape == (22, 10)
    env.close()


def test_reset_leaves_callers_config_alone():
    config = GameConfig(gravity_interval=5)
    env = TetrisEnv(config)
    env.reset(seed=3)
    env.reset()
    assert config.random_seed is None
    assert env.game.config.random_seed is not None
    assert env.game.config.gravity_interval == 5


def test_observation_includes_hidden_rows():
    env = TetrisEnv()
    obs, _ = env.reset(seed=0)
    hidden = env.game.config.hidden_rows
    assert np.array_equal(obs[hidden:], env.game.get_state())
    assert (obs < 0).sum() == 4
