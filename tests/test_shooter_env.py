"""Tests for the Gymnasium adapter."""

from __future__ import annotations

import random

import numpy as np
import pytest

from starfall.difficulty import Difficulty
from starfall.entities import EnemyProjectile
from starfall.play import main, run_random_episodes
from starfall.shooter_env import ShooterEnv


@pytest.fixture
def env() -> ShooterEnv:
    e = ShooterEnv(difficulty="normal")
    yield e
    e.close()


class TestSpaces:
    def test_reset_observation(self, env: ShooterEnv) -> None:
        obs, info = env.reset(seed=0)
        assert obs.shape == env.observation_space.shape
        assert obs.dtype == np.float32
        assert env.observation_space.contains(obs)
        assert info["score"] == 0 and info["level"] == 1 and info["health"] == 3

    def test_observation_stays_in_bounds(self, env: ShooterEnv) -> None:
        env.reset(seed=1)
        env.action_space.seed(1)
        for _ in range(600):
            obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
            assert env.observation_space.contains(obs)
            assert isinstance(reward, float)
            if terminated or truncated:
                break

    def test_invalid_action(self, env: ShooterEnv) -> None:
        env.reset(seed=0)
        with pytest.raises(AssertionError):
            env.step([3, 0, 0])


class TestDynamics:
    def test_action_moves_player(self, env: ShooterEnv) -> None:
        env.reset(seed=0)
        x = env.sim.player.x
        env.step([1, 0, 0])  # left
        assert env.sim.player.x == x - env.sim.player.speed

    def test_virtual_clock_advances(self, env: ShooterEnv) -> None:
        env.reset(seed=0)
        for _ in range(19):
            env.step([0, 0, 1])
        # 19 frames of 1000/60 ms is just past the 300ms cooldown
        assert env.sim.stats["shots_fired"] == 1

    def test_truncation(self) -> None:
        env = ShooterEnv(max_steps=5)
        env.reset(seed=0)
        results = [env.step([0, 0, 0]) for _ in range(5)]
        assert [r[3] for r in results] == [False] * 4 + [True]

    def test_reset_with_difficulty_option(self, env: ShooterEnv) -> None:
        env.reset(seed=0, options={"difficulty": "hard"})
        assert env.sim.difficulty is Difficulty.HARD

    def test_seeded_runs_are_identical(self) -> None:
        def rollout(seed):
            env = ShooterEnv(difficulty="hard")
            obs, _ = env.reset(seed=seed)
            trace = [obs]
            for i in range(300):
                obs, *_ = env.step([i % 3, (i // 3) % 3, i % 2])
                trace.append(obs)
            return np.stack(trace)

        np.testing.assert_array_equal(rollout(5), rollout(5))

    def test_seed_only_touches_simulation_rng(self, env: ShooterEnv) -> None:
        py_state = random.getstate()
        np_state = np.random.get_state()

        env.reset(seed=9)
        first = [env.sim.rng.random() for _ in range(3)]
        env.reset(seed=9)
        assert [env.sim.rng.random() for _ in range(3)] == first

        assert random.getstate() == py_state
        np.testing.assert_array_equal(np.random.get_state()[1], np_state[1])

    def test_global_rng_does_not_affect_rollout(self) -> None:
        def rollout(global_seed):
            random.seed(global_seed)
            np.random.seed(global_seed)
            env = ShooterEnv(difficulty="hard")
            env.reset(seed=21)
            for i in range(400):
                env.step([i % 3, 0, 1])
            return [(e.x, e.size, e.shoot_interval) for e in env.sim.enemies], env.sim.stats

        assert rollout(1) == rollout(2)


class TestReward:
    def test_kill_rewarded(self, env: ShooterEnv) -> None:
        from starfall.entities import Enemy, Projectile

        env.reset(seed=0)
        env.sim.projectiles.append(Projectile(x=100, y=100))
        env.sim.enemies.append(Enemy(x=95, y=95, size=30, speed=2, shoot_interval=10_000))
        _, reward, *_ = env.step([0, 0, 0])
        assert reward == pytest.approx(1.0 + 0.001)

    def test_death_penalised(self, env: ShooterEnv) -> None:
        from starfall.entities import Enemy

        env.reset(seed=0)
        env.sim.player.health = 1
        env.sim.enemies.append(Enemy(x=410, y=540, size=30, speed=2, shoot_interval=10_000))
        _, reward, terminated, _, info = env.step([0, 0, 0])
        assert terminated is True
        assert info["health"] == 0
        assert reward == pytest.approx(-1.0 + 0.001 - 5.0)


class TestPlay:
    def test_random_episodes(self, capsys) -> None:
        results = run_random_episodes(n_episodes=2, difficulty="easy", seed=3, max_steps=50)
        assert len(results) == 2
        assert all("score" in r for r in results)
        assert "Mean return" in capsys.readouterr().out

    def test_cli_random(self, capsys) -> None:
        main(["random", "--episodes", "1", "--max-steps", "20", "--seed", "1"])
        assert "Episode 1" in capsys.readouterr().out

    def test_cli_rejects_unknown_difficulty(self) -> None:
        with pytest.raises(SystemExit):
            main(["random", "--difficulty", "nightmare"])


class TestObservation:
    def test_bullet_measured_from_its_center(self, env: ShooterEnv) -> None:
        env.reset(seed=0)
        b = EnemyProjectile(x=100, y=100, vx=0, vy=4)
        env.sim.enemy_projectiles.append(b)
        obs = env._get_obs()

        px, py = env.sim.player.center
        bx, by = b.center
        start = 5 + env.k_enemies * 3
        assert obs[start] == pytest.approx((bx - px) / env.sim.width, abs=1e-6)
        assert obs[start + 1] == pytest.approx((by - py) / env.sim.height, abs=1e-6)
        assert obs[start + 3] == pytest.approx(1.0)

    def test_nearest_bullet_first(self, env: ShooterEnv) -> None:
        env.reset(seed=0)
        far = EnemyProjectile(x=10, y=10, vx=0, vy=1)
        near = EnemyProjectile(x=420, y=500, vx=0, vy=1, width=2, height=2)
        env.sim.enemy_projectiles.extend([far, near])
        obs = env._get_obs()

        px, _ = env.sim.player.center
        start = 5 + env.k_enemies * 3
        assert obs[start] == pytest.approx((near.center[0] - px) / env.sim.width, abs=1e-6)
