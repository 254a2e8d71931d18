"""
ShooterEnv - Gymnasium adapter around the Starfall simulation
-------------------------------------------------------------
- Same rules as the windowed game; time advances by a fixed virtual
  frame on every step instead of a wall clock
- MultiDiscrete action space: [horizontal(3), vertical(3), fire(2)]
- Vector observation: player state + K nearest enemies + M nearest enemy bullets

Quick test:
    python -m starfall.play random
"""

from __future__ import annotations

import random
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .configs.game_config import ENV_CONFIG
from .simulation import Simulation, WorldSnapshot
from .utils import clamp, seed_rng

# action index -> control
HORIZONTAL = (None, "left", "right")
VERTICAL = (None, "up", "down")


class ShooterEnv(gym.Env):
    """Headless Starfall environment for agents and scripted runs"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        difficulty: str = ENV_CONFIG["difficulty"],
        frame_ms: float = ENV_CONFIG["frame_ms"],
        max_steps: int = ENV_CONFIG["max_steps"],
        k_enemies: int = ENV_CONFIG["k_enemies"],
        m_bullets: int = ENV_CONFIG["m_bullets"],
        sim_config: Optional[Dict] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode

        self.sim = Simulation(difficulty, config=sim_config, rng=random.Random())
        self.difficulty = difficulty
        self.frame_ms = frame_ms
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.m_bullets = m_bullets

        self.action_space = spaces.MultiDiscrete([3, 3, 2])

        # Player: pos(2) health(1) cooldown(1) level progress(1)
        # Each enemy: rel pos(2) size(1)
        # Each enemy bullet: rel pos(2) vel(2)
        obs_dim = 5 + (self.k_enemies * 3) + (self.m_bullets * 4)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._now = 0.0
        self._step_count = 0
        self._snapshot: WorldSnapshot = self.sim.snapshot()

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_rng(self.sim.rng, seed)

        difficulty = (options or {}).get("difficulty", self.difficulty)
        self.sim.start(difficulty)
        self.difficulty = difficulty

        self._now = 0.0
        self._step_count = 0
        self._snapshot = self.sim.snapshot()
        return self._get_obs(), self._get_info()

    def step(self, action):
        h, v, fire = int(action[0]), int(action[1]), int(action[2])
        assert 0 <= h < 3 and 0 <= v < 3 and 0 <= fire < 2, f"Invalid action: {action}"

        keys = {k for k in (HORIZONTAL[h], VERTICAL[v]) if k}
        if fire:
            keys.add("fire")

        prev_score = self.sim.score
        prev_health = self.sim.player.health

        self._now += self.frame_ms
        self._snapshot = self.sim.step(keys, self._now)

        reward = self._compute_reward(
            self._snapshot.score - prev_score, prev_health - self._snapshot.health
        )

        terminated = self._snapshot.game_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        sim = self.sim
        cfg = sim.config
        p = sim.player
        W, H = sim.width, sim.height
        px, py = p.center

        cd_span = max(1e-6, cfg["initial_shoot_cooldown"] - cfg["min_shoot_cooldown"])
        cooldown = (p.shoot_cooldown - cfg["min_shoot_cooldown"]) / cd_span

        obs_parts = [
            (p.x / max(1, W - p.width)) * 2 - 1,
            (p.y / max(1, H - p.height)) * 2 - 1,
            p.health / cfg["player_health"] * 2 - 1,
            clamp(cooldown * 2 - 1, -1, 1),
            sim.level_progress * 2 - 1,
        ]

        # Enemies: top-K nearest
        enemies_sorted = sorted(
            sim.enemies,
            key=lambda e: (e.center[0] - px) ** 2 + (e.center[1] - py) ** 2
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                ex, ey = e.center
                obs_parts += [
                    clamp((ex - px) / W, -1, 1),
                    clamp((ey - py) / H, -1, 1),
                    clamp(e.size / cfg["max_size"], 0, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        # Enemy bullets: top-M nearest
        speed = max(1e-6, sim.difficulty.profile.bullet_speed)
        bullets_sorted = sorted(
            sim.enemy_projectiles,
            key=lambda b: (b.center[0] - px) ** 2 + (b.center[1] - py) ** 2
        )
        for i in range(self.m_bullets):
            if i < len(bullets_sorted):
                b = bullets_sorted[i]
                bx, by = b.center
                obs_parts += [
                    clamp((bx - px) / W, -1, 1),
                    clamp((by - py) / H, -1, 1),
                    clamp(b.vx / speed, -1, 1),
                    clamp(b.vy / speed, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, score_gain: int, health_lost: int) -> float:
        R_KILL = 1.0  # per score_per_kill points
        R_DAMAGE = 1.0
        R_SURVIVE = 0.001
        R_DEATH = 5.0

        reward = R_KILL * score_gain / self.sim.config["score_per_kill"]
        reward -= R_DAMAGE * health_lost
        reward += R_SURVIVE

        if self._snapshot.game_over:
            reward -= R_DEATH

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.sim.score,
            "level": self.sim.level,
            "health": self.sim.player.health,
            "num_enemies": len(self.sim.enemies),
            "num_enemy_bullets": len(self.sim.enemy_projectiles),
            "step": self._step_count,
            **self.sim.stats,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            # Only import arcade (and open a display) when actually rendering
            from .window import ShooterWindow
            self._window = ShooterWindow(self.sim, self.difficulty)

        self._window.show(self._snapshot)
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None
