"""
Simulation - the per-frame game logic of Starfall
-------------------------------------------------
- Player moves on a bounded playfield and fires upward (with cooldown)
- Enemies spawn above the top edge, descend, and fire aimed shots
- Axis-aligned rectangle collisions, scoring and leveling
- Game over once the player's health reaches zero

The simulation never draws and never reads a clock itself: the host calls
`step(keys, now)` once per rendered frame with the held controls and a
monotonic timestamp in milliseconds, then draws the returned snapshot.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .configs.game_config import build_config
from .difficulty import Difficulty
from .entities import Enemy, EnemyProjectile, Player, Projectile
from .utils import aim_velocity, clamp, rects_overlap

CONTROLS = frozenset({"left", "right", "up", "down", "fire"})


@dataclass(frozen=True)
class WorldSnapshot:
    """Read-only copy of everything the host needs to draw a frame"""
    player: Player
    projectiles: Tuple[Projectile, ...]
    enemies: Tuple[Enemy, ...]
    enemy_projectiles: Tuple[EnemyProjectile, ...]
    score: int
    level: int
    health: int
    game_over: bool
    session_id: int


class Simulation:
    """Owns all mutable game state for one playfield"""

    def __init__(
        self,
        difficulty: Union[str, Difficulty] = "normal",
        config: Optional[Dict] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = build_config(config)
        self.width = self.config["width"]
        self.height = self.config["height"]
        self.rng = rng or random.Random()

        self.difficulty = Difficulty.from_name(difficulty)

        # World state
        self.player: Player = None  # type: ignore
        self.projectiles: List[Projectile] = []
        self.enemies: List[Enemy] = []
        self.enemy_projectiles: List[EnemyProjectile] = []

        # Session state
        self.score = 0
        self.level = 1
        self.next_level_score = self.config["first_level_score"]
        self.game_over = False
        self.session_id = 0
        self.last_spawn = 0.0

        # Per-session counters, exposed to agents and the CLI
        self.stats: Dict[str, int] = {}

        self.reset()

    # ----------------------------
    # Session control
    # ----------------------------

    def start(self, difficulty: Union[str, Difficulty]):
        self.difficulty = Difficulty.from_name(difficulty)
        self.reset()

    def reset(self):
        """Fresh player, empty world, score 0, level 1; invalidates the previous session"""
        cfg = self.config
        self.player = Player(
            x=self.width / 2,
            y=self.height - cfg["bottom_offset"],
            width=cfg["player_width"],
            height=cfg["player_height"],
            speed=cfg["player_speed"],
            health=cfg["player_health"],
            shoot_cooldown=cfg["initial_shoot_cooldown"],
        )
        self.projectiles = []
        self.enemies = []
        self.enemy_projectiles = []

        self.score = 0
        self.level = 1
        self.next_level_score = cfg["first_level_score"]
        self.game_over = False
        self.last_spawn = 0.0
        self.stats = {"shots_fired": 0, "enemies_spawned": 0, "enemies_destroyed": 0, "hits_taken": 0}

        # Any frame loop still holding the old id becomes a no-op
        self.session_id += 1

    # ----------------------------
    # Frame update
    # ----------------------------

    def step(self, keys: Iterable[str], now: float, session: Optional[int] = None) -> WorldSnapshot:
        """
        Advance the world by one frame.

        Args:
            keys: controls currently held, a subset of CONTROLS
            now: monotonic timestamp in milliseconds
            session: session id the caller was bound to; a stale id makes
                the call a no-op
        """
        if session is not None and session != self.session_id:
            return self.snapshot()
        if self.game_over:
            return self.snapshot()

        keys = frozenset(keys)
        assert keys <= CONTROLS, f"Unknown controls: {sorted(keys - CONTROLS)}"

        self._move_player(keys)
        if "fire" in keys:
            self._shoot(now)

        self._update_projectiles()
        self._update_enemy_projectiles()
        self._spawn_logic(now)
        self._update_enemies(now)

        self._handle_collisions()

        if self.player.health <= 0:
            self.player.health = 0
            self.game_over = True

        return self.snapshot()

    def snapshot(self) -> WorldSnapshot:
        return WorldSnapshot(
            player=replace(self.player),
            projectiles=tuple(replace(p) for p in self.projectiles),
            enemies=tuple(replace(e) for e in self.enemies),
            enemy_projectiles=tuple(replace(b) for b in self.enemy_projectiles),
            score=self.score,
            level=self.level,
            health=self.player.health,
            game_over=self.game_over,
            session_id=self.session_id,
        )

    # ----------------------------
    # Core mechanics
    # ----------------------------

    def _move_player(self, keys: frozenset):
        p = self.player
        if "left" in keys:
            p.x -= p.speed
        if "right" in keys:
            p.x += p.speed
        if "up" in keys:
            p.y -= p.speed
        if "down" in keys:
            p.y += p.speed

        # Keep in bounds
        p.x = clamp(p.x, 0, self.width - p.width)
        p.y = clamp(p.y, 0, self.height - p.height)

    def _shoot(self, now: float):
        p = self.player
        if now - p.last_shot <= p.shoot_cooldown:
            return

        bw = self.config["bullet_width"]
        self.projectiles.append(Projectile(
            x=p.x + p.width / 2 - bw / 2,
            y=p.y,
            width=bw,
            height=self.config["bullet_height"],
            speed=self.config["bullet_speed"],
        ))
        p.last_shot = now
        self.stats["shots_fired"] += 1

    def _update_projectiles(self):
        for b in self.projectiles:
            b.y -= b.speed
        self.projectiles = [b for b in self.projectiles if b.y + b.height >= 0]

    def _update_enemy_projectiles(self):
        for b in self.enemy_projectiles:
            b.x += b.vx
            b.y += b.vy
        self.enemy_projectiles = [b for b in self.enemy_projectiles if self._on_playfield(b)]

    def _on_playfield(self, b) -> bool:
        return b.x + b.width >= 0 and b.x <= self.width and b.y + b.height >= 0 and b.y <= self.height

    def _spawn_logic(self, now: float):
        if now - self.last_spawn > self.difficulty.profile.spawn_interval:
            self._spawn_enemy(now)
            self.last_spawn = now

    def _spawn_enemy(self, now: float):
        profile = self.difficulty.profile
        size = self.rng.uniform(self.config["min_size"], self.config["max_size"])
        x = self.rng.uniform(0, self.width - size)

        # Somewhere between one and two base intervals between shots
        interval = profile.shoot_interval + self.rng.uniform(0, profile.shoot_interval)

        self.enemies.append(Enemy(
            x=x, y=-size, size=size, speed=profile.enemy_speed,
            shoot_interval=interval, last_shot=now,
        ))
        self.stats["enemies_spawned"] += 1

    def _update_enemies(self, now: float):
        px, py = self.player.center
        for e in self.enemies:
            e.y += e.speed
            if now - e.last_shot > e.shoot_interval and e.y > 0:
                self._enemy_fire(e, px, py)
                e.last_shot = now

        self.enemies = [e for e in self.enemies if e.y <= self.height]

    def _enemy_fire(self, e: Enemy, target_x: float, target_y: float):
        ex, ey = e.center
        vx, vy = aim_velocity(ex, ey, target_x, target_y, self.difficulty.profile.bullet_speed)
        w = self.config["enemy_bullet_width"]
        h = self.config["enemy_bullet_height"]
        self.enemy_projectiles.append(EnemyProjectile(x=ex - w / 2, y=ey - h / 2, vx=vx, vy=vy, width=w, height=h))

    @staticmethod
    def is_colliding(a, b) -> bool:
        return rects_overlap(a.x, a.y, a.width, a.height, b.x, b.y, b.width, b.height)

    def _handle_collisions(self):
        # Player bullets vs enemies: each bullet destroys at most one enemy
        for i in range(len(self.projectiles) - 1, -1, -1):
            bullet = self.projectiles[i]
            for j in range(len(self.enemies) - 1, -1, -1):
                if self.is_colliding(bullet, self.enemies[j]):
                    del self.projectiles[i]
                    del self.enemies[j]
                    self.score += self.config["score_per_kill"]
                    self.stats["enemies_destroyed"] += 1
                    self._check_level_up()
                    break

        # Player vs enemies: at most one hit per frame
        for j, e in enumerate(self.enemies):
            if self.is_colliding(self.player, e):
                del self.enemies[j]
                self._damage_player()
                break

        # Player vs enemy bullets: at most one hit per frame
        for j, b in enumerate(self.enemy_projectiles):
            if self.is_colliding(self.player, b):
                del self.enemy_projectiles[j]
                self._damage_player()
                break

    def _damage_player(self):
        self.player.health = max(0, self.player.health - 1)
        self.stats["hits_taken"] += 1

    def _check_level_up(self):
        if self.score < self.next_level_score:
            return
        self.level += 1
        self.next_level_score *= 2
        self.player.shoot_cooldown = max(
            self.player.shoot_cooldown - self.config["cooldown_decrement"],
            self.config["min_shoot_cooldown"],
        )

    @property
    def level_progress(self) -> float:
        """Fraction of the way from the previous threshold to the next one"""
        prev = self.next_level_score / 2 if self.level > 1 else 0
        span = self.next_level_score - prev
        return clamp((self.score - prev) / span, 0.0, 1.0)
