"""
Game entity dataclasses

All coordinates are canvas pixels with the origin at the top-left and y
growing downward. Positions are the top-left corner of each rectangle.
Defaults come from configs.game_config so there is a single source.
"""

from dataclasses import dataclass

from .configs.game_config import PLAYER_CONFIG, PROGRESSION_CONFIG, PROJECTILE_CONFIG


@dataclass
class Player:
    """Player ship controlled by the host's input"""
    x: float
    y: float
    width: float = PLAYER_CONFIG["player_width"]
    height: float = PLAYER_CONFIG["player_height"]
    speed: float = PLAYER_CONFIG["player_speed"]  # px per frame
    health: int = PLAYER_CONFIG["player_health"]
    shoot_cooldown: float = PROGRESSION_CONFIG["initial_shoot_cooldown"]  # ms between shots
    last_shot: float = 0.0  # ms timestamp

    @property
    def center(self):
        return self.x + self.width / 2, self.y + self.height / 2


@dataclass
class Projectile:
    """Player bullet travelling straight up"""
    x: float
    y: float
    width: float = PROJECTILE_CONFIG["bullet_width"]
    height: float = PROJECTILE_CONFIG["bullet_height"]
    speed: float = PROJECTILE_CONFIG["bullet_speed"]  # px per frame


@dataclass
class Enemy:
    """Enemy that descends and fires at the player"""
    x: float
    y: float
    size: float
    speed: float  # px per frame, downward
    shoot_interval: float  # ms
    last_shot: float = 0.0  # ms timestamp

    @property
    def width(self) -> float:
        return self.size

    @property
    def height(self) -> float:
        return self.size

    @property
    def center(self):
        return self.x + self.size / 2, self.y + self.size / 2


@dataclass
class EnemyProjectile:
    """Enemy bullet with a fixed velocity aimed at the player when fired"""
    x: float
    y: float
    vx: float
    vy: float
    width: float = PROJECTILE_CONFIG["enemy_bullet_width"]
    height: float = PROJECTILE_CONFIG["enemy_bullet_height"]

    @property
    def center(self):
        return self.x + self.width / 2, self.y + self.height / 2
