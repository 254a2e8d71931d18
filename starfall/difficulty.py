"""
Difficulty profiles

The set of difficulties is closed; each one carries an immutable
profile that the simulation binds at game start.
"""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class DifficultyProfile:
    enemy_speed: float  # px per frame
    spawn_interval: float  # ms between enemy spawns
    bullet_speed: float  # px per frame
    shoot_interval: float  # base ms between enemy shots


class Difficulty(Enum):
    EASY = DifficultyProfile(enemy_speed=1.5, spawn_interval=1200, bullet_speed=3, shoot_interval=2000)
    NORMAL = DifficultyProfile(enemy_speed=2.0, spawn_interval=1000, bullet_speed=4, shoot_interval=1500)
    HARD = DifficultyProfile(enemy_speed=3.0, spawn_interval=700, bullet_speed=5, shoot_interval=1000)

    @property
    def profile(self) -> DifficultyProfile:
        return self.value

    @classmethod
    def from_name(cls, name) -> "Difficulty":
        """Look up a difficulty by its lowercase name ('easy', 'normal', 'hard')"""
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name).upper()]
        except KeyError:
            raise ValueError(f"Unknown difficulty: {name}") from None


DIFFICULTY_NAMES = [d.name.lower() for d in Difficulty]
