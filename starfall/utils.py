"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Tuple, Optional


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def aim_velocity(from_x: float, from_y: float, to_x: float, to_y: float,
                 speed: float) -> Tuple[float, float]:
    """Velocity of length `speed` pointing from one point towards another"""
    angle = math.atan2(to_y - from_y, to_x - from_x)
    return math.cos(angle) * speed, math.sin(angle) * speed


def rects_overlap(ax, ay, aw, ah, bx, by, bw, bh) -> bool:
    """Check if two axis-aligned rectangles overlap (touching edges don't count)"""
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def seed_rng(rng: random.Random, seed: Optional[int]):
    """Seed a simulation's own generator; the global `random` state is left alone"""
    if seed is None:
        return
    rng.seed(seed)
