"""Starfall - frame-driven 2D arcade shooter simulation"""

from .difficulty import Difficulty, DifficultyProfile
from .simulation import Simulation, WorldSnapshot, CONTROLS
from .frame_loop import FrameLoop, InputState
from .shooter_env import ShooterEnv

__all__ = [
    'Difficulty', 'DifficultyProfile', 'Simulation', 'WorldSnapshot', 'CONTROLS',
    'FrameLoop', 'InputState', 'ShooterEnv',
]
