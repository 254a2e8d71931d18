"""
Host-side frame driver

`FrameLoop` is what a render loop calls once per display refresh. It is
bound to the simulation session that was current when it was (re)started,
so a loop left over from before a reset can never step the new game.
"""

from __future__ import annotations

import time
from typing import Callable, Optional, Union

from .difficulty import Difficulty
from .simulation import CONTROLS, Simulation, WorldSnapshot


class InputState:
    """Live map of held controls: press -> held, release -> absent"""

    def __init__(self):
        self._held = set()

    def press(self, control: str):
        assert control in CONTROLS, f"Unknown control: {control}"
        self._held.add(control)

    def release(self, control: str):
        self._held.discard(control)

    def clear(self):
        self._held.clear()

    def snapshot(self) -> frozenset:
        return frozenset(self._held)


class FrameLoop:
    def __init__(
        self,
        simulation: Simulation,
        inputs: Optional[InputState] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.simulation = simulation
        self.inputs = inputs or InputState()
        self.clock = clock
        self.session: int = simulation.session_id
        self.last_snapshot: WorldSnapshot = simulation.snapshot()

    @property
    def running(self) -> bool:
        return self.session == self.simulation.session_id and not self.simulation.game_over

    def now_ms(self) -> float:
        return self.clock() * 1000.0

    def tick(self) -> bool:
        """Step once; returns False when this loop should stop being scheduled"""
        if not self.running:
            return False
        self.last_snapshot = self.simulation.step(self.inputs.snapshot(), self.now_ms(), session=self.session)
        return not self.last_snapshot.game_over

    def start(self, difficulty: Union[str, Difficulty]):
        self.simulation.start(difficulty)
        self._rebind()

    def reset(self):
        self.simulation.reset()
        self._rebind()

    def _rebind(self):
        self.inputs.clear()
        self.session = self.simulation.session_id
        self.last_snapshot = self.simulation.snapshot()
