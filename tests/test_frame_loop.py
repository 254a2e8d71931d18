"""Unit tests for InputState and FrameLoop."""

from __future__ import annotations

import pytest

from starfall.entities import Enemy
from starfall.frame_loop import FrameLoop, InputState
from starfall.simulation import Simulation


class TestInputState:
    def test_press_and_release(self) -> None:
        inputs = InputState()
        inputs.press("left")
        inputs.press("fire")
        assert inputs.snapshot() == frozenset({"left", "fire"})
        inputs.release("left")
        assert inputs.snapshot() == frozenset({"fire"})

    def test_release_unheld_is_harmless(self) -> None:
        inputs = InputState()
        inputs.release("up")
        assert inputs.snapshot() == frozenset()

    def test_unknown_control(self) -> None:
        with pytest.raises(AssertionError):
            InputState().press("jump")

    def test_snapshot_is_frozen(self) -> None:
        inputs = InputState()
        inputs.press("down")
        snap = inputs.snapshot()
        inputs.release("down")
        assert "down" in snap


class TestFrameLoop:
    def test_tick_steps_with_held_keys(self, sim: Simulation, clock) -> None:
        loop = FrameLoop(sim, clock=clock)
        loop.inputs.press("right")
        x = sim.player.x
        assert loop.tick() is True
        assert sim.player.x == x + sim.player.speed
        assert loop.last_snapshot.player.x == sim.player.x

    def test_clock_converted_to_ms(self, sim: Simulation, clock) -> None:
        loop = FrameLoop(sim, clock=clock)
        loop.inputs.press("fire")
        clock.advance(0.301)
        loop.tick()
        assert sim.player.last_shot == pytest.approx(301)

    def test_stale_loop_stops_after_reset(self, sim: Simulation, clock) -> None:
        loop = FrameLoop(sim, clock=clock)
        loop.inputs.press("left")
        sim.reset()
        x = sim.player.x
        assert loop.running is False
        assert loop.tick() is False
        assert sim.player.x == x

    def test_only_newest_loop_drives_state(self, sim: Simulation, clock) -> None:
        old = FrameLoop(sim, clock=clock)
        sim.start("hard")
        new = FrameLoop(sim, clock=clock)
        assert old.tick() is False
        assert new.tick() is True

    def test_restart_rebinds(self, sim: Simulation, clock) -> None:
        loop = FrameLoop(sim, clock=clock)
        loop.inputs.press("fire")
        loop.start("easy")
        assert loop.running is True
        assert loop.inputs.snapshot() == frozenset()
        assert loop.last_snapshot.session_id == sim.session_id
        loop.reset()
        assert loop.running is True

    def test_stops_on_game_over(self, sim: Simulation, clock) -> None:
        loop = FrameLoop(sim, clock=clock)
        sim.player.health = 1
        sim.enemies.append(Enemy(x=410, y=540, size=30, speed=2, shoot_interval=10_000))
        assert loop.tick() is False
        assert loop.last_snapshot.game_over is True
        assert loop.running is False
        loop.reset()
        assert loop.tick() is True
