"""Shared fixtures for Starfall tests."""

from __future__ import annotations

import random

import pytest

from starfall.simulation import Simulation


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 0.0) -> None:
        self.t = start

    def __call__(self) -> float:
        return self.t

    def advance(self, seconds: float) -> None:
        self.t += seconds


@pytest.fixture
def sim() -> Simulation:
    """Normal-difficulty simulation with a seeded rng."""
    return Simulation("normal", rng=random.Random(0))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
