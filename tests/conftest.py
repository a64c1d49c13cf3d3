"""Shared fixtures and deterministic random sources."""

import pytest
import numpy as np


class FixedRandom:
    """Random source that always lands on the same fraction of the range.

    With the default fraction of 0.5, uniform(-1, 1) returns 0, so unit-ball
    rejection sampling accepts the origin on its first draw.
    """

    def __init__(self, fraction: float = 0.5):
        self.fraction = fraction

    def random(self) -> float:
        return self.fraction

    def uniform(self, low: float = 0.0, high: float = 1.0) -> float:
        return low + (high - low) * self.fraction


class ScriptedRandom:
    """Random source that replays queued values, ignoring requested bounds."""

    def __init__(self, uniforms=(), randoms=()):
        self.uniforms = list(uniforms)
        self.randoms = list(randoms)

    def random(self) -> float:
        return self.randoms.pop(0)

    def uniform(self, low: float = 0.0, high: float = 1.0) -> float:
        return self.uniforms.pop(0)


class ForbiddenRandom:
    """Random source that fails the test if anything draws from it."""

    def random(self) -> float:
        raise AssertionError("random source should not be used")

    def uniform(self, low: float = 0.0, high: float = 1.0) -> float:
        raise AssertionError("random source should not be used")


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def fixed_rng():
    return FixedRandom()
