from typing import List

import pytest


class FakeClock:
    """Clock returning seconds that only move when told to.

    `tick` is added after every reading; `advance()` moves time explicitly.
    """

    def __init__(self, start: float = 0.0, tick: float = 0.0):
        self.now = start
        self.tick = tick
        self.readings: List[float] = []

    def __call__(self) -> float:
        value = self.now
        self.readings.append(value)
        self.now += self.tick
        return value

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingStabilizer:
    def __init__(self):
        self.calls: List[str] = []

    def stabilize(self) -> None:
        self.calls.append("stabilize")

    def restore(self) -> None:
        self.calls.append("restore")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def lines():
    return []


@pytest.fixture
def make_clock():
    return FakeClock


@pytest.fixture
def stabilizer():
    return RecordingStabilizer()
