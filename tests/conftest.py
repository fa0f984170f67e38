"""Ensure the benchrand package is importable for local pytest runs."""

import random
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from benchrand import Xoroshiro128Plus


class ScriptedRng:
    """Stand-in generator replaying fixed doubles, counting how many were used."""

    def __init__(self, values):
        self._values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self._values[self.calls]
        self.calls += 1
        return value


class CountingRng:
    """Wraps a real generator and counts draws."""

    def __init__(self, rng):
        self._rng = rng
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self._rng.random()


@pytest.fixture
def rng():
    return Xoroshiro128Plus.from_source(random.Random(20240517))
