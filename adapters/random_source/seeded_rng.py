"""
Adapter: SeededRandomSource
Implements the RandomSource port on top of random.Random.

Each instance owns its own generator; nothing touches the module-level
random state. Use spawn() to hand independent, reproducible sources to
parallel workers instead of sharing one instance.
"""
from __future__ import annotations

import random
import time
from typing import Optional


class SeededRandomSource:
    """Uniform dice roller with an optional fixed seed."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._random = random.Random(seed)

    def roll(self, sides: int) -> int:
        if sides < 1:
            raise ValueError(f"A die needs at least 1 side, got {sides}")
        return self._random.randint(1, sides)

    def spawn(self) -> SeededRandomSource:
        """Child source seeded from this one; deterministic given the parent seed."""
        return SeededRandomSource(self._random.getrandbits(64))

    def __repr__(self) -> str:
        return f"SeededRandomSource(seed={self.seed!r})"


def simple_rng(seed: int) -> SeededRandomSource:
    """Random source with a fixed seed."""
    return SeededRandomSource(seed)


def new_simple_rng() -> SeededRandomSource:
    """Random source seeded from the current millisecond timestamp."""
    return SeededRandomSource(time.time_ns() // 1_000_000)
