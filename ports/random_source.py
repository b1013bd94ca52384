"""
Port: RandomSource
Responsibility: the only source of randomness used while rolling dice.
"""
from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    def roll(self, sides: int) -> int:
        """
        Returns a uniformly distributed integer in [1, sides] (sides >= 1).
        Two sources seeded identically must return identical sequences.
        """
        ...
