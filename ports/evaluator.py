"""
Port: Evaluator
Responsibility: computing the rolled total, bounds and average of an AST.
"""
from typing import Protocol, runtime_checkable

from contracts import DiceRoll, ExprAST
from ports.random_source import RandomSource


@runtime_checkable
class Evaluator(Protocol):
    def evaluate(self, ast: ExprAST, rng: RandomSource) -> DiceRoll:
        """
        Walks the AST once, post-order, left child before right child.
        Returns DiceRoll with:
          - total: the sampled result (draws dice from rng)
          - min, max: achievable bounds (independent of rng)
          - average: exact expected value (Fraction)
        Raises DivisionByZeroError when a divisor rolls zero.
        Raises IndeterminateRangeError when a divisor's range spans zero.
        """
        ...
