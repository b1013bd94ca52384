"""
Adapter: ASTEvaluator
Implements the Evaluator port — one recursive post-order walk over ExprAST.

Every node yields a DiceRoll (total, min, max, average) computed together:
  - total   consumes dice from the injected RandomSource, left before right
  - min/max use interval arithmetic; for '*' and '/' the extremes are taken
            over all four corner combinations because operands may be negative
  - average is an exact Fraction (product/quotient of expectations is valid
            because no two nodes share dice)

Integer division floors toward negative infinity. The average is the only
value computed without truncation.
"""
from __future__ import annotations

import logging
from fractions import Fraction
from typing import Callable

from contracts import (
    BinOpNode,
    DiceNode,
    DiceRoll,
    ExprAST,
    GroupNode,
    LiteralNode,
    NegateNode,
)
from errors import DivisionByZeroError, IndeterminateRangeError
from ports.random_source import RandomSource

logger = logging.getLogger("dicexp.evaluator")


def roll_dice(rng: RandomSource, count: int, sides: int) -> int:
    """Sum of `count` independent draws in [1, sides]."""
    return sum(rng.roll(sides) for _ in range(count))


def _add(l: DiceRoll, r: DiceRoll) -> DiceRoll:
    return DiceRoll(
        total=l.total + r.total,
        min=l.min + r.min,
        max=l.max + r.max,
        average=l.average + r.average,
    )


def _sub(l: DiceRoll, r: DiceRoll) -> DiceRoll:
    return DiceRoll(
        total=l.total - r.total,
        min=l.min - r.max,
        max=l.max - r.min,
        average=l.average - r.average,
    )


def _mul(l: DiceRoll, r: DiceRoll) -> DiceRoll:
    corners = [a * b for a in (l.min, l.max) for b in (r.min, r.max)]
    return DiceRoll(
        total=l.total * r.total,
        min=min(corners),
        max=max(corners),
        average=l.average * r.average,
    )


def _div(l: DiceRoll, r: DiceRoll) -> DiceRoll:
    if r.total == 0:
        raise DivisionByZeroError()
    if r.min <= 0 <= r.max:
        raise IndeterminateRangeError(r.min, r.max)
    # Floor is monotonic, so the floored extremes still sit on the corners.
    corners = [a // b for a in (l.min, l.max) for b in (r.min, r.max)]
    return DiceRoll(
        total=l.total // r.total,
        min=min(corners),
        max=max(corners),
        average=l.average / r.average,
    )


_OP_FUNCS: dict[str, Callable[[DiceRoll, DiceRoll], DiceRoll]] = {
    "+": _add,
    "-": _sub,
    "*": _mul,
    "/": _div,
}


class ASTEvaluator:
    """Rolls a parsed dice expression and derives its bounds and expected value."""

    # -- Evaluator protocol ------------------------------------------------

    def evaluate(self, ast: ExprAST, rng: RandomSource) -> DiceRoll:
        result = self._eval(ast, rng)
        logger.debug(
            "Evaluated: total=%d range=[%d, %d] average=%s",
            result.total, result.min, result.max, result.average,
        )
        return result

    # -- Private -----------------------------------------------------------

    def _eval(self, node: ExprAST, rng: RandomSource) -> DiceRoll:
        if isinstance(node, LiteralNode):
            v = node.value
            return DiceRoll(total=v, min=v, max=v, average=Fraction(v))

        if isinstance(node, DiceNode):
            n, s = node.count, node.sides
            return DiceRoll(
                total=roll_dice(rng, n, s),
                min=n,
                max=n * s,
                average=Fraction(n * (s + 1), 2),
            )

        if isinstance(node, NegateNode):
            x = self._eval(node.operand, rng)
            return DiceRoll(total=-x.total, min=-x.max, max=-x.min, average=-x.average)

        if isinstance(node, GroupNode):
            return self._eval(node.inner, rng)

        if isinstance(node, BinOpNode):
            fn = _OP_FUNCS.get(node.op)
            if fn is None:
                raise ValueError(f"Unknown operator: {node.op!r}")
            left = self._eval(node.left, rng)
            right = self._eval(node.right, rng)
            return fn(left, right)

        raise TypeError(f"Unknown AST node type: {type(node)}")
