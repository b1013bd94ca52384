"""
dice_bag.py — public library surface of dicexp.

    >>> from dice_bag import DiceBag
    >>> from adapters.random_source.seeded_rng import simple_rng
    >>> bag = DiceBag(simple_rng(42))
    >>> roll = bag.eval("3d6-4")
    >>> (roll.min, roll.max, float(roll.average))
    (-1, 14, 6.5)

parse() and evaluate() are the two pipeline stages; eval_expression()
composes them. DiceBag keeps one RandomSource for a sequence of rolls.
"""
from __future__ import annotations

from fractions import Fraction

from adapters.evaluator.ast_evaluator import ASTEvaluator, roll_dice
from adapters.expression_parser.recursive_descent_parser import RecursiveDescentParser
from contracts import DiceRoll, ExprAST
from ports.evaluator import Evaluator
from ports.expression_parser import ExpressionParser
from ports.random_source import RandomSource

# Stateless adapters — created once
_PARSER: ExpressionParser = RecursiveDescentParser()
_EVALUATOR: Evaluator = ASTEvaluator()


def parse(text: str) -> ExprAST:
    """Parses dice notation. Raises DiceSyntaxError."""
    return _PARSER.parse(text)


def evaluate(ast: ExprAST, rng: RandomSource) -> DiceRoll:
    """Rolls a parsed expression. Raises EvaluationError."""
    return _EVALUATOR.evaluate(ast, rng)


def eval_expression(text: str, rng: RandomSource) -> DiceRoll:
    """parse() followed by evaluate(); raises either error kind."""
    return evaluate(parse(text), rng)


class DiceBag:
    """Evaluates RPG dice notation expressions (e.g. "2d6+3") with one owned RNG.

    Args:
        rng: The random source used for every roll made through this bag.
    """

    def __init__(self, rng: RandomSource) -> None:
        self.rng = rng

    def roll(self, n: int, d: int, m: int = 0) -> int:
        """Rolls n d-sided dice and adds m to the sum."""
        return roll_dice(self.rng, n, d) + m

    def eval(self, dice_expression: str) -> DiceRoll:
        return eval_expression(dice_expression, self.rng)

    def eval_total(self, dice_expression: str) -> int:
        return self.eval(dice_expression).total

    def eval_min(self, dice_expression: str) -> int:
        return self.eval(dice_expression).min

    def eval_max(self, dice_expression: str) -> int:
        return self.eval(dice_expression).max

    def eval_ave(self, dice_expression: str) -> Fraction:
        return self.eval(dice_expression).average
