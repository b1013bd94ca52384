from __future__ import annotations

from fractions import Fraction

import pytest

from adapters.evaluator.ast_evaluator import ASTEvaluator
from adapters.expression_parser.recursive_descent_parser import RecursiveDescentParser
from contracts import BinOpNode, DiceNode, GroupNode, LiteralNode, NegateNode
from errors import DivisionByZeroError, EvaluationError, IndeterminateRangeError
from ports.evaluator import Evaluator


class _ScriptedRng:
    """Returns pre-recorded die results and remembers which dice were asked for."""

    def __init__(self, results: list[int]) -> None:
        self._results = list(results)
        self.requested_sides: list[int] = []

    def roll(self, sides: int) -> int:
        self.requested_sides.append(sides)
        value = self._results.pop(0)
        assert 1 <= value <= sides
        return value


def _eval(text: str, results: list[int] | None = None):
    ast = RecursiveDescentParser().parse(text)
    return ASTEvaluator().evaluate(ast, _ScriptedRng(results or []))


def test_evaluator_satisfies_port():
    assert isinstance(ASTEvaluator(), Evaluator)


def test_literal():
    roll = ASTEvaluator().evaluate(LiteralNode(value=5), _ScriptedRng([]))

    assert (roll.total, roll.min, roll.max, roll.average) == (5, 5, 5, 5)
    assert isinstance(roll.average, Fraction)


def test_dice_term_sums_draws_and_derives_bounds():
    rng = _ScriptedRng([1, 2, 3])

    roll = ASTEvaluator().evaluate(DiceNode(count=3, sides=6), rng)

    assert roll.total == 6
    assert (roll.min, roll.max) == (3, 18)
    assert roll.average == Fraction(21, 2)
    assert rng.requested_sides == [6, 6, 6]


def test_left_operand_draws_before_right():
    rng = _ScriptedRng([4, 17])
    ast = BinOpNode(op="+", left=DiceNode(count=1, sides=6), right=DiceNode(count=1, sides=20))

    roll = ASTEvaluator().evaluate(ast, rng)

    assert roll.total == 21
    assert rng.requested_sides == [6, 20]


def test_negate_swaps_bounds():
    roll = ASTEvaluator().evaluate(
        NegateNode(operand=DiceNode(count=2, sides=4)), _ScriptedRng([1, 3])
    )

    assert (roll.total, roll.min, roll.max, roll.average) == (-4, -8, -2, -5)


def test_group_is_transparent():
    inner = DiceNode(count=1, sides=8)

    grouped = ASTEvaluator().evaluate(GroupNode(inner=inner), _ScriptedRng([5]))
    plain = ASTEvaluator().evaluate(inner, _ScriptedRng([5]))

    assert grouped == plain


def test_subtract_crosses_bounds():
    roll = _eval("10-1d6", [2])

    assert (roll.total, roll.min, roll.max) == (8, 4, 9)
    assert roll.average == Fraction(13, 2)


def test_multiply_uses_all_four_corners():
    # [-3, 2] * [-1, 2]
    roll = _eval("(1d6-4)*(1d4-2)", [6, 1])

    assert roll.total == 2 * -1
    assert (roll.min, roll.max) == (-6, 4)
    assert roll.average == Fraction(-1, 4)


@pytest.mark.parametrize(
    ("text", "total"),
    [("7/2", 3), ("-7/2", -4), ("7/-2", -4), ("-7/-2", 3)],
)
def test_division_floors_toward_negative_infinity(text, total):
    roll = _eval(text)

    assert roll.total == roll.min == roll.max == total


def test_division_average_is_exact():
    assert _eval("7/2").average == Fraction(7, 2)


def test_division_bounds_with_negative_dividend():
    # [-3, 2] / 2
    roll = _eval("(1d6-4)/2", [1])

    assert roll.total == -2
    assert (roll.min, roll.max) == (-2, 1)


def test_division_bounds_with_negative_divisor():
    # 10 / [-4, -1]
    roll = _eval("10/(1d4-5)", [3])

    assert roll.total == 10 // -2
    assert (roll.min, roll.max) == (-10, -3)


def test_literal_zero_divisor_is_division_by_zero():
    with pytest.raises(DivisionByZeroError):
        _eval("1d6/0", [3])


def test_rolled_zero_divisor_is_division_by_zero():
    with pytest.raises(DivisionByZeroError):
        _eval("6/(1d3-2)", [2])


def test_divisor_range_spanning_zero_is_indeterminate():
    with pytest.raises(IndeterminateRangeError) as exc_info:
        _eval("6/(1d3-2)", [1])

    assert (exc_info.value.divisor_min, exc_info.value.divisor_max) == (-1, 1)


def test_evaluation_errors_share_arithmetic_bases():
    with pytest.raises(ZeroDivisionError):
        _eval("1/0")
    with pytest.raises(ArithmeticError):
        _eval("1/(1d2-1)", [2])
    with pytest.raises(EvaluationError):
        _eval("1/(1d2-1)", [2])
