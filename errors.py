"""
errors.py — exception hierarchy for dice expressions.

Syntax errors (scanner + parser) derive from the built-in SyntaxError and
carry the offending offset; evaluation errors derive from ArithmeticError.
"""
from __future__ import annotations

from typing import Optional


class DiceExpressionError(Exception):
    """Base class for every error raised while handling a dice expression."""

    code = "DICE_EXPRESSION_ERROR"


# ─────────────────────────── Syntax ──────────────────────────────────────

class DiceSyntaxError(DiceExpressionError, SyntaxError):
    """A dice expression could not be scanned or parsed.

    Args:
        message: Human readable description.
        offset: 0-based character index of the problem, if known.
        text: The full source text, used to derive line/column.
    """

    code = "SYNTAX_ERROR"

    def __init__(
        self,
        message: str,
        offset: Optional[int] = None,
        text: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.msg = message
        self.offset = offset
        self.text = text
        self.lineno, self.column = _line_and_column(text, offset)

    def with_text(self, text: str) -> "DiceSyntaxError":
        """Attach the source text once it is known (the parser only sees tokens)."""
        self.text = text
        self.lineno, self.column = _line_and_column(text, self.offset)
        return self

    def __str__(self) -> str:
        s = f"SyntaxError: {self.msg}"
        if self.lineno is not None:
            s += f"; error on line {self.lineno}, column {self.column}"
        elif self.offset is not None:
            s += f"; error at offset {self.offset}"
        return s


class LexError(DiceSyntaxError):
    code = "LEX_ERROR"


class InvalidCharacterError(LexError):
    code = "INVALID_CHARACTER"

    def __init__(self, char: str, offset: int, text: Optional[str] = None) -> None:
        if char == ".":
            message = "Found '.', but decimal numbers are not supported (integer math only)"
        else:
            message = f"Invalid character {char!r}"
        super().__init__(message, offset, text)
        self.char = char


class NumberTooLargeError(LexError):
    code = "NUMBER_TOO_LARGE"

    def __init__(self, digits: int, offset: int, text: Optional[str] = None) -> None:
        super().__init__(f"Number with {digits} digits is too large", offset, text)
        self.digits = digits


class ParseError(DiceSyntaxError):
    code = "PARSE_ERROR"


class UnexpectedTokenError(ParseError):
    code = "UNEXPECTED_TOKEN"

    def __init__(self, found: str, offset: int, text: Optional[str] = None) -> None:
        super().__init__(f"Unexpected token {found}", offset, text)
        self.found = found


class UnexpectedEndOfInputError(ParseError):
    code = "UNEXPECTED_END_OF_INPUT"

    def __init__(self, offset: Optional[int] = None, text: Optional[str] = None) -> None:
        super().__init__("Unexpected end of expression", offset, text)


class UnbalancedParenthesesError(ParseError):
    code = "UNBALANCED_PARENTHESES"


class InvalidDiceCountError(ParseError):
    code = "INVALID_DICE_COUNT"


class InvalidDiceSidesError(ParseError):
    code = "INVALID_DICE_SIDES"


# ─────────────────────────── Evaluation ──────────────────────────────────

class EvaluationError(DiceExpressionError, ArithmeticError):
    code = "EVALUATION_ERROR"


class DivisionByZeroError(EvaluationError, ZeroDivisionError):
    code = "DIVISION_BY_ZERO"

    def __init__(self, reason: str = "Division by zero") -> None:
        super().__init__(reason)


class IndeterminateRangeError(EvaluationError):
    """The divisor's achievable range contains zero, so quotient bounds are undefined."""

    code = "INDETERMINATE_RANGE"

    def __init__(self, divisor_min: int, divisor_max: int) -> None:
        super().__init__(
            f"Divisor range [{divisor_min}, {divisor_max}] contains zero; "
            "result range is undefined"
        )
        self.divisor_min = divisor_min
        self.divisor_max = divisor_max


def _line_and_column(text: Optional[str], offset: Optional[int]) -> tuple[Optional[int], Optional[int]]:
    """1-based (line, column) of offset in text, or (None, None)."""
    if text is None or offset is None:
        return None, None
    offset = min(offset, len(text))
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return line, column
