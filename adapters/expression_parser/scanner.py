"""
Scanner for dice expressions.

Turns raw text into a list of Token objects terminated by an END token.
Whitespace (newlines included) is skipped; anything not listed below raises
InvalidCharacterError.

    123          NUMBER
    d D          DICE
    %            PERCENT   (d% == d100)
    + -          PLUS, MINUS
    * x X ×      STAR
    / ÷          SLASH
    ( )          LPAREN, RPAREN
"""
from __future__ import annotations

import re

from contracts import Token, TokenKind
from errors import InvalidCharacterError, NumberTooLargeError

MAX_NUMBER_DIGITS = 4000

_TOKEN_RE = re.compile(
    r'(?P<number>[0-9]+)'
    r'|(?P<symbol>[dD%+\-*xX×/÷()])'
    r'|(?P<space>\s+)'
)

_SYMBOLS: dict[str, TokenKind] = {
    "d": TokenKind.DICE,
    "D": TokenKind.DICE,
    "%": TokenKind.PERCENT,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "x": TokenKind.STAR,
    "X": TokenKind.STAR,
    "×": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "÷": TokenKind.SLASH,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


def scan(text: str) -> list[Token]:
    """Tokenizes a dice expression. Raises InvalidCharacterError."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise InvalidCharacterError(text[pos], pos, text)
        digits = m.group("number")
        if digits:
            tokens.append(Token(kind=TokenKind.NUMBER, offset=pos, value=_to_int(digits, pos, text)))
        elif m.group("symbol"):
            tokens.append(Token(kind=_SYMBOLS[m.group("symbol")], offset=pos))
        pos = m.end()
    tokens.append(Token(kind=TokenKind.END, offset=len(text)))
    return tokens


def _to_int(digits: str, pos: int, text: str) -> int:
    if len(digits) > MAX_NUMBER_DIGITS:
        raise NumberTooLargeError(len(digits), pos, text)
    try:
        return int(digits)
    except ValueError:
        # interpreter-wide int/str conversion limit (sys.set_int_max_str_digits)
        raise NumberTooLargeError(len(digits), pos, text) from None
