"""
Adapter: RecursiveDescentParser
Implements the ExpressionParser port — dice expression text → ExprAST.

Grammar (highest binding first):
  primary  = NUMBER | '(' expr ')'
  dice     = primary ('d' (NUMBER | '%'))?
  unary    = ('-' | '+') unary | dice
  product  = unary (('*' | '/') unary | dice)*     -- bare 'dice' = implicit '*'
  sum      = product (('+' | '-') product)*
  expr     = sum

Implicit multiplication is inserted when a term is followed directly by a
NUMBER or '('. It shares precedence with '*' and '/' and associates to the
left, so "8/2(3)" is (8/2)*3. A following '-' is always subtraction.
"""
from __future__ import annotations

import logging

from adapters.expression_parser._printer import render
from adapters.expression_parser.scanner import scan
from contracts import (
    BinOpNode,
    DiceNode,
    ExprAST,
    GroupNode,
    LiteralNode,
    NegateNode,
    Token,
    TokenKind,
)
from errors import (
    DiceSyntaxError,
    InvalidDiceCountError,
    InvalidDiceSidesError,
    ParseError,
    UnbalancedParenthesesError,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
)

logger = logging.getLogger("dicexp.parser")

_SUM_OPS: dict[TokenKind, str] = {TokenKind.PLUS: "+", TokenKind.MINUS: "-"}
_PRODUCT_OPS: dict[TokenKind, str] = {TokenKind.STAR: "*", TokenKind.SLASH: "/"}
_IMPLICIT_START = (TokenKind.NUMBER, TokenKind.LPAREN)

PERCENTILE_SIDES = 100
MAX_DICE_COUNT = 100_000
# Bound on AST depth so evaluation and rendering stay within the recursion limit.
MAX_NESTING_DEPTH = 500


class _Parser:
    def __init__(self, tokens: list[Token]) -> None:
        if not tokens or tokens[-1].kind != TokenKind.END:
            raise ValueError("Token stream must end with an END token")
        self._tokens = tokens
        self._pos = 0
        self._depths: dict[int, int] = {}  # id(node) -> depth, for non-leaf nodes

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _consume(self) -> Token:
        t = self._tokens[self._pos]
        if t.kind != TokenKind.END:
            self._pos += 1
        return t

    def parse(self) -> ExprAST:
        try:
            node = self._sum()
        except RecursionError:
            raise ParseError("Expression is nested too deeply", self._peek().offset) from None
        tok = self._peek()
        if tok.kind == TokenKind.RPAREN:
            raise UnbalancedParenthesesError("Found ')' without matching '('", tok.offset)
        if tok.kind != TokenKind.END:
            raise UnexpectedTokenError(tok.describe(), tok.offset)
        return node

    def _nest(self, node: ExprAST, *children: ExprAST) -> ExprAST:
        depth = 1 + max(self._depths.get(id(c), 1) for c in children)
        if depth > MAX_NESTING_DEPTH:
            raise ParseError("Expression is nested too deeply", node.offset)
        self._depths[id(node)] = depth
        return node

    def _sum(self) -> ExprAST:
        left = self._product()
        while self._peek().kind in _SUM_OPS:
            op_tok = self._consume()
            right = self._product()
            left = self._nest(
                BinOpNode(op=_SUM_OPS[op_tok.kind], left=left, right=right, offset=op_tok.offset),
                left, right,
            )
        return left

    def _product(self) -> ExprAST:
        left = self._unary()
        while True:
            tok = self._peek()
            if tok.kind in _PRODUCT_OPS:
                self._consume()
                right = self._unary()
                left = self._nest(
                    BinOpNode(op=_PRODUCT_OPS[tok.kind], left=left, right=right, offset=tok.offset),
                    left, right,
                )
            elif tok.kind in _IMPLICIT_START:
                right = self._dice()
                left = self._nest(
                    BinOpNode(op="*", left=left, right=right, implicit=True, offset=tok.offset),
                    left, right,
                )
            else:
                return left

    def _unary(self) -> ExprAST:
        tok = self._peek()
        if tok.kind == TokenKind.MINUS:
            self._consume()
            operand = self._unary()
            return self._nest(NegateNode(operand=operand, offset=tok.offset), operand)
        if tok.kind == TokenKind.PLUS:
            self._consume()
            return self._unary()
        return self._dice()

    def _dice(self) -> ExprAST:
        start = self._peek()
        base = self._primary()
        if self._peek().kind != TokenKind.DICE:
            return base
        marker = self._consume()

        # Count and sides are literals, never evaluated subexpressions.
        if not isinstance(base, LiteralNode):
            raise InvalidDiceCountError(
                "Dice count must be a positive integer literal", marker.offset
            )
        if base.value < 1:
            raise InvalidDiceCountError(
                f"Dice count must be at least 1, found {base.value}", start.offset
            )
        if base.value > MAX_DICE_COUNT:
            raise InvalidDiceCountError(
                f"Dice count must be at most {MAX_DICE_COUNT}, found {base.value}", start.offset
            )

        tok = self._peek()
        if tok.kind == TokenKind.NUMBER:
            self._consume()
            if tok.value < 1:
                raise InvalidDiceSidesError(
                    f"Dice must have at least 1 side, found {tok.value}", tok.offset
                )
            sides = tok.value
        elif tok.kind == TokenKind.PERCENT:
            self._consume()
            sides = PERCENTILE_SIDES
        elif tok.kind == TokenKind.END:
            raise UnexpectedEndOfInputError(tok.offset)
        else:
            raise InvalidDiceSidesError(
                f"Dice sides must be a positive integer literal, found {tok.describe()}",
                tok.offset,
            )
        return DiceNode(count=base.value, sides=sides, offset=start.offset)

    def _primary(self) -> ExprAST:
        tok = self._peek()
        if tok.kind == TokenKind.NUMBER:
            self._consume()
            return LiteralNode(value=tok.value, offset=tok.offset)
        if tok.kind == TokenKind.LPAREN:
            self._consume()
            inner = self._sum()
            close = self._peek()
            if close.kind == TokenKind.RPAREN:
                self._consume()
                return self._nest(GroupNode(inner=inner, offset=tok.offset), inner)
            if close.kind == TokenKind.END:
                raise UnbalancedParenthesesError("Found '(' without matching ')'", tok.offset)
            raise UnexpectedTokenError(close.describe(), close.offset)
        if tok.kind == TokenKind.END:
            raise UnexpectedEndOfInputError(tok.offset)
        raise UnexpectedTokenError(tok.describe(), tok.offset)


def parse_tokens(tokens: list[Token]) -> ExprAST:
    """Builds an AST from a scanned token list. Raises ParseError."""
    return _Parser(tokens).parse()


class RecursiveDescentParser:
    """Parses dice expression text into an immutable ExprAST."""

    # -- ExpressionParser protocol --------------------------------------------

    def parse(self, text: str) -> ExprAST:
        try:
            ast = parse_tokens(scan(text))
        except DiceSyntaxError as exc:
            exc.with_text(text)
            raise
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Parsed %r as %s", text, render(ast))
        return ast
