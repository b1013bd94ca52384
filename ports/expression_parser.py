"""
Port: ExpressionParser
Responsibility: turning dice expression text into an ExprAST.
"""
from typing import Protocol, runtime_checkable

from contracts import ExprAST


@runtime_checkable
class ExpressionParser(Protocol):
    def parse(self, text: str) -> ExprAST:
        """
        Parses RPG dice notation (e.g. "4d6/10-5") into an immutable AST.

        Dice terms bind tighter than unary minus and every binary operator;
        adjacent terms ("4(2+3)") are multiplied.

        Raises DiceSyntaxError (LexError or ParseError) carrying the offset
        of the problem. No partial AST is returned on failure.
        """
        ...
