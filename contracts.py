"""
contracts.py — Single source of truth for every data type in dicexp.
All modules import tokens, AST nodes and results ONLY from here.
"""
from __future__ import annotations

from enum import Enum
from fractions import Fraction
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ─────────────────────────── Scanner ─────────────────────────────────────

class TokenKind(str, Enum):
    NUMBER = "NUMBER"      # unsigned integer literal
    DICE = "DICE"          # "d" / "D"
    PERCENT = "PERCENT"    # "%" — percentile sides, d% == d100
    PLUS = "PLUS"
    MINUS = "MINUS"
    STAR = "STAR"          # "*", "x", "X", "×"
    SLASH = "SLASH"        # "/", "÷"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    END = "END"


class Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: TokenKind
    offset: int = Field(ge=0)          # character index in the source text
    value: Optional[int] = None        # only for NUMBER

    def describe(self) -> str:
        if self.kind == TokenKind.NUMBER:
            return str(self.value)
        if self.kind == TokenKind.END:
            return "end of input"
        return repr(_TOKEN_TEXT[self.kind])


_TOKEN_TEXT: dict[TokenKind, str] = {
    TokenKind.DICE: "d",
    TokenKind.PERCENT: "%",
    TokenKind.PLUS: "+",
    TokenKind.MINUS: "-",
    TokenKind.STAR: "*",
    TokenKind.SLASH: "/",
    TokenKind.LPAREN: "(",
    TokenKind.RPAREN: ")",
}


# ─────────────────────────── AST ─────────────────────────────────────────

class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)

    offset: int = 0  # offset of the token that introduced the node


class LiteralNode(_Node):
    node_type: Literal["literal"] = "literal"
    value: int


class DiceNode(_Node):
    node_type: Literal["dice"] = "dice"
    count: int = Field(ge=1)
    sides: int = Field(ge=1)


class NegateNode(_Node):
    node_type: Literal["negate"] = "negate"
    operand: "ExprAST"


class BinOpNode(_Node):
    node_type: Literal["binop"] = "binop"
    op: Literal["+", "-", "*", "/"]
    left: "ExprAST"
    right: "ExprAST"
    implicit: bool = False  # multiplication synthesized from juxtaposition


class GroupNode(_Node):
    node_type: Literal["group"] = "group"
    inner: "ExprAST"


ExprAST = Union[LiteralNode, DiceNode, NegateNode, BinOpNode, GroupNode]
NegateNode.model_rebuild()
BinOpNode.model_rebuild()
GroupNode.model_rebuild()


# ─────────────────────────── Evaluator ───────────────────────────────────

class DiceRoll(BaseModel):
    """
    Result of evaluating a dice expression (or any subtree of one).

    total   — the amount actually rolled
    min/max — smallest and largest achievable totals
    average — exact expected value
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    total: int
    min: int
    max: int
    average: Fraction

    def __str__(self) -> str:
        return str(self.total)
