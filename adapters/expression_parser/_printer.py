"""
_printer.py — canonical text form of an ExprAST.

Every binary operation is parenthesized and groups are dropped, so two ASTs
with the same structure render identically regardless of the source spacing.
"""
from __future__ import annotations

from contracts import BinOpNode, DiceNode, ExprAST, GroupNode, LiteralNode, NegateNode


def render(node: ExprAST) -> str:
    """Returns e.g. "((4d6 / 10) - 5)" for "4d6/10-5"."""
    if isinstance(node, LiteralNode):
        return str(node.value)
    if isinstance(node, DiceNode):
        return f"{node.count}d{node.sides}"
    if isinstance(node, NegateNode):
        return f"-{render(node.operand)}"
    if isinstance(node, GroupNode):
        return render(node.inner)
    if isinstance(node, BinOpNode):
        return f"({render(node.left)} {node.op} {render(node.right)})"
    raise TypeError(f"Unknown AST node type: {type(node)}")
