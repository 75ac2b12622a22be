"""
Pre-order traversal of an expression AST.

accept() calls the visitor for a node first and then descends:
  UnaryMinusNode → operand
  FunctionNode   → argument
  BinaryOpNode   → left, then right
Pretty-printers and other consumers rely on this order.
The walk uses an explicit stack, so tree depth is limited by memory only.
"""
from __future__ import annotations

from contracts import (
    BinaryOpNode,
    ExprAST,
    FunctionNode,
    NumberNode,
    UnaryMinusNode,
    VariableNode,
)
from ports.visitor import ExpressionVisitor


def accept(node: ExprAST, visitor: ExpressionVisitor) -> None:
    stack: list[ExprAST] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, NumberNode):
            visitor.visit_number(current)
        elif isinstance(current, VariableNode):
            visitor.visit_variable(current)
        elif isinstance(current, BinaryOpNode):
            visitor.visit_binary_op(current)
            # right pushed first so the left subtree is visited first
            stack.append(current.right)
            stack.append(current.left)
        elif isinstance(current, UnaryMinusNode):
            visitor.visit_unary_minus(current)
            stack.append(current.operand)
        elif isinstance(current, FunctionNode):
            visitor.visit_function(current)
            stack.append(current.argument)
        else:
            raise TypeError(f"Unknown AST node type: {type(current).__name__}")
