"""
Port: ExpressionVisitor
Responsibility: per-node-type callbacks invoked by adapters.visitor.traversal.accept.

Unlike the other ports this is an abstract base class: a visitor that
does not handle every node type cannot be instantiated.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from contracts import (
    BinaryOpNode,
    FunctionNode,
    NumberNode,
    UnaryMinusNode,
    VariableNode,
)


class ExpressionVisitor(ABC):
    """Called once per node, parent before children (pre-order)."""

    @abstractmethod
    def visit_number(self, node: NumberNode) -> None: ...

    @abstractmethod
    def visit_variable(self, node: VariableNode) -> None: ...

    @abstractmethod
    def visit_binary_op(self, node: BinaryOpNode) -> None: ...

    @abstractmethod
    def visit_unary_minus(self, node: UnaryMinusNode) -> None: ...

    @abstractmethod
    def visit_function(self, node: FunctionNode) -> None: ...
