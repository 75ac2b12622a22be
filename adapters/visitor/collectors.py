"""
Ready-made visitors.

VariableCollector — variable names in order of first appearance
PrefixFormatter   — Polish (prefix) notation, e.g. "+ 1 * 2 3"
NodeCounter       — number of nodes per node_type
"""
from __future__ import annotations

from collections import Counter

from adapters.evaluator.tree_evaluator import fmt
from contracts import (
    BinaryOpNode,
    FunctionNode,
    NumberNode,
    UnaryMinusNode,
    VariableNode,
)
from ports.visitor import ExpressionVisitor


class VariableCollector(ExpressionVisitor):
    def __init__(self) -> None:
        self.names: list[str] = []

    def visit_number(self, node: NumberNode) -> None:
        pass

    def visit_variable(self, node: VariableNode) -> None:
        if node.name not in self.names:
            self.names.append(node.name)

    def visit_binary_op(self, node: BinaryOpNode) -> None:
        pass

    def visit_unary_minus(self, node: UnaryMinusNode) -> None:
        pass

    def visit_function(self, node: FunctionNode) -> None:
        pass


class PrefixFormatter(ExpressionVisitor):
    """Unary minus is written as "neg" to keep it apart from binary "-"."""

    def __init__(self, precision: int = 12) -> None:
        self._precision = precision
        self._parts: list[str] = []

    @property
    def text(self) -> str:
        return " ".join(self._parts)

    def visit_number(self, node: NumberNode) -> None:
        self._parts.append(fmt(node.value, self._precision))

    def visit_variable(self, node: VariableNode) -> None:
        self._parts.append(node.name)

    def visit_binary_op(self, node: BinaryOpNode) -> None:
        self._parts.append(node.op)

    def visit_unary_minus(self, node: UnaryMinusNode) -> None:
        self._parts.append("neg")

    def visit_function(self, node: FunctionNode) -> None:
        self._parts.append(node.function.value)


class NodeCounter(ExpressionVisitor):
    def __init__(self) -> None:
        self.counts: Counter[str] = Counter()

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def visit_number(self, node: NumberNode) -> None:
        self.counts[node.node_type] += 1

    def visit_variable(self, node: VariableNode) -> None:
        self.counts[node.node_type] += 1

    def visit_binary_op(self, node: BinaryOpNode) -> None:
        self.counts[node.node_type] += 1

    def visit_unary_minus(self, node: UnaryMinusNode) -> None:
        self.counts[node.node_type] += 1

    def visit_function(self, node: FunctionNode) -> None:
        self.counts[node.node_type] += 1
