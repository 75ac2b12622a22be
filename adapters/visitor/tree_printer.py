"""
RichTreeBuilder — renders an AST as a rich.tree.Tree.

Pre-order visiting hands over a parent before its children, so the builder
keeps a stack of open branches with the number of children each one still
expects.
"""
from __future__ import annotations

from typing import Optional

from rich.tree import Tree

from adapters.evaluator.tree_evaluator import fmt
from contracts import (
    BinaryOpNode,
    FunctionNode,
    NumberNode,
    UnaryMinusNode,
    VariableNode,
)
from ports.visitor import ExpressionVisitor


class RichTreeBuilder(ExpressionVisitor):
    def __init__(self, precision: int = 12) -> None:
        self._precision = precision
        self._root: Optional[Tree] = None
        self._open: list[list] = []  # [branch, children still expected]

    @property
    def tree(self) -> Tree:
        if self._root is None:
            raise ValueError("No expression visited yet")
        return self._root

    def _add(self, label: str, arity: int) -> None:
        while self._open and self._open[-1][1] == 0:
            self._open.pop()
        if self._open:
            parent = self._open[-1]
            parent[1] -= 1
            branch = parent[0].add(label)
        else:
            branch = Tree(label)
            self._root = branch
        if arity:
            self._open.append([branch, arity])

    def visit_number(self, node: NumberNode) -> None:
        self._add(f"[green]{fmt(node.value, self._precision)}[/green]", 0)

    def visit_variable(self, node: VariableNode) -> None:
        self._add(f"[yellow]{node.name}[/yellow]", 0)

    def visit_binary_op(self, node: BinaryOpNode) -> None:
        self._add(f"[bold cyan]{node.op}[/bold cyan]", 2)

    def visit_unary_minus(self, node: UnaryMinusNode) -> None:
        self._add("[bold cyan]neg[/bold cyan]", 1)

    def visit_function(self, node: FunctionNode) -> None:
        self._add(f"[bold magenta]{node.function.value}[/bold magenta]", 1)
