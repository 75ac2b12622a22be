"""
Adapter: TreeEvaluator
Implements the Evaluator port — recursive walk over ExprAST with floats.

evaluate()  — computes the value
eval_expr() — computes the value and the list of readable steps

Arithmetic follows IEEE-754 (see float_ops): 1/0 is inf, sqrt(-1) is NaN,
(-8)^(1/3) is NaN. Only unbound variables raise.
"""
from __future__ import annotations

import logging
import math
import operator
from typing import Callable, Mapping, Optional

from adapters.evaluator import float_ops
from contracts import (
    BinaryOpNode,
    EvalResult,
    EvaluationError,
    ExprAST,
    FunctionKind,
    FunctionNode,
    NumberNode,
    UnaryMinusNode,
    VariableNode,
)

logger = logging.getLogger("exprcalc.evaluator")

_BINARY_OPS: dict[str, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": float_ops.divide,
    "^": float_ops.power,
}

_FUNCTIONS: dict[FunctionKind, Callable[[float], float]] = {
    FunctionKind.SIN:  float_ops.total(math.sin),
    FunctionKind.COS:  float_ops.total(math.cos),
    FunctionKind.TAN:  float_ops.total(math.tan),
    FunctionKind.ASIN: float_ops.total(math.asin),
    FunctionKind.ACOS: float_ops.total(math.acos),
    FunctionKind.ATAN: float_ops.total(math.atan),
    FunctionKind.SQRT: float_ops.total(math.sqrt),
    FunctionKind.EXP:  float_ops.total(math.exp),
    FunctionKind.LN:   float_ops.ln,
    FunctionKind.LOG:  float_ops.log10,
    FunctionKind.LOG2: float_ops.log2,
}


class TreeEvaluator:
    """Floating-point expression evaluator. Never mutates the tree.

    precision: significant digits of the numbers written into steps
    """

    def __init__(self, precision: int = 12) -> None:
        self._precision = precision

    # -- Evaluator protocol ------------------------------------------------

    def evaluate(
        self,
        ast: ExprAST,
        bindings: Optional[Mapping[str, float]] = None,
    ) -> float:
        return self._eval(ast, _float_env(bindings), None)

    def eval_expr(
        self,
        ast: ExprAST,
        bindings: Optional[Mapping[str, float]] = None,
    ) -> EvalResult:
        """
        Evaluates the AST and records one step per variable lookup,
        operator and function application, children before parents.
        """
        steps: list[str] = []
        value = self._eval(ast, _float_env(bindings), steps)
        logger.debug("Evaluated expression in %d steps", len(steps))
        return EvalResult(value=value, steps=steps)

    # -- Private -----------------------------------------------------------

    def _eval(
        self,
        root: ExprAST,
        env: dict[str, float],
        steps: Optional[list[str]],
    ) -> float:
        """Post-order walk with an explicit stack; depth is not limited by
        the interpreter's recursion limit."""
        p = self._precision
        values: list[float] = []
        # (node, children already evaluated)
        stack: list[tuple[ExprAST, bool]] = [(root, False)]

        while stack:
            node, reduced = stack.pop()

            if isinstance(node, NumberNode):
                values.append(node.value)

            elif isinstance(node, VariableNode):
                if node.name not in env:
                    raise EvaluationError(f"Unbound variable: {node.name!r}")
                val = env[node.name]
                if steps is not None:
                    steps.append(f"{node.name} = {fmt(val, p)}")
                values.append(val)

            elif isinstance(node, UnaryMinusNode):
                if not reduced:
                    stack.append((node, True))
                    stack.append((node.operand, False))
                    continue
                val = values.pop()
                result = -val
                if steps is not None:
                    steps.append(f"-({fmt(val, p)}) = {fmt(result, p)}")
                values.append(result)

            elif isinstance(node, BinaryOpNode):
                fn = _BINARY_OPS.get(node.op)
                if fn is None:
                    raise EvaluationError(f"Invalid operator: {node.op!r}")
                if not reduced:
                    stack.append((node, True))
                    stack.append((node.right, False))
                    stack.append((node.left, False))
                    continue
                right_val = values.pop()
                left_val = values.pop()
                result = fn(left_val, right_val)
                if steps is not None:
                    steps.append(f"{fmt(left_val, p)} {node.op} {fmt(right_val, p)} = {fmt(result, p)}")
                values.append(result)

            elif isinstance(node, FunctionNode):
                fn = _FUNCTIONS.get(node.function)
                if fn is None:
                    raise EvaluationError(f"Invalid function id: {node.function!r}")
                if not reduced:
                    stack.append((node, True))
                    stack.append((node.argument, False))
                    continue
                val = values.pop()
                result = fn(val)
                if steps is not None:
                    steps.append(f"{node.function.value}({fmt(val, p)}) = {fmt(result, p)}")
                values.append(result)

            else:
                raise EvaluationError(f"Unknown AST node type: {type(node).__name__}")

        return values.pop()


def _float_env(bindings: Optional[Mapping[str, float]]) -> dict[str, float]:
    return {name: float(value) for name, value in (bindings or {}).items()}


def fmt(v: float, precision: int = 12) -> str:
    """Readable float: integral values without the trailing '.0'."""
    return format(v, f".{precision}g")
