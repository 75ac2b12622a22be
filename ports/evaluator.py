"""
Port: Evaluator
Responsibility: computing the numeric value of an expression AST.
"""
from typing import Mapping, Optional, Protocol, runtime_checkable

from contracts import EvalResult, ExprAST


@runtime_checkable
class Evaluator(Protocol):
    def evaluate(
        self,
        ast: ExprAST,
        bindings: Optional[Mapping[str, float]] = None,
    ) -> float:
        """
        Evaluates the AST with IEEE-754 floating-point semantics.
        bindings: values for VariableNode resolution.
        Division by zero, overflow and out-of-domain functions produce
        inf/NaN instead of raising.
        Raises EvaluationError for unbound variables.
        """
        ...

    def eval_expr(
        self,
        ast: ExprAST,
        bindings: Optional[Mapping[str, float]] = None,
    ) -> EvalResult:
        """
        Same as evaluate(), additionally returning a list of
        human-readable computation steps.
        """
        ...
