"""
engine.py — programmatic entry point of exprcalc.

    tokens = tokenize("x^2 + 1")
    tree = parse(tokens)
    evaluate(tree, {"x": 3.0})        # 10.0
    calculate("x^2 + 1", {"x": 3.0})  # same, in one call

All functions share the process-wide expression tokenizer and a single
stateless parser / evaluator.
"""
from __future__ import annotations

from typing import Mapping, Optional, Sequence, Union

from adapters.evaluator.tree_evaluator import TreeEvaluator
from adapters.parser.recursive_descent_parser import RecursiveDescentParser
from adapters.tokenizer.regex_tokenizer import expression_tokenizer
from adapters.visitor.collectors import VariableCollector
from adapters.visitor.traversal import accept
from contracts import EvalResult, ExprAST, Token
from ports.evaluator import Evaluator
from ports.parser import Parser

__all__ = [
    "tokenize",
    "parse",
    "evaluate",
    "eval_expr",
    "accept",
    "calculate",
    "variables_of",
]

_PARSER: Parser = RecursiveDescentParser()
_EVALUATOR: Evaluator = TreeEvaluator()


def tokenize(text: str) -> list[Token]:
    return expression_tokenizer().tokenize(text)


def parse(tokens: Union[str, Sequence[Token]]) -> ExprAST:
    """Builds the AST; a string is tokenized first."""
    if isinstance(tokens, str):
        tokens = tokenize(tokens)
    return _PARSER.parse(tokens)


def evaluate(node: ExprAST, bindings: Optional[Mapping[str, float]] = None) -> float:
    return _EVALUATOR.evaluate(node, bindings)


def eval_expr(node: ExprAST, bindings: Optional[Mapping[str, float]] = None) -> EvalResult:
    return _EVALUATOR.eval_expr(node, bindings)


def calculate(text: str, bindings: Optional[Mapping[str, float]] = None) -> float:
    """text → tokens → tree → value."""
    return evaluate(parse(tokenize(text)), bindings)


def variables_of(expression: Union[str, ExprAST]) -> list[str]:
    """Variable names in order of first appearance."""
    node = parse(expression) if isinstance(expression, str) else expression
    collector = VariableCollector()
    accept(node, collector)
    return collector.names
