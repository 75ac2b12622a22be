"""
Port: Parser
Responsibility: building an expression AST from a token sequence.
"""
from typing import Protocol, Sequence, runtime_checkable

from contracts import ExprAST, Token


@runtime_checkable
class Parser(Protocol):
    def parse(self, tokens: Sequence[Token]) -> ExprAST:
        """
        Builds one root node covering the whole token sequence.
        Honors precedence (+- < */ < unary minus < ^) and associativity
        (^ groups to the right, everything else to the left).
        Raises ExpressionSyntaxError on a missing operand or bracket,
        or when tokens remain after a complete expression.
        """
        ...
