"""
contracts.py — single source of truth for every data type in exprcalc.
All modules import types from here only. Do not change without bumping
CONTRACTS_VERSION.
"""
from __future__ import annotations

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

CONTRACTS_VERSION = "1.0.0"


# ─────────────────────────── Errors ──────────────────────────────────────

class ExpressionSyntaxError(SyntaxError):
    """Raised by the tokenizer (unmatched character) and the parser
    (unexpected or missing token).

    fragment: the offending text (token text or unmatched remainder)
    position: character offset in the trimmed input, None if unknown
    """

    def __init__(
        self,
        message: str,
        fragment: str = "",
        position: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.fragment = fragment
        self.position = position


class EvaluationError(ValueError):
    """Raised by evaluation for unbound variables and invalid node ids."""


# ─────────────────────────── Tokenizer ───────────────────────────────────

class TokenKind(str, Enum):
    PLUS_MINUS = "plus_minus"        # + -
    MULT_DIV = "mult_div"            # * /
    RAISED = "raised"                # ^
    FUNCTION = "function"            # sin, cos, ...
    OPEN_BRACKET = "open_bracket"    # (
    CLOSE_BRACKET = "close_bracket"  # )
    NUMBER = "number"                # 3, 3.14, .5, 1e-3
    VARIABLE = "variable"            # x, rate_2


class Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: TokenKind
    text: str
    position: int = Field(ge=0)  # offset in the trimmed input


# ─────────────────────────── Functions ───────────────────────────────────

class FunctionKind(str, Enum):
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    SQRT = "sqrt"
    EXP = "exp"
    LN = "ln"
    LOG = "log"
    LOG2 = "log2"

    @classmethod
    def from_name(cls, name: str, position: Optional[int] = None) -> FunctionKind:
        """Case-sensitive exact lookup of a function name.
        position: offset of the name in the input, reported on failure."""
        for kind in cls:
            if kind.value == name:
                return kind
        raise ExpressionSyntaxError(
            f"Unexpected function {name!r} found",
            fragment=name,
            position=position,
        )

    @classmethod
    def pattern(cls) -> str:
        """Alternation of all function names, used by the expression tokenizer."""
        return "|".join(kind.value for kind in cls)


# ─────────────────────────── AST ─────────────────────────────────────────

class NumberNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["number"] = "number"
    value: float


class VariableNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["variable"] = "variable"
    name: str


class BinaryOpNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["binop"] = "binop"
    op: Literal["+", "-", "*", "/", "^"]
    left: "ExprAST"
    right: "ExprAST"


class UnaryMinusNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["unary_minus"] = "unary_minus"
    operand: "ExprAST"


class FunctionNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["function"] = "function"
    function: FunctionKind
    argument: "ExprAST"


ExprAST = Union[NumberNode, VariableNode, BinaryOpNode, UnaryMinusNode, FunctionNode]
BinaryOpNode.model_rebuild()
UnaryMinusNode.model_rebuild()
FunctionNode.model_rebuild()


# ─────────────────────────── Evaluator ───────────────────────────────────

class EvalResult(BaseModel):
    value: float
    steps: list[str] = Field(default_factory=list)  # readable computation steps
