"""
Adapter: RecursiveDescentParser
Implements the Parser port — one left-to-right pass, one token of lookahead.

Grammar (lowest to highest precedence):
  expr  = term (('+'|'-') term)*
  term  = unary (('*'|'/') unary)*
  unary = '-' unary | power
  power = atom ('^' unary)?                 ^ is right-associative
  atom  = NUMBER | VARIABLE | FUNCTION '(' expr ')' | '(' expr ')'

Unary minus binds looser than '^': -2^2 == -(2^2).
A function argument must be parenthesized: "sin x" is rejected.

The grammar levels are walked with explicit operand/operator stacks, not
Python recursion; nesting depth is limited by input length only.
Binding powers encode the levels above:
  '+' '-' → 1, '*' '/' → 2, unary '-' → 3, '^' → 4 (right-assoc)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from contracts import (
    BinaryOpNode,
    ExpressionSyntaxError,
    ExprAST,
    FunctionKind,
    FunctionNode,
    NumberNode,
    Token,
    TokenKind,
    UnaryMinusNode,
    VariableNode,
)

logger = logging.getLogger("exprcalc.parser")

_NEGATE_BP = 3
_BINARY_BP: dict[str, int] = {"+": 1, "-": 1, "*": 2, "/": 2, "^": 4}
_RIGHT_ASSOC = {"^"}


@dataclass(frozen=True)
class _Pending:
    """Entry of the operator stack.

    kind: "binary" | "negate" | "bracket" | "function"
    """
    kind: str
    op: str = ""
    bp: int = 0
    function: Optional[FunctionKind] = None


class _Parser:
    """State of a single parse() call."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = tokens
        self._pos = 0
        self._operands: list[ExprAST] = []
        self._operators: list[_Pending] = []
        self._open_brackets = 0

    def _peek(self) -> Optional[Token]:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _consume(self) -> Token:
        t = self._tokens[self._pos]
        self._pos += 1
        return t

    def _end_position(self) -> int:
        if not self._tokens:
            return 0
        last = self._tokens[-1]
        return last.position + len(last.text)

    def _error(self, expected: str) -> ExpressionSyntaxError:
        tok = self._peek()
        if tok is None:
            return ExpressionSyntaxError(
                f"{expected}, got end of input",
                position=self._end_position(),
            )
        return ExpressionSyntaxError(
            f"{expected}, got {tok.text!r} at position {tok.position}",
            fragment=tok.text,
            position=tok.position,
        )

    def _expect(self, kind: TokenKind, expected: str) -> Token:
        tok = self._peek()
        if tok is None or tok.kind != kind:
            raise self._error(f"Expected {expected}")
        return self._consume()

    def parse(self) -> ExprAST:
        if not self._tokens:
            raise ExpressionSyntaxError("Unexpected end of expression", position=0)
        expect_operand: Optional[bool] = True
        while expect_operand is not None:
            expect_operand = self._operand() if expect_operand else self._operator()
        self._reduce_while(lambda pending: True)
        return self._operands.pop()

    # -- Operand position: '-' prefix, atom, or the start of a bracket --------

    def _operand(self) -> bool:
        """Returns True while still waiting for an operand."""
        tok = self._peek()
        if tok is None:
            raise self._error("Expected number, variable, function or '('")

        if tok.kind == TokenKind.PLUS_MINUS and tok.text == "-":
            self._consume()
            self._operators.append(_Pending("negate", bp=_NEGATE_BP))
            return True

        if tok.kind == TokenKind.NUMBER:
            self._consume()
            self._operands.append(NumberNode(value=float(tok.text)))
            return False

        if tok.kind == TokenKind.VARIABLE:
            self._consume()
            self._operands.append(VariableNode(name=tok.text))
            return False

        if tok.kind == TokenKind.FUNCTION:
            self._consume()
            function = FunctionKind.from_name(tok.text, position=tok.position)
            self._expect(TokenKind.OPEN_BRACKET, f"'(' after function {tok.text!r}")
            self._operators.append(_Pending("function", function=function))
            self._open_brackets += 1
            return True

        if tok.kind == TokenKind.OPEN_BRACKET:
            self._consume()
            self._operators.append(_Pending("bracket"))
            self._open_brackets += 1
            return True

        raise self._error("Expected number, variable, function or '('")

    # -- Operator position: binary operator, ')' or end of input ----------------

    def _operator(self) -> Optional[bool]:
        """Returns True when an operand must follow, False when another
        operator may follow, None once the whole input is consumed."""
        tok = self._peek()
        if tok is None:
            if self._open_brackets:
                raise self._error("Expected ')'")
            return None

        if tok.kind in (TokenKind.PLUS_MINUS, TokenKind.MULT_DIV, TokenKind.RAISED):
            self._consume()
            op = tok.text
            bp = _BINARY_BP[op]
            if op in _RIGHT_ASSOC:
                self._reduce_while(lambda pending: pending.bp > bp)
            else:
                self._reduce_while(lambda pending: pending.bp >= bp)
            self._operators.append(_Pending("binary", op=op, bp=bp))
            return True

        if tok.kind == TokenKind.CLOSE_BRACKET and self._open_brackets:
            self._consume()
            self._reduce_while(lambda pending: True)
            opener = self._operators.pop()
            self._open_brackets -= 1
            if opener.kind == "function":
                argument = self._operands.pop()
                self._operands.append(FunctionNode(function=opener.function, argument=argument))
            return False

        if self._open_brackets:
            raise self._error("Expected ')'")
        raise ExpressionSyntaxError(
            f"Unexpected trailing input {tok.text!r} at position {tok.position}",
            fragment=tok.text,
            position=tok.position,
        )

    def _reduce_while(self, keep_going) -> None:
        """Pops operators into nodes; stops at a bracket or when keep_going fails."""
        while self._operators:
            pending = self._operators[-1]
            if pending.kind in ("bracket", "function") or not keep_going(pending):
                return
            self._operators.pop()
            if pending.kind == "negate":
                self._operands.append(UnaryMinusNode(operand=self._operands.pop()))
            else:
                right = self._operands.pop()
                left = self._operands.pop()
                self._operands.append(BinaryOpNode(op=pending.op, left=left, right=right))


class RecursiveDescentParser:
    """Stateless between calls; safe to share across threads."""

    # -- Parser protocol ---------------------------------------------------

    def parse(self, tokens: Sequence[Token]) -> ExprAST:
        node = _Parser(tokens).parse()
        logger.debug("Parsed %d tokens into %s", len(tokens), node.node_type)
        return node
