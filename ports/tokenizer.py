"""
Port: Tokenizer
Responsibility: splitting expression text into typed tokens.
"""
from typing import Protocol, runtime_checkable

from contracts import Token


@runtime_checkable
class Tokenizer(Protocol):
    def tokenize(self, text: str) -> list[Token]:
        """
        Splits text into an ordered list of Tokens.
        Surrounding whitespace is ignored; empty input yields an empty list.
        Each call returns a fresh list; the previous result is discarded.
        Raises ExpressionSyntaxError when no rule matches the remaining input.
        """
        ...
