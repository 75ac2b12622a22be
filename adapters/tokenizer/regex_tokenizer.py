"""
Adapter: RegexTokenizer
Implements the Tokenizer port with an ordered list of regex rules.

Rules are tried in registration order against the start of the remaining
input and the first match wins (not the longest one). The order is part
of the contract: function names must be registered before variables,
otherwise "sin" would come out as a VARIABLE.

expression_tokenizer() returns the shared tokenizer for mathematical
expressions, built once on first use.
"""
from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass

from contracts import ExpressionSyntaxError, FunctionKind, Token, TokenKind

logger = logging.getLogger("exprcalc.tokenizer")


@dataclass(frozen=True)
class PatternRule:
    pattern: re.Pattern[str]
    kind: TokenKind


class RegexTokenizer:
    """First-match regex tokenizer. Patterns must not contain anchors or
    capturing groups; the anchor is added by add()."""

    def __init__(self) -> None:
        self._rules: list[PatternRule] = []
        self._tokens: list[Token] = []

    def add(self, pattern: str, kind: TokenKind) -> None:
        """Registers a rule after all previously registered ones."""
        self._rules.append(PatternRule(re.compile(rf"^({pattern})", re.ASCII), kind))

    @property
    def rules(self) -> tuple[PatternRule, ...]:
        return tuple(self._rules)

    @property
    def tokens(self) -> list[Token]:
        """Result of the last tokenize() call."""
        return list(self._tokens)

    # -- Tokenizer protocol ------------------------------------------------

    def tokenize(self, text: str) -> list[Token]:
        s = text.strip()
        total_length = len(s)
        tokens: list[Token] = []
        while s:
            position = total_length - len(s)
            for rule in self._rules:
                m = rule.pattern.match(s)
                if m:
                    tokens.append(Token(kind=rule.kind, text=m.group().strip(), position=position))
                    s = s[m.end():].strip()
                    break
            else:
                raise ExpressionSyntaxError(
                    f"Unexpected character in input: {s}",
                    fragment=s,
                    position=position,
                )
        # Fresh list per call; concurrent callers never share a buffer
        self._tokens = tokens
        return tokens


# ──────────────────────────────────────────────────────────────────────────────
# Shared expression tokenizer
# ──────────────────────────────────────────────────────────────────────────────

_EXPRESSION_TOKENIZER: RegexTokenizer | None = None
_EXPRESSION_TOKENIZER_LOCK = threading.Lock()


def create_expression_tokenizer() -> RegexTokenizer:
    """Builds a new tokenizer for mathematical expressions."""
    tokenizer = RegexTokenizer()
    tokenizer.add(r"[+-]", TokenKind.PLUS_MINUS)
    tokenizer.add(r"[*/]", TokenKind.MULT_DIV)
    tokenizer.add(r"\^", TokenKind.RAISED)
    tokenizer.add(rf"({FunctionKind.pattern()})(?!\w)", TokenKind.FUNCTION)
    tokenizer.add(r"\(", TokenKind.OPEN_BRACKET)
    tokenizer.add(r"\)", TokenKind.CLOSE_BRACKET)
    tokenizer.add(r"(?:\d+\.?|\.\d)\d*(?:[Ee][-+]?\d+)?", TokenKind.NUMBER)
    tokenizer.add(r"[a-zA-Z]\w*", TokenKind.VARIABLE)
    return tokenizer


def expression_tokenizer() -> RegexTokenizer:
    """Returns the process-wide expression tokenizer (created exactly once)."""
    global _EXPRESSION_TOKENIZER
    if _EXPRESSION_TOKENIZER is None:
        with _EXPRESSION_TOKENIZER_LOCK:
            if _EXPRESSION_TOKENIZER is None:
                _EXPRESSION_TOKENIZER = create_expression_tokenizer()
                logger.debug(
                    "Expression tokenizer ready (%d rules)",
                    len(_EXPRESSION_TOKENIZER.rules),
                )
    return _EXPRESSION_TOKENIZER
