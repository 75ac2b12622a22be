from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from adapters.tokenizer import regex_tokenizer
from adapters.tokenizer.regex_tokenizer import RegexTokenizer, expression_tokenizer
from contracts import ExpressionSyntaxError, Token, TokenKind


def _kinds(text: str) -> list[TokenKind]:
    return [t.kind for t in expression_tokenizer().tokenize(text)]


def test_tokenize_mixed_expression_yields_kinds_in_order():
    assert _kinds("3.14+x*sin(2)") == [
        TokenKind.NUMBER,
        TokenKind.PLUS_MINUS,
        TokenKind.VARIABLE,
        TokenKind.MULT_DIV,
        TokenKind.FUNCTION,
        TokenKind.OPEN_BRACKET,
        TokenKind.NUMBER,
        TokenKind.CLOSE_BRACKET,
    ]


def test_tokenize_records_text_and_offset_in_trimmed_input():
    tokens = expression_tokenizer().tokenize("   2 +  x^3 ")

    assert tokens == [
        Token(kind=TokenKind.NUMBER, text="2", position=0),
        Token(kind=TokenKind.PLUS_MINUS, text="+", position=2),
        Token(kind=TokenKind.VARIABLE, text="x", position=5),
        Token(kind=TokenKind.RAISED, text="^", position=6),
        Token(kind=TokenKind.NUMBER, text="3", position=7),
    ]


def test_tokenize_rejects_unknown_character():
    with pytest.raises(ExpressionSyntaxError) as excinfo:
        expression_tokenizer().tokenize("3 & 4")

    assert "Unexpected character" in str(excinfo.value)
    assert excinfo.value.fragment == "& 4"
    assert excinfo.value.position == 2


def test_tokenize_error_is_a_syntax_error():
    with pytest.raises(SyntaxError):
        expression_tokenizer().tokenize("2 $")


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_tokenize_blank_input_yields_no_tokens(text):
    assert expression_tokenizer().tokenize(text) == []


@pytest.mark.parametrize("text", ["3", "3.", ".5", "3.25", "1e-3", "2E+10", "6.02e23"])
def test_tokenize_number_forms(text):
    tokens = expression_tokenizer().tokenize(text)

    assert [(t.kind, t.text) for t in tokens] == [(TokenKind.NUMBER, text)]


@pytest.mark.parametrize(
    "text, name",
    [("sin(x)", "sin"), ("asin(x)", "asin"), ("log(x)", "log"), ("log2(x)", "log2"), ("sqrt (x)", "sqrt")],
)
def test_tokenize_function_names(text, name):
    first = expression_tokenizer().tokenize(text)[0]

    assert first.kind == TokenKind.FUNCTION
    assert first.text == name


def test_tokenize_function_prefix_followed_by_word_char_is_a_variable():
    tokens = expression_tokenizer().tokenize("sinx + log10 + expo")

    assert [(t.kind, t.text) for t in tokens] == [
        (TokenKind.VARIABLE, "sinx"),
        (TokenKind.PLUS_MINUS, "+"),
        (TokenKind.VARIABLE, "log10"),
        (TokenKind.PLUS_MINUS, "+"),
        (TokenKind.VARIABLE, "expo"),
    ]


def test_tokenize_function_names_are_case_sensitive():
    assert _kinds("Sin(1)")[0] == TokenKind.VARIABLE


def test_tokenize_number_directly_followed_by_variable():
    assert _kinds("2x") == [TokenKind.NUMBER, TokenKind.VARIABLE]


def test_rule_registration_order_decides_the_match():
    tokenizer = RegexTokenizer()
    tokenizer.add(r"[a-zA-Z]\w*", TokenKind.VARIABLE)
    tokenizer.add(r"sin", TokenKind.FUNCTION)

    tokens = tokenizer.tokenize("sin")

    assert tokens[0].kind == TokenKind.VARIABLE


def test_tokenize_replaces_previous_result():
    tokenizer = expression_tokenizer()

    first = tokenizer.tokenize("1 + 2")
    second = tokenizer.tokenize("x")

    assert len(first) == 3
    assert tokenizer.tokens == second
    assert [t.text for t in tokenizer.tokens] == ["x"]


def test_expression_tokenizer_rule_order():
    kinds = [rule.kind for rule in expression_tokenizer().rules]

    assert kinds == [
        TokenKind.PLUS_MINUS,
        TokenKind.MULT_DIV,
        TokenKind.RAISED,
        TokenKind.FUNCTION,
        TokenKind.OPEN_BRACKET,
        TokenKind.CLOSE_BRACKET,
        TokenKind.NUMBER,
        TokenKind.VARIABLE,
    ]


def test_expression_tokenizer_is_created_once_across_threads(monkeypatch):
    monkeypatch.setattr(regex_tokenizer, "_EXPRESSION_TOKENIZER", None)

    with ThreadPoolExecutor(max_workers=8) as pool:
        instances = list(pool.map(lambda _: expression_tokenizer(), range(32)))

    assert len({id(t) for t in instances}) == 1
    assert expression_tokenizer() is instances[0]
