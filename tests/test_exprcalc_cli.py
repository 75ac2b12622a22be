from __future__ import annotations

import io

import pytest

from exprcalc import main


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("EXPRCALC_PRECISION", raising=False)
    monkeypatch.delenv("EXPRCALC_LOG_LEVEL", raising=False)


def test_eval_prints_value(capsys):
    main(["eval", "2+3*4"])

    assert capsys.readouterr().out == "14\n"


def test_eval_with_variables(capsys):
    main(["eval", "x*y+1", "--var", "x=5", "-v", "y=2"])

    assert capsys.readouterr().out == "11\n"


def test_eval_with_steps(capsys):
    main(["eval", "--steps", "2*3"])

    out = capsys.readouterr().out
    assert "2 * 3 = 6" in out
    assert out.endswith("6\n")


def test_eval_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("log(100)\n"))

    main(["eval"])

    assert capsys.readouterr().out == "2\n"


def test_eval_respects_precision_setting(monkeypatch, capsys):
    monkeypatch.setenv("EXPRCALC_PRECISION", "4")

    main(["eval", "1/3"])

    assert capsys.readouterr().out == "0.3333\n"


def test_unbound_variable_exits_with_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["eval", "x+1"])

    assert excinfo.value.code == 1
    assert "Unbound variable" in capsys.readouterr().err


def test_syntax_error_exits_with_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["tokens", "3 & 4"])

    assert excinfo.value.code == 1
    assert "Unexpected character" in capsys.readouterr().err


def test_malformed_binding_is_a_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main(["eval", "x", "--var", "x"])

    assert excinfo.value.code == 2


def test_tokens_table(capsys):
    main(["tokens", "sin(x)"])

    out = capsys.readouterr().out
    assert "Tokens [4]" in out
    assert "FUNCTION" in out
    assert "CLOSE_BRACKET" in out


def test_tree_prints_prefix_and_node_count(capsys):
    main(["tree", "1+2*3"])

    out = capsys.readouterr().out
    assert "prefix: + 1 * 2 3" in out
    assert "nodes:  5" in out


def test_vars(capsys):
    main(["vars", "a*b+a"])

    assert capsys.readouterr().out == "a\nb\n"


def test_eval_expression_with_leading_minus_after_double_dash(capsys):
    main(["eval", "--", "-2^2"])

    assert capsys.readouterr().out == "-4\n"


def test_eval_leading_minus_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("-x\n"))

    main(["eval", "--var", "x=3"])

    assert capsys.readouterr().out == "-3\n"


def test_eval_steps_respect_precision_setting(monkeypatch, capsys):
    monkeypatch.setenv("EXPRCALC_PRECISION", "4")

    main(["eval", "--steps", "1/3"])

    out = capsys.readouterr().out
    assert "1 / 3 = 0.3333" in out
    assert "0.333333333333" not in out
