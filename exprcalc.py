#!/usr/bin/env python3
"""
exprcalc.py — exprcalc CLI.

Configuration: environment variables with the EXPRCALC_ prefix
or a .env file (e.g. EXPRCALC_LOG_LEVEL=DEBUG, EXPRCALC_PRECISION=6).

Subcommands:
    tokens — show the tokens of an expression
    tree   — show the parsed expression tree
    eval   — evaluate an expression
    vars   — list the variables an expression uses

Usage:
    python exprcalc.py tokens "3.14+x*sin(2)"
    python exprcalc.py tree "1+2*3"
    python exprcalc.py eval "x^2+1" --var x=3 --steps
    echo "log(100)" | python exprcalc.py eval
    python exprcalc.py eval -- "-2^2"
    python exprcalc.py vars "a*b+a"

An expression starting with "-" must follow "--" (or come on stdin),
otherwise argparse reads it as an option.
EXPRCALC_PRECISION applies to printed values and to --steps.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Optional

from rich import box
from rich.console import Console
from rich.table import Table

logger = logging.getLogger("exprcalc.cli")


# -- helpers ---------------------------------------------------------------

_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False)
    return _CONSOLE


def _binding(raw: str) -> tuple[str, float]:
    name, sep, value = raw.partition("=")
    name = name.strip()
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {raw!r}")
    try:
        return name, float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value.strip()!r}") from None


def _read_expression(args: argparse.Namespace) -> str:
    text = args.expression or sys.stdin.read().strip()
    if not text:
        print("Error: pass an expression as an argument or on stdin", file=sys.stderr)
        sys.exit(1)
    return text


def _print_table(title: str, columns: list[str], rows: list[tuple[Any, ...]]) -> None:
    table = Table(title=title, box=box.ASCII, show_lines=False)
    for i, column in enumerate(columns):
        table.add_column(column, no_wrap=True, style="bold cyan" if i == 0 else None)
    for row in rows:
        table.add_row(*(str(cell) for cell in row))
    _console().print(table)


# -- subcommands -----------------------------------------------------------

def _tokens(args: argparse.Namespace, precision: int) -> None:
    from engine import tokenize

    tokens = tokenize(_read_expression(args))
    _print_table(
        f"Tokens [{len(tokens)}]",
        ["#", "Kind", "Text", "Pos"],
        [(i, t.kind.name, t.text, t.position) for i, t in enumerate(tokens, 1)],
    )


def _tree(args: argparse.Namespace, precision: int) -> None:
    from adapters.visitor.collectors import NodeCounter, PrefixFormatter
    from adapters.visitor.tree_printer import RichTreeBuilder
    from engine import accept, parse

    node = parse(_read_expression(args))

    builder = RichTreeBuilder(precision=precision)
    accept(node, builder)
    _console().print(builder.tree)

    prefix = PrefixFormatter(precision=precision)
    accept(node, prefix)
    counter = NodeCounter()
    accept(node, counter)
    print(f"prefix: {prefix.text}")
    print(f"nodes:  {counter.total}")


def _eval(args: argparse.Namespace, precision: int) -> None:
    from adapters.evaluator.tree_evaluator import TreeEvaluator, fmt
    from engine import parse

    node = parse(_read_expression(args))
    bindings = dict(args.var or [])
    result = TreeEvaluator(precision=precision).eval_expr(node, bindings)
    if args.steps:
        _print_table(
            f"Steps [{len(result.steps)}]",
            ["#", "Step"],
            [(i, step) for i, step in enumerate(result.steps, 1)],
        )
    print(fmt(result.value, precision))


def _vars(args: argparse.Namespace, precision: int) -> None:
    from engine import variables_of

    for name in variables_of(_read_expression(args)):
        print(name)


# -- main ------------------------------------------------------------------

def main(argv: Optional[list[str]] = None) -> None:
    from config import Settings
    from contracts import EvaluationError, ExpressionSyntaxError

    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper())

    parser = argparse.ArgumentParser(
        prog="exprcalc",
        description="exprcalc — tokenize, parse and evaluate math expressions",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # tokens
    p = sub.add_parser("tokens", help="Show the tokens of an expression")
    p.add_argument("expression", nargs="?", help="Expression (or stdin)")

    # tree
    p = sub.add_parser("tree", help="Show the parsed expression tree")
    p.add_argument("expression", nargs="?", help="Expression (or stdin)")

    # eval
    p = sub.add_parser("eval", help="Evaluate an expression")
    p.add_argument("expression", nargs="?",
                   help="Expression (or stdin); put -- before one starting with '-'")
    p.add_argument("--var", "-v", action="append", type=_binding, metavar="NAME=VALUE",
                   help="Variable binding, may be repeated")
    p.add_argument("--steps", "-s", action="store_true",
                   help="Show the computation steps")

    # vars
    p = sub.add_parser("vars", help="List the variables used by an expression")
    p.add_argument("expression", nargs="?", help="Expression (or stdin)")

    args = parser.parse_args(argv)

    cmds = {
        "tokens": _tokens,
        "tree":   _tree,
        "eval":   _eval,
        "vars":   _vars,
    }

    logger.debug("Running %s", args.command)
    try:
        cmds[args.command](args, settings.precision)
    except (ExpressionSyntaxError, EvaluationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
