"""
tinyexpr command-line front end.

Commands:
    parse   print the expression tree for one expression
    tokens  print the token table for one expression
    repl    read expressions line by line and print each tree
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from tinyexpr.cli.utils import (
    console,
    print_error,
    resolve_config,
    setup_logging,
    version_callback,
)
from tinyexpr.core.errors import TinyExprError
from tinyexpr.core.expression_lang import parse_expr, tokenize
from tinyexpr.core.expression_lang.tokenizer import TokenKind

app = typer.Typer(
    help="tinyexpr - parse debugger expressions into syntax trees",
    no_args_is_help=True,
)

ExtendedOption = Annotated[
    bool,
    typer.Option("--extended", "-x", help="Recognize 0b binary literals"),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to a tinyexpr.toml file"),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", help="Enable debug logging")]


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """tinyexpr CLI main callback for global options."""
    pass


@app.command(name="parse")
def parse_command(
    expression: Annotated[str, typer.Argument(help="Expression to parse")],
    extended: ExtendedOption = False,
    config_path: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Parse an expression and print its canonical tree."""
    setup_logging(verbose)
    config = resolve_config(config_path, extended)
    try:
        expr = parse_expr(expression, config)
    except TinyExprError as e:
        print_error(e)
        raise typer.Exit(code=1) from e
    console.print(escape(str(expr)), soft_wrap=True)


@app.command(name="tokens")
def tokens_command(
    expression: Annotated[str, typer.Argument(help="Expression to tokenize")],
    extended: ExtendedOption = False,
    config_path: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Tokenize an expression and print the token table."""
    setup_logging(verbose)
    config = resolve_config(config_path, extended)
    try:
        tokens = tokenize(expression, config)
    except TinyExprError as e:
        print_error(e)
        raise typer.Exit(code=1) from e

    table = Table(title="Tokens")
    table.add_column("Pos", justify="right")
    table.add_column("Kind", style="cyan")
    table.add_column("Lexeme")
    for tok in tokens:
        if tok.kind == TokenKind.EOF:
            continue
        table.add_row(str(tok.pos), tok.kind.value, escape(repr(tok.value)))
    console.print(table)


@app.command(name="repl")
def repl_command(
    extended: ExtendedOption = False,
    config_path: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Read expressions line by line until EOF, 'quit' or 'exit'."""
    setup_logging(verbose)
    config = resolve_config(config_path, extended)
    prompt = "> " if sys.stdin.isatty() else ""

    while True:
        try:
            line = console.input(prompt)
        except EOFError:
            break
        line = line.strip()
        if not line:
            continue
        if line in ("quit", "exit"):
            break
        try:
            expr = parse_expr(line, config)
        except TinyExprError as e:
            print_error(e)
            continue
        console.print(escape(str(expr)), soft_wrap=True)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
