"""
tinyexpr CLI Utilities.

Shared helpers used by the CLI commands.
"""

import logging
import platform
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from tinyexpr._version import get_version
from tinyexpr.core.config import ParserConfig, load_config
from tinyexpr.core.errors import TinyExprError

console = Console()


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"tinyexpr {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


def resolve_config(config_path: Path | None, extended: bool) -> ParserConfig:
    """Load the parser config; --extended switches binary literals on regardless of files and env."""
    try:
        config = load_config(config_path)
    except TinyExprError as e:
        print_error(e)
        raise typer.Exit(code=1) from e
    if extended:
        config = config.model_copy(update={"extended": extended})
    return config


def print_error(error: TinyExprError) -> None:
    console.print(f"[red]{escape(str(error))}[/red]", soft_wrap=True)
