"""
tinyexpr CLI Package.

- main.py: typer app with the parse, tokens and repl commands
- utils.py: shared console, logging and config helpers
"""

from tinyexpr.cli.main import app, main
from tinyexpr.cli.utils import version_callback

__all__ = ["app", "main", "version_callback"]
