"""
tinyexpr - expression front end for an interactive script debugger.

Turns one line of user input into an expression tree:

    from tinyexpr import parse_expr

    str(parse_expr("2 + 3 * 5"))
    # '(2 + (3 * 5))'
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.config import DEFAULT_CONFIG, ParserConfig, load_config
from .core.errors import ConfigError, ExpressionSyntaxError, LexError, TinyExprError
from .core.expression_lang import parse_expr, tokenize, treeify

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "parse_expr",
    "tokenize",
    "treeify",
    "ParserConfig",
    "DEFAULT_CONFIG",
    "load_config",
    "TinyExprError",
    "LexError",
    "ExpressionSyntaxError",
    "ConfigError",
]
