"""Core tinyexpr functionality: IR, tokenizer, treeifier, configuration, errors."""

from . import ir
from .config import DEFAULT_CONFIG, ParserConfig, load_config
from .errors import (
    ConfigError,
    ErrorContext,
    ExpressionSyntaxError,
    LexError,
    TinyExprError,
)
from .expression_lang import parse_expr, tokenize, treeify

__all__ = [
    "ir",
    "TinyExprError",
    "LexError",
    "ExpressionSyntaxError",
    "ConfigError",
    "ErrorContext",
    "ParserConfig",
    "DEFAULT_CONFIG",
    "load_config",
    "parse_expr",
    "tokenize",
    "treeify",
]
