"""
Error types for tinyexpr tokenizing, parsing, and configuration.
"""

from dataclasses import dataclass
from typing import Optional


class TinyExprError(Exception):
    """Base exception for all tinyexpr errors."""

    def __init__(
        self,
        message: str,
        context: Optional["ErrorContext"] = None,
        pos: int | None = None,
    ):
        self.message = message
        self.context = context
        # Zero-based source offset of the offending character or token
        self.pos = context.pos if context and pos is None else pos
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        if self.pos is not None:
            return f"{self.message} (at position {self.pos})"
        return self.message


class LexError(TinyExprError):
    """
    Raised when input text cannot be split into tokens.

    Examples:
    - Unterminated string literal
    """

    pass


class ExpressionSyntaxError(TinyExprError):
    """
    Raised when a token sequence does not form a single expression.

    Examples:
    - Operator with a missing operand
    - Unmatched parenthesis or brace
    - Tokens left over after a complete expression
    - Assignment to something other than a variable
    """

    pass


class ConfigError(TinyExprError):
    """
    Raised when parser configuration cannot be loaded.

    Examples:
    - Malformed TOML
    - Non-boolean value for a flag
    """

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside a single line of input.

    Attributes:
        source: The full text that was being parsed
        pos: Zero-based offset of the offending character or token
        origin: Name shown in the location prefix
    """

    source: str
    pos: int
    origin: str = "<input>"

    @property
    def line(self) -> int:
        return self.source.count("\n", 0, self.pos) + 1

    @property
    def column(self) -> int:
        return self.pos - (self.source.rfind("\n", 0, self.pos) + 1) + 1

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like "<input>:1:5" followed by the source line
            and a caret under the offending column.
        """
        location = f"{self.origin}:{self.line}:{self.column}"
        return f"{location}\n{self._format_snippet()}"

    def _format_snippet(self) -> str:
        """Format the offending line with an error marker under the column."""
        lines = self.source.split("\n")
        text = lines[self.line - 1]
        prefix = f"{self.line:4d} | "
        marker = " " * (len(prefix) + self.column - 1) + "^"
        return f"{prefix}{text}\n{marker}"


def make_lex_error(message: str, source: str, pos: int) -> LexError:
    """
    Helper to create a LexError with context.

    Args:
        message: Error description
        source: Text being tokenized
        pos: Zero-based offset of the error

    Returns:
        LexError with context attached
    """
    return LexError(message, ErrorContext(source=source, pos=pos))


def make_syntax_error(message: str, source: str | None, pos: int) -> ExpressionSyntaxError:
    """
    Helper to create an ExpressionSyntaxError with optional context.

    The treeifier works on tokens and may not know the original text; in
    that case the error carries no snippet, only the position.

    Args:
        message: Error description
        source: Text the tokens came from, if known
        pos: Zero-based offset of the offending token

    Returns:
        ExpressionSyntaxError with context if the source is known
    """
    if source is not None:
        return ExpressionSyntaxError(message, ErrorContext(source=source, pos=pos))
    return ExpressionSyntaxError(message, pos=pos)
