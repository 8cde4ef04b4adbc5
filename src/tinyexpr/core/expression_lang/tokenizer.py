"""
Tokenizer for the tinyexpr expression language.

Converts one line of input into a sequence of typed tokens. Literals are
classified by their leading characters only: ``0x`` starts a hex run,
``0b`` a binary run (when extended literals are enabled), any other digit a
decimal run, and a letter or underscore an identifier, however hex-like
the rest of it looks.
"""

from __future__ import annotations

import logging
import re
from enum import StrEnum, auto

from tinyexpr.core.config import DEFAULT_CONFIG, ParserConfig
from tinyexpr.core.errors import make_lex_error

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for the expression language."""

    # Literals
    NUMBER = auto()
    HEX = auto()
    BIN = auto()
    STRING = auto()

    # Identifiers
    IDENT = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    CONCAT = auto()  # ++
    BANG = auto()
    AND = auto()  # &&
    OR = auto()  # ||

    # Assignment
    ASSIGN = auto()
    STAR_ASSIGN = auto()
    SLASH_ASSIGN = auto()
    PLUS_ASSIGN = auto()
    MINUS_ASSIGN = auto()
    CONCAT_ASSIGN = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()
    LBRACE = auto()
    RBRACE = auto()

    # Any character no other rule accepts
    UNKNOWN = auto()

    # End of input
    EOF = auto()


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: str, pos: int) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.value, self.pos) == (other.kind, other.value, other.pos)

    def __hash__(self) -> int:
        return hash((self.kind, self.value, self.pos))

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


# Operators ordered longest first so that ++= wins over ++ and ++ over +
_OPERATORS: tuple[tuple[str, TokenKind], ...] = (
    ("++=", TokenKind.CONCAT_ASSIGN),
    ("++", TokenKind.CONCAT),
    ("*=", TokenKind.STAR_ASSIGN),
    ("/=", TokenKind.SLASH_ASSIGN),
    ("+=", TokenKind.PLUS_ASSIGN),
    ("-=", TokenKind.MINUS_ASSIGN),
    ("&&", TokenKind.AND),
    ("||", TokenKind.OR),
    ("+", TokenKind.PLUS),
    ("-", TokenKind.MINUS),
    ("*", TokenKind.STAR),
    ("/", TokenKind.SLASH),
    ("!", TokenKind.BANG),
    ("=", TokenKind.ASSIGN),
    ("(", TokenKind.LPAREN),
    (")", TokenKind.RPAREN),
    (",", TokenKind.COMMA),
    ("{", TokenKind.LBRACE),
    ("}", TokenKind.RBRACE),
)

_HEX_RE = re.compile(r"0x([0-9a-fA-F]*)")
_BIN_RE = re.compile(r"0b([01]*)")
_NUMBER_RE = re.compile(r"[0-9]+")
# Identifier: letter or underscore followed by alphanumerics/underscores
_IDENT_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")

_WHITESPACE = " \t\n\r\f\v"


def tokenize(source: str, config: ParserConfig | None = None) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    The returned list always ends with an EOF token positioned at
    ``len(source)``.

    Args:
        source: One line of user input.
        config: Parser options; ``extended`` enables 0b binary literals.

    Raises:
        LexError: If a string literal is not terminated.
    """
    config = config or DEFAULT_CONFIG
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        # Skip whitespace
        if c in _WHITESPACE:
            i += 1
            continue

        # String literals
        if c == '"':
            i, tok = _read_string(source, i)
            tokens.append(tok)
            continue

        # Numbers, with the prefix rules checked before plain decimal
        if c.isascii() and c.isdigit():
            i, tok = _read_number(source, i, config)
            tokens.append(tok)
            continue

        # Identifiers
        m = _IDENT_RE.match(source, i)
        if m:
            tokens.append(Token(TokenKind.IDENT, m.group(0), i))
            i = m.end()
            continue

        # Operators and punctuation
        for text, kind in _OPERATORS:
            if source.startswith(text, i):
                tokens.append(Token(kind, text, i))
                i += len(text)
                break
        else:
            tokens.append(Token(TokenKind.UNKNOWN, c, i))
            i += 1

    tokens.append(Token(TokenKind.EOF, "", n))
    logger.debug("Tokenized %r into %d tokens", source, len(tokens) - 1)
    return tokens


def _read_number(source: str, start: int, config: ParserConfig) -> tuple[int, Token]:
    """Read a hex, binary or decimal literal starting at a digit."""
    m = _HEX_RE.match(source, start)
    if m:
        return m.end(), Token(TokenKind.HEX, m.group(1), start)

    if config.extended:
        m = _BIN_RE.match(source, start)
        if m:
            return m.end(), Token(TokenKind.BIN, m.group(1), start)

    m = _NUMBER_RE.match(source, start)
    assert m is not None
    return m.end(), Token(TokenKind.NUMBER, m.group(0), start)


def _read_string(source: str, start: int) -> tuple[int, Token]:
    """Read a double-quoted string literal. Content is kept verbatim."""
    end = source.find('"', start + 1)
    if end == -1:
        raise make_lex_error("Unterminated string literal", source, start)
    return end + 1, Token(TokenKind.STRING, source[start + 1 : end], start)
