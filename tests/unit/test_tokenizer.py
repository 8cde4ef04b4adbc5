"""Tests for the tinyexpr tokenizer.

Covers literal classification by leading characters, longest-match
operators, positions, and the unterminated-string failure.
"""

from __future__ import annotations

import pytest

from tinyexpr.core.config import ParserConfig
from tinyexpr.core.errors import LexError
from tinyexpr.core.expression_lang.tokenizer import Token, TokenKind, tokenize


def _pairs(source: str, config: ParserConfig | None = None) -> list[tuple[TokenKind, str]]:
    return [(t.kind, t.value) for t in tokenize(source, config) if t.kind != TokenKind.EOF]


class TestNumericLiterals:
    """Numeric literals are classified by their prefix."""

    def test_decimal(self) -> None:
        assert _pairs("42") == [(TokenKind.NUMBER, "42")]

    def test_zero(self) -> None:
        assert _pairs("0") == [(TokenKind.NUMBER, "0")]

    def test_hex_strips_prefix(self) -> None:
        assert _pairs("0x1234") == [(TokenKind.HEX, "1234")]

    def test_hex_empty_run(self) -> None:
        assert _pairs("0x") == [(TokenKind.HEX, "")]

    def test_hex_mixed_case(self) -> None:
        assert _pairs("0xabCD") == [(TokenKind.HEX, "abCD")]

    def test_hex_stops_at_non_hex(self) -> None:
        assert _pairs("0xzz") == [(TokenKind.HEX, ""), (TokenKind.IDENT, "zz")]

    def test_binary_when_extended(self, extended_config: ParserConfig) -> None:
        assert _pairs("0b1011", extended_config) == [(TokenKind.BIN, "1011")]

    def test_binary_empty_run(self, extended_config: ParserConfig) -> None:
        assert _pairs("0b", extended_config) == [(TokenKind.BIN, "")]

    def test_binary_stops_at_non_binary_digit(self, extended_config: ParserConfig) -> None:
        assert _pairs("0b12", extended_config) == [(TokenKind.BIN, "1"), (TokenKind.NUMBER, "2")]

    def test_binary_disabled_by_default(self) -> None:
        assert _pairs("0b1011") == [(TokenKind.NUMBER, "0"), (TokenKind.IDENT, "b1011")]

    def test_digits_then_letters_split(self) -> None:
        assert _pairs("12ab") == [(TokenKind.NUMBER, "12"), (TokenKind.IDENT, "ab")]

    def test_negative_number_is_two_tokens(self) -> None:
        assert _pairs("-1") == [(TokenKind.MINUS, "-"), (TokenKind.NUMBER, "1")]


class TestIdentifiersAndStrings:
    def test_identifier(self) -> None:
        assert _pairs("my_var") == [(TokenKind.IDENT, "my_var")]

    def test_leading_underscore(self) -> None:
        assert _pairs("_x1") == [(TokenKind.IDENT, "_x1")]

    def test_hex_looking_run_is_identifier(self) -> None:
        run = "aabbccddeeff00112233445566778899aabbccddeeff00112233445566778899"
        assert _pairs(run) == [(TokenKind.IDENT, run)]

    def test_string_content_verbatim(self) -> None:
        assert _pairs('"hello world"') == [(TokenKind.STRING, "hello world")]

    def test_string_backslash_not_processed(self) -> None:
        assert _pairs('"a\\nb"') == [(TokenKind.STRING, "a\\nb")]

    def test_empty_string(self) -> None:
        assert _pairs('""') == [(TokenKind.STRING, "")]

    def test_unterminated_string(self) -> None:
        with pytest.raises(LexError, match="Unterminated") as exc_info:
            tokenize('abc "hello')
        assert exc_info.value.pos == 4


class TestOperators:
    """Operators use longest match."""

    def test_all_operators(self) -> None:
        source = "+ - * / ++ ! && || = *= /= += -= ++="
        kinds = [t.kind for t in tokenize(source)]
        assert kinds == [
            TokenKind.PLUS,
            TokenKind.MINUS,
            TokenKind.STAR,
            TokenKind.SLASH,
            TokenKind.CONCAT,
            TokenKind.BANG,
            TokenKind.AND,
            TokenKind.OR,
            TokenKind.ASSIGN,
            TokenKind.STAR_ASSIGN,
            TokenKind.SLASH_ASSIGN,
            TokenKind.PLUS_ASSIGN,
            TokenKind.MINUS_ASSIGN,
            TokenKind.CONCAT_ASSIGN,
            TokenKind.EOF,
        ]

    def test_punctuation(self) -> None:
        kinds = [t.kind for t in tokenize("(),{}")]
        assert kinds == [
            TokenKind.LPAREN,
            TokenKind.RPAREN,
            TokenKind.COMMA,
            TokenKind.LBRACE,
            TokenKind.RBRACE,
            TokenKind.EOF,
        ]

    def test_concat_assign_beats_concat(self) -> None:
        assert _pairs("a++=b") == [
            (TokenKind.IDENT, "a"),
            (TokenKind.CONCAT_ASSIGN, "++="),
            (TokenKind.IDENT, "b"),
        ]

    def test_triple_plus(self) -> None:
        assert _pairs("+++") == [(TokenKind.CONCAT, "++"), (TokenKind.PLUS, "+")]

    def test_separated_pluses(self) -> None:
        assert _pairs("+ +") == [(TokenKind.PLUS, "+"), (TokenKind.PLUS, "+")]

    def test_unknown_character(self) -> None:
        assert _pairs("a & b") == [
            (TokenKind.IDENT, "a"),
            (TokenKind.UNKNOWN, "&"),
            (TokenKind.IDENT, "b"),
        ]


class TestPositions:
    def test_positions_and_eof(self) -> None:
        tokens = tokenize("a + 10")
        assert [t.pos for t in tokens] == [0, 2, 4, 6]
        assert tokens[-1].kind == TokenKind.EOF

    def test_empty_input(self) -> None:
        assert tokenize("") == [Token(TokenKind.EOF, "", 0)]

    def test_whitespace_handling(self) -> None:
        kinds = [t.kind for t in tokenize(" \t a  *\n b  ")]
        assert kinds == [TokenKind.IDENT, TokenKind.STAR, TokenKind.IDENT, TokenKind.EOF]

    def test_retokenizing_is_idempotent(self) -> None:
        source = 'f(0x12, "s") ++= -a * 3'
        assert tokenize(source) == tokenize(source)

    def test_tokens_differ_by_position(self) -> None:
        assert Token(TokenKind.NUMBER, "1", 0) != Token(TokenKind.NUMBER, "1", 1)
