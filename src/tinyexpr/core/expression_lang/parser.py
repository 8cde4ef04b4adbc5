"""
Precedence-climbing parser (treeifier) for the tinyexpr expression language.

Grammar (precedence low to high):
    assignment  → IDENT ("=" | "*=" | "/=" | "+=" | "-=" | "++=") assignment
    or_expr     → and_expr ("||" and_expr)*
    and_expr    → sum ("&&" sum)*
    sum         → diff ("+" sum)?
    diff        → product (("-" | "++") product)*
    product     → unary (("*" | "/") unary)*
    unary       → ("!" | "-") unary | primary
    primary     → literal | call | IDENT | func_literal | "(" expr ")"
    literal     → NUMBER | HEX | BIN | STRING
    call        → IDENT "(" (expr ("," expr)*)? ")"
    func_literal → "(" (IDENT ("," IDENT)*)? ")" "{" (expr ("," expr)*)? "}"

``+`` sits below ``-`` and ``++`` and takes the rest of its tier to the
right, so ``a + b - c - d`` is ``a + ((b - c) - d)`` while ``-`` and ``++``
chains stay left-associative. Assignment is right-associative and the
compound forms are desugared: ``a *= 5`` becomes ``a = a * 5``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import NamedTuple

from tinyexpr.core.config import DEFAULT_CONFIG, ParserConfig
from tinyexpr.core.errors import ExpressionSyntaxError, make_syntax_error
from tinyexpr.core.expression_lang.lint import warn_ambiguous_literals
from tinyexpr.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from tinyexpr.core.ir.expressions import (
    ArgList,
    Assign,
    BinaryExpr,
    BinaryOp,
    Expr,
    FuncCall,
    FuncLiteral,
    NumberBase,
    NumberLiteral,
    StringLiteral,
    UnaryExpr,
    UnaryOp,
    Variable,
)

logger = logging.getLogger(__name__)


class _Infix(NamedTuple):
    op: BinaryOp
    prec: int
    right_grouping: bool = False


# Precedence tiers
ASSIGN_PREC = 1
OR_PREC = 2
AND_PREC = 3
SUM_PREC = 4
DIFF_PREC = 5
PRODUCT_PREC = 6

# Deepest nesting of groups, calls, prefix operators and assignments
MAX_DEPTH = 100
# Tallest tree the parser will build; rendering and walk recurse per level
MAX_HEIGHT = 256

_INFIX: dict[TokenKind, _Infix] = {
    TokenKind.OR: _Infix(BinaryOp.OR, OR_PREC),
    TokenKind.AND: _Infix(BinaryOp.AND, AND_PREC),
    TokenKind.PLUS: _Infix(BinaryOp.ADD, SUM_PREC, right_grouping=True),
    TokenKind.MINUS: _Infix(BinaryOp.SUB, DIFF_PREC),
    TokenKind.CONCAT: _Infix(BinaryOp.CONCAT, DIFF_PREC),
    TokenKind.STAR: _Infix(BinaryOp.MUL, PRODUCT_PREC),
    TokenKind.SLASH: _Infix(BinaryOp.DIV, PRODUCT_PREC),
}

# Assignment operators and the binary operator each one desugars to
_ASSIGN_OPS: dict[TokenKind, BinaryOp | None] = {
    TokenKind.ASSIGN: None,
    TokenKind.STAR_ASSIGN: BinaryOp.MUL,
    TokenKind.SLASH_ASSIGN: BinaryOp.DIV,
    TokenKind.PLUS_ASSIGN: BinaryOp.ADD,
    TokenKind.MINUS_ASSIGN: BinaryOp.SUB,
    TokenKind.CONCAT_ASSIGN: BinaryOp.CONCAT,
}

_PREFIX: dict[TokenKind, UnaryOp] = {
    TokenKind.BANG: UnaryOp.NOT,
    TokenKind.MINUS: UnaryOp.NEG,
}

_LITERALS: dict[TokenKind, NumberBase] = {
    TokenKind.NUMBER: NumberBase.DEC,
    TokenKind.HEX: NumberBase.HEX,
    TokenKind.BIN: NumberBase.BIN,
}


def _describe(tok: Token) -> str:
    if tok.kind == TokenKind.EOF:
        return "end of input"
    return f"{tok.kind} ({tok.value!r})"


class _Parser:
    """Precedence-climbing parser over a token list."""

    def __init__(
        self,
        tokens: list[Token],
        config: ParserConfig,
        source: str | None = None,
    ) -> None:
        if not tokens or tokens[-1].kind != TokenKind.EOF:
            end = tokens[-1].pos + len(tokens[-1].value) if tokens else 0
            tokens = [*tokens, Token(TokenKind.EOF, "", end)]
        self.tokens = tokens
        self.config = config
        self.source = source
        self.pos = 0
        self.depth = 0
        # id -> (node, height) for every interior node built so far
        self.heights: dict[int, tuple[Expr, int]] = {}
        # Closing kinds of the groups currently open, innermost last
        self.open_groups: list[TokenKind] = []

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int = 0) -> Token:
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return self.tokens[-1]  # EOF

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def error(self, message: str, tok: Token | None = None) -> ExpressionSyntaxError:
        tok = tok or self.current
        return make_syntax_error(message, self.source, tok.pos)

    def expect_closing(self, kind: TokenKind, opener: Token) -> Token:
        """Consume a closing ``)`` or ``}`` matching ``opener``."""
        tok = self.current
        if tok.kind == kind:
            return self.advance()
        closer = ")" if kind == TokenKind.RPAREN else "}"
        if tok.kind == TokenKind.EOF:
            raise self.error(f"Unmatched {opener.value!r}: expected {closer!r}", opener)
        raise self.error(f"Expected {closer!r}, got {_describe(tok)}")

    @contextmanager
    def nested(self) -> Iterator[None]:
        """Track one level of recursion, failing past MAX_DEPTH."""
        if self.depth >= MAX_DEPTH:
            raise self.error("Expression nested too deeply")
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    def build(self, node: Expr, *children: Expr) -> Expr:
        """Record the height of a new interior node, failing past MAX_HEIGHT."""
        height = 1 + max((self.heights.get(id(c), (c, 1))[1] for c in children), default=1)
        if height > MAX_HEIGHT:
            raise self.error("Expression nested too deeply")
        self.heights[id(node)] = (node, height)
        return node

    # -- Grammar rules --

    def parse_expr(self, min_prec: int = ASSIGN_PREC) -> Expr:
        """Fold infix operators binding at least as tightly as ``min_prec``."""
        with self.nested():
            return self._parse_infix(min_prec)

    def _parse_infix(self, min_prec: int) -> Expr:
        left = self.parse_unary()

        while True:
            tok = self.current

            if tok.kind in _ASSIGN_OPS:
                if min_prec > ASSIGN_PREC:
                    break
                left = self._parse_assignment(left, tok)
                continue

            infix = _INFIX.get(tok.kind)
            if infix is None or infix.prec < min_prec:
                break
            self.advance()
            if infix.right_grouping:
                right = self._parse_right_chain(infix)
            else:
                right = self.parse_expr(infix.prec + 1)
            left = self.build(BinaryExpr(op=infix.op, left=left, right=right), left, right)

        return left

    def _parse_right_chain(self, infix: _Infix) -> Expr:
        """Operands of ``infix`` up to the end of its tier, grouped from the right."""
        operands = [self.parse_expr(infix.prec + 1)]
        while _INFIX.get(self.current.kind) is infix:
            self.advance()
            operands.append(self.parse_expr(infix.prec + 1))

        right = operands.pop()
        for operand in reversed(operands):
            right = self.build(BinaryExpr(op=infix.op, left=operand, right=right), operand, right)
        return right

    def _parse_assignment(self, target: Expr, op_tok: Token) -> Expr:
        """target OP= value, right-associative."""
        if not isinstance(target, Variable):
            raise self.error(f"Cannot assign to {target}: target must be a variable", op_tok)
        self.advance()
        value = self.parse_expr(ASSIGN_PREC)

        op = _ASSIGN_OPS[op_tok.kind]
        if op is not None:
            value = self.build(BinaryExpr(op=op, left=Variable(name=target.name), right=value), value)
        return self.build(Assign(name=target.name, value=value), value)

    def parse_unary(self) -> Expr:
        """('!' | '-') unary | primary"""
        op = _PREFIX.get(self.current.kind)
        if op is not None:
            self.advance()
            with self.nested():
                operand = self.parse_unary()
            return self.build(UnaryExpr(op=op, operand=operand), operand)
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        """literal | call | variable | func_literal | '(' expr ')'"""
        tok = self.current

        if tok.kind in _LITERALS:
            if tok.kind == TokenKind.BIN and not self.config.extended:
                raise self.error("Binary literals require extended mode")
            self.advance()
            return NumberLiteral(text=tok.value, base=_LITERALS[tok.kind])

        if tok.kind == TokenKind.STRING:
            self.advance()
            return StringLiteral(text=tok.value)

        if tok.kind == TokenKind.IDENT:
            if self.peek(1).kind == TokenKind.LPAREN:
                return self._parse_func_call()
            self.advance()
            return Variable(name=tok.value)

        if tok.kind == TokenKind.LPAREN:
            if self._at_func_literal():
                return self._parse_func_literal()
            if self.peek(1).kind == TokenKind.RPAREN:
                raise self.error("Empty parentheses: expected an expression")
            self.advance()
            self.open_groups.append(TokenKind.RPAREN)
            expr = self.parse_expr()
            self.expect_closing(TokenKind.RPAREN, tok)
            self.open_groups.pop()
            return expr

        if tok.kind == TokenKind.EOF:
            raise self.error("Unexpected end of input: expected an expression")
        if tok.kind in (TokenKind.RPAREN, TokenKind.RBRACE):
            if tok.kind in self.open_groups:
                raise self.error(f"Expected an expression, got {tok.value!r}")
            raise self.error(f"Unmatched {tok.value!r}")
        if tok.kind == TokenKind.UNKNOWN:
            raise self.error(f"Unexpected character: {tok.value!r}")
        raise self.error(f"Expected an expression, got {_describe(tok)}")

    def _parse_func_call(self) -> Expr:
        """IDENT '(' (expr (',' expr)*)? ')'"""
        name_tok = self.advance()
        opener = self.advance()

        if self.current.kind == TokenKind.RPAREN:
            self.advance()
            return FuncCall(name=name_tok.value, args=None)

        self.open_groups.append(TokenKind.RPAREN)
        items = self._parse_expr_list()
        self.expect_closing(TokenKind.RPAREN, opener)
        self.open_groups.pop()
        return self.build(FuncCall(name=name_tok.value, args=ArgList(items=items)), *items)

    def _parse_expr_list(self) -> list[Expr]:
        items = [self.parse_expr()]
        while self.current.kind == TokenKind.COMMA:
            self.advance()
            items.append(self.parse_expr())
        return items

    def _at_func_literal(self) -> bool:
        """Whether the '(' at the cursor opens a parameter list followed by '{'."""
        i = 1
        if self.peek(i).kind == TokenKind.IDENT:
            i += 1
            while self.peek(i).kind == TokenKind.COMMA and self.peek(i + 1).kind == TokenKind.IDENT:
                i += 2
        return self.peek(i).kind == TokenKind.RPAREN and self.peek(i + 1).kind == TokenKind.LBRACE

    def _parse_func_literal(self) -> Expr:
        """'(' params ')' '{' (expr (',' expr)*)? '}'"""
        self.advance()  # (
        params: list[str] = []
        while self.current.kind != TokenKind.RPAREN:
            params.append(self.advance().value)
            if self.current.kind == TokenKind.COMMA:
                self.advance()
        self.advance()  # )

        opener = self.advance()  # {
        body: list[Expr] = []
        self.open_groups.append(TokenKind.RBRACE)
        if self.current.kind != TokenKind.RBRACE:
            body = self._parse_expr_list()
        self.expect_closing(TokenKind.RBRACE, opener)
        self.open_groups.pop()
        return self.build(FuncLiteral(params=params, body=body), *body)


def treeify(
    tokens: list[Token],
    config: ParserConfig | None = None,
    source: str | None = None,
) -> Expr:
    """Build a single expression tree from a token list.

    The whole token list must form exactly one expression.

    Args:
        tokens: Output of ``tokenize``.
        config: Parser options; BIN tokens are rejected unless ``extended``.
        source: Original text, used only to render error snippets.

    Returns:
        Root node of the expression tree.

    Raises:
        ExpressionSyntaxError: If the tokens do not form one expression.
    """
    parser = _Parser(tokens, config or DEFAULT_CONFIG, source)
    expr = parser.parse_expr()

    # Ensure all tokens consumed
    tok = parser.current
    if tok.kind != TokenKind.EOF:
        if tok.kind in (TokenKind.RPAREN, TokenKind.RBRACE):
            raise parser.error(f"Unmatched {tok.value!r}")
        if tok.kind == TokenKind.UNKNOWN:
            raise parser.error(f"Unexpected character: {tok.value!r}")
        raise parser.error(f"Unexpected token after expression: {tok.value!r}")

    logger.debug("Treeified %d tokens into %s", len(parser.tokens) - 1, expr)
    return expr


def parse_expr(source: str, config: ParserConfig | None = None) -> Expr:
    """Parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "a ++= 0x01")
        config: Parser options. Ambiguous decimal literals are logged as
            warnings when ``config.warn`` is set.

    Returns:
        Parsed expression AST.

    Raises:
        LexError: If tokenization fails.
        ExpressionSyntaxError: If the expression is invalid.
    """
    config = config or DEFAULT_CONFIG
    tokens = tokenize(source, config)
    expr = treeify(tokens, config, source=source)
    if config.warn:
        warn_ambiguous_literals(expr)
    return expr
