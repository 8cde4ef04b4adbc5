"""
tinyexpr expression language.

Tokenizer and treeifier for the one-line expressions typed into the script
debugger.

Usage:
    from tinyexpr.core.expression_lang import parse_expr

    expr = parse_expr("a ++= 0x01")
    str(expr)
    # '(a = (a ++ 0x01))'
"""

from tinyexpr.core.expression_lang.lint import literal_warnings
from tinyexpr.core.expression_lang.parser import parse_expr, treeify
from tinyexpr.core.expression_lang.tokenizer import Token, TokenKind, tokenize

__all__ = ["Token", "TokenKind", "literal_warnings", "parse_expr", "tokenize", "treeify"]
