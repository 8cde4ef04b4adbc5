"""
tinyexpr Intermediate Representation (IR) types.

All expression node types are re-exported from this package.
"""

from .expressions import (
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
    walk,
)

__all__ = [
    "ArgList",
    "Assign",
    "BinaryExpr",
    "BinaryOp",
    "Expr",
    "FuncCall",
    "FuncLiteral",
    "NumberBase",
    "NumberLiteral",
    "StringLiteral",
    "UnaryExpr",
    "UnaryOp",
    "Variable",
    "walk",
]
