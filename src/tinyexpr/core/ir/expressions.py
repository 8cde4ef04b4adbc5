"""
Expression AST types for the tinyexpr front end.

The treeifier produces a tree of these nodes for one line of input. The
node set is closed; consumers dispatch on it with ``isinstance`` and never
need anything beyond the types in ``Expr``.

Supports:
- Literals: decimal, 0x hex and 0b binary digit runs, "strings"
- Variables and assignment (compound forms are desugared by the parser)
- Arithmetic and concatenation: +, -, *, /, ++
- Logic: &&, ||, !
- Function calls: name(), name(a, b)
- Function literals: (a, b) { a ++ b }

Trees are compared by their canonical rendering, ``str(node)``. Literal
leaves keep their raw lexeme so the evaluator can rebuild the value.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class NumberBase(StrEnum):
    """Radix a numeric literal was written in."""

    DEC = "dec"
    HEX = "hex"
    BIN = "bin"


class BinaryOp(StrEnum):
    """Binary operators for expressions."""

    # Arithmetic
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    # Byte concatenation
    CONCAT = "++"
    # Logical
    AND = "&&"
    OR = "||"


class UnaryOp(StrEnum):
    """Unary operators for expressions."""

    NOT = "!"
    NEG = "-"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class NumberLiteral(BaseModel):
    """
    A numeric literal, kept as its raw digit run.

    Examples:
        - NumberLiteral(text="12") → 12
        - NumberLiteral(text="", base=NumberBase.HEX) → 0x
        - NumberLiteral(text="1011", base=NumberBase.BIN) → 0b1011
    """

    text: str = Field(description="Digits without any radix prefix")
    base: NumberBase = Field(default=NumberBase.DEC, description="Radix of the digits")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.base == NumberBase.HEX:
            return f"0x{self.text}"
        if self.base == NumberBase.BIN:
            return f"0b{self.text}"
        return self.text


class StringLiteral(BaseModel):
    """A quoted string; the text is verbatim, escapes are not processed."""

    text: str = Field(description="Content between the quotes")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f'"{self.text}"'


class Variable(BaseModel):
    """Reference to a named variable."""

    name: str = Field(description="Variable name")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class UnaryExpr(BaseModel):
    """Prefix operation: op operand."""

    op: UnaryOp
    operand: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.op.value}{self.operand})"


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.left} {self.op.value} {self.right})"


class ArgList(BaseModel):
    """An explicit, possibly empty, list of call arguments."""

    items: list[Expr] = Field(default_factory=list, description="Arguments in order")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "[" + ", ".join(str(i) for i in self.items) + "]"


class FuncCall(BaseModel):
    """
    Function call: name(arg1, arg2, ...).

    ``args`` is None when the call was written with empty parentheses. That
    is a different tree from a call holding an empty ``ArgList``, and the
    two render differently: ``f()`` versus ``f([])``.
    """

    name: str = Field(description="Function name")
    args: ArgList | None = Field(default=None, description="Arguments, or None for name()")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.args is None:
            return f"{self.name}()"
        return f"{self.name}({self.args})"


class Assign(BaseModel):
    """Simple assignment: name = value."""

    name: str = Field(description="Target variable")
    value: Expr = Field(description="Assigned expression")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.name} = {self.value})"


class FuncLiteral(BaseModel):
    """Anonymous function: (params) { stmt, stmt }."""

    params: list[str] = Field(default_factory=list, description="Parameter names")
    body: list[Expr] = Field(default_factory=list, description="Statement sequence")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        params_str = ", ".join(self.params)
        body_str = "; ".join(str(s) for s in self.body)
        return f"fn({params_str}) {{{body_str}}}"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = (
    NumberLiteral
    | StringLiteral
    | Variable
    | UnaryExpr
    | BinaryExpr
    | FuncCall
    | Assign
    | FuncLiteral
)

# Rebuild models for recursive forward references
UnaryExpr.model_rebuild()
BinaryExpr.model_rebuild()
ArgList.model_rebuild()
FuncCall.model_rebuild()
Assign.model_rebuild()
FuncLiteral.model_rebuild()


def walk(expr: Expr) -> Iterator[Expr]:
    """Yield ``expr`` and every node below it, in pre-order."""
    yield expr

    if isinstance(expr, NumberLiteral | StringLiteral | Variable):
        return
    if isinstance(expr, UnaryExpr):
        yield from walk(expr.operand)
        return
    if isinstance(expr, BinaryExpr):
        yield from walk(expr.left)
        yield from walk(expr.right)
        return
    if isinstance(expr, FuncCall):
        if expr.args is not None:
            for arg in expr.args.items:
                yield from walk(arg)
        return
    if isinstance(expr, Assign):
        yield from walk(expr.value)
        return
    if isinstance(expr, FuncLiteral):
        for stmt in expr.body:
            yield from walk(stmt)
        return

    raise TypeError(f"Unknown expression node: {type(expr).__name__}")
