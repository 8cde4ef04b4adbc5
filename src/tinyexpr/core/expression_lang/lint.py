"""
Ambiguous literal warnings.

A bare decimal literal is always read as a number, but some digit runs are
just as plausible as hex data (``1234`` vs ``0x1234``) or as small-integer
opcodes (``5`` vs ``OP_5``). These helpers point that out without changing
the tree.
"""

from __future__ import annotations

import logging

from tinyexpr.core.ir.expressions import Expr, NumberBase, NumberLiteral, walk

logger = logging.getLogger(__name__)

_INT64_MAX = 2**63 - 1
_INT64_DIGITS = len(str(_INT64_MAX))


def literal_warnings(expr: Expr) -> list[str]:
    """Return one message per ambiguous decimal literal in ``expr``, in tree order."""
    messages: list[str] = []
    for node in walk(expr):
        if isinstance(node, NumberLiteral) and node.base == NumberBase.DEC:
            messages.extend(_decimal_warnings(node.text))
    return messages


def _decimal_warnings(text: str) -> list[str]:
    # Longer digit runs cannot fit in int64
    if len(text) > _INT64_DIGITS:
        return []
    value = int(text)
    # Leading zeros or out-of-range values are not read back as the same number
    if str(value) != text or value > _INT64_MAX:
        return []

    messages = []
    if len(text) % 2 == 0:
        messages.append(
            f"ambiguous input {text} is interpreted as a numeric value; "
            f"use 0x{text} to force into hexadecimal interpretation"
        )
    if 1 <= value <= 16:
        messages.append(
            f"ambiguous input {text} is interpreted as a numeric value; "
            f"use OP_{text} to force into opcode"
        )
    return messages


def warn_ambiguous_literals(expr: Expr) -> None:
    """Log every message from ``literal_warnings`` at WARNING level."""
    for message in literal_warnings(expr):
        logger.warning(message)
