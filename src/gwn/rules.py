"""Binding precedences and the parse-rule record used by the Pratt parser."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gwn.ast_nodes import Expr
    from gwn.parser import Parser


class Precedence(IntEnum):
    """Binding power, lowest to highest."""

    NONE = 0
    OR = 1
    AND = 2
    EQUALITY = 3
    COMPARISON = 4
    TERM = 5
    FACTOR = 6
    POWER = 7
    APPLY = 8
    UNARY = 9
    PRIMARY = 10

    def next(self) -> Precedence:
        """One level tighter; PRIMARY is the ceiling."""
        return Precedence(min(self + 1, Precedence.PRIMARY))


PrefixFn = Callable[["Parser"], "Expr"]
InfixFn = Callable[["Parser", "Expr"], "Expr"]


@dataclass(frozen=True)
class ParseRule:
    precedence: Precedence = Precedence.NONE
    prefix: PrefixFn | None = None
    infix: InfixFn | None = None


# Returned for any token kind without an entry: it can neither start nor
# continue an expression.
NO_RULE = ParseRule()
