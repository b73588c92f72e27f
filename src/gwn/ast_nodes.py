"""AST node definitions for the gwn language.

Every expression is an ``Expr`` wrapping exactly one node payload and one
type slot. Nodes own their children outright: the parser only ever attaches
freshly built subtrees, so the tree has no sharing and no cycles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from gwn.tokens import Token
from gwn.typ import BOOL, FLOAT, INT, STRING, UNKNOWN, Typ

# ── Literals ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class IntLit:
    value: int


@dataclass(frozen=True)
class FloatLit:
    value: float


@dataclass(frozen=True)
class BoolLit:
    value: bool


@dataclass(frozen=True)
class StringLit:
    value: str


Literal = Union[IntLit, FloatLit, BoolLit, StringLit]

_LITERAL_TYPES: dict[type, Typ] = {
    IntLit: INT,
    FloatLit: FLOAT,
    BoolLit: BOOL,
    StringLit: STRING,
}


# ── Patterns ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class LiteralPattern:
    literal: Literal


@dataclass(frozen=True)
class IdentifierPattern:
    name: Token


Pattern = Union[LiteralPattern, IdentifierPattern]


# ── Expressions ──────────────────────────────────────────────────


@dataclass(frozen=True)
class ConstantExpr:
    """A bare identifier reference, e.g. ``foo``."""

    name: Token


@dataclass(frozen=True)
class UnaryExpr:
    operator: Token
    operand: Expr


@dataclass(frozen=True)
class BinaryExpr:
    operator: Token
    left: Expr
    right: Expr


@dataclass(frozen=True)
class LogicalExpr:
    """``and`` / ``or``; separate from BinaryExpr since it short-circuits."""

    operator: Token
    left: Expr
    right: Expr


@dataclass(frozen=True)
class ApplyExpr:
    """Single-argument application.

    ``operator`` keeps the spelling that produced the node: ``a -> f``
    (pipe) and ``f <- a`` (call) both build ``ApplyExpr(func=f, arg=a)``.
    """

    operator: Token
    func: Expr
    arg: Expr


@dataclass(frozen=True)
class FuncGuard:
    condition: Expr
    value: Expr


@dataclass(frozen=True)
class FuncCase:
    # A body without ``cond ?`` is stored as a single ``true ? body`` guard,
    # so guards is never empty.
    pattern: Pattern
    guards: list[FuncGuard]


@dataclass(frozen=True)
class FuncExpr:
    cases: list[FuncCase]


@dataclass(frozen=True)
class TupleExpr:
    elements: list[Expr]


@dataclass(frozen=True)
class ListExpr:
    elements: list[Expr]


ExprKind = Union[
    ConstantExpr, UnaryExpr, BinaryExpr, LogicalExpr, ApplyExpr,
    FuncExpr, TupleExpr, ListExpr,
    IntLit, FloatLit, BoolLit, StringLit,
]


@dataclass(frozen=True)
class Expr:
    node: ExprKind
    typ: Typ

    @classmethod
    def of(cls, node: ExprKind) -> Expr:
        """Wrap a node; literals get their primitive type, the rest UNKNOWN."""
        return cls(node, _LITERAL_TYPES.get(type(node), UNKNOWN))


# ── Declarations ─────────────────────────────────────────────────


@dataclass(frozen=True)
class ConstantDecl:
    """``name = value`` or ``name : Type = value``."""

    name: Token
    type_name: Token | None
    value: Expr


@dataclass(frozen=True)
class EvaluatedDecl:
    """A top-level expression evaluated for effect, e.g. ``print <- "hi"``."""

    expr: Expr


Decl = Union[ConstantDecl, EvaluatedDecl]
