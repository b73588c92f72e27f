"""AST-walking printer producing canonical gwn source.

Every compound expression is fully parenthesized and application is always
written in call form, so ``a -> f`` and ``f <- a`` print identically. The
output re-parses to the same tree (up to operator spelling and token
positions).
"""

from __future__ import annotations

import math
from decimal import Decimal

from gwn.ast_nodes import (
    ApplyExpr,
    BinaryExpr,
    BoolLit,
    ConstantDecl,
    ConstantExpr,
    Decl,
    EvaluatedDecl,
    Expr,
    FloatLit,
    FuncCase,
    FuncExpr,
    FuncGuard,
    IdentifierPattern,
    IntLit,
    ListExpr,
    Literal,
    LiteralPattern,
    LogicalExpr,
    Pattern,
    StringLit,
    TupleExpr,
    UnaryExpr,
)
from gwn.tokens import TokenKind

_STRING_ESCAPES = {'\n': '\\n', '\t': '\\t', '\r': '\\r', '"': '\\"'}


class GwnFormatter:
    """Format parsed gwn declarations back to canonical source text."""

    # ── Public API ─────────────────────────────────────────────

    def format(self, decls: list[Decl]) -> str:
        return "".join(self.format_decl(d) + "\n" for d in decls)

    def format_decl(self, decl: Decl) -> str:
        if isinstance(decl, ConstantDecl):
            value = self.format_expr(decl.value)
            if decl.type_name is not None:
                return f"{decl.name.lexeme} : {decl.type_name.lexeme} = {value}"
            return f"{decl.name.lexeme} = {value}"
        if isinstance(decl, EvaluatedDecl):
            return self.format_expr(decl.expr)
        raise TypeError(f"not a declaration: {decl!r}")

    def format_expr(self, expr: Expr) -> str:
        node = expr.node
        match node:
            case IntLit() | FloatLit() | BoolLit() | StringLit():
                return self._literal(node)
            case ConstantExpr(name=name):
                return name.lexeme
            case UnaryExpr(operator=op, operand=operand):
                if op.kind == TokenKind.NOT:
                    return f"(not {self.format_expr(operand)})"
                return f"({op.lexeme}{self.format_expr(operand)})"
            case (
                BinaryExpr(operator=op, left=left, right=right)
                | LogicalExpr(operator=op, left=left, right=right)
            ):
                return f"({self.format_expr(left)} {op.lexeme} {self.format_expr(right)})"
            case ApplyExpr(func=func, arg=arg):
                return f"({self.format_expr(func)} <- {self.format_expr(arg)})"
            case TupleExpr(elements=elements):
                return "(" + ", ".join(self.format_expr(e) for e in elements) + ")"
            case ListExpr(elements=elements):
                return "[" + ", ".join(self.format_expr(e) for e in elements) + "]"
            case FuncExpr(cases=cases):
                return "{" + ", ".join(self._case(c) for c in cases) + "}"
        raise TypeError(f"unknown expression node: {node!r}")

    # ── Pieces ─────────────────────────────────────────────────

    def _case(self, case: FuncCase) -> str:
        guards = ", ".join(self._guard(g) for g in case.guards)
        return f"{self._pattern(case.pattern)} | {guards}"

    def _guard(self, guard: FuncGuard) -> str:
        # `true ? v` is what a bare `v` parses to; print the short form
        if guard.condition.node == BoolLit(True):
            return self.format_expr(guard.value)
        return f"{self.format_expr(guard.condition)} ? {self.format_expr(guard.value)}"

    def _pattern(self, pattern: Pattern) -> str:
        if isinstance(pattern, IdentifierPattern):
            return pattern.name.lexeme
        if isinstance(pattern, LiteralPattern):
            return self._literal(pattern.literal)
        raise TypeError(f"unknown pattern: {pattern!r}")

    def _literal(self, lit: Literal) -> str:
        if isinstance(lit, BoolLit):
            return "true" if lit.value else "false"
        if isinstance(lit, StringLit):
            body = "".join(_STRING_ESCAPES.get(ch, ch) for ch in lit.value)
            return f'"{body}"'
        if isinstance(lit, FloatLit):
            return _float(lit.value)
        return repr(lit.value)


def _float(value: float) -> str:
    """Positional notation with a fractional part, as the scanner reads it."""
    if not math.isfinite(value):
        raise ValueError(f"float literal has no source form: {value!r}")
    text = format(Decimal(repr(value)), "f")
    if "." not in text:
        text += ".0"
    return text
