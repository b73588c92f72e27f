"""Shared test helpers for the gwn test suite."""

from __future__ import annotations

from gwn.ast_nodes import Decl, EvaluatedDecl, Expr
from gwn.errors import GwnError
from gwn.formatter import GwnFormatter
from gwn.parser import Parser


def parse(source: str) -> tuple[list[Decl], list[GwnError]]:
    """Parse source, collecting diagnostics instead of printing them."""
    errors: list[GwnError] = []
    decls = Parser(source, reporter=errors.append).parse()
    return decls, errors


def parse_expr(source: str) -> Expr:
    """Parse a single top-level expression, asserting no errors."""
    decls, errors = parse(source)
    assert not errors, [f"{e.code}: {e.message()}" for e in errors]
    assert len(decls) == 1, decls
    assert isinstance(decls[0], EvaluatedDecl), decls[0]
    return decls[0].expr


def canon(source: str) -> str:
    """Parse a single expression and return its canonical source form."""
    return GwnFormatter().format_expr(parse_expr(source))
