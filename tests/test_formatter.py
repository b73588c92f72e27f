"""Tests for the canonical gwn formatter."""

from __future__ import annotations

import pytest

from gwn.ast_nodes import Expr, FloatLit
from gwn.formatter import GwnFormatter
from tests.helpers import canon, parse


def fmt(source: str) -> str:
    decls, errors = parse(source)
    assert not errors
    return GwnFormatter().format(decls)


class TestFormatLiterals:
    def test_numbers(self):
        assert canon("42") == "42"
        assert canon("3.5") == "3.5"

    def test_booleans(self):
        assert canon("true") == "true"
        assert canon("false") == "false"

    def test_string_escapes(self):
        assert canon(r'"a\n\"b\""') == r'"a\n\"b\""'

    def test_floats_positional(self):
        assert canon("1000000000000000000000.5") == "1000000000000000000000.0"
        assert canon("0.0000001") == "0.0000001"
        assert canon("2.0") == "2.0"

    def test_large_and_small_floats_reparse(self):
        text = fmt("1000000000000000000000.5\n0.0000001")
        assert text == "1000000000000000000000.0\n0.0000001\n"
        _, errors = parse(text)
        assert errors == []

    def test_non_finite_float(self):
        with pytest.raises(ValueError):
            GwnFormatter().format_expr(Expr.of(FloatLit(float("inf"))))


class TestFormatExpressions:
    def test_unary(self):
        assert canon("-x") == "(-x)"
        assert canon("not x") == "(not x)"

    def test_apply_always_call_form(self):
        assert canon("x -> f") == "(f <- x)"

    def test_collections(self):
        assert canon("( 1 ,2 )") == "(1, 2)"
        assert canon("[ ]") == "[]"
        assert canon("[1,2]") == "[1, 2]"

    def test_function(self):
        assert canon("{x | x > 0 ? 1, 0}") == "{x | (x > 0) ? 1, 0}"
        assert canon('{0|"z",n|n}') == '{0 | "z", n | n}'

    def test_negative_pattern(self):
        assert canon("{-1 | 0, n | n}") == "{-1 | 0, n | n}"

    def test_unknown_node(self):
        with pytest.raises(TypeError):
            GwnFormatter().format_expr(Expr(object(), None))  # type: ignore[arg-type]


class TestFormatDecls:
    def test_constant(self):
        assert fmt("x=1+2") == "x = (1 + 2)\n"

    def test_typed_constant(self):
        assert fmt("x:Int=5") == "x : Int = 5\n"

    def test_one_line_per_decl(self):
        assert fmt("a = 1\n\nprint <- a\n") == "a = 1\n(print <- a)\n"

    @pytest.mark.parametrize("source", [
        "x : Int = -2 + 3 * 4",
        "a -> f -> g",
        'classify = {0 | "zero", n | n < 0 ? "negative", "positive"}',
        "[(1, 2), (3, 4)] -> map <- {p | p}",
        "not a and b or c == d",
        "1000000000000000000000.5",
        "0.0000001",
        "{-2.5 | 1.0, x | x}",
    ])
    def test_output_reparses_to_itself(self, source):
        once = fmt(source)
        assert fmt(once) == once
