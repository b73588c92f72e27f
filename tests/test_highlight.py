"""Tests for the gwn Pygments lexer."""

from __future__ import annotations

from pygments.token import Comment, Error, Keyword, Name, Number, Operator, String

from gwn.highlight import GwnLexer


def tokens(source: str) -> list[tuple]:
    return [(tok, value) for tok, value in GwnLexer().get_tokens(source) if value.strip()]


class TestGwnLexer:
    def test_constant_decl(self):
        toks = tokens("x = 42")
        assert (Name, "x") in toks
        assert (Operator, "=") in toks
        assert (Number.Integer, "42") in toks

    def test_float(self):
        assert (Number.Float, "3.14") in tokens("3.14")

    def test_arrows_are_single_tokens(self):
        toks = tokens("a -> f <- b")
        assert (Operator, "->") in toks
        assert (Operator, "<-") in toks

    def test_word_operators(self):
        toks = tokens("not a and b or c")
        assert (Operator.Word, "not") in toks
        assert (Operator.Word, "and") in toks
        assert (Operator.Word, "or") in toks

    def test_booleans(self):
        assert (Keyword.Constant, "true") in tokens("true")

    def test_comment(self):
        assert (Comment.Single, "# note") in tokens("x # note")

    def test_string_escapes(self):
        toks = tokens(r'"a\nb\q"')
        assert (String.Escape, r"\n") in toks
        assert (Error, r"\q") in toks

    def test_filename_registered(self):
        assert "*.gwn" in GwnLexer.filenames
