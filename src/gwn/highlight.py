"""Pygments lexer for the gwn language."""

from pygments.lexer import RegexLexer, words
from pygments.token import (
    Comment,
    Error,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Text,
)


class GwnLexer(RegexLexer):
    """Pygments lexer for the gwn language."""

    name = "gwn"
    aliases = ["gwn"]
    filenames = ["*.gwn"]
    mimetypes = ["text/x-gwn"]

    tokens = {
        "root": [
            # Whitespace
            (r"\s+", Text),
            # Line comments
            (r"#.*$", Comment.Single),
            # Strings with escape support
            (r'"', String, "string"),
            # Numbers
            (r"[0-9]+\.[0-9]+", Number.Float),
            (r"[0-9]+", Number.Integer),
            # Word operators
            (words(("and", "or", "not"), prefix=r"\b", suffix=r"\b"), Operator.Word),
            # Boolean constants
            (r"\b(true|false)\b", Keyword.Constant),
            # Operators (multi-char before single-char)
            (r"<-|->", Operator),
            (r"\+\+|==|!=|<=|>=", Operator),
            (r"[+\-*/%^<>=!:?]", Operator),
            # Identifiers
            (r"[^\W\d]\w*", Name),
            # Punctuation
            (r"[(),\[\]{}|]", Punctuation),
        ],
        # String state; only \n \t \r \" are valid escapes
        "string": [
            (r'\\[ntr"]', String.Escape),
            (r"\\.", Error),
            (r'[^"\\]+', String),
            (r'"', String, "#pop"),
        ],
    }
