"""Token kinds and token representation for the gwn scanner."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    # Brackets
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    LEFT_SQUARE = auto()
    RIGHT_SQUARE = auto()
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()

    # Single character
    SLASH = auto()
    STAR = auto()
    CARET = auto()
    PERCENT = auto()
    COLON = auto()
    COMMA = auto()
    PIPE = auto()
    QUESTION = auto()

    # One or two characters
    PLUS = auto()
    PLUS_PLUS = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    BANG = auto()
    BANG_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()
    LEFT_ARROW = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    MINUS = auto()
    RIGHT_ARROW = auto()

    # Keywords
    AND = auto()
    OR = auto()
    NOT = auto()
    TRUE = auto()
    FALSE = auto()

    # Literals and identifiers
    NUMBER = auto()
    STRING = auto()
    IDENTIFIER = auto()

    # Structural
    NEWLINE = auto()
    EOF = auto()
    NONE = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    line: int
    col: int  # 0-based column just past the lexeme


# Placeholder for the parser window before the first token arrives.
NONE_TOKEN = Token(TokenKind.NONE, "", 0, 0)


KEYWORDS: dict[str, TokenKind] = {
    "and": TokenKind.AND,
    "or": TokenKind.OR,
    "not": TokenKind.NOT,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
}

SINGLE_CHAR: dict[str, TokenKind] = {
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    "[": TokenKind.LEFT_SQUARE,
    "]": TokenKind.RIGHT_SQUARE,
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "/": TokenKind.SLASH,
    "*": TokenKind.STAR,
    "^": TokenKind.CARET,
    "%": TokenKind.PERCENT,
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
    "|": TokenKind.PIPE,
    "?": TokenKind.QUESTION,
}

# First character -> ((second character, kind), ...), then the one-char kind.
# Order matters only where two spellings share a first character ('<').
COMPOUND: dict[str, tuple[tuple[tuple[str, TokenKind], ...], TokenKind]] = {
    "+": ((("+", TokenKind.PLUS_PLUS),), TokenKind.PLUS),
    "=": ((("=", TokenKind.EQUAL_EQUAL),), TokenKind.EQUAL),
    "!": ((("=", TokenKind.BANG_EQUAL),), TokenKind.BANG),
    "<": ((("=", TokenKind.LESS_EQUAL), ("-", TokenKind.LEFT_ARROW)), TokenKind.LESS),
    ">": ((("=", TokenKind.GREATER_EQUAL),), TokenKind.GREATER),
    "-": (((">", TokenKind.RIGHT_ARROW),), TokenKind.MINUS),
}
