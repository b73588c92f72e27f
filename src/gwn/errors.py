"""Diagnostics raised by the scanner and parser, and their rendering.

Every error value answers ``position()``, ``message()`` and ``place()``, and
can render itself against the source text it came from::

    [line 1] Error at '+':
        1 + + 2
            ^
    Expected expression.
"""

from __future__ import annotations

import click

from gwn.tokens import Token, TokenKind


# ANSI color codes
_RED = "\033[1;31m"
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"

_GUTTER = "    "


class DiagnosticRenderer:
    """Renders a diagnostic with its source line and a caret."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, error: GwnError, source: str) -> str:
        line_num, col = error.position()
        lines = source.split("\n")
        source_line = lines[line_num - 1].rstrip("\r") if 1 <= line_num <= len(lines) else ""
        padding = " " * max(0, col - 1)

        return "\n".join([
            f"{self._c(_RED)}[line {line_num}] Error{error.place()}:{self._c(_RESET)}",
            f"{self._c(_BLUE)}{_GUTTER}{self._c(_RESET)}{source_line}",
            f"{_GUTTER}{padding}{self._c(_RED)}^{self._c(_RESET)}",
            f"{self._c(_BOLD)}{error.message()}{self._c(_RESET)}",
        ])


class GwnError(Exception):
    """Base class for every diagnostic the front end can produce."""

    code = "E000"

    def __init__(self, msg: str, line: int, col: int) -> None:
        super().__init__(msg)
        self.msg = msg
        self.line = line
        self.col = col

    def position(self) -> tuple[int, int]:
        return (self.line, self.col)

    def message(self) -> str:
        return self.msg

    def place(self) -> str:
        return ""

    def render(self, source: str, *, color: bool = False) -> str:
        return DiagnosticRenderer(color=color).render(self, source)

    def report_in(self, source: str, *, color: bool = True) -> None:
        """Write the rendered diagnostic to stderr."""
        click.echo(self.render(source, color=color), err=True)


# ── Lexical errors ───────────────────────────────────────────────


class LexError(GwnError):
    """A character sequence the scanner cannot turn into a token."""

    code = "E100"


class UnrecognizedCharacter(LexError):
    code = "E101"

    def __init__(self, char: str, line: int, col: int) -> None:
        super().__init__(f"Unrecognised character '{char}'.", line, col)
        self.char = char

    def place(self) -> str:
        return f" at '{self.char}'"


class UnrecognizedEscape(LexError):
    code = "E102"

    def __init__(self, char: str, line: int, col: int) -> None:
        super().__init__(f"Unrecognised escape sequence '\\{char}'.", line, col)
        self.char = char

    def place(self) -> str:
        return f" at '\\{self.char}'"


class UnterminatedString(LexError):
    code = "E103"

    def __init__(self, line: int, col: int) -> None:
        super().__init__("Unterminated string.", line, col)

    def place(self) -> str:
        return " at end"


# ── Syntax errors ────────────────────────────────────────────────


class ParseError(GwnError):
    """A token that cannot appear where the parser found it."""

    code = "E200"

    def __init__(self, token: Token, msg: str) -> None:
        super().__init__(msg, token.line, token.col)
        self.token = token

    def place(self) -> str:
        match self.token.kind:
            case TokenKind.NEWLINE:
                return " at newline"
            case TokenKind.EOF:
                return " at end"
            case _:
                return f" at '{self.token.lexeme}'"


class ExpectedExpression(ParseError):
    code = "E201"

    def __init__(self, token: Token) -> None:
        super().__init__(token, "Expected expression.")


class ExpectedToken(ParseError):
    code = "E202"

    def __init__(self, expected: TokenKind, token: Token, msg: str) -> None:
        super().__init__(token, msg)
        self.expected = expected


class InvalidNumber(ParseError):
    code = "E203"

    def __init__(self, token: Token, kind: str = "a 32-bit integer") -> None:
        super().__init__(token, f"Number '{token.lexeme}' does not fit in {kind}.")


class NestingTooDeep(ParseError):
    """An expression nested past what the recursive parser can follow."""

    code = "E204"

    def __init__(self, token: Token) -> None:
        super().__init__(token, "Expression nested too deeply.")
