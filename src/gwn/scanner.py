"""Scanner for the gwn language.

Pull-based: the parser asks for one token at a time with ``scan_token()``.
Lexical errors are raised, not collected, and leave the cursor past the
offending input so the caller can simply ask again.
"""

from __future__ import annotations

from collections.abc import Iterator

from gwn.errors import UnrecognizedCharacter, UnrecognizedEscape, UnterminatedString
from gwn.tokens import COMPOUND, KEYWORDS, SINGLE_CHAR, Token, TokenKind


def _is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


_ESCAPES = {'n': '\n', 't': '\t', 'r': '\r', '"': '"'}


class Scanner:
    """Tokenizes gwn source code on demand."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.start = 0
        self.current = 0
        self.line = 1
        self.col = 0

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including EOF."""
        while True:
            tok = self.scan_token()
            yield tok
            if tok.kind == TokenKind.EOF:
                return

    def scan_token(self) -> Token:
        self._skip_whitespace()
        self.start = self.current

        if self._is_at_end():
            return self._make_token(TokenKind.EOF, "")

        ch = self._advance()

        if _is_digit(ch):
            return self._scan_number()
        if ch.isalpha() or ch == '_':
            return self._scan_identifier()
        if ch == '"':
            return self._scan_string()
        if ch == '\n':
            return self._scan_newlines()

        if ch in SINGLE_CHAR:
            return self._make_token(SINGLE_CHAR[ch])
        if ch in COMPOUND:
            pairs, single = COMPOUND[ch]
            for second, kind in pairs:
                if self._match(second):
                    return self._make_token(kind)
            return self._make_token(single)

        raise UnrecognizedCharacter(ch, self.line, self.col)

    # ── Helpers ───────────────────────────────────────────────────

    def _is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        idx = self.current + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def _advance(self) -> str:
        ch = self.source[self.current]
        self.current += 1
        self.col += 1
        return ch

    def _match(self, expected: str) -> bool:
        if self._peek() == expected:
            self._advance()
            return True
        return False

    def _make_token(self, kind: TokenKind, lexeme: str | None = None) -> Token:
        if lexeme is None:
            lexeme = self.source[self.start:self.current]
        return Token(kind, lexeme, self.line, self.col)

    def _skip_whitespace(self) -> None:
        while not self._is_at_end():
            ch = self._peek()
            if ch in (' ', '\r', '\t'):
                self._advance()
            elif ch == '#':
                while not self._is_at_end() and self._peek() != '\n':
                    self._advance()
            else:
                return

    # ── Token classes ────────────────────────────────────────────

    def _scan_newlines(self) -> Token:
        self.line += 1
        while self._peek() == '\n':
            self._advance()
            self.line += 1
        self.col = 0
        return self._make_token(TokenKind.NEWLINE)

    def _scan_number(self) -> Token:
        while _is_digit(self._peek()):
            self._advance()

        # A trailing '.' without a digit after it is not part of the number
        if self._peek() == '.' and _is_digit(self._peek(1)):
            self._advance()
            while _is_digit(self._peek()):
                self._advance()

        return self._make_token(TokenKind.NUMBER)

    def _scan_identifier(self) -> Token:
        while self._peek().isalnum() or self._peek() == '_':
            self._advance()
        word = self.source[self.start:self.current]
        return self._make_token(KEYWORDS.get(word, TokenKind.IDENTIFIER))

    def _scan_string(self) -> Token:
        """Scan a string literal; the token's lexeme is the decoded text."""
        text: list[str] = []
        bad_escape: UnrecognizedEscape | None = None

        while not self._is_at_end() and self._peek() != '"':
            ch = self._advance()
            if ch == '\n':
                self.line += 1
                self.col = 0
                text.append(ch)
            elif ch == '\\':
                if self._is_at_end():
                    break
                esc = self._advance()
                if esc in _ESCAPES:
                    text.append(_ESCAPES[esc])
                elif bad_escape is None:
                    bad_escape = UnrecognizedEscape(esc, self.line, self.col)
            else:
                text.append(ch)

        if self._is_at_end():
            raise UnterminatedString(self.line, self.col)

        self._advance()  # closing "
        if bad_escape is not None:
            raise bad_escape
        return self._make_token(TokenKind.STRING, ''.join(text))
