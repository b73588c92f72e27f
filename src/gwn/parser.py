"""Parser for the gwn language.

Pulls tokens from a Scanner through a two-slot window (``previous`` and
``current``) and builds the AST with a table-driven Pratt parser: each token
kind maps to a ParseRule holding its infix binding precedence and optional
prefix/infix handlers.

Errors never abort the run. Lexical errors are reported inside ``_advance``
and the scanner is asked again; a syntax error abandons only the current
top-level form, after which ``parse`` skips one token and carries on.
"""

from __future__ import annotations

import math
from collections.abc import Callable

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
    LiteralPattern,
    LogicalExpr,
    Pattern,
    StringLit,
    TupleExpr,
    UnaryExpr,
)
from gwn.errors import (
    ExpectedExpression,
    ExpectedToken,
    GwnError,
    InvalidNumber,
    LexError,
    NestingTooDeep,
    ParseError,
)
from gwn.rules import NO_RULE, ParseRule, Precedence
from gwn.scanner import Scanner
from gwn.tokens import NONE_TOKEN, Token, TokenKind

_I32_MIN = -(2 ** 31)
_I32_MAX = 2 ** 31 - 1

Reporter = Callable[[GwnError], None]


class Parser:
    """Parses gwn source text into a list of top-level declarations."""

    def __init__(
        self,
        source: str,
        *,
        reporter: Reporter | None = None,
        color: bool = True,
    ) -> None:
        self.source = source
        self.scanner = Scanner(source)
        self.previous: Token = NONE_TOKEN
        self.current: Token = NONE_TOKEN
        self.diagnostics: list[GwnError] = []
        self.color = color
        self._reporter = reporter

    # ── Token window ─────────────────────────────────────────────

    def _advance(self) -> None:
        self.previous = self.current
        if self.current.kind == TokenKind.EOF:
            return
        while True:
            try:
                self.current = self.scanner.scan_token()
                return
            except LexError as err:
                self._report(err)

    def _check(self, kind: TokenKind) -> bool:
        return self.current.kind == kind

    def _match(self, kind: TokenKind) -> bool:
        if self._check(kind):
            self._advance()
            return True
        return False

    def _expect(self, kind: TokenKind, message: str) -> Token:
        if not self._match(kind):
            raise ExpectedToken(kind, self.current, message)
        return self.previous

    def _skip_newlines(self) -> None:
        while self._match(TokenKind.NEWLINE):
            pass

    def _report(self, error: GwnError) -> None:
        self.diagnostics.append(error)
        if self._reporter is not None:
            self._reporter(error)
        else:
            error.report_in(self.source, color=self.color)

    # ── Top level ────────────────────────────────────────────────

    def parse(self) -> list[Decl]:
        """Parse the whole source; forms after a syntax error still parse."""
        self._advance()
        decls: list[Decl] = []
        self._skip_newlines()

        while not self._check(TokenKind.EOF):
            try:
                decls.append(self._declaration())
            except ParseError as err:
                self._report(err)
                self._advance()
            except RecursionError:
                self._report(NestingTooDeep(self.current))
                self._synchronize()
            self._skip_newlines()

        return decls

    def _synchronize(self) -> None:
        """Skip the rest of the current top-level form."""
        while not (self._check(TokenKind.NEWLINE) or self._check(TokenKind.EOF)):
            self._advance()

    def _declaration(self) -> Decl:
        expr = self.parse_precedence(Precedence.OR)
        if self._check(TokenKind.EQUAL):
            decl: Decl = self._constant_decl(expr)
        else:
            decl = EvaluatedDecl(expr)

        if not (self._check(TokenKind.NEWLINE) or self._check(TokenKind.EOF)):
            raise ExpectedToken(
                TokenKind.NEWLINE, self.current, "Expected newline after expression.",
            )
        return decl

    def _constant_decl(self, target: Expr) -> ConstantDecl:
        """``name = value`` or ``name : Type = value``; target is the parsed left side."""
        equals = self.current
        match target.node:
            case ConstantExpr(name=name):
                type_name = None
            case BinaryExpr(
                operator=Token(kind=TokenKind.COLON),
                left=Expr(node=ConstantExpr(name=name)),
                right=Expr(node=ConstantExpr(name=type_name)),
            ):
                pass
            case _:
                raise ExpectedToken(
                    TokenKind.IDENTIFIER, equals, "Expected constant name before '='.",
                )

        self._advance()  # =
        value = self.parse_precedence(Precedence.OR)
        return ConstantDecl(name, type_name, value)

    # ── Pratt engine ─────────────────────────────────────────────

    def parse_precedence(self, precedence: Precedence) -> Expr:
        """Parse an expression whose operators bind at least as tightly as ``precedence``."""
        self._advance()
        prefix = get_rule(self.previous.kind).prefix
        if prefix is None:
            raise ExpectedExpression(self.previous)

        expr = prefix(self)

        rule = get_rule(self.current.kind)
        while precedence <= rule.precedence:
            self._advance()
            expr = rule.infix(self, expr)
            rule = get_rule(self.current.kind)

        return expr

    def _item(self) -> Expr:
        """An expression inside brackets, where newlines are insignificant."""
        self._skip_newlines()
        expr = self.parse_precedence(Precedence.OR)
        self._skip_newlines()
        return expr

    # ── Prefix rules ─────────────────────────────────────────────

    def _number(self) -> Expr:
        lexeme = self.previous.lexeme
        if '.' in lexeme:
            number = float(lexeme)
            if not math.isfinite(number):
                raise InvalidNumber(self.previous, "a float")
            return Expr.of(FloatLit(number))
        # int() refuses very long digit strings; those overflow anyway
        if len(lexeme.lstrip('0')) > 10:
            raise InvalidNumber(self.previous)
        value = int(lexeme)
        if not _I32_MIN <= value <= _I32_MAX:
            raise InvalidNumber(self.previous)
        return Expr.of(IntLit(value))

    def _boolean(self) -> Expr:
        return Expr.of(BoolLit(self.previous.kind == TokenKind.TRUE))

    def _string(self) -> Expr:
        return Expr.of(StringLit(self.previous.lexeme))

    def _constant(self) -> Expr:
        return Expr.of(ConstantExpr(self.previous))

    def _unary(self) -> Expr:
        operator = self.previous
        operand = self.parse_precedence(Precedence.UNARY)
        return Expr.of(UnaryExpr(operator, operand))

    def _grouping(self) -> Expr:
        # (x) is just x; only a comma makes a tuple
        first = self._item()
        if not self._check(TokenKind.COMMA):
            self._expect(TokenKind.RIGHT_PAREN, "Expected ')' after expression.")
            return first

        elements = [first]
        while self._match(TokenKind.COMMA):
            elements.append(self._item())
        self._expect(TokenKind.RIGHT_PAREN, "Expected ')' after tuple.")
        return Expr.of(TupleExpr(elements))

    def _list(self) -> Expr:
        elements: list[Expr] = []
        self._skip_newlines()
        if not self._check(TokenKind.RIGHT_SQUARE):
            elements.append(self._item())
            while self._match(TokenKind.COMMA):
                elements.append(self._item())
        self._expect(TokenKind.RIGHT_SQUARE, "Expected ']' after list.")
        return Expr.of(ListExpr(elements))

    def _function(self) -> Expr:
        """Parse ``{pattern | guard, ..., pattern | guard, ...}``.

        After a comma the next expression is parsed first; if ``|`` follows
        it, it was the pattern of a new case, otherwise it begins a guard.
        """
        cases: list[FuncCase] = []
        self._skip_newlines()
        start = self.current
        head: Expr | None = self._item()

        while head is not None:
            self._expect(TokenKind.PIPE, "Expected '|' after pattern.")
            pattern = self._pattern(head, start)
            guards: list[FuncGuard] = []
            head = None

            item = self._item()
            while True:
                if self._match(TokenKind.QUESTION):
                    guards.append(FuncGuard(item, self._item()))
                else:
                    guards.append(FuncGuard(Expr.of(BoolLit(True)), item))
                if not self._match(TokenKind.COMMA):
                    break
                self._skip_newlines()
                start = self.current
                item = self._item()
                if self._check(TokenKind.PIPE):
                    head = item
                    break

            cases.append(FuncCase(pattern, guards))

        self._expect(TokenKind.RIGHT_BRACE, "Expected '}' after function.")
        return Expr.of(FuncExpr(cases))

    def _pattern(self, expr: Expr, start: Token) -> Pattern:
        """Narrow a parsed expression to a pattern; ``start`` is its first token."""
        match expr.node:
            case IntLit() | FloatLit() | BoolLit() | StringLit() as lit:
                return LiteralPattern(lit)
            case ConstantExpr(name=name):
                return IdentifierPattern(name)
            case UnaryExpr(operator=Token(kind=TokenKind.MINUS), operand=Expr(node=IntLit(value=v))):
                return LiteralPattern(IntLit(-v))
            case UnaryExpr(operator=Token(kind=TokenKind.MINUS), operand=Expr(node=FloatLit(value=v))):
                return LiteralPattern(FloatLit(-v))
        raise ExpectedToken(TokenKind.IDENTIFIER, start, "Expected pattern before '|'.")

    # ── Infix rules ──────────────────────────────────────────────

    def _binary_left(self, left: Expr) -> Expr:
        operator = self.previous
        rule = get_rule(operator.kind)
        # Left associative: the right operand must bind strictly tighter
        right = self.parse_precedence(rule.precedence.next())

        match operator.kind:
            case TokenKind.AND | TokenKind.OR:
                return Expr.of(LogicalExpr(operator, left, right))
            case TokenKind.RIGHT_ARROW:
                return Expr.of(ApplyExpr(operator, func=right, arg=left))
            case _:
                return Expr.of(BinaryExpr(operator, left, right))

    def _binary_right(self, left: Expr) -> Expr:
        operator = self.previous
        rule = get_rule(operator.kind)
        # Right associative: the same operator may recurse to the right
        right = self.parse_precedence(rule.precedence)

        if operator.kind == TokenKind.LEFT_ARROW:
            return Expr.of(ApplyExpr(operator, func=left, arg=right))
        return Expr.of(BinaryExpr(operator, left, right))


# ── Rule table ──────────────────────────────────────────────────

_RULES: dict[TokenKind, ParseRule] = {
    TokenKind.NUMBER: ParseRule(prefix=Parser._number),
    TokenKind.STRING: ParseRule(prefix=Parser._string),
    TokenKind.TRUE: ParseRule(prefix=Parser._boolean),
    TokenKind.FALSE: ParseRule(prefix=Parser._boolean),
    TokenKind.IDENTIFIER: ParseRule(prefix=Parser._constant),
    TokenKind.LEFT_PAREN: ParseRule(prefix=Parser._grouping),
    TokenKind.LEFT_SQUARE: ParseRule(prefix=Parser._list),
    TokenKind.LEFT_BRACE: ParseRule(prefix=Parser._function),
    TokenKind.NOT: ParseRule(prefix=Parser._unary),
    TokenKind.MINUS: ParseRule(Precedence.TERM, Parser._unary, Parser._binary_left),
    TokenKind.PLUS: ParseRule(Precedence.TERM, infix=Parser._binary_left),
    TokenKind.PLUS_PLUS: ParseRule(Precedence.TERM, infix=Parser._binary_left),
    TokenKind.COLON: ParseRule(Precedence.TERM, infix=Parser._binary_right),
    TokenKind.SLASH: ParseRule(Precedence.FACTOR, infix=Parser._binary_left),
    TokenKind.STAR: ParseRule(Precedence.FACTOR, infix=Parser._binary_left),
    TokenKind.PERCENT: ParseRule(Precedence.FACTOR, infix=Parser._binary_left),
    TokenKind.CARET: ParseRule(Precedence.POWER, infix=Parser._binary_left),
    TokenKind.EQUAL_EQUAL: ParseRule(Precedence.EQUALITY, infix=Parser._binary_left),
    TokenKind.BANG_EQUAL: ParseRule(Precedence.EQUALITY, infix=Parser._binary_left),
    TokenKind.GREATER: ParseRule(Precedence.COMPARISON, infix=Parser._binary_left),
    TokenKind.GREATER_EQUAL: ParseRule(Precedence.COMPARISON, infix=Parser._binary_left),
    TokenKind.LESS: ParseRule(Precedence.COMPARISON, infix=Parser._binary_left),
    TokenKind.LESS_EQUAL: ParseRule(Precedence.COMPARISON, infix=Parser._binary_left),
    TokenKind.LEFT_ARROW: ParseRule(Precedence.APPLY, infix=Parser._binary_right),
    TokenKind.RIGHT_ARROW: ParseRule(Precedence.APPLY, infix=Parser._binary_left),
    TokenKind.AND: ParseRule(Precedence.AND, infix=Parser._binary_left),
    TokenKind.OR: ParseRule(Precedence.OR, infix=Parser._binary_left),
}


def get_rule(kind: TokenKind) -> ParseRule:
    """Look up the rule for a token kind; unknown kinds get NO_RULE."""
    return _RULES.get(kind, NO_RULE)
