"""MiniLisp lexer — converts source text into a flat token stream."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from minilisp.errors import NumericOverflowError, UnmatchedInputError
from minilisp.rules import DEFAULT_RULES, Rule
from minilisp.tokens import INT64_MAX, Position, Span, Token, extract_value

logger = logging.getLogger(__name__)

WHITESPACE = frozenset(" \t\r\n")


class Lexer:
    """Tokenize source text by trying an ordered rule table at each position.

    The first rule in table order that matches a non-empty prefix wins,
    regardless of match length. A Lexer keeps no state between calls, so
    one instance can be shared freely.
    """

    def __init__(
        self,
        rules: Iterable[Rule] = DEFAULT_RULES,
        *,
        max_int: int | None = INT64_MAX,
        snippet_length: int = 20,
    ) -> None:
        self._rules = tuple(rules)
        self._max_int = max_int
        self._snippet_length = snippet_length

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def tokenize(self, source: str, filename: str = "input.lisp") -> list[Token]:
        """Tokenize the full source and return the token list."""
        scan = _Scan(source)
        tokens: list[Token] = []

        while True:
            scan.skip_whitespace()
            if scan.at_end():
                break

            start = scan.position()
            rest = source[scan.pos :]
            for rule in self._rules:
                text = rule.match(rest)
                if text is not None:
                    break
            else:
                snippet = scan.snippet(self._snippet_length)
                logger.debug("%s: no rule matches at %d:%d", filename, start.line, start.column)
                raise UnmatchedInputError(start, source, snippet, tokens)

            try:
                value = extract_value(rule.kind, text, self._max_int)
            except NumericOverflowError as exc:
                raise NumericOverflowError(exc.text, exc.limit, start, source) from None

            scan.advance(text)
            tokens.append(Token(rule.kind, value, text, Span(start, scan.position())))

        logger.debug("%s: produced %d tokens", filename, len(tokens))
        return tokens


class _Scan:
    """Cursor over one source string, tracking line and column."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self.line = 1
        self.col = 1

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def position(self) -> Position:
        return Position(self.line, self.col, self.pos)

    def advance(self, text: str) -> None:
        for ch in text:
            if ch == "\n":
                self.line += 1
                self.col = 1
            else:
                self.col += 1
        self.pos += len(text)

    def skip_whitespace(self) -> None:
        end = self.pos
        while end < len(self.source) and self.source[end] in WHITESPACE:
            end += 1
        self.advance(self.source[self.pos : end])

    def snippet(self, length: int) -> str:
        rest = self.source[self.pos : self.pos + length]
        return rest.split("\n", 1)[0]


def tokenize(
    source: str,
    filename: str = "input.lisp",
    rules: Iterable[Rule] = DEFAULT_RULES,
) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(rules).tokenize(source, filename)
