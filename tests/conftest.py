"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from minilisp.lexer import tokenize
from minilisp.tokens import Token, TokenKind


@pytest.fixture
def lex():
    """Return a helper that tokenizes source with the default rule table."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


def assert_kinds(tokens: list[Token], expected: list[TokenKind]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = [t.kind for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[object]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
