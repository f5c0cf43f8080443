"""Token kinds, token data structures, and value extraction."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum, auto

from minilisp.errors import NumericOverflowError

INT64_MAX = 2**63 - 1

_DIGITS = frozenset("0123456789")


class TokenKind(Enum):
    # Punctuation
    LEFT_PAREN = auto()  # (
    RIGHT_PAREN = auto()  # )
    LEFT_BRACKET = auto()  # [
    RIGHT_BRACKET = auto()  # ]
    COMMA = auto()  # ,

    # Values
    NUM_LITERAL = auto()  # decimal digits
    STRING_LITERAL = auto()  # "..." up to the last quote on the line
    IDENTIFIER = auto()  # ASCII letters

    # Operators
    ADD = auto()  # +
    DIVIDE = auto()  # /

    @property
    def has_value(self) -> bool:
        """True if tokens of this kind carry an extracted value."""
        return self in VALUE_KINDS


VALUE_KINDS = frozenset({TokenKind.NUM_LITERAL, TokenKind.STRING_LITERAL, TokenKind.IDENTIFIER})

# Regular expression source per kind. No leading ^: rules are anchored by
# matching at the cursor offset.
PATTERNS: dict[TokenKind, str] = {
    TokenKind.LEFT_PAREN: r"\(",
    TokenKind.RIGHT_PAREN: r"\)",
    TokenKind.LEFT_BRACKET: r"\[",
    TokenKind.RIGHT_BRACKET: r"\]",
    TokenKind.COMMA: r",",
    TokenKind.NUM_LITERAL: r"[0-9]+",
    TokenKind.STRING_LITERAL: r'".*"',
    TokenKind.IDENTIFIER: r"[A-Za-z]+",
    TokenKind.ADD: r"\+",
    TokenKind.DIVIDE: r"/",
}


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token.

    ``value`` is an ``int`` for number literals, the unquoted text for string
    literals, the name for identifiers, and ``None`` for every other kind.
    The span is location metadata only and takes no part in equality.
    """

    kind: TokenKind
    value: int | str | None
    raw: str
    span: Span | None = field(default=None, compare=False)

    @property
    def has_value(self) -> bool:
        return self.kind.has_value


def extract_value(kind: TokenKind, text: str, max_int: int | None = INT64_MAX) -> int | str | None:
    """Return the value carried by a token of *kind* matched as *text*.

    Number literals larger than *max_int* raise NumericOverflowError;
    pass ``max_int=None`` to accept integers of any size up to the
    interpreter's digit limit (``sys.get_int_max_str_digits()``), past which
    NumericOverflowError is raised with ``limit=None``.
    """
    match kind:
        case TokenKind.NUM_LITERAL:
            return _parse_int(text, max_int)
        case TokenKind.STRING_LITERAL:
            return _unquote(text)
        case TokenKind.IDENTIFIER:
            return text
        case _:
            return None


def _parse_int(text: str, max_int: int | None) -> int:
    if not text or not all(ch in _DIGITS for ch in text):
        raise ValueError(f"invalid number literal {text!r}")
    digits = text.lstrip("0") or "0"
    # an n-digit literal is at least 10**(n - 1)
    if max_int is not None and len(digits) > 1 and 10 ** (len(digits) - 1) > max_int:
        raise NumericOverflowError(text, max_int)
    # int() refuses strings longer than the interpreter's conversion limit
    digit_limit = sys.get_int_max_str_digits()
    if digit_limit and len(digits) > digit_limit:
        raise NumericOverflowError(text, None)
    value = int(digits, 10)
    if max_int is not None and value > max_int:
        raise NumericOverflowError(text, max_int)
    return value


def _unquote(text: str) -> str:
    if text.startswith('"'):
        text = text[1:]
    if text.endswith('"'):
        text = text[:-1]
    return text
