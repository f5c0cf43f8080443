"""Error types with formatted source context."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from minilisp.tokens import Position, Token


class LexError(Exception):
    """Raised on the first lexing error, with position and source context."""

    def __init__(
        self,
        message: str,
        position: Position | None,
        source: str,
        length: int = 1,
    ) -> None:
        self.message = message
        self.position = position
        self.source = source
        self.length = length
        super().__init__(self.format())

    def format(self, filename: str = "input.lisp") -> str:
        if self.position is None:
            return f"error: {self.message}"

        lines = self.source.splitlines(keepends=True)
        line_idx = self.position.line - 1
        col = self.position.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline the offending text, at least 1 char, but stay within line
        underline_len = max(1, min(self.length, len(source_line) - col + 1))

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class UnmatchedInputError(LexError):
    """No rule matches at the cursor.

    ``snippet`` is a prefix of the remaining text and ``partial`` holds the
    tokens committed before the failure.
    """

    def __init__(
        self,
        position: Position,
        source: str,
        snippet: str,
        partial: list[Token] | None = None,
    ) -> None:
        self.snippet = snippet
        self.partial = partial or []
        super().__init__(
            f"no rule matches input at offset {position.offset}: {snippet!r}",
            position,
            source,
        )


class NumericOverflowError(LexError):
    """A number literal does not fit under the configured ceiling.

    A ``limit`` of None means the literal has more digits than the
    interpreter will convert to an integer.
    """

    def __init__(
        self,
        text: str,
        limit: int | None,
        position: Position | None = None,
        source: str = "",
    ) -> None:
        self.text = text
        self.limit = limit
        shown = text if len(text) <= 20 else text[:20] + "..."
        if limit is None:
            reason = f"has more than {sys.get_int_max_str_digits()} digits"
        else:
            reason = f"exceeds maximum {limit}"
        super().__init__(
            f"number literal {shown} {reason}",
            position,
            source,
            len(text),
        )
