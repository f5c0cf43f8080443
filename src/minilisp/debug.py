"""Token dumps for --debug and the CLI output formats."""

from __future__ import annotations

import sys
from typing import Any, TextIO

from minilisp.tokens import Token


def format_token(token: Token) -> str:
    """Render a token as ``line:col KIND value``."""
    if token.span is not None:
        where = f"{token.span.start.line}:{token.span.start.column}"
    else:
        where = "?:?"
    text = f"{where} {token.kind.name}"
    if token.has_value:
        text += f" {token.value!r}"
    return text


def dump_tokens(tokens: list[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one token per line to *file*."""
    for token in tokens:
        file.write(format_token(token) + "\n")


def token_to_dict(token: Token) -> dict[str, Any]:
    record: dict[str, Any] = {
        "kind": token.kind.name,
        "value": token.value,
        "raw": token.raw,
    }
    if token.span is not None:
        start = token.span.start
        record.update(line=start.line, column=start.column, offset=start.offset)
    return record
