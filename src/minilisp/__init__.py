"""MiniLisp lexical front-end."""

from __future__ import annotations

from minilisp.errors import LexError, NumericOverflowError, UnmatchedInputError
from minilisp.lexer import Lexer, tokenize
from minilisp.rules import DEFAULT_RULES, Rule, make_rules
from minilisp.tokens import Token, TokenKind

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_RULES",
    "LexError",
    "Lexer",
    "NumericOverflowError",
    "Rule",
    "Token",
    "TokenKind",
    "UnmatchedInputError",
    "make_rules",
    "tokenize",
]
