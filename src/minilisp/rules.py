"""Ordered lexical rule tables."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from minilisp.tokens import PATTERNS, TokenKind


@dataclass(frozen=True, slots=True)
class Rule:
    """A token kind paired with the pattern that recognises it."""

    kind: TokenKind
    pattern: re.Pattern[str]

    def match(self, rest: str) -> str | None:
        """Return the prefix of *rest* this rule matches, or None.

        *rest* is the remaining input from the cursor, so ``^`` anchors at
        the cursor. An empty match counts as no match so the cursor always
        advances.
        """
        m = self.pattern.match(rest)
        if m is None or m.end() == 0:
            return None
        return m.group()


def make_rules(pairs: Iterable[tuple[TokenKind, str | re.Pattern[str]]]) -> tuple[Rule, ...]:
    """Build an immutable rule table, keeping the given order."""
    rules = []
    for kind, pattern in pairs:
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        rules.append(Rule(kind, pattern))
    return tuple(rules)


def rules_by_name(names: Iterable[str]) -> tuple[Rule, ...]:
    """Build a rule table from kind names using the standard patterns."""
    kinds: list[TokenKind] = []
    for name in names:
        try:
            kind = TokenKind[name]
        except KeyError:
            raise ValueError(f"unknown token kind {name!r}") from None
        if kind in kinds:
            raise ValueError(f"duplicate token kind {name!r}")
        kinds.append(kind)
    return make_rules((kind, PATTERNS[kind]) for kind in kinds)


DEFAULT_RULES = make_rules(PATTERNS.items())
