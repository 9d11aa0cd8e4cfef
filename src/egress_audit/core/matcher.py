"""Literal matcher — line-level detection of forbidden substrings.

Detection is "literal present on this line": a line that repeats the same
literal still produces a single match for it.  Matching is plain, exact,
case-sensitive substring containment with no URL normalisation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True, slots=True)
class Match:
    literal: str
    line: int  # 1-based


def find_matches(content: str, literals: Iterable[str]) -> list[Match]:
    """Return one :class:`Match` per (line, literal) pair, line order first.

    Lines are split on ``"\\n"`` only, so a trailing ``"\\r"`` stays part of
    the line text.  Literals are tried in the order given; empty strings are
    ignored.
    """
    needles = [lit for lit in literals if lit]
    if not needles:
        return []

    found: list[Match] = []
    for index, line in enumerate(content.split("\n")):
        for literal in needles:
            if literal in line:
                found.append(Match(literal=literal, line=index + 1))
    return found
