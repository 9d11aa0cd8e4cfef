"""Exclude predicates — structural path rules used to prune the walk.

Every rule is matched against the POSIX form of a path as joined from its
scan root (``packages/ui/node_modules``, not the absolute location on disk),
so the same policy behaves identically across checkouts.

Rules are written as ``"<kind>:<value>"`` strings in policy files:

=============  ===========================================================
``prefix``     path starts with *value*
``substring``  *value* occurs anywhere in the path (also the bare-string form)
``suffix``     path ends with *value*
``segment``    one path component equals *value* exactly
=============  ===========================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import Iterable

EXCLUDE_KINDS: tuple[str, ...] = ("prefix", "substring", "suffix", "segment")


@dataclass(frozen=True, slots=True)
class ExcludePattern:
    """One structural exclusion rule."""

    kind: str
    value: str

    def __post_init__(self) -> None:
        if self.kind not in EXCLUDE_KINDS:
            raise ValueError(
                f"unknown exclude kind {self.kind!r} "
                f"(expected one of: {', '.join(EXCLUDE_KINDS)})"
            )
        if not self.value:
            raise ValueError(f"exclude pattern of kind {self.kind!r} has an empty value")

    def matches(self, path: str | PurePath) -> bool:
        text = path.as_posix() if isinstance(path, PurePath) else path
        if self.kind == "prefix":
            return text.startswith(self.value)
        if self.kind == "suffix":
            return text.endswith(self.value)
        if self.kind == "segment":
            return self.value in text.split("/")
        return self.value in text

    def __str__(self) -> str:
        return f"{self.kind}:{self.value}"


def parse_exclude(raw: str | ExcludePattern) -> ExcludePattern:
    """Parse ``"kind:value"`` (or a bare substring) into an :class:`ExcludePattern`.

    Only a recognised kind before the first colon is treated as a kind, so
    values such as ``"C:/build"`` fall through to substring rules.
    """
    if isinstance(raw, ExcludePattern):
        return raw
    kind, sep, value = raw.partition(":")
    if sep and kind in EXCLUDE_KINDS:
        return ExcludePattern(kind, value)
    return ExcludePattern("substring", raw)


def parse_excludes(raw: Iterable[str | ExcludePattern]) -> tuple[ExcludePattern, ...]:
    seen: dict[ExcludePattern, None] = {}
    for item in raw:
        seen.setdefault(parse_exclude(item), None)
    return tuple(seen)


def is_excluded(path: str | PurePath, patterns: Iterable[ExcludePattern]) -> bool:
    """Return True if *path* matches ANY of *patterns* (empty → never)."""
    return any(p.matches(path) for p in patterns)
