"""Violation — one forbidden literal found on one line of one scanned file."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field

SCHEMA_VERSION = "violation_report_v1"


def make_fingerprint(file: str, line: int, literal: str) -> str:
    """Deterministic violation fingerprint: sha256(file|line|literal)."""
    # Normalize path separators for cross-platform stability
    file = file.replace("\\", "/")
    payload = "|".join([file, str(line), literal])
    return "sha256:" + hashlib.sha256(payload.encode()).hexdigest()


@dataclass(frozen=True, slots=True)
class Violation:
    """Immutable violation record.

    Corresponds to ``violations[]`` in ``violation_report.schema.json``.
    """

    file: str
    literal: str
    line: int

    def __post_init__(self) -> None:
        if self.line < 1:
            raise ValueError(f"line numbers are 1-based, got {self.line}")

    @property
    def fingerprint(self) -> str:
        return make_fingerprint(self.file, self.line, self.literal)

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "line": self.line,
            "literal": self.literal,
            "fingerprint": self.fingerprint,
        }

    def __str__(self) -> str:
        return f"{self.file}:{self.line} - {self.literal}"


@dataclass(frozen=True, slots=True)
class ViolationReport:
    """The output of one scan, violations in traversal order then line order.

    An empty ``violations`` tuple is the only passing state.
    """

    violations: tuple[Violation, ...] = ()
    files_scanned: int = 0
    files_skipped: int = 0
    roots: tuple[str, ...] = field(default=())

    @property
    def ok(self) -> bool:
        return not self.violations

    def __len__(self) -> int:
        return len(self.violations)

    def __iter__(self):
        return iter(self.violations)

    def by_file(self) -> dict[str, list[Violation]]:
        grouped: dict[str, list[Violation]] = {}
        for v in self.violations:
            grouped.setdefault(v.file, []).append(v)
        return grouped

    def to_dict(self) -> dict:
        return {
            "schema_version": SCHEMA_VERSION,
            "roots": list(self.roots),
            "summary": {
                "files_scanned": self.files_scanned,
                "files_skipped": self.files_skipped,
                "violations_total": len(self.violations),
                "ok": self.ok,
            },
            "violations": [v.to_dict() for v in self.violations],
        }
