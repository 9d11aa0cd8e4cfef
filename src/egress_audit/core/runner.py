"""Runner — walks the tree, matches every candidate, assembles the report."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable

from egress_audit.core.config import ScanConfiguration
from egress_audit.core.discover import FileCandidate, walk
from egress_audit.core.matcher import find_matches
from egress_audit.model.violation import Violation, ViolationReport

_logger = logging.getLogger(__name__)


class EgressViolationError(AssertionError):
    """Raised by :func:`assert_clean` when a report carries violations."""

    def __init__(self, report: ViolationReport) -> None:
        from egress_audit.reports.render import render_report

        self.report = report
        super().__init__(render_report(report))


def check_content(
    content: str,
    literals: Iterable[str],
    *,
    file: str | Path,
) -> list[Violation]:
    """Match in-memory *content* and label the violations with *file*."""
    label = file.as_posix() if isinstance(file, Path) else file
    return [
        Violation(file=label, literal=m.literal, line=m.line)
        for m in find_matches(content, literals)
    ]


def check_file(
    path: str | Path,
    literals: Iterable[str],
    *,
    display: str | Path | None = None,
) -> list[Violation]:
    """Guard a single known-sensitive file, bypassing walk and exclusions.

    Read errors propagate: a pinned file that cannot be read is a broken
    guardrail, not a clean one.
    """
    p = Path(path)
    content = p.read_text(encoding="utf-8")
    return check_content(content, literals, file=display if display is not None else p)


def _scan_candidate(
    candidate: FileCandidate, literals: tuple[str, ...]
) -> list[Violation] | None:
    """Violations for one candidate, or ``None`` if it could not be read."""
    try:
        content = candidate.location.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        _logger.debug("skipping unreadable file %s (%s)", candidate.display, exc)
        return None
    return check_content(content, literals, file=candidate.display)


def scan(config: ScanConfiguration) -> ViolationReport:
    """Run the tree audit described by *config*.

    Unreadable files are skipped and counted; the rest of the tree is still
    scanned.  With ``config.jobs > 1`` files are read on a thread pool, and
    ``Executor.map`` keeps the results in traversal order.
    """
    candidates = walk(
        config.root_directories,
        config.exclude_patterns,
        config.allowed_extensions,
        base_dir=config.base_dir,
    )
    literals = config.forbidden_literals

    if config.jobs > 1 and len(candidates) > 1:
        with ThreadPoolExecutor(max_workers=config.jobs) as pool:
            results = list(pool.map(lambda c: _scan_candidate(c, literals), candidates))
    else:
        results = [_scan_candidate(c, literals) for c in candidates]

    violations: list[Violation] = []
    skipped = 0
    for found in results:
        if found is None:
            skipped += 1
            continue
        violations.extend(found)

    report = ViolationReport(
        violations=tuple(violations),
        files_scanned=len(candidates) - skipped,
        files_skipped=skipped,
        roots=tuple(r.as_posix() for r in config.root_directories),
    )
    _logger.info(
        "scanned %d file(s) under %d root(s): %d violation(s)",
        report.files_scanned,
        len(config.root_directories),
        len(report),
    )
    return report


def check_pinned(
    config: ScanConfiguration,
    paths: Iterable[str | Path] | None = None,
) -> ViolationReport:
    """Apply :func:`check_file` to each pinned file (``config.pinned_files`` by default)."""
    targets = [Path(p) for p in paths] if paths is not None else list(config.pinned_files)
    violations: list[Violation] = []
    for target in targets:
        location = (
            target
            if config.base_dir is None or target.is_absolute()
            else config.base_dir / target
        )
        violations.extend(
            check_file(location, config.forbidden_literals, display=target)
        )
    return ViolationReport(
        violations=tuple(violations),
        files_scanned=len(targets),
        roots=tuple(t.as_posix() for t in targets),
    )


def assert_clean(report: ViolationReport) -> None:
    """Turn a non-empty report into a failure carrying the rendered text."""
    if not report.ok:
        raise EgressViolationError(report)
