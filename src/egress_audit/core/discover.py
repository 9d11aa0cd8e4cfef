"""File discovery — depth-first walk of the scan roots with exclusion pruning."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Iterable, Iterator

from egress_audit.core.exclude import ExcludePattern, is_excluded

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileCandidate:
    """A regular file that survived exclusion and extension filtering.

    ``path`` is the root joined with the entry's relative parts (what the
    exclude rules saw and what reports show); ``location`` is where the file
    actually lives on disk.
    """

    path: Path
    location: Path
    root: Path

    @property
    def display(self) -> str:
        return self.path.as_posix()


def _list_dir(location: Path) -> list[os.DirEntry[str]] | None:
    try:
        with os.scandir(location) as it:
            return sorted(it, key=lambda e: e.name)
    except FileNotFoundError:
        _logger.debug("scan root %s does not exist — skipped", location)
    except NotADirectoryError:
        _logger.debug("scan root %s is not a directory — skipped", location)
    except OSError as exc:
        _logger.warning("cannot list %s (%s) — skipped", location, exc)
    return None


def _iter_root(
    root: Path,
    location: Path,
    patterns: tuple[ExcludePattern, ...],
    extensions: frozenset[str],
) -> Iterator[FileCandidate]:
    entries = _list_dir(location)
    if entries is None:
        return

    # Stack of (displayed directory path, remaining entries) keeps the walk
    # depth-first without recursion.
    stack: list[tuple[Path, Iterator[os.DirEntry[str]]]] = [(root, iter(entries))]
    while stack:
        shown_dir, it = stack[-1]
        entry = next(it, None)
        if entry is None:
            stack.pop()
            continue

        shown = shown_dir / entry.name
        # Prune before any stat so large or cyclic trees are never touched.
        if is_excluded(shown, patterns):
            continue

        try:
            # Directory symlinks are not followed; that rules out cycles.
            if entry.is_dir(follow_symlinks=False):
                children = _list_dir(Path(entry.path))
                if children:
                    stack.append((shown, iter(children)))
                continue
            if not entry.is_file():
                continue
        except OSError:
            continue

        if PurePath(entry.name).suffix not in extensions:
            continue
        yield FileCandidate(path=shown, location=Path(entry.path), root=root)


def walk(
    roots: Iterable[str | Path],
    exclude_patterns: Iterable[ExcludePattern] = (),
    allowed_extensions: Iterable[str] = (),
    *,
    base_dir: Path | None = None,
) -> list[FileCandidate]:
    """Enumerate candidate files under every root, in root order.

    Relative roots are looked up under *base_dir* (the working directory
    when omitted) but keep their relative spelling in ``FileCandidate.path``.
    A root that is missing or unreadable contributes nothing.
    """
    patterns = tuple(exclude_patterns)
    extensions = frozenset(allowed_extensions)
    if not extensions:
        return []

    out: list[FileCandidate] = []
    for raw in roots:
        root = Path(raw)
        location = root if base_dir is None or root.is_absolute() else base_dir / root
        found = list(_iter_root(root, location, patterns, extensions))
        _logger.debug("root %s: %d candidate file(s)", root, len(found))
        out.extend(found)
    return out
