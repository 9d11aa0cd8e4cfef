"""Centralized exit-code contract for all CLI commands.

Code  Meaning
----  -------
  0   Success — no forbidden literals found
  1   Violation — at least one forbidden literal in a scanned or pinned file
  2   Error — usage error, bad policy, missing pinned file, runtime failure
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2
