"""Shared helpers: canonical JSON output and the CLI exit-code contract."""

from egress_audit.utils.exit_codes import ExitCode
from egress_audit.utils.json_norm import stable_json_dump, stable_json_dumps

__all__ = ["ExitCode", "stable_json_dump", "stable_json_dumps"]
