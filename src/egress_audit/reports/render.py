"""Render a :class:`ViolationReport` for people and for machines.

Both renderers are pure: they never print, exit or raise on violations.
Turning a non-empty report into a failure is the caller's job.
"""

from __future__ import annotations

from egress_audit.contracts.load import validate_instance
from egress_audit.model.violation import ViolationReport
from egress_audit.utils.json_norm import stable_json_dumps


def render_report(report: ViolationReport) -> str:
    """Count header followed by one ``<file>:<line> - <literal>`` line per violation."""
    if report.ok:
        return "No external URLs found."
    lines = [f"Found {len(report)} external URL(s):"]
    lines.extend(f"  {v}" for v in report.violations)
    return "\n".join(lines)


def report_to_dict(report: ViolationReport) -> dict:
    """Schema-validated dict form of *report*."""
    data = report.to_dict()
    validate_instance(data, "violation_report.schema.json")
    return data


def report_to_json(report: ViolationReport) -> str:
    return stable_json_dumps(report_to_dict(report))
