"""Report renderers — human-readable failure text and the JSON artifact."""

from egress_audit.reports.render import render_report, report_to_dict, report_to_json

__all__ = ["render_report", "report_to_dict", "report_to_json"]
