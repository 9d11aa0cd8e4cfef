"""egress_audit — static guardrail against hardcoded external network endpoints."""

__all__ = [
    "__version__",
    "scan_project",
    "check_files",
    "load_policy",
    "ScanConfiguration",
    "Violation",
    "ViolationReport",
    "render_report",
]
__version__ = "0.1.0"

from egress_audit.api import check_files, load_policy, scan_project  # noqa: E402
from egress_audit.core.config import ScanConfiguration  # noqa: E402
from egress_audit.model.violation import Violation, ViolationReport  # noqa: E402
from egress_audit.reports.render import render_report  # noqa: E402
