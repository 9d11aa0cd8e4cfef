"""Value types shared by the scanner, the renderers and the outer surfaces."""

from egress_audit.model.violation import Violation, ViolationReport, make_fingerprint

__all__ = ["Violation", "ViolationReport", "make_fingerprint"]
