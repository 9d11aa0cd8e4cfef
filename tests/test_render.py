"""Tests for report rendering, the report dict and its schema."""

from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest

from egress_audit.contracts.load import validate_file, validate_instance
from egress_audit.model.violation import Violation, ViolationReport, make_fingerprint
from egress_audit.reports.render import render_report, report_to_dict, report_to_json

GH = "https://api.github.com"
FONTS = "https://fonts.gstatic.com"


def _report() -> ViolationReport:
    return ViolationReport(
        violations=(
            Violation("packages/ui/a.ts", GH, 3),
            Violation("apps/hook/index.html", FONTS, 12),
        ),
        files_scanned=7,
        roots=("packages/ui", "apps/hook"),
    )


class TestRenderReport:
    def test_count_header_and_one_line_per_violation(self):
        assert render_report(_report()) == (
            "Found 2 external URL(s):\n"
            f"  packages/ui/a.ts:3 - {GH}\n"
            f"  apps/hook/index.html:12 - {FONTS}"
        )

    def test_clean_report(self):
        assert render_report(ViolationReport()) == "No external URLs found."


class TestViolation:
    def test_line_must_be_one_based(self):
        with pytest.raises(ValueError):
            Violation("a.ts", GH, 0)

    def test_fingerprint_is_stable_and_prefixed(self):
        v = Violation("a.ts", GH, 3)
        assert v.fingerprint == Violation("a.ts", GH, 3).fingerprint
        assert v.fingerprint.startswith("sha256:")
        assert v.fingerprint != Violation("a.ts", GH, 4).fingerprint

    def test_fingerprint_normalises_separators(self):
        assert make_fingerprint("a\\b.ts", 1, GH) == make_fingerprint("a/b.ts", 1, GH)

    def test_str(self):
        assert str(Violation("a.ts", GH, 3)) == f"a.ts:3 - {GH}"


class TestReportDict:
    def test_shape(self):
        d = report_to_dict(_report())
        assert d["schema_version"] == "violation_report_v1"
        assert d["summary"] == {
            "files_scanned": 7,
            "files_skipped": 0,
            "violations_total": 2,
            "ok": False,
        }
        assert d["violations"][0]["file"] == "packages/ui/a.ts"
        assert d["violations"][0]["line"] == 3

    def test_json_round_trips_through_schema(self, tmp_path: Path):
        out = tmp_path / "report.json"
        out.write_text(report_to_json(_report()), encoding="utf-8")
        validate_file(out, "violation_report.schema.json")
        assert json.loads(out.read_text(encoding="utf-8"))["summary"]["violations_total"] == 2

    def test_schema_rejects_zero_line(self):
        d = report_to_dict(_report())
        d["violations"][0]["line"] = 0
        with pytest.raises(jsonschema.ValidationError):
            validate_instance(d, "violation_report.schema.json")

    def test_wrong_schema_version_is_a_value_error(self, tmp_path: Path):
        d = report_to_dict(_report())
        d["schema_version"] = "run_result_v1"
        out = tmp_path / "r.json"
        out.write_text(json.dumps(d), encoding="utf-8")
        with pytest.raises(ValueError, match="schema_version"):
            validate_file(out, "violation_report.schema.json")

    def test_by_file_groups_in_order(self):
        grouped = _report().by_file()
        assert list(grouped) == ["packages/ui/a.ts", "apps/hook/index.html"]
