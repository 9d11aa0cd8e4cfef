"""In-process tests for the ``egress-audit`` command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from egress_audit.__main__ import main
from egress_audit.utils.exit_codes import ExitCode

GH = "https://api.github.com"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("EGRESS_AUDIT_CONFIG", raising=False)
    monkeypatch.delenv("EGRESS_AUDIT_JOBS", raising=False)


def _write(root: Path, rel: str, text: str) -> Path:
    p = root / rel
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


class TestScanCommand:
    def test_clean_tree_exits_0(self, tmp_path: Path, capsys):
        _write(tmp_path, "src/a.ts", "const x = 1;\n")
        assert main([str(tmp_path / "src")]) == ExitCode.SUCCESS
        assert "No external URLs found" in capsys.readouterr().err

    def test_violation_exits_1_and_prints_report(self, tmp_path: Path, capsys):
        _write(tmp_path, "src/a.ts", f"x\n'{GH}'\n")
        rc = main(["scan", "src", "--base-dir", str(tmp_path)])
        assert rc == ExitCode.VIOLATION
        err = capsys.readouterr().err
        assert "Found 1 external URL(s):" in err
        assert f"src/a.ts:2 - {GH}" in err

    def test_json_output(self, tmp_path: Path, capsys):
        _write(tmp_path, "src/a.ts", f"{GH}\n")
        rc = main(["src", "--base-dir", str(tmp_path), "--json"])
        assert rc == ExitCode.VIOLATION
        data = json.loads(capsys.readouterr().out)
        assert data["violations"][0]["file"] == "src/a.ts"
        assert data["summary"]["violations_total"] == 1

    def test_missing_explicit_path_exits_2(self, tmp_path: Path, capsys):
        assert main([str(tmp_path / "nope")]) == ExitCode.ERROR
        assert "does not exist" in capsys.readouterr().err

    def test_default_roots_from_policy(self, tmp_path: Path):
        _write(tmp_path, "packages/ui/hooks/useUpdateCheck.ts", f"fetch('{GH}/repos')\n")
        assert main(["scan", "--base-dir", str(tmp_path)]) == ExitCode.VIOLATION

    def test_policy_file(self, tmp_path: Path, capsys):
        _write(tmp_path, "web/a.js", "https://tracker.example.com\n")
        policy = _write(
            tmp_path,
            "egress.yaml",
            "roots: [web]\nforbidden_literals: ['https://tracker.example.com']\n",
        )
        assert main(["--config", str(policy)]) == ExitCode.VIOLATION
        assert "web/a.js:1" in capsys.readouterr().err

    def test_invalid_policy_exits_2(self, tmp_path: Path, capsys):
        policy = _write(tmp_path, "egress.json", '{"jobs": "many"}')
        assert main(["scan", "--config", str(policy)]) == ExitCode.ERROR
        assert "invalid policy" in capsys.readouterr().err

    def test_jobs_flag(self, tmp_path: Path):
        for i in range(6):
            _write(tmp_path, f"src/f{i}.ts", f"{GH}\n")
        assert main(["scan", "src", "--base-dir", str(tmp_path), "--jobs", "3"]) == ExitCode.VIOLATION


class TestCheckCommand:
    def test_pinned_file_clean(self, tmp_path: Path):
        _write(tmp_path, "apps/hook/index.html", "<html></html>\n")
        rc = main(["check", "apps/hook/index.html", "--base-dir", str(tmp_path)])
        assert rc == ExitCode.SUCCESS

    def test_pinned_file_violation(self, tmp_path: Path, capsys):
        _write(
            tmp_path,
            "apps/hook/index.html",
            '<link href="https://fonts.googleapis.com/css2?family=Inter">\n',
        )
        rc = main(["check", "apps/hook/index.html", "--base-dir", str(tmp_path)])
        assert rc == ExitCode.VIOLATION
        assert "apps/hook/index.html:1 - https://fonts.googleapis.com" in capsys.readouterr().err

    def test_missing_pinned_file_exits_2(self, tmp_path: Path, capsys):
        rc = main(["check", "--base-dir", str(tmp_path)])
        assert rc == ExitCode.ERROR
        assert "cannot read pinned file" in capsys.readouterr().err


class TestOtherCommands:
    def test_policy_prints_effective_policy(self, capsys):
        assert main(["policy"]) == ExitCode.SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert GH in data["forbidden_literals"]
        assert "substring:node_modules" in data["exclude"]

    def test_policy_rejects_json_flag(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["policy", "--json"])
        assert exc.value.code == 2
        assert "--json" in capsys.readouterr().err

    def test_validate_ok(self, tmp_path: Path, capsys):
        _write(tmp_path, "src/a.ts", f"{GH}\n")
        main(["src", "--base-dir", str(tmp_path), "--json"])
        out = tmp_path / "report.json"
        out.write_text(capsys.readouterr().out, encoding="utf-8")
        assert main(["validate", str(out)]) == ExitCode.SUCCESS

    def test_validate_schema_violation_exits_1(self, tmp_path: Path):
        bad = _write(
            tmp_path,
            "report.json",
            json.dumps({"schema_version": "violation_report_v1", "violations": []}),
        )
        assert main(["validate", str(bad)]) == ExitCode.VIOLATION

    def test_validate_missing_file_exits_2(self, tmp_path: Path):
        assert main(["validate", str(tmp_path / "none.json")]) == ExitCode.ERROR

    def test_preview_update(self, capsys):
        assert main(["preview-update", "?preview-update=v0.5.0"]) == ExitCode.SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["latest_version"] == "v0.5.0"
        assert data["release_url"].endswith("/tag/v0.5.0")

    def test_preview_update_without_param(self, capsys):
        assert main(["preview-update", "http://localhost/"]) == ExitCode.SUCCESS
        assert json.loads(capsys.readouterr().out) is None
