"""
egress_audit.api
================

Programmatic entrypoints for using egress_audit from test suites, build
scripts and the web API.

Goals:
  - No argparse / CLI dependencies
  - Deterministic, order-stable outputs
  - JSON-friendly results that match the bundled report schema

Usage::

    from egress_audit.api import scan_project, check_files

    report, report_dict = scan_project(base_dir=Path("."))
    assert report.ok, render_report(report)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping

from egress_audit.core.config import ScanConfiguration, load_policy, resolve_configuration
from egress_audit.core.runner import check_pinned, scan
from egress_audit.model.violation import ViolationReport
from egress_audit.reports.render import report_to_dict

__all__ = ["check_files", "load_policy", "scan_project"]


def _build_config(
    *,
    roots: Iterable[str | Path] | None,
    config: ScanConfiguration | None,
    config_path: str | Path | None,
    policy: Mapping[str, Any] | None,
    base_dir: str | Path | None,
    jobs: int | None,
) -> ScanConfiguration:
    base = Path(base_dir) if base_dir is not None else None
    if config is None:
        config = resolve_configuration(config_path, base_dir=base, env={})
    if policy:
        config = ScanConfiguration.from_mapping(policy, base=config)
    root_dirs = tuple(Path(r) for r in roots) if roots else None
    return config.with_overrides(root_directories=root_dirs, base_dir=base, jobs=jobs)


def scan_project(
    roots: Iterable[str | Path] | None = None,
    *,
    config: ScanConfiguration | None = None,
    config_path: str | Path | None = None,
    policy: Mapping[str, Any] | None = None,
    base_dir: str | Path | None = None,
    jobs: int | None = None,
) -> tuple[ViolationReport, dict]:
    """Scan *roots* (policy roots when omitted) and return ``(report, report_dict)``.

    *policy* is an inline policy mapping overlaid on the configuration, in
    the same shape a policy file uses.
    """
    cfg = _build_config(
        roots=roots,
        config=config,
        config_path=config_path,
        policy=policy,
        base_dir=base_dir,
        jobs=jobs,
    )
    report = scan(cfg)
    return report, report_to_dict(report)


def check_files(
    paths: Iterable[str | Path] | None = None,
    *,
    config: ScanConfiguration | None = None,
    config_path: str | Path | None = None,
    policy: Mapping[str, Any] | None = None,
    base_dir: str | Path | None = None,
) -> tuple[ViolationReport, dict]:
    """Check pinned files (the policy's ``pinned_files`` when *paths* is None)."""
    cfg = _build_config(
        roots=None,
        config=config,
        config_path=config_path,
        policy=policy,
        base_dir=base_dir,
        jobs=None,
    )
    report = check_pinned(cfg, list(paths) if paths is not None else None)
    return report, report_to_dict(report)
