"""CLI entry-point for egress_audit.

Usage:
    python -m egress_audit [PATH ...] [--config FILE] [--json] [--jobs N] [-v]
    python -m egress_audit scan [PATH ...] [--config FILE] [--base-dir DIR] [--json]
    python -m egress_audit check [FILE ...] [--config FILE] [--json]
    python -m egress_audit policy [--config FILE]
    python -m egress_audit validate <report.json>
    python -m egress_audit preview-update <URL> [--current-version V]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import jsonschema

from egress_audit import __version__
from egress_audit.contracts.load import validate_file
from egress_audit.core.config import PolicyError, ScanConfiguration, resolve_configuration
from egress_audit.core.runner import check_pinned, scan
from egress_audit.model.violation import ViolationReport
from egress_audit.reports.render import render_report, report_to_dict
from egress_audit.update_check import DEFAULT_CURRENT_VERSION, preview_update
from egress_audit.utils.exit_codes import ExitCode
from egress_audit.utils.json_norm import stable_json_dump

_KNOWN_COMMANDS = {"scan", "check", "policy", "validate", "preview-update"}


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Policy file (.yaml, .json or pyproject.toml). Default: $EGRESS_AUDIT_CONFIG.",
    )
    p.add_argument(
        "--base-dir",
        dest="base_dir",
        type=Path,
        default=None,
        help="Directory relative roots and pinned files are resolved against.",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-vv for debug detail).",
    )


def _add_report_args(p: argparse.ArgumentParser) -> None:
    _add_common(p)
    p.add_argument(
        "--json",
        dest="json_out",
        action="store_true",
        default=False,
        help="Print the report JSON to stdout.",
    )


def _add_scan_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Root directories to scan (default: the policy's roots).",
    )
    p.add_argument(
        "--jobs",
        type=int,
        default=None,
        help="Read and match files on N threads (default: 1 or $EGRESS_AUDIT_JOBS).",
    )
    _add_report_args(p)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="egress-audit",
        description="Fail the build when source files hardcode forbidden external URLs.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    sub = p.add_subparsers(dest="command")

    # ── scan subcommand ───────────────────────────────────────────────
    scan_p = sub.add_parser("scan", help="Scan the configured roots for forbidden literals.")
    _add_scan_args(scan_p)

    # ── check subcommand ──────────────────────────────────────────────
    check_p = sub.add_parser(
        "check",
        help="Hold specific files to zero violations (default: the policy's pinned files).",
    )
    check_p.add_argument("files", nargs="*", type=Path, help="Files to check.")
    _add_report_args(check_p)

    # ── policy subcommand ─────────────────────────────────────────────
    policy_p = sub.add_parser("policy", help="Print the effective policy as JSON.")
    _add_common(policy_p)

    # ── validate subcommand ───────────────────────────────────────────
    val_p = sub.add_parser("validate", help="Validate a saved report against the bundled schema.")
    val_p.add_argument("instance", type=Path, help="Path to the report JSON file.")

    # ── preview-update subcommand ─────────────────────────────────────
    prev_p = sub.add_parser(
        "preview-update",
        help="Show the update record a page URL would produce in preview mode.",
    )
    prev_p.add_argument("url", help="Page URL or query string, e.g. '?preview-update=v0.5.0'.")
    prev_p.add_argument(
        "--current-version",
        dest="current_version",
        default=DEFAULT_CURRENT_VERSION,
    )
    return p


def _build_default_parser() -> argparse.ArgumentParser:
    """Parser for default positional mode.

    Argparse subparsers greedily consume the first positional token, so
    ``egress-audit packages/ui --json`` would treat ``packages/ui`` as a
    command.  This parser is used when the first positional token is *not* a
    known subcommand.
    """
    p = argparse.ArgumentParser(
        prog="egress-audit",
        description="Fail the build when source files hardcode forbidden external URLs.",
    )
    _add_scan_args(p)
    p.set_defaults(command="scan")
    return p


def _resolve(args: argparse.Namespace, **overrides) -> ScanConfiguration | None:
    try:
        return resolve_configuration(args.config, base_dir=args.base_dir, **overrides)
    except PolicyError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return None


def _emit(report: ViolationReport, *, json_out: bool, what: str) -> int:
    if json_out:
        stable_json_dump(report_to_dict(report), sys.stdout)
    if report.ok:
        print(f"No external URLs found ({report.files_scanned} {what} checked).", file=sys.stderr)
        return ExitCode.SUCCESS
    print(f"\n{render_report(report)}\n", file=sys.stderr)
    return ExitCode.VIOLATION


def _handle_scan(args: argparse.Namespace) -> int:
    for path in args.paths:
        target = path if args.base_dir is None or path.is_absolute() else args.base_dir / path
        if not target.exists():
            print(f"error: path does not exist: {target}", file=sys.stderr)
            return ExitCode.ERROR

    cfg = _resolve(args, roots=args.paths or None, jobs=args.jobs)
    if cfg is None:
        return ExitCode.ERROR
    return _emit(scan(cfg), json_out=args.json_out, what="file(s)")


def _handle_check(args: argparse.Namespace) -> int:
    cfg = _resolve(args)
    if cfg is None:
        return ExitCode.ERROR
    try:
        report = check_pinned(cfg, args.files or None)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read pinned file: {exc}", file=sys.stderr)
        return ExitCode.ERROR
    return _emit(report, json_out=args.json_out, what="pinned file(s)")


def _handle_policy(args: argparse.Namespace) -> int:
    cfg = _resolve(args)
    if cfg is None:
        return ExitCode.ERROR
    stable_json_dump(cfg.to_dict(), sys.stdout)
    return ExitCode.SUCCESS


def _handle_validate(args: argparse.Namespace) -> int:
    # Exit code contract:
    #   1 = schema violation
    #   2 = unreadable file / not JSON / wrong schema_version
    try:
        validate_file(args.instance, "violation_report.schema.json")
    except jsonschema.ValidationError as exc:
        print(f"FAIL: {exc.message}", file=sys.stderr)
        return ExitCode.VIOLATION
    except (OSError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return ExitCode.ERROR
    print("OK")
    return ExitCode.SUCCESS


def _handle_preview(args: argparse.Namespace) -> int:
    info = preview_update(args.url, current_version=args.current_version)
    stable_json_dump(info.to_dict() if info is not None else None, sys.stdout)
    return ExitCode.SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an exit code (0 = clean, 1 = violations, 2 = error)."""
    effective_argv = list(argv) if argv is not None else sys.argv[1:]

    first_positional = next((a for a in effective_argv if not a.startswith("-")), None)
    if "--version" in effective_argv or (
        first_positional is not None and first_positional in _KNOWN_COMMANDS
    ):
        args = _build_parser().parse_args(effective_argv)
    else:
        args = _build_default_parser().parse_args(effective_argv)

    _configure_logging(getattr(args, "verbose", 0))

    if args.command == "check":
        return _handle_check(args)
    if args.command == "policy":
        return _handle_policy(args)
    if args.command == "validate":
        return _handle_validate(args)
    if args.command == "preview-update":
        return _handle_preview(args)
    return _handle_scan(args)


if __name__ == "__main__":
    raise SystemExit(main())
