"""
Scan Router
===========
Endpoints for running egress audits.
"""
from pathlib import Path

from fastapi import APIRouter, HTTPException

from egress_audit import api as core_api
from egress_audit.core.config import PolicyError
from egress_audit.reports.render import render_report
from egress_audit.web_api.config import settings
from egress_audit.web_api.schemas.scan import (
    CheckRequest,
    ReportResponse,
    ReportSummary,
    ScanRequest,
)

router = APIRouter()


def _base_dir(raw: str) -> Path:
    target = Path(raw)
    if not target.is_dir():
        raise HTTPException(status_code=404, detail=f"Path not found: {raw}")
    return target


def _response(report, report_dict) -> ReportResponse:
    return ReportResponse(
        status="clean" if report.ok else "violations",
        summary=ReportSummary(**report_dict["summary"]),
        report=report_dict,
        rendered=render_report(report),
    )


@router.post("/", response_model=ReportResponse)
def run_scan(request: ScanRequest):
    """
    Scan a project tree for forbidden external URLs.

    - **base_dir**: Local project directory
    - **roots**: Optional root directories, relative to base_dir
    - **policy**: Optional inline policy overrides
    """
    base = _base_dir(request.base_dir)
    try:
        report, report_dict = core_api.scan_project(
            request.roots,
            policy=request.policy,
            base_dir=base,
            jobs=settings.SCAN_JOBS,
        )
    except PolicyError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _response(report, report_dict)


@router.post("/check", response_model=ReportResponse)
def run_check(request: CheckRequest):
    """
    Hold specific files to zero violations.
    """
    base = _base_dir(request.base_dir)
    try:
        report, report_dict = core_api.check_files(
            request.files,
            policy=request.policy,
            base_dir=base,
        )
    except PolicyError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except (OSError, UnicodeDecodeError) as e:
        raise HTTPException(status_code=404, detail=f"Cannot read pinned file: {e}")
    return _response(report, report_dict)
