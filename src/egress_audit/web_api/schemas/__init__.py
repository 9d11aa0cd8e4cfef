"""
Pydantic Schemas
================
Request and response models for the API.
"""
from .scan import CheckRequest, ReportResponse, ReportSummary, ScanRequest

__all__ = ["CheckRequest", "ReportResponse", "ReportSummary", "ScanRequest"]
