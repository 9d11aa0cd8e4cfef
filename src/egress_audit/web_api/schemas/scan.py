"""
Scan Schemas
============
Request and response models for scan endpoints.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any, List


class ScanRequest(BaseModel):
    """Request to run a tree scan"""

    base_dir: str = Field(..., description="Project directory roots are resolved against")
    roots: Optional[List[str]] = Field(
        default=None, description="Root directories to scan (default: policy roots)"
    )
    policy: Optional[Dict[str, Any]] = Field(
        default=None, description="Inline policy overlaid on the defaults"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "base_dir": "/path/to/repo",
                "roots": ["packages/ui", "apps/hook"],
                "policy": {"forbidden_literals": ["https://tracker.example.com"]},
            }
        }
    )


class CheckRequest(BaseModel):
    """Request to check pinned files"""

    base_dir: str = Field(..., description="Project directory files are resolved against")
    files: Optional[List[str]] = Field(
        default=None, description="Files to check (default: policy pinned_files)"
    )
    policy: Optional[Dict[str, Any]] = Field(default=None)


class ReportSummary(BaseModel):
    """Summary of a report"""

    files_scanned: int = Field(default=0)
    files_skipped: int = Field(default=0)
    violations_total: int = Field(default=0)
    ok: bool = Field(default=True)


class ReportResponse(BaseModel):
    """Response from a scan or check"""

    status: str = Field(..., description="'clean' or 'violations'")
    summary: ReportSummary
    report: Dict[str, Any] = Field(default_factory=dict)
    rendered: str = Field(default="", description="Human-readable report text")
