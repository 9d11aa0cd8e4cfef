"""
Health Check Router
===================
Endpoints for health checks and readiness checks.
"""
from fastapi import APIRouter

from egress_audit import __version__

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns OK if the service is running.
    """
    return {"status": "ok", "version": __version__}


@router.get("/ready")
async def readiness_check():
    """
    Readiness check endpoint.
    The audit has no backing services, so ready means running.
    """
    return {"status": "ready"}
