"""
Egress Audit Web API
====================
FastAPI-based REST surface over the egress audit.

Quick Start:
    uvicorn egress_audit.web_api.main:app --reload
"""
from .main import app

__all__ = ["app"]
