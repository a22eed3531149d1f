"""
Health Check Router
===================
Endpoints for health checks and readiness probes.
"""
import shutil

from fastapi import APIRouter

from locale_audit import __version__

router = APIRouter()


@router.get("/health")
async def health_check():
    """Returns OK if the service is running."""
    return {"status": "ok", "version": __version__}


@router.get("/ready")
async def readiness_check():
    """Ready once a git executable is available to read history."""
    if shutil.which("git") is None:
        return {"status": "degraded", "detail": "git executable not found"}
    return {"status": "ready"}
