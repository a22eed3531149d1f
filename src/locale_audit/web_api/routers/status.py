"""
Status Router
=============
Compute the localization status report of a project on this host.
"""
from pathlib import Path

from fastapi import APIRouter, HTTPException

from locale_audit import api as core_api
from locale_audit.errors import ConfigurationError, DictionaryParseError
from locale_audit.web_api.config import settings
from locale_audit.web_api.schemas.status import (
    StatusRequest,
    StatusResponse,
    StatusSummary,
)

router = APIRouter()


@router.post("/", response_model=StatusResponse)
def compute_status(request: StatusRequest):
    """
    Compute the status report.

    - **root**: project root (default: server setting)
    - **config_path**: configuration file
    - **use_cache** / **force**: result cache control
    """
    target = Path(request.root or settings.DEFAULT_ROOT)
    if not target.is_dir():
        raise HTTPException(status_code=404, detail=f"Path not found: {target}")

    try:
        _, report = core_api.get_full_status(
            target,
            config_path=request.config_path,
            use_cache=request.use_cache,
            force=request.force,
            max_workers=settings.MAX_WORKERS,
        )
    except (ConfigurationError, DictionaryParseError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    by_status = report["summary"]["by_status"]
    return StatusResponse(
        status="complete",
        summary=StatusSummary(
            files_total=report["summary"]["files_total"],
            missing=by_status["missing"],
            outdated=by_status["outdated"],
            up_to_date=by_status["up-to-date"],
        ),
        report=report,
    )
