"""
Status Schemas
==============
Request and response models for the status endpoint.
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class StatusRequest(BaseModel):
    """Request to compute a status report"""

    root: Optional[str] = Field(default=None, description="Project root on the server")
    config_path: Optional[str] = Field(
        default=None, description="Configuration file (default: looked up in root)"
    )
    use_cache: bool = Field(default=False, description="Reuse a matching cached report")
    force: bool = Field(default=False, description="Rebuild even if cached")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "root": "/srv/docs",
                "config_path": None,
                "use_cache": True,
                "force": False,
            }
        }
    )


class StatusSummary(BaseModel):
    """Counts across all files and locales"""

    files_total: int = Field(default=0)
    missing: int = Field(default=0)
    outdated: int = Field(default=0)
    up_to_date: int = Field(default=0)


class StatusResponse(BaseModel):
    """Response from a status computation"""

    status: str = Field(..., description="complete or failed")
    summary: StatusSummary
    report: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
