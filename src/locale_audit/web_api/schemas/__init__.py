"""
Pydantic Schemas
================
Request and response models for the API.
"""
from .status import StatusRequest, StatusResponse, StatusSummary

__all__ = ["StatusRequest", "StatusResponse", "StatusSummary"]
