"""
API Routers
===========
"""
from . import health, status

__all__ = ["health", "status"]
