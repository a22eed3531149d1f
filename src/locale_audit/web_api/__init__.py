"""HTTP surface for the status report (FastAPI)."""
