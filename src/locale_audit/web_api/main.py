"""
FastAPI Application
===================
Serves the localization status report, e.g. for a dashboard.

Run with:
    uvicorn locale_audit.web_api.main:app --reload
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from locale_audit import __version__
from locale_audit.web_api.config import settings
from locale_audit.web_api.routers import health, status

app = FastAPI(
    title="Locale Audit API",
    description="Localization status of a content tree, from git history",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, tags=["Health"])
app.include_router(status.router, prefix="/status", tags=["Status"])


@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "name": "Locale Audit API",
        "version": __version__,
        "docs": "/docs",
    }


# For running directly: python -m locale_audit.web_api.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
