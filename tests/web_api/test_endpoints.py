"""
Web API Endpoint Tests
======================
Integration tests for the health and status endpoints.

Usage:
    pip install locale-audit[api]
    pytest tests/web_api/test_endpoints.py -v
"""
import json
from pathlib import Path

import pytest

# Skip entire module if FastAPI not installed
pytest.importorskip("fastapi")

from fastapi.testclient import TestClient

from locale_audit import __version__
from locale_audit.web_api.main import app

from conftest import base_config


@pytest.fixture
def client():
    """Create test client for FastAPI app."""
    return TestClient(app)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A content tree with one translated and one untranslated page."""
    for rel in ("docs/en/guide.md", "docs/en/intro.md", "docs/fr/guide.md"):
        p = tmp_path / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("x", encoding="utf-8")
    (tmp_path / "locale_audit.config.json").write_text(
        json.dumps(base_config()), encoding="utf-8"
    )
    return tmp_path


# ============================================================================
# HEALTH ENDPOINTS
# ============================================================================

class TestHealthEndpoint:
    """Tests for GET /health and GET /ready"""

    def test_health_returns_ok(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}

    def test_ready_reports_git_availability(self, client):
        response = client.get("/ready")
        assert response.status_code == 200
        assert response.json()["status"] in ("ready", "degraded")

    def test_root_lists_api_info(self, client):
        data = client.get("/").json()
        assert data["name"] == "Locale Audit API"
        assert data["version"] == __version__


# ============================================================================
# STATUS ENDPOINT
# ============================================================================

class TestStatusEndpoint:
    """Tests for POST /status/"""

    def test_status_returns_report(self, client, project):
        response = client.post("/status/", json={"root": str(project)})
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "complete"
        # Outside a git repository every history is absent: nothing is outdated.
        assert data["summary"] == {
            "files_total": 2,
            "missing": 1,
            "outdated": 0,
            "up_to_date": 1,
        }
        assert data["report"]["schema_version"] == "status_report_v1"
        assert "created_at" in data

    def test_status_unknown_root_is_404(self, client, tmp_path):
        response = client.post("/status/", json={"root": str(tmp_path / "absent")})
        assert response.status_code == 404

    def test_status_without_config_is_422(self, client, tmp_path):
        response = client.post("/status/", json={"root": str(tmp_path)})
        assert response.status_code == 422
        assert "no configuration file" in response.json()["detail"]

    def test_status_rejects_unknown_body_types(self, client):
        response = client.post("/status/", json={"use_cache": "not-a-bool"})
        assert response.status_code == 422


# ============================================================================
# SETTINGS
# ============================================================================

class TestSettings:
    """Environment overrides for the service settings"""

    def test_env_overrides(self, monkeypatch):
        from locale_audit.web_api.config import Settings

        monkeypatch.setenv("LOCALE_AUDIT_MAX_WORKERS", "3")
        monkeypatch.setenv("LOCALE_AUDIT_CORS_ORIGINS", "https://a.example,https://b.example")
        monkeypatch.setenv("LOCALE_AUDIT_DEFAULT_ROOT", "/srv/docs")
        s = Settings()
        assert s.MAX_WORKERS == 3
        assert s.CORS_ORIGINS == ["https://a.example", "https://b.example"]
        assert s.DEFAULT_ROOT == "/srv/docs"

    def test_docs_are_served(self, client):
        assert client.get("/").json()["docs"] == "/docs"
        assert client.get("/docs").status_code == 200
