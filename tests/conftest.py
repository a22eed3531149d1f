"""Shared fixtures: an in-memory history provider and a project builder."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

import pytest

from locale_audit.core.config import validate_config
from locale_audit.model.history import ChangeRecord, FileHistory


def at(day: int, hour: int = 12) -> datetime:
    return datetime(2024, 1, day, hour, 0, tzinfo=timezone.utc)


def history_at(day: int, revision: str = "", message: str = "docs: update") -> FileHistory:
    record = ChangeRecord(
        timestamp=at(day),
        revision=revision or f"rev{day:02d}",
        message=message,
        author_name="Docs Bot",
        author_email="docs@example.org",
    )
    return FileHistory(latest_change=record, latest_tracked_change=record)


class FakeHistory:
    """``HistoryProvider`` answering from a dict; records every lookup."""

    def __init__(self, histories: dict[str, FileHistory] | None = None, revision: str = "abc123"):
        self.histories = dict(histories or {})
        self.revision = revision
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def get_file_history(self, path: str) -> FileHistory:
        with self._lock:
            self.calls.append(path)
        return self.histories.get(path, FileHistory.absent())

    def latest_revision(self) -> str:
        return self.revision


def base_config(**overrides: Any) -> dict[str, Any]:
    cfg: dict[str, Any] = {
        "source_locale": {"lang": "en", "label": "English"},
        "locales": [{"lang": "fr", "label": "Français"}],
        "files": [
            {
                "include": ["docs/en/**/*.md"],
                "pattern": "docs/{locale}/{path}",
            }
        ],
    }
    cfg.update(overrides)
    return cfg


@pytest.fixture
def write_files(tmp_path: Path) -> Callable[..., Path]:
    """Create files under tmp_path: ``write_files({"docs/en/a.md": "..."})``."""

    def _write(files: dict[str, str]) -> Path:
        for rel, content in files.items():
            p = tmp_path / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def make_config() -> Callable[..., Any]:
    def _make(**overrides: Any):
        return validate_config(base_config(**overrides))

    return _make
