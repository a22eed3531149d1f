"""Tests for the opt-in status cache."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from locale_audit.core.cache import CACHE_FILENAME, StatusCache, cache_key
from locale_audit.core.status import StatusAggregator, StatusContext

from conftest import FakeHistory, history_at

TREE = {"docs/en/a.md": "x", "docs/fr/a.md": "x", "docs/en/b.md": "x"}


@pytest.fixture
def entries(write_files, make_config):
    root = write_files(TREE)
    fake = FakeHistory({"docs/en/a.md": history_at(3), "docs/fr/a.md": history_at(1)})
    return StatusAggregator(StatusContext.create(make_config(), root, fake)).run()


def test_key_changes_with_revision_and_config(make_config) -> None:
    cfg = make_config()
    assert cache_key(cfg, "abc") == cache_key(make_config(), "abc")
    assert cache_key(cfg, "abc") != cache_key(cfg, "def")
    assert cache_key(cfg, "abc") != cache_key(make_config(max_workers=3), "abc")


def test_save_then_load_restores_entries(tmp_path: Path, entries) -> None:
    cache = StatusCache(tmp_path / "cache")
    path = cache.save("k1", entries)

    assert path == tmp_path / "cache" / CACHE_FILENAME
    assert cache.load("k1") == entries
    # No temporary files left behind.
    assert [p.name for p in (tmp_path / "cache").iterdir()] == [CACHE_FILENAME]


def test_stale_key_is_a_miss(tmp_path: Path, entries) -> None:
    cache = StatusCache(tmp_path)
    cache.save("old", entries)
    assert cache.load("new") is None


def test_missing_file_is_a_miss(tmp_path: Path) -> None:
    assert StatusCache(tmp_path / "nowhere").load("k") is None


@pytest.mark.parametrize(
    "body",
    ["not json", "[]", json.dumps({"hash": "k"}), json.dumps({"hash": "k", "status": [{}]})],
)
def test_corrupt_cache_warns_and_misses(
    tmp_path: Path, body: str, caplog: pytest.LogCaptureFixture
) -> None:
    (tmp_path / CACHE_FILENAME).write_text(body, encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        assert StatusCache(tmp_path).load("k") is None
    assert "rebuilding" in caplog.text


def test_cache_file_layout(tmp_path: Path, entries) -> None:
    cache = StatusCache(tmp_path)
    cache.save("k", entries)
    data = json.loads(cache.path.read_text(encoding="utf-8"))
    assert data["hash"] == "k"
    assert [e["source"]["path"] for e in data["status"]] == ["docs/en/a.md", "docs/en/b.md"]
    assert data["status"][0]["localizations"][0]["status"] == "outdated"
