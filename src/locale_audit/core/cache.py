"""Opt-in on-disk cache of the status report.

The cache key hashes ``CACHE_VERSION`` + the ``HEAD`` revision + the canonical
configuration, so a new commit, a configuration change or a format bump all
force a rebuild.  Uncommitted edits do not change the key; callers pass
``force=True`` when that matters.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import tempfile
from pathlib import Path

from locale_audit.core.config import StatusConfig
from locale_audit.model.status_entry import FileStatusEntry
from locale_audit.utils.json_norm import stable_json_dumps

_logger = logging.getLogger(__name__)

# Bump whenever the serialised status format changes.
CACHE_VERSION = "1.0.0"
CACHE_FILENAME = "status.json"


def cache_key(config: StatusConfig, revision: str) -> str:
    payload = CACHE_VERSION + revision + config.canonical_json()
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class StatusCache:
    """Stores one report under ``<cache_dir>/status.json``."""

    def __init__(self, cache_dir: Path) -> None:
        self._dir = cache_dir

    @property
    def path(self) -> Path:
        return self._dir / CACHE_FILENAME

    def load(self, key: str) -> list[FileStatusEntry] | None:
        """Cached report for *key*, or ``None`` on a miss or unreadable file."""
        if not self.path.is_file():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if data.get("hash") != key:
                _logger.debug("Status cache is stale, rebuilding")
                return None
            entries = [FileStatusEntry.from_dict(d) for d in data["status"]]
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            _logger.warning("Failed to read status from cache, rebuilding... (%s)", e)
            return None
        _logger.info("Loaded status from cache")
        return entries

    def save(self, key: str, entries: list[FileStatusEntry]) -> Path:
        """Atomically write *entries* under *key*."""
        self._dir.mkdir(parents=True, exist_ok=True)
        body = stable_json_dumps(
            {"hash": key, "status": [e.to_dict() for e in entries]}
        )
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            prefix="status_tmp_",
            suffix=".json",
            dir=str(self._dir),
            delete=False,
        ) as tf:
            tf.write(body)
            tmp_path = Path(tf.name)
        os.replace(tmp_path, self.path)
        return self.path
