"""History provider — latest tracked git change for a path.

``git log --follow`` is run once per path.  Commits whose message contains one
of the configured *ignored keywords* (case-insensitive) still count as the
latest change, but not as the latest *tracked* change, so cosmetic commits
(``fix typo``) never mark a translation as outdated.
"""

from __future__ import annotations

import logging
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Iterable, Protocol

from locale_audit.errors import HistoryLookupFailure
from locale_audit.model.history import ChangeRecord, FileHistory

_logger = logging.getLogger(__name__)

# Unit / record separators keep multi-line commit messages parseable.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = _FIELD_SEP.join(["%H", "%aI", "%an", "%ae", "%B"]) + _RECORD_SEP

_DEFAULT_GIT_TIMEOUT = 60  # seconds


class HistoryProvider(Protocol):
    """Anything able to answer "latest tracked change of *path*"."""

    def get_file_history(self, path: str) -> FileHistory: ...

    def latest_revision(self) -> str: ...


def parse_log(output: str) -> list[ChangeRecord]:
    """Parse ``git log`` output produced with ``_LOG_FORMAT``, newest first."""
    records: list[ChangeRecord] = []
    for chunk in output.split(_RECORD_SEP):
        chunk = chunk.strip("\n")
        if not chunk.strip():
            continue
        fields = chunk.split(_FIELD_SEP)
        if len(fields) != 5:
            _logger.debug("Unparseable git log record skipped: %r", chunk[:80])
            continue
        revision, date, name, email, message = fields
        try:
            timestamp = datetime.fromisoformat(date.strip())
        except ValueError:
            _logger.debug("Invalid commit date %r for %s", date, revision)
            continue
        records.append(
            ChangeRecord(
                timestamp=timestamp,
                revision=revision.strip(),
                message=message.strip(),
                author_name=name,
                author_email=email,
            )
        )
    return records


def is_tracked(record: ChangeRecord, ignored_keywords: Iterable[str]) -> bool:
    message = record.message.lower()
    return not any(kw.lower() in message for kw in ignored_keywords if kw)


def history_from_records(
    records: list[ChangeRecord], ignored_keywords: Iterable[str]
) -> FileHistory:
    """Reduce a newest-first commit list to a ``FileHistory``."""
    if not records:
        return FileHistory.absent()
    keywords = tuple(ignored_keywords)
    tracked = next(
        (r for r in records if is_tracked(r, keywords)), ChangeRecord.absent()
    )
    return FileHistory(latest_change=records[0], latest_tracked_change=tracked)


class GitHistory:
    """``HistoryProvider`` backed by the ``git`` executable.

    Parameters
    ----------
    root:
        Working tree the paths are relative to.
    ignored_keywords:
        Commit-message keywords marking a commit as untracked.
    timeout:
        Per-command timeout in seconds.
    """

    def __init__(
        self,
        root: Path,
        ignored_keywords: Iterable[str] = (),
        *,
        timeout: float = _DEFAULT_GIT_TIMEOUT,
    ) -> None:
        self.root = root
        self.ignored_keywords = tuple(ignored_keywords)
        self.timeout = timeout

    def _run_git(self, *args: str) -> str:
        try:
            result = subprocess.run(
                ["git", "-C", str(self.root), *args],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise HistoryLookupFailure(args[-1], str(e)) from e
        if result.returncode != 0:
            raise HistoryLookupFailure(args[-1], (result.stderr or "").strip())
        return result.stdout

    def get_file_history(self, path: str) -> FileHistory:
        """Latest change and latest tracked change of *path*.

        A path without history, or a failing git command, yields
        ``FileHistory.absent()``.
        """
        _logger.debug("Reading git history of %s", path)
        try:
            output = self._run_git("log", "--follow", f"--format={_LOG_FORMAT}", "--", path)
        except HistoryLookupFailure as e:
            _logger.warning("%s", e)
            return FileHistory.absent()
        return history_from_records(parse_log(output), self.ignored_keywords)

    def get_latest_change(self, path: str) -> ChangeRecord:
        return self.get_file_history(path).latest_tracked_change

    def latest_revision(self) -> str:
        """``HEAD`` commit hash, or ``""`` outside a repository."""
        try:
            return self._run_git("rev-parse", "HEAD").strip()
        except HistoryLookupFailure as e:
            _logger.warning("%s", e)
            return ""
