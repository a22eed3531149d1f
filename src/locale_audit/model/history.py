"""ChangeRecord / FileHistory — latest git changes for a single path."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class ChangeRecord:
    """One commit touching a path.

    ``timestamp is None`` marks the absent-history sentinel (untracked or
    brand-new files); such a record is never considered newer or older than
    another one.
    """

    timestamp: datetime | None
    revision: str = ""
    message: str = ""
    author_name: str = ""
    author_email: str = ""

    @classmethod
    def absent(cls) -> ChangeRecord:
        return cls(timestamp=None)

    @property
    def is_absent(self) -> bool:
        return self.timestamp is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.timestamp.isoformat() if self.timestamp else None,
            "revision": self.revision,
            "message": self.message,
            "author_name": self.author_name,
            "author_email": self.author_email,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ChangeRecord:
        date = d.get("date")
        return cls(
            timestamp=datetime.fromisoformat(date) if date else None,
            revision=d.get("revision", ""),
            message=d.get("message", ""),
            author_name=d.get("author_name", ""),
            author_email=d.get("author_email", ""),
        )


@dataclass(frozen=True, slots=True)
class FileHistory:
    """Latest change and latest *tracked* change of a path.

    The two differ when the newest commits only carry ignored keywords
    (e.g. ``fix typo``); outdatedness is always judged on
    ``latest_tracked_change``.
    """

    latest_change: ChangeRecord = field(default_factory=ChangeRecord.absent)
    latest_tracked_change: ChangeRecord = field(default_factory=ChangeRecord.absent)

    @classmethod
    def absent(cls) -> FileHistory:
        return cls()

    def is_newer_than(self, other: FileHistory) -> bool:
        """True iff both tracked timestamps exist and ours is strictly later."""
        mine = self.latest_tracked_change.timestamp
        theirs = other.latest_tracked_change.timestamp
        if mine is None or theirs is None:
            return False
        return mine > theirs

    def to_dict(self) -> dict[str, Any]:
        return {
            "latest_change": self.latest_change.to_dict(),
            "latest_tracked_change": self.latest_tracked_change.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> FileHistory:
        return cls(
            latest_change=ChangeRecord.from_dict(d.get("latest_change") or {}),
            latest_tracked_change=ChangeRecord.from_dict(
                d.get("latest_tracked_change") or {}
            ),
        )
