"""FileStatusEntry — the report unit for one source file."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from . import FileGroupType, Status
from .history import FileHistory


@dataclass(frozen=True, slots=True)
class LocalizationEntry:
    """Status of one target locale for a source file.

    ``history`` is ``None`` for ``missing`` entries; ``missing_keys`` is only
    set for dictionary file groups.
    """

    lang: str
    path: str
    status: Status
    history: FileHistory | None = None
    missing_keys: tuple[str, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "lang": self.lang,
            "path": self.path,
            "status": self.status.value,
        }
        if self.history is not None:
            d["git"] = self.history.to_dict()
        if self.missing_keys is not None:
            d["missing_keys"] = list(self.missing_keys)
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> LocalizationEntry:
        git = d.get("git")
        keys = d.get("missing_keys")
        return cls(
            lang=d["lang"],
            path=d["path"],
            status=Status(d["status"]),
            history=FileHistory.from_dict(git) if git is not None else None,
            missing_keys=tuple(keys) if keys is not None else None,
        )


@dataclass(frozen=True, slots=True)
class SourceEntry:
    """The source-locale side of a FileStatusEntry."""

    lang: str
    path: str
    history: FileHistory

    def to_dict(self) -> dict[str, Any]:
        return {
            "lang": self.lang,
            "path": self.path,
            "git": self.history.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> SourceEntry:
        return cls(
            lang=d["lang"],
            path=d["path"],
            history=FileHistory.from_dict(d.get("git") or {}),
        )


@dataclass(frozen=True, slots=True)
class FileStatusEntry:
    """Immutable status of a source file across every target locale."""

    type: FileGroupType
    pattern: str
    source: SourceEntry
    localizations: tuple[LocalizationEntry, ...]

    def by_lang(self, lang: str) -> LocalizationEntry | None:
        return next((e for e in self.localizations if e.lang == lang), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "pattern": self.pattern,
            "source": self.source.to_dict(),
            "localizations": [e.to_dict() for e in self.localizations],
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> FileStatusEntry:
        return cls(
            type=FileGroupType(d["type"]),
            pattern=d["pattern"],
            source=SourceEntry.from_dict(d["source"]),
            localizations=tuple(
                LocalizationEntry.from_dict(e) for e in d.get("localizations", [])
            ),
        )
