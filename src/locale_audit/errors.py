"""Exception hierarchy for the status engine.

Only ``ConfigurationError`` (and ``DictionaryParseError`` under the default
``on_parse_error: fail`` policy) stop a run.  Everything else is scoped to a
single file and is logged by the resolver before the file is skipped.
"""

from __future__ import annotations


class LocaleAuditError(Exception):
    """Base class for all locale_audit errors."""


class ConfigurationError(LocaleAuditError):
    """Invalid configuration: bad pattern shape, overlapping locales, unreadable file."""


class FileGroupNotFound(LocaleAuditError):
    """Raised when no configured file group pattern matches a path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            f"No `files` entry matches {path!r}. "
            "Verify that its `pattern` covers this path."
        )


class NotLocalizable(LocaleAuditError):
    """Raised when a file is excluded from tracking by its front matter."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class DictionaryParseError(LocaleAuditError):
    """Raised when a dictionary file cannot be read as a key/value mapping."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to parse dictionary file {path!r}: {detail}")


class HistoryLookupFailure(LocaleAuditError):
    """Raised by the git backend when a history query fails."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"git history lookup failed for {path!r}: {detail}")
