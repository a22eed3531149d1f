"""Path patterns — map a source file path to its locale counterparts and back.

A pattern is a POSIX path template with exactly one ``{locale}`` placeholder
and at most one ``{path}`` placeholder::

    docs/{locale}/guide.md        # one file per locale
    docs/{locale}/{path}          # a whole tree per locale
    i18n/ui.{locale}.json         # locale in the file name

``{locale}`` only ever matches one of the configured locale codes, and
``{path}`` matches one or more characters (slashes included).  Everything else
in the template is matched literally.
"""

from __future__ import annotations

import re
from typing import Iterable

from locale_audit.errors import ConfigurationError

LOCALE_PLACEHOLDER = "{locale}"
PATH_PLACEHOLDER = "{path}"

_PLACEHOLDER_RE = re.compile(r"\{([^{}]*)\}")
_KNOWN_PLACEHOLDERS = frozenset({"locale", "path"})


def validate_pattern(pattern: str) -> None:
    """Raise ``ConfigurationError`` unless *pattern* is a well-formed template."""
    if not pattern or not pattern.strip():
        raise ConfigurationError("file pattern must not be empty")
    if "\\" in pattern:
        raise ConfigurationError(
            f"pattern {pattern!r} must use forward slashes as path separators"
        )

    names = _PLACEHOLDER_RE.findall(pattern)
    unknown = sorted(set(names) - _KNOWN_PLACEHOLDERS)
    if unknown:
        raise ConfigurationError(
            f"pattern {pattern!r} uses unknown placeholder(s): "
            + ", ".join("{" + n + "}" for n in unknown)
        )
    n_locale = names.count("locale")
    if n_locale != 1:
        raise ConfigurationError(
            f"pattern {pattern!r} must contain exactly one {LOCALE_PLACEHOLDER} "
            f"placeholder (found {n_locale})"
        )
    if names.count("path") > 1:
        raise ConfigurationError(
            f"pattern {pattern!r} may contain at most one {PATH_PLACEHOLDER} placeholder"
        )
    if LOCALE_PLACEHOLDER + PATH_PLACEHOLDER in pattern or (
        PATH_PLACEHOLDER + LOCALE_PLACEHOLDER in pattern
    ):
        raise ConfigurationError(
            f"pattern {pattern!r} needs a literal separator between "
            f"{LOCALE_PLACEHOLDER} and {PATH_PLACEHOLDER}"
        )


def _compile_for(pattern: str, lang: str) -> re.Pattern[str]:
    """Regex matching *pattern* with ``{locale}`` fixed to *lang*."""
    parts: list[str] = []
    pos = 0
    for m in _PLACEHOLDER_RE.finditer(pattern):
        parts.append(re.escape(pattern[pos : m.start()]))
        if m.group(1) == "locale":
            parts.append(re.escape(lang))
        else:
            parts.append(r"(?P<path>.+)")
        pos = m.end()
    parts.append(re.escape(pattern[pos:]))
    return re.compile("".join(parts))


class PathResolver:
    """Matchers and generators for one pattern.

    Parameters
    ----------
    pattern:
        The path template (see module docstring).
    source_locale:
        Code of the source locale, e.g. ``"en"``.
    locales:
        Codes of the target locales.  Must not contain *source_locale*.

    Raises
    ------
    ConfigurationError
        If the pattern is malformed or the locale sets overlap.
    """

    def __init__(self, pattern: str, source_locale: str, locales: Iterable[str]) -> None:
        validate_pattern(pattern)
        targets = tuple(locales)
        if source_locale in targets:
            raise ConfigurationError(
                f"source locale {source_locale!r} is also listed as a target locale"
            )
        if len(set(targets)) != len(targets):
            raise ConfigurationError("target locales must be unique")

        self.pattern = pattern
        self.source_locale = source_locale
        self.locales = targets
        # Source first, so that a path is attributed to the source locale
        # whenever it could be read either way.
        self._matchers: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
            (lang, _compile_for(pattern, lang)) for lang in (source_locale, *targets)
        )

    def __repr__(self) -> str:
        return f"PathResolver({self.pattern!r}, source={self.source_locale!r})"

    # ── matching ────────────────────────────────────────────────────

    def _match(self, path: str) -> tuple[str, re.Match[str]] | None:
        for lang, rx in self._matchers:
            m = rx.fullmatch(path)
            if m is not None:
                return lang, m
        return None

    def is_source_match(self, path: str) -> bool:
        return self._matchers[0][1].fullmatch(path) is not None

    def is_locales_match(self, path: str) -> bool:
        return any(rx.fullmatch(path) for _, rx in self._matchers[1:])

    def is_any_locale_match(self, path: str) -> bool:
        return self._match(path) is not None

    def locale_of(self, path: str) -> str | None:
        """Return the locale code *path* was written for, or ``None``."""
        hit = self._match(path)
        return hit[0] if hit else None

    # ── generation ──────────────────────────────────────────────────

    def to_path(self, path: str, lang: str) -> str:
        """Re-substitute *lang* into the template *path* matched.

        Pure string transform: the filesystem is never consulted.

        Raises
        ------
        ValueError
            If *path* does not match the pattern for any configured locale,
            or *lang* is not a configured locale.
        """
        if lang != self.source_locale and lang not in self.locales:
            raise ValueError(f"{lang!r} is not a configured locale")
        hit = self._match(path)
        if hit is None:
            raise ValueError(f"{path!r} does not match pattern {self.pattern!r}")
        _, m = hit
        out = self.pattern.replace(LOCALE_PLACEHOLDER, lang)
        if PATH_PLACEHOLDER in out:
            out = out.replace(PATH_PLACEHOLDER, m.group("path"))
        return out

    def to_source_path(self, path: str) -> str:
        return self.to_path(path, self.source_locale)
