"""File discovery — expand ``include`` minus ``exclude`` globs under the root."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Iterable

from locale_audit.errors import ConfigurationError

# Never descended into, whatever the globs say.
_DEFAULT_EXCLUDES = frozenset({".git", "node_modules", "__pycache__"})


def _expand(root: Path, patterns: Iterable[str]) -> set[str]:
    found: set[str] = set()
    for pat in patterns:
        if not pat or PurePosixPath(pat).is_absolute():
            raise ConfigurationError(
                f"glob {pat!r} must be a non-empty path relative to the project root"
            )
        recursive = pat.rstrip("/").endswith("**")
        for p in root.glob(pat):
            # A trailing `**` yields directories: take every file below them.
            matches = p.rglob("*") if recursive and p.is_dir() else (p,)
            for f in matches:
                rel = f.relative_to(root)
                if any(part in _DEFAULT_EXCLUDES for part in rel.parts):
                    continue
                if f.is_file():
                    found.add(rel.as_posix())
    return found


def discover_files(
    root: Path,
    include: Iterable[str],
    exclude: Iterable[str] = (),
) -> list[str]:
    """Return files under *root* matching *include* and not *exclude*.

    Parameters
    ----------
    root:
        Project root; every glob is relative to it.
    include:
        Glob patterns (``**`` allowed) selecting candidate files.
    exclude:
        Glob patterns removed from the candidates.

    Returns
    -------
    Sorted list of root-relative POSIX path strings.
    """
    if not root.is_dir():
        raise ConfigurationError(f"project root does not exist: {root.as_posix()}")
    return sorted(_expand(root, include) - _expand(root, exclude))
