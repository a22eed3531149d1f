"""Front-matter eligibility check for localization tracking."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from locale_audit.errors import NotLocalizable

FRONTMATTER_EXTENSIONS = frozenset({".md", ".mdx", ".markdown", ".mdoc"})

_FRONTMATTER_RE = re.compile(r"\A\ufeff?---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.S)


def read_frontmatter(text: str) -> dict[str, Any] | None:
    """Return the YAML front matter of *text*, or ``None`` if there is none."""
    m = _FRONTMATTER_RE.match(text)
    if m is None:
        return None
    try:
        data = yaml.safe_load(m.group(1))
    except yaml.YAMLError:
        return None
    return data if isinstance(data, dict) else None


def _lookup(data: dict[str, Any], dotted: str) -> Any:
    node: Any = data
    for part in dotted.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def ensure_localizable(path: Path, localizable_property: str | None) -> None:
    """Raise ``NotLocalizable`` unless *path* opts in to tracking.

    Without a configured property every file is localizable, and so is any
    file type that cannot carry front matter (dictionaries, plain text).
    Otherwise the front matter value at the (dot-separated) property must be
    truthy.
    """
    if not localizable_property or path.suffix.lower() not in FRONTMATTER_EXTENSIONS:
        return
    shown = path.as_posix()
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise NotLocalizable(shown, f"cannot read file: {e}") from e

    frontmatter = read_frontmatter(text)
    if frontmatter is None:
        raise NotLocalizable(shown, "no front matter found")
    if not _lookup(frontmatter, localizable_property):
        raise NotLocalizable(
            shown, f"front matter property `{localizable_property}` is not enabled"
        )
