"""Dictionary completeness — keys present in the source but not the translation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

from locale_audit.errors import DictionaryParseError

_LOADERS = {
    ".json": json.loads,
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
}


def load_dictionary(path: Path) -> Mapping[str, Any]:
    """Read a JSON or YAML dictionary file into a mapping."""
    loader = _LOADERS.get(path.suffix.lower())
    if loader is None:
        raise DictionaryParseError(
            path.as_posix(),
            f"unsupported extension {path.suffix!r} (expected one of {', '.join(sorted(_LOADERS))})",
        )
    try:
        data = loader(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise DictionaryParseError(path.as_posix(), str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise DictionaryParseError(
            path.as_posix(), f"top-level value is a {type(data).__name__}, not a mapping"
        )
    return data


def flatten_keys(data: Mapping[str, Any], prefix: str = "") -> set[str]:
    """Dot-path keys of every leaf; lists and scalars are leaves.

    >>> sorted(flatten_keys({"a": {"b": 1, "c": [1, 2]}, "d": "x"}))
    ['a.b', 'a.c', 'd']
    """
    keys: set[str] = set()
    for k, v in data.items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, Mapping) and v:
            keys |= flatten_keys(v, key)
        else:
            keys.add(key)
    return keys


def missing_keys(
    optional_keys: Iterable[str],
    source_path: Path,
    localized_path: Path,
) -> set[str]:
    """``source keys - localized keys - optional keys``.

    Raises ``DictionaryParseError`` if either file is not a valid dictionary.
    """
    source_keys = flatten_keys(load_dictionary(source_path))
    localized_keys = flatten_keys(load_dictionary(localized_path))
    return source_keys - localized_keys - set(optional_keys)
