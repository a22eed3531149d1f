"""
locale_audit.api
================

Programmatic entrypoints for using locale_audit as a library.

Goals:
  - No argparse / CLI dependencies
  - No global state: every call builds its own ``StatusContext``
  - Stable, JSON-friendly outputs matching ``status_report.schema.json``

Usage::

    from locale_audit.api import get_full_status

    entries, report = get_full_status(".")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional

from locale_audit import __version__
from locale_audit.contracts.load import validate_instance
from locale_audit.core.cache import StatusCache, cache_key
from locale_audit.core.config import StatusConfig, load_config, validate_config
from locale_audit.core.git import HistoryProvider
from locale_audit.core.status import FileStatusResolver, StatusAggregator, StatusContext
from locale_audit.model import Status
from locale_audit.model.status_entry import FileStatusEntry


def _to_path(p: str | Path) -> Path:
    return p if isinstance(p, Path) else Path(p)


def _resolve_config(
    root: Path,
    config: Optional[StatusConfig | dict[str, Any]],
    config_path: Optional[str | Path],
    max_workers: Optional[int],
) -> StatusConfig:
    if config is not None:
        cfg = validate_config(config)
    else:
        cfg = load_config(root, _to_path(config_path) if config_path else None)
    if max_workers is not None:
        cfg = validate_config({**cfg.model_dump(), "max_workers": max_workers})
    return cfg


def _empty_counts() -> dict[str, int]:
    return {s.value: 0 for s in Status}


def build_report(entries: Iterable[FileStatusEntry], config: StatusConfig) -> dict[str, Any]:
    """Assemble the schema-aligned report dict for *entries*."""
    files = list(entries)
    by_status = _empty_counts()
    by_locale = {lang: _empty_counts() for lang in config.target_langs}
    for entry in files:
        for loc in entry.localizations:
            by_status[loc.status.value] += 1
            by_locale.setdefault(loc.lang, _empty_counts())[loc.status.value] += 1

    return {
        "schema_version": "status_report_v1",
        "tool_version": __version__,
        "source_locale": config.source_lang,
        "locales": list(config.target_langs),
        "summary": {
            "files_total": len(files),
            "by_status": by_status,
            "by_locale": by_locale,
        },
        "files": [e.to_dict() for e in files],
    }


# ── get_full_status ─────────────────────────────────────────────────


def get_full_status(
    root: str | Path = ".",
    *,
    config: Optional[StatusConfig | dict[str, Any]] = None,
    config_path: Optional[str | Path] = None,
    history: Optional[HistoryProvider] = None,
    use_cache: bool = False,
    force: bool = False,
    max_workers: Optional[int] = None,
) -> tuple[list[FileStatusEntry], dict[str, Any]]:
    """Compute the localization status of every tracked file.

    Parameters
    ----------
    root:
        Project root; globs, patterns and git paths are relative to it.
    config:
        Inline configuration.  When omitted it is loaded from *config_path*
        or from ``locale_audit.config.{json,yaml,yml}`` in *root*.
    history:
        Override the git-backed history provider (tests, alternate VCS).
    use_cache:
        Read/write ``<cache_dir>/status.json``.  Off by default.
    force:
        With *use_cache*, ignore any cached report and rebuild it.
    max_workers:
        Override the configured worker count.

    Returns
    -------
    ``(entries, report_dict)``

    Raises
    ------
    FileNotFoundError
        If *root* does not exist.
    ConfigurationError
        If the configuration is missing or invalid.
    DictionaryParseError
        Under ``on_parse_error: fail``.
    """
    root_p = _to_path(root).resolve()
    if not root_p.exists():
        raise FileNotFoundError(f"get_full_status: root does not exist: {root_p}")

    cfg = _resolve_config(root_p, config, config_path, max_workers)
    context = StatusContext.create(cfg, root_p, history)

    cache: StatusCache | None = None
    key = ""
    if use_cache:
        cache = StatusCache(root_p / cfg.cache_dir)
        key = cache_key(cfg, context.history.latest_revision())
        if not force:
            cached = cache.load(key)
            if cached is not None:
                return cached, build_report(cached, cfg)

    entries = StatusAggregator(context).run()
    report = build_report(entries, cfg)
    validate_instance(report)

    if cache is not None:
        cache.save(key, entries)
    return entries, report


# ── get_file_status ─────────────────────────────────────────────────


def get_file_status(
    path: str,
    root: str | Path = ".",
    *,
    config: Optional[StatusConfig | dict[str, Any]] = None,
    config_path: Optional[str | Path] = None,
    history: Optional[HistoryProvider] = None,
) -> FileStatusEntry | None:
    """Status of one file, given as a root-relative path in any locale.

    Returns ``None`` when the file is skipped (no matching ``files`` entry,
    not localizable, or a dictionary parse error under ``skip``).
    """
    root_p = _to_path(root).resolve()
    cfg = _resolve_config(root_p, config, config_path, None)
    context = StatusContext.create(cfg, root_p, history)
    return FileStatusResolver(context).get_file_status(path)
