"""Status engine — per-file resolution and the concurrent aggregator.

``StatusAggregator.run()`` is the only entry point that wires
discovery → pattern matching → git history → dictionary checks.

Concurrency: one bounded pool evaluates files, a second bounded pool evaluates
the target locales of each file.  File tasks block on locale tasks, never the
other way round, so neither pool can starve itself.  ``Executor.map`` yields in
input order, which keeps the report order equal to the sorted discovery order
regardless of completion timing.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from locale_audit.core.config import DictionaryFileGroup, FileGroup, StatusConfig
from locale_audit.core.dictionary import missing_keys
from locale_audit.core.discover import discover_files
from locale_audit.core.git import GitHistory, HistoryProvider
from locale_audit.core.localizable import ensure_localizable
from locale_audit.core.paths import PathResolver
from locale_audit.errors import (
    ConfigurationError,
    DictionaryParseError,
    FileGroupNotFound,
    NotLocalizable,
)
from locale_audit.model import FileGroupType, Status
from locale_audit.model.history import FileHistory
from locale_audit.model.status_entry import (
    FileStatusEntry,
    LocalizationEntry,
    SourceEntry,
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusContext:
    """Everything one run needs, passed explicitly to each component."""

    config: StatusConfig
    root: Path
    history: HistoryProvider

    @classmethod
    def create(
        cls,
        config: StatusConfig,
        root: Path,
        history: HistoryProvider | None = None,
    ) -> StatusContext:
        if history is None:
            history = GitHistory(root, config.tracking.ignored_keywords)
        return cls(config=config, root=root, history=history)


def compile_groups(config: StatusConfig) -> tuple[tuple[FileGroup, PathResolver], ...]:
    return tuple(
        (group, PathResolver(group.pattern, config.source_lang, config.target_langs))
        for group in config.files
    )


class FileStatusResolver:
    """Resolve the status of one discovered path.

    Parameters
    ----------
    context:
        The run context.
    locale_pool:
        Executor for per-locale subtasks.  ``None`` evaluates locales inline.
    """

    def __init__(self, context: StatusContext, *, locale_pool: Executor | None = None) -> None:
        self.context = context
        self._groups = compile_groups(context.config)
        self._locale_pool = locale_pool

    def find_file_group(self, path: str) -> tuple[FileGroup, PathResolver]:
        """The one ``files`` entry whose pattern matches *path* in any locale.

        Raises
        ------
        FileGroupNotFound
            If no pattern matches.
        ConfigurationError
            If more than one pattern matches.
        """
        matches = [
            (group, resolver)
            for group, resolver in self._groups
            if resolver.is_any_locale_match(path)
        ]
        if not matches:
            raise FileGroupNotFound(path)
        if len(matches) > 1:
            patterns = ", ".join(repr(g.pattern) for g, _ in matches)
            raise ConfigurationError(
                f"{path!r} is matched by more than one `files` entry "
                f"(patterns: {patterns}); "
                "each path must belong to exactly one entry"
            )
        return matches[0]

    def resolve(self, path: str) -> FileStatusEntry:
        """Status of *path*; per-file errors propagate to the caller."""
        cfg = self.context.config
        group, resolver = self.find_file_group(path)

        # The path may belong to any locale; always work from the source form.
        source_path = (
            path if resolver.is_source_match(path) else resolver.to_source_path(path)
        )
        ensure_localizable(
            self.context.root / source_path, cfg.tracking.localizable_property
        )
        source_history = self.context.history.get_file_history(source_path)

        def entry_for(lang: str) -> LocalizationEntry:
            return self._localization_entry(
                group, resolver, source_path, source_history, lang
            )

        if self._locale_pool is not None:
            localizations = tuple(self._locale_pool.map(entry_for, cfg.target_langs))
        else:
            localizations = tuple(entry_for(lang) for lang in cfg.target_langs)

        return FileStatusEntry(
            type=FileGroupType(group.type),
            pattern=group.pattern,
            source=SourceEntry(
                lang=cfg.source_lang, path=source_path, history=source_history
            ),
            localizations=localizations,
        )

    def _localization_entry(
        self,
        group: FileGroup,
        resolver: PathResolver,
        source_path: str,
        source_history: FileHistory,
        lang: str,
    ) -> LocalizationEntry:
        localized_path = resolver.to_path(source_path, lang)
        if not (self.context.root / localized_path).exists():
            return LocalizationEntry(lang=lang, path=localized_path, status=Status.MISSING)

        localized_history = self.context.history.get_file_history(localized_path)
        status = (
            Status.OUTDATED
            if source_history.is_newer_than(localized_history)
            else Status.UP_TO_DATE
        )

        keys: tuple[str, ...] | None = None
        if isinstance(group, DictionaryFileGroup):
            keys = tuple(
                sorted(
                    missing_keys(
                        group.optional_keys,
                        self.context.root / source_path,
                        self.context.root / localized_path,
                    )
                )
            )
        return LocalizationEntry(
            lang=lang,
            path=localized_path,
            status=status,
            history=localized_history,
            missing_keys=keys,
        )

    def get_file_status(self, path: str) -> FileStatusEntry | None:
        """Like ``resolve`` but logs and skips files that cannot be reported.

        ``DictionaryParseError`` is re-raised under ``on_parse_error: fail``.
        """
        try:
            return self.resolve(path)
        except (FileGroupNotFound, NotLocalizable) as e:
            _logger.error("Skipping %s: %s", path, e)
            return None
        except DictionaryParseError as e:
            if self.context.config.on_parse_error == "fail":
                raise
            _logger.error("Skipping %s: %s", path, e)
            return None


class StatusAggregator:
    """Discover source files for every ``files`` entry and resolve them all."""

    def __init__(self, context: StatusContext) -> None:
        self.context = context
        self._groups = compile_groups(context.config)

    def source_paths(self, group: FileGroup, resolver: PathResolver) -> list[str]:
        """Sorted candidate paths of *group* that match its source pattern."""
        candidates = discover_files(self.context.root, group.include, group.exclude)
        kept: list[str] = []
        filtered_out: list[str] = []
        for path in candidates:
            (kept if resolver.is_source_match(path) else filtered_out).append(path)

        if filtered_out:
            _logger.warning(
                "The following paths were filtered out by not matching the source "
                "pattern %r:%s\nVerify that the `pattern`, `include` and `exclude` "
                "of this `files` entry are set correctly.",
                group.pattern,
                "".join(f"\n- {p}" for p in filtered_out),
            )
        return sorted(kept)

    def plan(self) -> list[list[str]]:
        """Sorted source paths per ``files`` entry, in declaration order.

        Raises ``ConfigurationError`` before any status work if a discovered
        path is matched by more than one entry's pattern.
        """
        planned = [
            self.source_paths(group, resolver) for group, resolver in self._groups
        ]
        checker = FileStatusResolver(self.context)
        for paths in planned:
            for path in paths:
                checker.find_file_group(path)
        return planned

    def run(self) -> list[FileStatusEntry]:
        """Build the full status report, in ``files`` declaration order."""
        workers = self.context.config.max_workers
        planned = self.plan()
        report: list[FileStatusEntry] = []

        with ThreadPoolExecutor(max_workers=workers) as file_pool, ThreadPoolExecutor(
            max_workers=workers
        ) as locale_pool:
            resolver = FileStatusResolver(self.context, locale_pool=locale_pool)
            for (group, _), paths in zip(self._groups, planned):
                _logger.debug("Processing files with pattern: %s", group.pattern)
                report.extend(
                    entry
                    for entry in file_pool.map(resolver.get_file_status, paths)
                    if entry is not None
                )

        _logger.info("Computed status of %d file(s)", len(report))
        return report
