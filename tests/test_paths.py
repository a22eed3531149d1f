"""Tests for the bidirectional path-pattern resolver."""

from __future__ import annotations

import pytest

from locale_audit.core.paths import PathResolver, validate_pattern
from locale_audit.errors import ConfigurationError


TARGETS = ("fr", "pt-BR", "zh-cn")


# ── construction ────────────────────────────────────────────────────


class TestPatternValidation:
    @pytest.mark.parametrize(
        "pattern",
        [
            "docs/guide.md",  # no locale
            "docs/{locale}/{locale}.md",  # two locales
            "docs/{lang}/guide.md",  # unknown placeholder
            "docs/{locale}/{path}/{path}",  # two paths
            "docs/{locale}{path}",  # ambiguous boundary
            "",
        ],
    )
    def test_malformed_patterns_rejected_at_construction(self, pattern: str) -> None:
        with pytest.raises(ConfigurationError):
            PathResolver(pattern, "en", TARGETS)

    def test_backslashes_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="forward slashes"):
            validate_pattern("docs\\{locale}\\guide.md")

    def test_source_locale_in_targets_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="also listed"):
            PathResolver("docs/{locale}/guide.md", "en", ("en", "fr"))

    def test_duplicate_targets_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="unique"):
            PathResolver("docs/{locale}/guide.md", "en", ("fr", "fr"))


# ── matching ────────────────────────────────────────────────────────


class TestMatching:
    def test_source_match_is_exact(self) -> None:
        r = PathResolver("docs/{locale}/guide.md", "en", TARGETS)
        assert r.is_source_match("docs/en/guide.md")
        assert not r.is_source_match("docs/en/guide.md.bak")
        assert not r.is_source_match("x/docs/en/guide.md")
        assert not r.is_source_match("docs/fr/guide.md")

    def test_literal_segments_are_not_regex(self) -> None:
        r = PathResolver("docs/{locale}/a+b.md", "en", TARGETS)
        assert r.is_source_match("docs/en/a+b.md")
        assert not r.is_source_match("docs/en/aab.md")

    def test_locales_match_only_configured_codes(self) -> None:
        r = PathResolver("docs/{locale}/guide.md", "en", TARGETS)
        assert r.is_locales_match("docs/pt-BR/guide.md")
        assert not r.is_locales_match("docs/de/guide.md")
        assert not r.is_locales_match("docs/en/guide.md")

    def test_any_locale_match(self) -> None:
        r = PathResolver("docs/{locale}/guide.md", "en", TARGETS)
        assert r.is_any_locale_match("docs/en/guide.md")
        assert r.is_any_locale_match("docs/zh-cn/guide.md")
        assert not r.is_any_locale_match("docs/de/guide.md")

    def test_path_placeholder_spans_directories(self) -> None:
        r = PathResolver("src/content/{locale}/{path}", "en", TARGETS)
        assert r.is_source_match("src/content/en/guides/intro/index.mdx")
        assert r.locale_of("src/content/fr/guides/intro/index.mdx") == "fr"

    def test_locale_of_prefers_exact_code(self) -> None:
        r = PathResolver("i18n/ui.{locale}.json", "pt", ("pt-BR",))
        assert r.locale_of("i18n/ui.pt.json") == "pt"
        assert r.locale_of("i18n/ui.pt-BR.json") == "pt-BR"
        assert r.locale_of("i18n/ui.es.json") is None


# ── generation ──────────────────────────────────────────────────────


class TestToPath:
    @pytest.mark.parametrize(
        "pattern,source_path",
        [
            ("docs/{locale}/guide.md", "docs/en/guide.md"),
            ("docs/{locale}/{path}", "docs/en/a/b/c.md"),
            ("i18n/ui.{locale}.json", "i18n/ui.en.json"),
            ("{locale}/{path}.md", "en/getting-started.md"),
            ("content/{path}/index.{locale}.mdx", "content/deep/nest/index.en.mdx"),
        ],
    )
    @pytest.mark.parametrize("target", TARGETS)
    def test_round_trip_returns_source_path(
        self, pattern: str, source_path: str, target: str
    ) -> None:
        r = PathResolver(pattern, "en", TARGETS)
        localized = r.to_path(source_path, target)
        assert localized != source_path
        assert r.locale_of(localized) == target
        assert r.to_path(localized, "en") == source_path
        assert r.to_source_path(localized) == source_path

    def test_substitutes_between_target_locales(self) -> None:
        r = PathResolver("docs/{locale}/{path}", "en", TARGETS)
        assert r.to_path("docs/fr/a/b.md", "pt-BR") == "docs/pt-BR/a/b.md"

    def test_non_matching_path_raises(self) -> None:
        r = PathResolver("docs/{locale}/guide.md", "en", TARGETS)
        with pytest.raises(ValueError, match="does not match"):
            r.to_path("blog/en/guide.md", "fr")

    def test_unknown_locale_raises(self) -> None:
        r = PathResolver("docs/{locale}/guide.md", "en", TARGETS)
        with pytest.raises(ValueError, match="not a configured locale"):
            r.to_path("docs/en/guide.md", "de")

    def test_no_filesystem_access(self, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        r = PathResolver("docs/{locale}/guide.md", "en", TARGETS)
        assert r.to_path("docs/en/guide.md", "fr") == "docs/fr/guide.md"
        assert list(tmp_path.iterdir()) == []
