"""Status configuration — loaded from JSON/YAML and validated with pydantic.

Field names are snake_case; camelCase spellings (``sourceLocale``,
``optionalKeys``, ...) are accepted as aliases.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any, Literal, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    ValidationError,
)

from locale_audit.core.paths import PathResolver
from locale_audit.errors import ConfigurationError
from locale_audit.model import FileGroupType

# Looked up in this order inside the project root.
CONFIG_FILENAMES = (
    "locale_audit.config.json",
    "locale_audit.config.yaml",
    "locale_audit.config.yml",
)

DEFAULT_IGNORED_KEYWORDS = ("locale-audit-ignore", "fix typo")


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class LocaleConfig(_Frozen):
    lang: str = Field(min_length=1)
    label: str = ""


class _FileGroupBase(_Frozen):
    include: tuple[str, ...] = Field(min_length=1)
    exclude: tuple[str, ...] = ()
    pattern: str = Field(min_length=1)


class UniversalFileGroup(_FileGroupBase):
    """Plain files: status is judged by git history alone."""

    type: Literal["universal"] = "universal"


class DictionaryFileGroup(_FileGroupBase):
    """Key/value files: status also reports keys missing from the translation."""

    type: Literal["dictionary"] = "dictionary"
    optional_keys: tuple[str, ...] = Field(default=(), alias="optionalKeys")


def _group_type(value: Any) -> str:
    if isinstance(value, dict):
        raw = value.get("type", FileGroupType.UNIVERSAL)
    else:
        raw = getattr(value, "type", FileGroupType.UNIVERSAL)
    return raw.value if isinstance(raw, FileGroupType) else str(raw)


FileGroup = Annotated[
    Union[
        Annotated[UniversalFileGroup, Tag(FileGroupType.UNIVERSAL.value)],
        Annotated[DictionaryFileGroup, Tag(FileGroupType.DICTIONARY.value)],
    ],
    Discriminator(_group_type),
]


class TrackingConfig(_Frozen):
    ignored_keywords: tuple[str, ...] = Field(
        default=DEFAULT_IGNORED_KEYWORDS, alias="ignoredKeywords"
    )
    localizable_property: str | None = Field(default=None, alias="localizableProperty")


class StatusConfig(_Frozen):
    """Immutable run configuration."""

    source_locale: LocaleConfig = Field(alias="sourceLocale")
    locales: tuple[LocaleConfig, ...] = Field(min_length=1)
    files: tuple[FileGroup, ...] = Field(min_length=1)
    tracking: TrackingConfig = Field(default_factory=TrackingConfig)
    cache_dir: str = Field(default=".locale_audit/cache", alias="cacheDir")
    max_workers: int = Field(default=8, ge=1, alias="maxWorkers")
    on_parse_error: Literal["fail", "skip"] = Field(default="fail", alias="onParseError")

    @property
    def source_lang(self) -> str:
        return self.source_locale.lang

    @property
    def target_langs(self) -> tuple[str, ...]:
        return tuple(loc.lang for loc in self.locales)

    def canonical_json(self) -> str:
        """Stable serialisation used to key the result cache."""
        return json.dumps(self.model_dump(mode="json"), sort_keys=True)


def validate_config(raw: dict[str, Any] | StatusConfig) -> StatusConfig:
    """Validate *raw* and check cross-field invariants.

    Raises
    ------
    ConfigurationError
        On schema violations, overlapping locales or malformed patterns.
    """
    if isinstance(raw, StatusConfig):
        cfg = raw
    else:
        try:
            cfg = StatusConfig.model_validate(raw)
        except ValidationError as e:
            raise ConfigurationError(f"invalid configuration:\n{e}") from e

    for group in cfg.files:
        # Constructing the resolver validates pattern shape and locale sets.
        PathResolver(group.pattern, cfg.source_lang, cfg.target_langs)
    return cfg


def find_config_file(root: Path) -> Path | None:
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def load_config(root: Path, path: Path | None = None) -> StatusConfig:
    """Load and validate the configuration file.

    *path* wins when given; otherwise the first of ``CONFIG_FILENAMES`` found
    in *root* is used.
    """
    cfg_path = path if path is not None else find_config_file(root)
    if cfg_path is None:
        raise ConfigurationError(
            f"no configuration file found in {root.as_posix()} "
            f"(looked for {', '.join(CONFIG_FILENAMES)})"
        )
    try:
        text = cfg_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"cannot read {cfg_path.as_posix()}: {e}") from e

    try:
        if cfg_path.suffix.lower() in (".yaml", ".yml"):
            raw = yaml.safe_load(text)
        else:
            raw = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"cannot parse {cfg_path.as_posix()}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"{cfg_path.as_posix()}: top-level value must be a mapping"
        )
    return validate_config(raw)
