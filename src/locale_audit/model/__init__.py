"""Enums shared across the engine and report layers."""

from __future__ import annotations

from enum import Enum


class Status(str, Enum):
    """Localization status of one file for one target locale."""

    MISSING = "missing"
    OUTDATED = "outdated"
    UP_TO_DATE = "up-to-date"


class FileGroupType(str, Enum):
    """Content type of a ``files`` entry."""

    UNIVERSAL = "universal"
    DICTIONARY = "dictionary"
