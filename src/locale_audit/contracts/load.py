"""Load and validate JSON instances against the bundled schemas.

Usage::

    from locale_audit.contracts.load import validate_instance, validate_file

    validate_instance(report_dict, "status_report.schema.json")
    validate_file(Path("out/status.json"), "status_report.schema.json")
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema

SCHEMA_DIR = "data/schemas"
REPORT_SCHEMA = "status_report.schema.json"


def _schema_path(name: str) -> Path:
    """Resolve a bundled schema.

    Priority:
    1. ``src/locale_audit/data/schemas/`` relative to this file
    2. pip-installed package data via importlib.resources
    """
    canonical = Path(__file__).resolve().parents[1] / SCHEMA_DIR / name
    if canonical.exists():
        return canonical

    with resources.as_file(resources.files("locale_audit") / SCHEMA_DIR / name) as p:
        if not p.exists():
            raise FileNotFoundError(f"unknown schema: {name}")
        return p


def load_schema(name: str) -> dict[str, Any]:
    """Load a bundled JSON schema by filename."""
    return json.loads(_schema_path(name).read_text(encoding="utf-8"))


def validate_instance(instance: Any, schema_name: str = REPORT_SCHEMA) -> None:
    """Validate *instance* against the named schema.

    Raises ``jsonschema.ValidationError`` on failure.
    """
    jsonschema.validate(instance=instance, schema=load_schema(schema_name))


def validate_file(instance_path: Path, schema_name: str = REPORT_SCHEMA) -> None:
    """Load a JSON file and validate it against the named schema."""
    instance = json.loads(instance_path.read_text(encoding="utf-8"))

    # Readable error before the generic jsonschema traceback.
    if schema_name == REPORT_SCHEMA and isinstance(instance, dict):
        sv = instance.get("schema_version")
        if sv != "status_report_v1":
            raise ValueError(
                f"{instance_path}: expected schema_version='status_report_v1', got {sv!r}"
            )

    validate_instance(instance, schema_name)
