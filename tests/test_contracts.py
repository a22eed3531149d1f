"""The bundled report schema accepts real reports and rejects drift."""

from __future__ import annotations

import copy

import jsonschema
import pytest

from locale_audit.api import build_report
from locale_audit.contracts.load import REPORT_SCHEMA, load_schema, validate_instance
from locale_audit.core.status import StatusAggregator, StatusContext

from conftest import FakeHistory, history_at


@pytest.fixture
def report(write_files, make_config):
    root = write_files(
        {"docs/en/a.md": "x", "docs/fr/a.md": "x", "docs/en/b.md": "x"}
    )
    cfg = make_config()
    fake = FakeHistory({"docs/en/a.md": history_at(2), "docs/fr/a.md": history_at(1)})
    entries = StatusAggregator(StatusContext.create(cfg, root, fake)).run()
    return build_report(entries, cfg)


def test_schema_is_bundled():
    schema = load_schema(REPORT_SCHEMA)
    assert schema["properties"]["schema_version"]["const"] == "status_report_v1"


def test_real_report_validates(report):
    validate_instance(report)


@pytest.mark.parametrize(
    "mutate",
    [
        lambda r: r.pop("summary"),
        lambda r: r.update(schema_version="status_report_v0"),
        lambda r: r["files"][0]["localizations"][0].update(status="stale"),
        lambda r: r["files"][0].update(extra=True),
        lambda r: r["files"][0]["source"].pop("git"),
    ],
    ids=["no-summary", "wrong-version", "unknown-status", "extra-field", "no-source-git"],
)
def test_drifted_report_is_rejected(report, mutate):
    broken = copy.deepcopy(report)
    mutate(broken)
    with pytest.raises(jsonschema.ValidationError):
        validate_instance(broken)
