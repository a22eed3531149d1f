"""CLI entry-point for locale_audit.

Usage:
    python -m locale_audit [status] [--root DIR] [--config FILE] [--json]
    python -m locale_audit status --out status.json --fail-on outdated
    python -m locale_audit status --cache [--force]
    python -m locale_audit validate <report.json> [schema_name]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import jsonschema

from locale_audit import __version__
from locale_audit.api import get_full_status
from locale_audit.contracts.load import REPORT_SCHEMA, validate_file
from locale_audit.errors import ConfigurationError, DictionaryParseError
from locale_audit.model import Status
from locale_audit.utils.exit_codes import ExitCode
from locale_audit.utils.json_norm import stable_json_dump, stable_json_dumps

# --log-level choices mapped onto stdlib logging levels.
LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "silent": logging.CRITICAL + 1,
}

_KNOWN_COMMANDS = frozenset({"status", "validate"})

# Options whose value is a separate argv item.
_VALUE_OPTIONS = frozenset(
    {"--root", "--config", "--out", "--max-workers", "--fail-on", "--log-level"}
)

_STATUS_MARK = {"missing": "✗", "outdated": "!", "up-to-date": "✓"}


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=LOG_LEVELS[level],
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _add_status_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="Project root (default: current directory).",
    )
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file (default: locale_audit.config.{json,yaml,yml} in --root).",
    )
    p.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Write the JSON report to this file.",
    )
    p.add_argument(
        "--json",
        dest="json_out",
        action="store_true",
        default=False,
        help="Print the JSON report to stdout.",
    )
    p.add_argument(
        "--cache",
        dest="use_cache",
        action="store_true",
        default=False,
        help="Reuse the cached report when HEAD and the configuration are unchanged.",
    )
    p.add_argument(
        "--force",
        action="store_true",
        default=False,
        help="With --cache, rebuild the report even if a cached one matches.",
    )
    p.add_argument("--max-workers", type=int, default=None)
    p.add_argument(
        "--fail-on",
        dest="fail_on",
        action="append",
        choices=[Status.OUTDATED.value, Status.MISSING.value],
        default=[],
        help="Exit 1 if any entry has this status (repeatable).",
    )
    p.add_argument(
        "--log-level",
        choices=sorted(LOG_LEVELS),
        default="info",
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="locale-audit",
        description="Localization status of a content tree, from git history.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    sub = p.add_subparsers(dest="command")

    status_p = sub.add_parser("status", help="Compute the localization status report.")
    _add_status_args(status_p)

    val_p = sub.add_parser(
        "validate",
        help="Validate a saved report against the bundled schema.",
    )
    val_p.add_argument("instance", type=Path, help="Path to the JSON file to validate.")
    val_p.add_argument("schema_name", nargs="?", default=REPORT_SCHEMA)
    return p


def _print_human(report: dict) -> None:
    """Readable summary on stderr: per-locale counts, then what needs work."""
    summary = report["summary"]
    out = sys.stderr
    print(
        f"Source locale: {report['source_locale']} — "
        f"{summary['files_total']} file(s) tracked",
        file=out,
    )
    for lang, counts in summary["by_locale"].items():
        print(
            f"  {lang:<8} up-to-date {counts['up-to-date']:>4}  "
            f"outdated {counts['outdated']:>4}  missing {counts['missing']:>4}",
            file=out,
        )
    for entry in report["files"]:
        pending = [
            loc for loc in entry["localizations"] if loc["status"] != Status.UP_TO_DATE.value
        ]
        for loc in pending:
            extra = ""
            if loc.get("missing_keys"):
                extra = f" ({len(loc['missing_keys'])} missing key(s))"
            print(
                f"  {_STATUS_MARK[loc['status']]} {loc['lang']:<8} {loc['path']}{extra}",
                file=out,
            )


def _handle_validate(args: argparse.Namespace) -> int:
    # Exit code contract:
    #   1 = schema violation
    #   2 = unreadable file / unknown schema
    try:
        validate_file(args.instance, args.schema_name)
    except jsonschema.ValidationError as e:
        print(f"FAIL: {e.message}", file=sys.stderr)
        return ExitCode.VIOLATION
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    print("OK")
    return ExitCode.SUCCESS


def _handle_status(args: argparse.Namespace) -> int:
    _configure_logging(args.log_level)

    root: Path = args.root.resolve()
    if not root.is_dir():
        print(f"error: root is not a directory: {root}", file=sys.stderr)
        return ExitCode.ERROR
    if args.max_workers is not None and args.max_workers < 1:
        print("error: --max-workers must be at least 1", file=sys.stderr)
        return ExitCode.ERROR

    try:
        _, report = get_full_status(
            root,
            config_path=args.config,
            use_cache=args.use_cache,
            force=args.force,
            max_workers=args.max_workers,
        )
    except (ConfigurationError, DictionaryParseError) as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR

    if args.out is not None:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(stable_json_dumps(report), encoding="utf-8")

    if args.log_level != "silent":
        _print_human(report)
    if args.json_out:
        stable_json_dump(report, sys.stdout)

    if args.fail_on and any(
        report["summary"]["by_status"][status] > 0 for status in args.fail_on
    ):
        return ExitCode.VIOLATION
    return ExitCode.SUCCESS


def _split_command(argv: list[str]) -> tuple[str | None, list[str]]:
    """Find the subcommand in *argv*, skipping values of value-taking options."""
    skip_next = False
    for i, arg in enumerate(argv):
        if skip_next:
            skip_next = False
            continue
        if arg.startswith("-"):
            skip_next = arg in _VALUE_OPTIONS
            continue
        if arg in _KNOWN_COMMANDS:
            return arg, argv[:i] + argv[i + 1 :]
        return None, argv
    return None, argv


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an exit code (see ``utils.exit_codes``)."""
    effective_argv = list(argv) if argv is not None else sys.argv[1:]

    # `locale-audit --json` is shorthand for `locale-audit status --json`.
    if not any(a in ("-h", "--help", "--version") for a in effective_argv[:1]):
        command, rest = _split_command(effective_argv)
        effective_argv = [command or "status", *rest]

    args = _build_parser().parse_args(effective_argv)

    if args.command == "validate":
        return _handle_validate(args)
    return _handle_status(args)


if __name__ == "__main__":
    raise SystemExit(main())
