# SPDX-License-Identifier: MIT
"""Command-line interface for migrating and inspecting stored request files."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, Callable, Iterator, get_args

import logfire

from request_versions.core.equality import rest_request_eq
from request_versions.core.extract import extract_fields
from request_versions.io_utils import (
    QuarantineWriter,
    RecordLine,
    atomic_write,
    dump_record,
    iter_records,
)
from request_versions.io_utils.quarantine import JSON_PARSE_ERROR
from request_versions.observability import telemetry
from request_versions.observability.monitoring import LogLevel, init_logfire
from request_versions.requests import (
    RestRequest,
    ensure_ref_id,
    get_default_rest_request,
    rest_requests,
)
from request_versions.runtime.settings import Settings, load_settings
from request_versions.utils import CollectingErrorHandler

LOG_LEVELS: list[LogLevel] = list(get_args(LogLevel))

MIGRATED = "migrated"
SALVAGED = "salvaged"
DUPLICATE = "duplicate"


def _print_version() -> None:
    """Print the installed package version."""
    try:
        pkg_version = version("request-versions")
    except PackageNotFoundError:  # pragma: no cover - fallback for source checkouts
        pkg_version = "unknown"
    print(f"request-versions {pkg_version}")


def _configure_logging(args: argparse.Namespace, settings: Settings) -> None:
    """Configure Logfire from ``settings.log_level`` shifted by -v and -q."""
    index = LOG_LEVELS.index(settings.log_level) + args.verbose - args.quiet
    index = max(0, min(len(LOG_LEVELS) - 1, index))
    init_logfire(settings.logfire_token, LOG_LEVELS[index])


def _current_records(
    path: Path,
    settings: Settings,
    quarantine: QuarantineWriter,
) -> Iterator[RestRequest]:
    """Yield current records parsed from ``path``.

    Lines that fail are quarantined, or salvaged with the legacy extractor when
    ``settings.legacy_fallback`` is enabled.
    """
    source = path.stem
    for line in iter_records(path):
        record = _parse_line(line, source, settings, quarantine)
        if record is not None:
            yield record


def _parse_line(
    line: RecordLine,
    source: str,
    settings: Settings,
    quarantine: QuarantineWriter,
) -> RestRequest | None:
    if not line.ok:
        telemetry.record_outcome(source, JSON_PARSE_ERROR)
        quarantine.write(source, JSON_PARSE_ERROR, line.raw, line.error or "")
        return None

    result = rest_requests.safe_parse(line.raw)
    if result.ok:
        telemetry.record_outcome(source, MIGRATED, result.version)
        return result.value

    if settings.legacy_fallback:
        logfire.info(
            "Salvaging record with legacy extractor",
            line=line.line_no,
            kind=result.kind.value,
        )
        telemetry.record_outcome(source, SALVAGED, result.version)
        default = get_default_rest_request()
        return default.model_copy(update=extract_fields(line.raw), deep=True)

    telemetry.record_outcome(source, result.kind.value, result.version)
    quarantine.write(source, result.kind.value, line.raw, result.message)
    return None


def _cmd_migrate(args: argparse.Namespace, settings: Settings) -> int:
    """Rewrite every record of ``args.input`` at the latest schema version."""
    input_path = Path(args.input)
    quarantine = QuarantineWriter(settings.quarantine_dir)
    with logfire.span("cli.migrate", attributes={"input": str(input_path)}):
        count = atomic_write(
            Path(args.output),
            (
                dump_record(ensure_ref_id(record))
                for record in _current_records(input_path, settings, quarantine)
            ),
        )
    logfire.info("Migrated records", output=str(args.output), count=count)
    return 1 if settings.strict and telemetry.has_quarantines() else 0


def _cmd_check(args: argparse.Namespace, settings: Settings) -> int:
    """Report the detected version and parse outcome of each record."""
    input_path = Path(args.input)
    source = input_path.stem
    errors = CollectingErrorHandler()
    for line in iter_records(input_path):
        if not line.ok:
            telemetry.record_outcome(source, JSON_PARSE_ERROR)
            errors.handle(f"line {line.line_no}: {JSON_PARSE_ERROR}")
            continue
        result = rest_requests.safe_parse(line.raw)
        if result.ok:
            telemetry.record_outcome(source, MIGRATED, result.version)
            print(f"line {line.line_no}: v{result.version} ok")
        else:
            telemetry.record_outcome(source, result.kind.value, result.version)
            errors.handle(f"line {line.line_no}: {result.kind.value}: {result.message}")
    for message in errors.messages:
        print(message)
    return 1 if errors.messages else 0


def _dedupe(
    records: Iterator[RestRequest],
    equals: Callable[[Any, Any], bool],
    source: str,
) -> Iterator[RestRequest]:
    """Yield ``records`` skipping any equal to an earlier one."""
    kept: list[RestRequest] = []
    for record in records:
        if any(equals(record, seen) for seen in kept):
            telemetry.record_outcome(source, DUPLICATE)
            continue
        kept.append(record)
        yield record


def _cmd_dedupe(args: argparse.Namespace, settings: Settings) -> int:
    """Write records of ``args.input`` without structural duplicates."""
    input_path = Path(args.input)
    source = input_path.stem
    quarantine = QuarantineWriter(settings.quarantine_dir)
    equals = rest_request_eq(ignore=("ref_id",) if args.ignore_ref_id else ())
    records = _current_records(input_path, settings, quarantine)
    count = atomic_write(
        Path(args.output),
        (
            dump_record(ensure_ref_id(record))
            for record in _dedupe(records, equals, source)
        ),
    )
    logfire.info(
        "Deduplicated records",
        kept=count,
        dropped=telemetry.outcome_count(source, DUPLICATE),
    )
    return 1 if settings.strict and telemetry.has_quarantines() else 0


def _add_io_args(parser: argparse.ArgumentParser, output: bool = True) -> None:
    parser.add_argument("input", help="Path to the records JSONL file")
    if output:
        parser.add_argument("output", help="File to write current records to")


def _build_parser() -> argparse.ArgumentParser:
    """Return an argument parser configured with subcommands."""
    parser = argparse.ArgumentParser(
        description=(
            "Detect, migrate and compare stored REST request records across "
            "schema versions."
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print the request-versions version and exit.",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config", default=None, help="Path to YAML configuration file"
    )
    common.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase log verbosity"
    )
    common.add_argument(
        "-q", "--quiet", action="count", default=0, help="Decrease log verbosity"
    )
    common.add_argument(
        "--quarantine-dir", default=None, help="Directory for rejected records"
    )
    common.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Exit with status 1 when any record is quarantined",
    )
    common.add_argument(
        "--legacy-fallback",
        action="store_true",
        default=None,
        help="Salvage unparseable records field by field instead of quarantining",
    )

    subparsers = parser.add_subparsers(dest="command")

    migrate = subparsers.add_parser(
        "migrate", parents=[common], help="Upgrade records to the latest version"
    )
    _add_io_args(migrate)
    migrate.set_defaults(func=_cmd_migrate)

    check = subparsers.add_parser(
        "check", parents=[common], help="Report version and validity per record"
    )
    _add_io_args(check, output=False)
    check.set_defaults(func=_cmd_check)

    dedupe = subparsers.add_parser(
        "dedupe", parents=[common], help="Drop structurally equal records"
    )
    _add_io_args(dedupe)
    dedupe.add_argument(
        "--ignore-ref-id",
        action="store_true",
        help="Treat records differing only in reference id as duplicates",
    )
    dedupe.set_defaults(func=_cmd_dedupe)
    return parser


def _apply_args_to_settings(args: argparse.Namespace, settings: Settings) -> None:
    """Override settings fields based on CLI arguments."""
    arg_mapping: dict[str, tuple[str, Callable[[Any], Any] | None]] = {
        "quarantine_dir": ("quarantine_dir", Path),
        "strict": ("strict", None),
        "legacy_fallback": ("legacy_fallback", None),
    }
    for arg_name, (attr, converter) in arg_mapping.items():
        value = getattr(args, arg_name, None)
        if value is not None:
            setattr(settings, attr, converter(value) if converter else value)


def run(args: argparse.Namespace, settings: Settings) -> int:
    """Dispatch ``args`` to its subcommand and return the exit status."""
    telemetry.reset()
    try:
        return args.func(args, settings)
    finally:
        telemetry.print_summary()
        logfire.force_flush()


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and dispatch to the requested subcommand."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.version:
        _print_version()
        return
    if args.command is None:
        parser.print_help()
        raise SystemExit(1)
    settings = load_settings(args.config)
    _apply_args_to_settings(args, settings)
    _configure_logging(args, settings)
    code = run(args, settings)
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    main()
