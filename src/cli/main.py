"""Intake CLI entry points.
This module exposes commands for loading and inspecting scanner reports.
It maps argparse commands onto session SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from convert.report_formats import JSON_REPORT_FORMATS, TEXT_REPORT_FORMATS
from core.config import IntakeConfig
from core.errors import IntakeError
from core.types import FileLoadMetadata, IntakeBatchResult, as_tags
from detect.hdf_validator import is_hdf
from intake.file_reader import read_local_upload
from store.file_records import EvaluationFile
from store.intake_session import IntakeSession


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="hdf-intake",
        description="Detect, convert, and register scanner reports",
    )
    parser.add_argument(
        "--transformers",
        help="Override HDF_INTAKE_TRANSFORMERS_FILE for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_load_command(subparsers)
    _add_manifest_command(subparsers)
    _add_guess_command(subparsers)
    _add_check_command(subparsers)
    subparsers.add_parser("formats", help="List routable formats and registered transformers")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the intake CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        session = _build_session(args.transformers)
        if args.command == "load":
            return _run_load_command(session, args)
        if args.command == "manifest":
            return _run_manifest_command(session, args)
        if args.command == "guess":
            return _run_guess_command(session, args)
        if args.command == "check":
            return _run_check_command(args)
        if args.command == "formats":
            return _run_formats_command(session)
    except IntakeError as error:
        print(f"error: {error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_session(transformers_path: str | None) -> IntakeSession:
    """Build a session with an optional transformer plugin override.

    Args:
        transformers_path: Optional plugin file path.

    Returns:
        Configured session.
    """
    config = IntakeConfig.from_env()
    if transformers_path:
        config = replace(config, transformers_path=Path(transformers_path).expanduser().resolve())
    return IntakeSession(config)


def _run_load_command(session: IntakeSession, args: argparse.Namespace) -> int:
    """Handle load command.

    Args:
        session: Intake session.
        args: Parsed CLI args.

    Returns:
        Exit code, non-zero when any upload failed.
    """
    metadata = FileLoadMetadata(database_id=args.database_id, tags=as_tags(args.tag))
    result = session.load_path(args.source, metadata)
    _print_batch(session, result)
    return 0 if not result.failures else 1


def _run_manifest_command(session: IntakeSession, args: argparse.Namespace) -> int:
    """Handle manifest command."""
    result = session.load_manifest(args.manifest)
    _print_batch(session, result)
    return 0 if not result.failures else 1


def _run_guess_command(session: IntakeSession, args: argparse.Namespace) -> int:
    """Handle guess command.

    Args:
        session: Intake session.
        args: Parsed CLI args.

    Returns:
        Exit code, non-zero when no format matched.
    """
    report = session.detect(read_local_upload(Path(args.file).expanduser()))
    if report.is_normalized:
        print(f"{report.filename}\thdf\t-")
        return 0
    print(
        f"{report.filename}\t"
        f"{report.report_format or '-'}\t"
        f"{report.detection}\t"
        f"transformer={'yes' if report.has_transformer else 'no'}"
    )
    return 0 if report.report_format else 1


def _run_check_command(args: argparse.Namespace) -> int:
    """Handle check command."""
    upload = read_local_upload(Path(args.file).expanduser())
    normalized = is_hdf(upload.text)
    print(f"{upload.filename}\t{'hdf' if normalized else 'not-hdf'}")
    return 0 if normalized else 1


def _run_formats_command(session: IntakeSession) -> int:
    """Handle formats command."""
    for report_format in JSON_REPORT_FORMATS + TEXT_REPORT_FORMATS:
        registered = "registered" if report_format in session.registry else "-"
        print(f"{report_format.value}\t{registered}")
    return 0


def _print_batch(session: IntakeSession, result: IntakeBatchResult) -> None:
    """Print one line per registered record and per failure."""
    for loaded in result.loaded:
        if not loaded.file_ids:
            print(f"-\t{loaded.filename}\tno-match")
        for file_id in loaded.file_ids:
            record = session.data_store.get_file(file_id)
            if isinstance(record, EvaluationFile):
                counts = record.evaluation.status_counts()
                summary = ",".join(f"{status}={count}" for status, count in sorted(counts.items()))
                print(f"{file_id}\t{loaded.filename}\tevaluation\t{summary or '-'}")
            else:
                print(f"{file_id}\t{loaded.filename}\tprofile\t-")
    for failure in result.failures:
        print(f"-\t{failure.filename}\tfailed\t{failure.error}")


def _add_load_command(subparsers: Any) -> None:
    """Register load subcommand."""
    parser = subparsers.add_parser("load", help="Load a report file, directory, or S3 prefix")
    parser.add_argument("source", help="Report file, directory, or s3://bucket/prefix")
    parser.add_argument("--database-id", help="External database id for created records")
    parser.add_argument(
        "--tag",
        action="append",
        default=[],
        help="Tag to attach to created records, repeatable",
    )


def _add_manifest_command(subparsers: Any) -> None:
    """Register manifest subcommand."""
    parser = subparsers.add_parser("manifest", help="Load every report listed in a YAML manifest")
    parser.add_argument("manifest", help="Path to intake manifest YAML")


def _add_guess_command(subparsers: Any) -> None:
    """Register guess subcommand."""
    parser = subparsers.add_parser("guess", help="Show how a report would be routed")
    parser.add_argument("file", help="Report file to inspect")


def _add_check_command(subparsers: Any) -> None:
    """Register check subcommand."""
    parser = subparsers.add_parser("check", help="Check whether a file is already HDF")
    parser.add_argument("file", help="File to check")
