"""Fingerprint table for JSON scanner reports.

Each entry maps a format tag to property paths whose presence in a parsed
document is diagnostic of that scanner's output. Declaration order matters:
the type guesser keeps the earliest entry when scores tie.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Mapping, cast

from core.errors import IntakeConfigError, IntakeDependencyError

FingerprintTable = Mapping[str, tuple[str, ...]]

FILE_TYPE_FINGERPRINTS: FingerprintTable = MappingProxyType(
    {
        "fortify": ("FVDL", "FVDL.EngineData.EngineVersion", "FVDL.UUID"),
        "jfrog": ("total_count", "data"),
        "nikto": ("banner", "host", "ip", "port", "vulnerabilities"),
        "sarif": ("$schema", "version", "runs"),
        "snyk": (
            "projectName",
            "policy",
            "summary",
            "vulnerabilities",
            "vulnerabilities[0].identifiers",
        ),
        "zap": ("@generated", "@version", "site"),
    }
)


def freeze_fingerprint_table(raw_table: Mapping[str, object]) -> FingerprintTable:
    """Validate and freeze a fingerprint table.

    Args:
        raw_table: Mapping of format tag to a list of property paths.

    Returns:
        Read-only table preserving the input order.

    Raises:
        IntakeConfigError: If the table is empty or malformed.
    """
    if not raw_table:
        raise IntakeConfigError(
            "Fingerprint table is empty. Declare at least one format with property paths."
        )
    frozen_rows: dict[str, tuple[str, ...]] = {}
    for format_name, raw_paths in raw_table.items():
        if not isinstance(format_name, str) or not format_name:
            raise IntakeConfigError(
                f"Invalid fingerprint format name {format_name!r}: expected non-empty string."
            )
        if not isinstance(raw_paths, (list, tuple)) or not raw_paths:
            raise IntakeConfigError(
                f"Invalid fingerprints for '{format_name}': expected a non-empty list of paths."
            )
        if not all(isinstance(path, str) and path for path in raw_paths):
            raise IntakeConfigError(
                f"Invalid fingerprints for '{format_name}': every path must be a string."
            )
        frozen_rows[format_name] = tuple(raw_paths)
    return MappingProxyType(frozen_rows)


def load_fingerprint_table(table_path: Path | None) -> FingerprintTable:
    """Load a fingerprint table from YAML, or return the built-in table.

    Args:
        table_path: Optional YAML file mapping format tags to path lists.

    Returns:
        Read-only fingerprint table.

    Raises:
        IntakeConfigError: If the file is missing or invalid.
        IntakeDependencyError: If PyYAML is unavailable.
    """
    if table_path is None:
        return FILE_TYPE_FINGERPRINTS
    try:
        import yaml
    except ImportError as error:  # pragma: no cover - dependency failure
        raise IntakeDependencyError(
            "YAML fingerprint tables require PyYAML. Install with 'pip install pyyaml'."
        ) from error
    if not table_path.exists():
        raise IntakeConfigError(
            f"Fingerprint file does not exist at {table_path}. "
            "Fix HDF_INTAKE_FINGERPRINTS_FILE or remove it."
        )
    try:
        payload = cast(object, yaml.safe_load(table_path.read_text(encoding="utf-8")))
    except yaml.YAMLError as error:
        raise IntakeConfigError(
            f"Failed to parse fingerprint file at {table_path}: {error}. Fix YAML syntax."
        ) from error
    if not isinstance(payload, Mapping):
        raise IntakeConfigError(
            f"Invalid fingerprint file at {table_path}: expected a mapping of format to paths."
        )
    return freeze_fingerprint_table(payload)
