"""Typed intake manifest parsing for declarative batch loads.

This module loads and validates YAML manifests that list report files
together with the bookkeeping each file record should carry. Relative
sources resolve against the manifest's own directory.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence, cast

from core.constants import SUPPORTED_MANIFEST_VERSION
from core.errors import IntakeDependencyError, IntakeManifestError
from core.s3_uri import is_s3_uri


@dataclass(frozen=True)
class ManifestEntry:
    """One report file listed in a manifest."""

    source: str
    filename: str | None = None
    database_id: str | None = None
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class IntakeManifest:
    """Validated manifest root object."""

    version: int
    default_tags: tuple[str, ...]
    entries: tuple[ManifestEntry, ...]


def load_intake_manifest(manifest_path: str) -> IntakeManifest:
    """Load and validate a YAML intake manifest from disk.

    Args:
        manifest_path: File path to the YAML manifest.

    Returns:
        Fully validated manifest.

    Raises:
        IntakeDependencyError: If PyYAML is unavailable.
        IntakeManifestError: If file is invalid or schema checks fail.
    """
    manifest_file = Path(manifest_path).expanduser().resolve()
    payload = _load_yaml_payload(manifest_file)
    root_mapping = _expect_mapping(payload, "manifest root")
    _validate_keys(root_mapping, {"version", "defaults", "files"}, "manifest root")
    version = _parse_version(root_mapping)
    default_tags = _parse_defaults(root_mapping)
    entries = _parse_entries(root_mapping, manifest_file.parent)
    return IntakeManifest(version=version, default_tags=default_tags, entries=entries)


def _load_yaml_payload(manifest_file: Path) -> object:
    try:
        import yaml
    except ImportError as error:  # pragma: no cover - dependency failure
        raise IntakeDependencyError(
            "YAML manifest support requires PyYAML. Install with 'pip install pyyaml'."
        ) from error
    if not manifest_file.exists():
        raise IntakeManifestError(
            f"Manifest file does not exist at {manifest_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(manifest_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise IntakeManifestError(
            f"Failed to read manifest at {manifest_file}: {error}. Check file permissions."
        ) from error
    except yaml.YAMLError as error:
        raise IntakeManifestError(
            f"Failed to parse YAML manifest at {manifest_file}: {error}. Fix YAML syntax."
        ) from error
    if payload is None:
        raise IntakeManifestError(
            f"Manifest at {manifest_file} is empty. Define 'version' and 'files'."
        )
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise IntakeManifestError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise IntakeManifestError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _expect_sequence(value: object, context: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise IntakeManifestError(f"Invalid {context}: expected list, got {type(value).__name__}.")


def _parse_version(root_mapping: Mapping[str, object]) -> int:
    raw_version = root_mapping.get("version")
    if not isinstance(raw_version, int) or isinstance(raw_version, bool):
        raise IntakeManifestError("Manifest field 'version' must be an integer. Set version: 1.")
    if raw_version != SUPPORTED_MANIFEST_VERSION:
        raise IntakeManifestError(
            f"Unsupported manifest version {raw_version}. "
            f"Use version: {SUPPORTED_MANIFEST_VERSION}."
        )
    return raw_version


def _parse_defaults(root_mapping: Mapping[str, object]) -> tuple[str, ...]:
    raw_defaults = root_mapping.get("defaults")
    if raw_defaults is None:
        return ()
    defaults_mapping = _expect_mapping(raw_defaults, "manifest defaults")
    _validate_keys(defaults_mapping, {"tags"}, "manifest defaults")
    return _parse_tags(defaults_mapping.get("tags"), "manifest defaults")


def _parse_entries(
    root_mapping: Mapping[str, object],
    base_dir: Path,
) -> tuple[ManifestEntry, ...]:
    raw_files = root_mapping.get("files")
    if raw_files is None:
        raise IntakeManifestError(
            "Manifest missing required field 'files'. Add a non-empty list of reports."
        )
    file_rows = _expect_sequence(raw_files, "manifest files")
    if len(file_rows) == 0:
        raise IntakeManifestError("Manifest field 'files' must include at least one entry.")
    return tuple(
        _parse_entry(file_value, index, base_dir) for index, file_value in enumerate(file_rows)
    )


def _parse_entry(file_value: object, entry_index: int, base_dir: Path) -> ManifestEntry:
    context = f"manifest file #{entry_index + 1}"
    if isinstance(file_value, str):
        return ManifestEntry(source=_resolve_source(file_value, base_dir, context))
    entry_mapping = _expect_mapping(file_value, context)
    _validate_keys(entry_mapping, {"source", "filename", "database_id", "tags"}, context)
    raw_source = _optional_string(entry_mapping, "source", context)
    if raw_source is None:
        raise IntakeManifestError(f"Invalid {context}: field 'source' is required.")
    return ManifestEntry(
        source=_resolve_source(raw_source, base_dir, context),
        filename=_optional_string(entry_mapping, "filename", context),
        database_id=_optional_string(entry_mapping, "database_id", context),
        tags=_parse_tags(entry_mapping.get("tags"), context),
    )


def _resolve_source(raw_source: str, base_dir: Path, context: str) -> str:
    source = raw_source.strip()
    if not source:
        raise IntakeManifestError(f"Invalid {context}: field 'source' must not be blank.")
    if is_s3_uri(source):
        return source
    source_path = Path(source).expanduser()
    if not source_path.is_absolute():
        source_path = base_dir / source_path
    return str(source_path.resolve())


def _parse_tags(raw_tags: object, context: str) -> tuple[str, ...]:
    if raw_tags is None:
        return ()
    tag_rows = _expect_sequence(raw_tags, f"{context} tags")
    if not all(isinstance(tag, str) and tag.strip() for tag in tag_rows):
        raise IntakeManifestError(f"Invalid {context} tags: every tag must be a non-empty string.")
    return tuple(cast(str, tag).strip() for tag in tag_rows)


def _optional_string(mapping: Mapping[str, object], field_name: str, context: str) -> str | None:
    raw_value = mapping.get(field_name)
    if raw_value is None:
        return None
    if isinstance(raw_value, (str, int)) and not isinstance(raw_value, bool):
        normalized_value = str(raw_value).strip()
        return normalized_value if normalized_value else None
    raise IntakeManifestError(f"Invalid {context}: field '{field_name}' must be a string.")


def _validate_keys(mapping: Mapping[str, object], allowed_keys: set[str], context: str) -> None:
    unknown_keys = sorted(set(mapping) - allowed_keys)
    if unknown_keys:
        raise IntakeManifestError(
            f"Invalid {context}: unknown fields {', '.join(unknown_keys)}."
        )
