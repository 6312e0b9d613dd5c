"""Multi-version recognition of normalized HDF text.

This module parses text and checks it against each supported schema
version. Callers pick the first recognized shape; when none matches the
collected errors explain why.
"""

from __future__ import annotations

from collections import abc
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

from core.constants import EXEC_JSON_SCHEMA_KEY, PROFILE_JSON_SCHEMA_KEY
from core.json_text import parse_json_text


@dataclass(frozen=True)
class SchemaConversionResult:
    """Outcome of matching text against supported schema versions.

    Attributes:
        matches: Parsed document keyed by every schema version it satisfies.
        errors: Validation messages for versions that did not match.
    """

    matches: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    errors: tuple[str, ...] = ()

    @property
    def execution(self) -> Mapping[str, Any] | None:
        """Return the document when it is a recognized execution."""
        return self.matches.get(EXEC_JSON_SCHEMA_KEY)

    @property
    def profile(self) -> Mapping[str, Any] | None:
        """Return the document when it is a recognized profile."""
        return self.matches.get(PROFILE_JSON_SCHEMA_KEY)


def convert_file(text: str) -> SchemaConversionResult:
    """Parse normalized text and recognize its schema version.

    Args:
        text: Raw normalized JSON text.

    Returns:
        Result listing every matching schema version and collected errors.
    """
    try:
        document = parse_json_text(text)
    except ValueError as error:
        return SchemaConversionResult(errors=(f"Invalid JSON: {error}",))
    return convert_document(document)


def convert_document(document: object) -> SchemaConversionResult:
    """Recognize the schema version of an already parsed document."""
    if not isinstance(document, Mapping):
        return SchemaConversionResult(
            errors=(f"Expected a JSON object, got {type(document).__name__}.",)
        )
    matches: dict[str, Mapping[str, Any]] = {}
    errors: list[str] = []
    for schema_key, validator in SCHEMA_VALIDATORS:
        schema_errors = validator(document)
        if schema_errors:
            errors.extend(f"{schema_key}: {message}" for message in schema_errors)
        else:
            matches[schema_key] = document
    return SchemaConversionResult(matches=matches, errors=tuple(errors))


def validate_exec_json(document: Mapping[str, Any]) -> list[str]:
    """Return validation errors for the 1.0 execution schema."""
    errors = _require_fields(
        document,
        {"platform": abc.Mapping, "profiles": list, "statistics": abc.Mapping, "version": str},
    )
    for index, profile in enumerate(_as_list(document.get("profiles"))):
        context = f"profiles[{index}]"
        if not isinstance(profile, Mapping):
            errors.append(f"{context} must be an object.")
            continue
        errors.extend(
            f"{context}.{message}"
            for message in _require_fields(profile, {"name": str, "controls": list})
        )
        for control_index, control in enumerate(_as_list(profile.get("controls"))):
            control_context = f"{context}.controls[{control_index}]"
            if not isinstance(control, Mapping):
                errors.append(f"{control_context} must be an object.")
                continue
            errors.extend(
                f"{control_context}.{message}"
                for message in _require_fields(control, {"id": str, "results": list})
            )
    return errors


def validate_profile_json(document: Mapping[str, Any]) -> list[str]:
    """Return validation errors for the 1.0 profile schema."""
    errors = _require_fields(document, {"name": str, "sha256": str, "controls": list})
    for index, control in enumerate(_as_list(document.get("controls"))):
        context = f"controls[{index}]"
        if not isinstance(control, Mapping):
            errors.append(f"{context} must be an object.")
            continue
        errors.extend(f"{context}.{message}" for message in _require_fields(control, {"id": str}))
    return errors


SCHEMA_VALIDATORS: tuple[tuple[str, Callable[[Mapping[str, Any]], list[str]]], ...] = (
    (EXEC_JSON_SCHEMA_KEY, validate_exec_json),
    (PROFILE_JSON_SCHEMA_KEY, validate_profile_json),
)


def _require_fields(document: Mapping[str, Any], expected: Mapping[str, type]) -> list[str]:
    errors: list[str] = []
    for field_name, field_type in expected.items():
        if field_name not in document:
            errors.append(f"{field_name} is required.")
        elif not isinstance(document[field_name], field_type):
            errors.append(f"{field_name} must be {field_type.__name__}.")
    return errors


def _as_list(value: object) -> Sequence[object]:
    return value if isinstance(value, list) else []
