"""Runtime configuration model for intake.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import DEFAULT_MAX_CONCURRENT_LOADS
from core.errors import IntakeConfigError


@dataclass(frozen=True)
class IntakeConfig:
    """Validated runtime configuration.

    Attributes:
        s3_region: Optional default AWS region for S3 reads.
        s3_profile: Optional AWS profile for boto3 session initialization.
        transformers_path: Optional Python file registering transformers.
        fingerprints_path: Optional YAML file replacing the fingerprint table.
        max_concurrent_loads: Upper bound on files loaded at the same time.
    """

    s3_region: str | None = None
    s3_profile: str | None = None
    transformers_path: Path | None = None
    fingerprints_path: Path | None = None
    max_concurrent_loads: int = DEFAULT_MAX_CONCURRENT_LOADS

    @classmethod
    def from_env(cls) -> "IntakeConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            IntakeConfigError: If environment values are invalid.
        """
        max_loads_value = os.getenv(
            "HDF_INTAKE_MAX_CONCURRENT_LOADS", str(DEFAULT_MAX_CONCURRENT_LOADS)
        )
        return cls(
            s3_region=os.getenv("HDF_INTAKE_S3_REGION"),
            s3_profile=os.getenv("HDF_INTAKE_S3_PROFILE"),
            transformers_path=_optional_path(os.getenv("HDF_INTAKE_TRANSFORMERS_FILE")),
            fingerprints_path=_optional_path(os.getenv("HDF_INTAKE_FINGERPRINTS_FILE")),
            max_concurrent_loads=_parse_max_concurrent_loads(max_loads_value),
        )


def _optional_path(raw_value: str | None) -> Path | None:
    """Resolve an optional path value, treating blanks as unset."""
    if raw_value is None or not raw_value.strip():
        return None
    return Path(raw_value.strip()).expanduser().resolve()


def _parse_max_concurrent_loads(raw_value: str) -> int:
    """Parse the concurrent load limit environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive integer.

    Raises:
        IntakeConfigError: If value is not a positive integer.
    """
    try:
        parsed_value = int(raw_value)
    except ValueError as error:
        raise IntakeConfigError(
            "Invalid HDF_INTAKE_MAX_CONCURRENT_LOADS value: "
            f"expected integer, got '{raw_value}'. "
            "Set HDF_INTAKE_MAX_CONCURRENT_LOADS to a positive number."
        ) from error
    if parsed_value < 1:
        raise IntakeConfigError(
            "Invalid HDF_INTAKE_MAX_CONCURRENT_LOADS value: "
            f"expected at least 1, got {parsed_value}."
        )
    return parsed_value
