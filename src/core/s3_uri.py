"""S3 URI parsing helpers.

This module centralizes S3 URI parsing for the upload reader.
It keeps URI validation behavior consistent across entry points.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.errors import IntakeReadError


@dataclass(frozen=True)
class S3Location:
    """Parsed S3 location model."""

    bucket: str
    prefix: str


def is_s3_uri(uri: str) -> bool:
    """Return whether a source URI points at S3."""
    return uri.startswith("s3://")


def parse_s3_uri(uri: str) -> S3Location:
    """Parse and validate an S3 URI.

    Args:
        uri: URI in format ``s3://bucket/prefix`` or ``s3://bucket/key``.

    Returns:
        Parsed bucket and prefix pair.

    Raises:
        IntakeReadError: If bucket or prefix is missing.
    """
    stripped_uri = uri.removeprefix("s3://")
    if "/" not in stripped_uri:
        _raise_uri_error(uri)
    bucket, prefix = stripped_uri.split("/", 1)
    if not bucket or not prefix:
        _raise_uri_error(uri)
    return S3Location(bucket=bucket, prefix=prefix)


def _raise_uri_error(uri: str) -> None:
    raise IntakeReadError(
        f"Invalid S3 URI '{uri}': expected s3://bucket/prefix. "
        "Provide both bucket and object key or prefix."
    )
