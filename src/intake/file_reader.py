"""Upload readers for intake.

This module loads raw report uploads from local paths or S3 prefixes.
It normalizes inputs into typed upload records for the orchestrator.
"""

from __future__ import annotations

import asyncio
from pathlib import Path, PurePosixPath
from typing import Any, Iterable

from core.config import IntakeConfig
from core.constants import DEFAULT_TEXT_ENCODING
from core.errors import IntakeDependencyError, IntakeReadError
from core.s3_uri import S3Location, is_s3_uri, parse_s3_uri
from core.types import UploadedFile


def read_uploaded_files(source_uri: str, config: IntakeConfig) -> list[UploadedFile]:
    """Load uploads from a local file, a local directory, or S3.

    Args:
        source_uri: Local path or ``s3://`` URI.
        config: Runtime configuration for S3 session defaults.

    Returns:
        Uploads in sorted path order.

    Raises:
        IntakeReadError: If the source cannot be read.
    """
    if is_s3_uri(source_uri):
        return _read_s3_uploads(source_uri, config)
    return _read_local_uploads(Path(source_uri).expanduser())


async def read_uploaded_files_async(source_uri: str, config: IntakeConfig) -> list[UploadedFile]:
    """Load uploads without blocking the event loop."""
    return await asyncio.to_thread(read_uploaded_files, source_uri, config)


def read_local_upload(file_path: Path, filename: str | None = None) -> UploadedFile:
    """Read one local file as an upload.

    Args:
        file_path: Path to the report file.
        filename: Optional filename override.

    Returns:
        Upload record.

    Raises:
        IntakeReadError: If the file is missing or not valid text.
    """
    if not file_path.is_file():
        raise IntakeReadError(
            f"Failed to read upload at {file_path}: file does not exist. "
            "Provide an existing report file."
        )
    try:
        text = file_path.read_text(encoding=DEFAULT_TEXT_ENCODING)
    except (OSError, UnicodeDecodeError) as error:
        raise IntakeReadError(
            f"Failed to read upload at {file_path}: {error}. "
            "Check file permissions and that the report is UTF-8 text."
        ) from error
    return UploadedFile(
        filename=filename or file_path.name,
        text=text,
        source_uri=str(file_path),
    )


def _read_local_uploads(source_path: Path) -> list[UploadedFile]:
    """Read uploads from the local file system.

    Args:
        source_path: Input file or directory.

    Returns:
        Collected uploads.

    Raises:
        IntakeReadError: If path is missing or holds no files.
    """
    if not source_path.exists():
        raise IntakeReadError(
            f"Failed to read source at {source_path}: path does not exist. "
            "Provide an existing file or directory."
        )
    if source_path.is_file():
        return [read_local_upload(source_path)]
    uploads = [
        read_local_upload(file_path)
        for file_path in sorted(source_path.rglob("*"))
        if file_path.is_file() and not _is_hidden(file_path.name)
    ]
    if not uploads:
        raise IntakeReadError(
            f"No report files found under {source_path}. Add report files and retry."
        )
    return uploads


def _read_s3_uploads(source_uri: str, config: IntakeConfig) -> list[UploadedFile]:
    """Read uploads from S3 objects under a prefix.

    Args:
        source_uri: S3 prefix or object URI.
        config: Runtime configuration for region/profile.

    Returns:
        Uploads loaded from objects.

    Raises:
        IntakeReadError: If no objects are found.
    """
    location = parse_s3_uri(source_uri)
    s3_client = _create_s3_client(config)
    object_keys = _list_s3_keys(s3_client, location)
    uploads = _download_s3_uploads(s3_client, location.bucket, object_keys)
    if not uploads:
        raise IntakeReadError(
            f"No report objects found for {source_uri}. Upload report files and retry."
        )
    return uploads


def _create_s3_client(config: IntakeConfig) -> Any:
    """Create a boto3 S3 client.

    Args:
        config: Runtime config containing optional profile/region.

    Returns:
        Boto3 S3 client.

    Raises:
        IntakeDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise IntakeDependencyError(
            "S3 support requires boto3, but it is not installed. "
            "Install boto3 to load reports from s3:// sources."
        ) from error
    session = boto3.session.Session(**_build_boto3_session_kwargs(config))
    return session.client("s3")


def _build_boto3_session_kwargs(config: IntakeConfig) -> dict[str, str]:
    kwargs: dict[str, str] = {}
    if config.s3_profile:
        kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        kwargs["region_name"] = config.s3_region
    return kwargs


def _list_s3_keys(s3_client: Any, location: S3Location) -> list[str]:
    """List object keys under an S3 prefix, skipping folder markers."""
    paginator = s3_client.get_paginator("list_objects_v2")
    pages = paginator.paginate(Bucket=location.bucket, Prefix=location.prefix)
    keys: list[str] = []
    for page in pages:
        for obj in page.get("Contents", []):
            key = obj["Key"]
            if not key.endswith("/"):
                keys.append(key)
    return sorted(keys)


def _download_s3_uploads(
    s3_client: Any,
    bucket: str,
    object_keys: Iterable[str],
) -> list[UploadedFile]:
    """Download report objects as uploads.

    Args:
        s3_client: Boto3 S3 client.
        bucket: S3 bucket name.
        object_keys: Object keys to fetch.

    Returns:
        Loaded uploads.

    Raises:
        IntakeReadError: If an object is not valid text.
    """
    uploads: list[UploadedFile] = []
    for key in object_keys:
        source_uri = f"s3://{bucket}/{key}"
        body = s3_client.get_object(Bucket=bucket, Key=key)["Body"].read()
        try:
            text = body.decode(DEFAULT_TEXT_ENCODING)
        except UnicodeDecodeError as error:
            raise IntakeReadError(
                f"Failed to decode {source_uri}: {error}. Upload UTF-8 report text."
            ) from error
        uploads.append(
            UploadedFile(filename=PurePosixPath(key).name, text=text, source_uri=source_uri)
        )
    return uploads


def _is_hidden(name: str) -> bool:
    return name.startswith(".")
