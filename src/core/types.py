"""Shared typed models.

This module defines immutable data models used by the detect, convert,
normalize, store, and intake layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal, Mapping, Sequence

FileID = str
"""Unique identifier for one registered file record."""

Execution = Mapping[str, Any]
"""A normalized execution document (HDF ``ExecJSON``)."""

DetectionPhase = Literal["json", "heuristic"]


@dataclass(frozen=True)
class Tag:
    """User-facing label attached to a file record.

    Attributes:
        name: Tag display name.
        color: Optional display color.
    """

    name: str
    color: str | None = None


@dataclass(frozen=True)
class UploadedFile:
    """Raw uploaded report before detection.

    Attributes:
        filename: Name the file was uploaded under.
        text: Decoded file content.
        source_uri: Origin path or URI of the upload.
    """

    filename: str
    text: str
    source_uri: str


@dataclass(frozen=True)
class FileLoadMetadata:
    """Optional bookkeeping carried from a load request into its file record.

    Attributes:
        database_id: Identifier of the record in an external database.
        tags: Labels attached to the file.
        created_at: Creation timestamp reported by the caller.
        updated_at: Last update timestamp reported by the caller.
    """

    database_id: str | None = None
    tags: tuple[Tag, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class TextLoadOptions:
    """Request to load already-normalized text.

    Attributes:
        filename: The filename to denote this record with.
        text: Raw normalized JSON text.
        metadata: Optional bookkeeping fields.
    """

    filename: str
    text: str
    metadata: FileLoadMetadata = FileLoadMetadata()


@dataclass(frozen=True)
class ExecJsonLoadOptions:
    """Request to load an execution document that is already parsed.

    Attributes:
        filename: The filename to denote this record with.
        data: Normalized execution document.
        metadata: Optional bookkeeping fields.
    """

    filename: str
    data: Execution
    metadata: FileLoadMetadata = FileLoadMetadata()


@dataclass(frozen=True)
class ConversionOutcome:
    """Result of routing raw text through the converter dispatcher.

    Attributes:
        report_format: Format tag that handled the text, if any.
        detection: Detection phase that picked the format, if any.
        executions: Normalized executions in transformer order.
        is_sequence: Whether the transformer returned several executions.
    """

    report_format: str | None
    detection: DetectionPhase | None
    executions: tuple[Execution, ...]
    is_sequence: bool = False

    @property
    def matched(self) -> bool:
        """Return whether a transformer produced output."""
        return self.report_format is not None


@dataclass(frozen=True)
class LoadFailure:
    """One upload that failed during a batch load.

    Attributes:
        filename: Filename of the failed upload.
        source_uri: Origin of the failed upload.
        error: Rendered error message.
    """

    filename: str
    source_uri: str
    error: str


@dataclass(frozen=True)
class LoadedFile:
    """One upload that finished loading.

    Attributes:
        filename: Filename of the upload.
        source_uri: Origin of the upload.
        file_ids: Identifiers registered for the upload, possibly empty.
    """

    filename: str
    source_uri: str
    file_ids: tuple[FileID, ...]


@dataclass(frozen=True)
class IntakeBatchResult:
    """Outcome of loading several uploads concurrently.

    Attributes:
        loaded: Uploads that completed, in completion order.
        failures: Uploads that raised, in completion order.
    """

    loaded: tuple[LoadedFile, ...]
    failures: tuple[LoadFailure, ...]

    @property
    def file_ids(self) -> tuple[FileID, ...]:
        """Return every registered identifier across the batch."""
        return tuple(file_id for loaded in self.loaded for file_id in loaded.file_ids)


def as_tags(names: Sequence[str]) -> tuple[Tag, ...]:
    """Build tags from plain names."""
    return tuple(Tag(name=name) for name in names)
