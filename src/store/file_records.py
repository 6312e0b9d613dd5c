"""File record wrappers around contextualized content."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Union

from core.types import FileID, FileLoadMetadata, Tag
from normalize.contextualize import ContextualizedEvaluation, ContextualizedProfile


@dataclass(frozen=True)
class EvaluationFile:
    """A registered file holding one execution.

    Attributes:
        unique_id: Identifier minted when the file was loaded.
        filename: Name the file was uploaded under.
        evaluation: Frozen execution view; ``evaluation.from_file`` equals
            ``unique_id``.
        database_id: Optional external database identifier.
        tags: Labels attached to the file.
        created_at: Optional creation timestamp.
        updated_at: Optional last update timestamp.
    """

    unique_id: FileID
    filename: str
    evaluation: ContextualizedEvaluation
    database_id: str | None = None
    tags: tuple[Tag, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ProfileFile:
    """A registered file holding one profile that was not run.

    Attributes:
        unique_id: Identifier minted when the file was loaded.
        filename: Name the file was uploaded under.
        profile: Frozen profile view; ``profile.from_file`` equals ``unique_id``.
        database_id: Optional external database identifier.
        tags: Labels attached to the file.
        created_at: Optional creation timestamp.
        updated_at: Optional last update timestamp.
    """

    unique_id: FileID
    filename: str
    profile: ContextualizedProfile
    database_id: str | None = None
    tags: tuple[Tag, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None


FileRecord = Union[EvaluationFile, ProfileFile]


def build_evaluation_file(
    file_id: FileID,
    filename: str,
    evaluation: ContextualizedEvaluation,
    metadata: FileLoadMetadata,
) -> EvaluationFile:
    """Wrap an evaluation view with its load metadata."""
    return EvaluationFile(
        unique_id=file_id,
        filename=filename,
        evaluation=evaluation,
        database_id=metadata.database_id,
        tags=metadata.tags,
        created_at=metadata.created_at,
        updated_at=metadata.updated_at,
    )


def build_profile_file(
    file_id: FileID,
    filename: str,
    profile: ContextualizedProfile,
    metadata: FileLoadMetadata,
) -> ProfileFile:
    """Wrap a profile view with its load metadata."""
    return ProfileFile(
        unique_id=file_id,
        filename=filename,
        profile=profile,
        database_id=metadata.database_id,
        tags=metadata.tags,
        created_at=metadata.created_at,
        updated_at=metadata.updated_at,
    )
