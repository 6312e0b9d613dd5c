"""Registration store for loaded file records.

Records are kept in one insertion-ordered index keyed by file id.
Contextualized views point back at their file through that key, and
``resolve_source`` turns the key into the owning record.
"""

from __future__ import annotations

from core.errors import IntakeStoreError
from core.logging_config import get_logger
from core.types import FileID
from normalize.contextualize import ContextualizedEvaluation, ContextualizedProfile
from store.file_records import EvaluationFile, FileRecord, ProfileFile

_LOGGER = get_logger(__name__)


class InspecDataStore:
    """Insertion-ordered registry of evaluation and profile files."""

    def __init__(self) -> None:
        self._files: dict[FileID, FileRecord] = {}

    def add_execution(self, evaluation_file: EvaluationFile) -> None:
        """Register an evaluation file.

        Raises:
            IntakeStoreError: If the id is already registered.
        """
        self._add(evaluation_file)

    def add_profile(self, profile_file: ProfileFile) -> None:
        """Register a profile file.

        Raises:
            IntakeStoreError: If the id is already registered.
        """
        self._add(profile_file)

    def get_file(self, file_id: FileID) -> FileRecord:
        """Return the record registered under an id.

        Raises:
            IntakeStoreError: If the id is unknown.
        """
        try:
            return self._files[file_id]
        except KeyError as error:
            raise IntakeStoreError(
                f"No file is registered under id '{file_id}'. "
                "Load the file first or check the id."
            ) from error

    def replace_file(self, record: FileRecord) -> None:
        """Swap in an updated record, keeping its position.

        Raises:
            IntakeStoreError: If the id is unknown or the record kind changes.
        """
        current = self.get_file(record.unique_id)
        if type(current) is not type(record):
            raise IntakeStoreError(
                f"Cannot replace {type(current).__name__} '{record.unique_id}' "
                f"with a {type(record).__name__}."
            )
        self._files[record.unique_id] = record

    def remove_file(self, file_id: FileID) -> FileRecord:
        """Unregister and return a record.

        Raises:
            IntakeStoreError: If the id is unknown.
        """
        record = self.get_file(file_id)
        del self._files[file_id]
        _LOGGER.info("file_removed", file_id=file_id, filename=record.filename)
        return record

    def resolve_source(
        self,
        content: ContextualizedEvaluation | ContextualizedProfile,
    ) -> FileRecord:
        """Return the file record that owns a contextualized view."""
        return self.get_file(content.from_file)

    def clear(self) -> None:
        """Drop every registered record."""
        self._files.clear()

    @property
    def evaluation_files(self) -> tuple[EvaluationFile, ...]:
        """Return evaluation files in insertion order."""
        return tuple(
            record for record in self._files.values() if isinstance(record, EvaluationFile)
        )

    @property
    def profile_files(self) -> tuple[ProfileFile, ...]:
        """Return profile files in insertion order."""
        return tuple(
            record for record in self._files.values() if isinstance(record, ProfileFile)
        )

    @property
    def all_files(self) -> tuple[FileRecord, ...]:
        """Return every record in insertion order."""
        return tuple(self._files.values())

    def __contains__(self, file_id: object) -> bool:
        return file_id in self._files

    def __len__(self) -> int:
        return len(self._files)

    def _add(self, record: FileRecord) -> None:
        if record.unique_id in self._files:
            raise IntakeStoreError(
                f"File id '{record.unique_id}' is already registered. "
                "Mint a fresh id for every load."
            )
        self._files[record.unique_id] = record
