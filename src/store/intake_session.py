"""Python SDK for intake sessions.

This module wires configuration, transformers, stores, and the
orchestrator into one session object with sync and async entry points.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, replace

from core.config import IntakeConfig
from core.errors import IntakeReadError
from core.intake_manifest import IntakeManifest, ManifestEntry, load_intake_manifest
from core.logging_config import get_logger
from core.types import (
    DetectionPhase,
    FileID,
    FileLoadMetadata,
    IntakeBatchResult,
    LoadFailure,
    UploadedFile,
    as_tags,
)
from convert.dispatcher import ConverterDispatcher
from convert.transformer_loader import build_transformer_registry
from convert.transformer_registry import TransformerRegistry
from detect.fingerprints import load_fingerprint_table
from detect.hdf_validator import is_hdf
from intake.file_reader import read_uploaded_files_async
from intake.orchestrator import IntakeOrchestrator
from store.data_store import InspecDataStore
from store.notifications import LoggingNotifier, Notifier
from store.selection_store import SelectionStore

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class DetectionReport:
    """How an upload would be routed.

    Attributes:
        filename: Upload filename.
        is_normalized: Whether the text is already normalized.
        report_format: Guessed format tag, None when nothing matched.
        detection: Phase that produced the guess.
        has_transformer: Whether a transformer is registered for the guess.
    """

    filename: str
    is_normalized: bool
    report_format: str | None
    detection: DetectionPhase | None
    has_transformer: bool


class IntakeSession:
    """Primary SDK entry point owning one session's state."""

    def __init__(
        self,
        config: IntakeConfig | None = None,
        registry: TransformerRegistry | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        """Create an intake session.

        Args:
            config: Optional runtime configuration.
            registry: Optional transformer registry; built from the configured
                plugin file when omitted.
            notifier: Optional failure notifier.
        """
        self._config = config or IntakeConfig.from_env()
        self._registry = (
            registry
            if registry is not None
            else build_transformer_registry(self._config.transformers_path)
        )
        self._notifier = notifier if notifier is not None else LoggingNotifier()
        self._data_store = InspecDataStore()
        self._selection_store = SelectionStore()
        self._dispatcher = ConverterDispatcher(
            self._registry,
            self._notifier,
            load_fingerprint_table(self._config.fingerprints_path),
        )
        self._orchestrator = IntakeOrchestrator(
            self._data_store,
            self._selection_store,
            self._dispatcher,
            max_concurrent_loads=self._config.max_concurrent_loads,
        )

    @property
    def data_store(self) -> InspecDataStore:
        return self._data_store

    @property
    def selection_store(self) -> SelectionStore:
        return self._selection_store

    @property
    def notifier(self) -> Notifier:
        return self._notifier

    @property
    def registry(self) -> TransformerRegistry:
        return self._registry

    @property
    def orchestrator(self) -> IntakeOrchestrator:
        return self._orchestrator

    def detect(self, upload: UploadedFile) -> DetectionReport:
        """Describe how an upload would be routed, without loading it."""
        if is_hdf(upload.text):
            return DetectionReport(
                filename=upload.filename,
                is_normalized=True,
                report_format=None,
                detection=None,
                has_transformer=False,
            )
        report_format, detection = self._dispatcher.detect(upload.text, upload.filename)
        return DetectionReport(
            filename=upload.filename,
            is_normalized=False,
            report_format=report_format,
            detection=detection,
            has_transformer=report_format is not None and report_format in self._registry,
        )

    def load_file(self, upload: UploadedFile) -> tuple[FileID, ...]:
        """Load one upload and return the registered ids."""
        return asyncio.run(self._orchestrator.load_file(upload))

    def load_path(
        self,
        source_uri: str,
        metadata: FileLoadMetadata = FileLoadMetadata(),
    ) -> IntakeBatchResult:
        """Load every report under a local path or S3 prefix.

        Args:
            source_uri: Local file, directory, or ``s3://`` URI.
            metadata: Optional bookkeeping applied to every record.

        Returns:
            Batch outcome.

        Raises:
            IntakeReadError: If the source cannot be read.
        """
        return asyncio.run(self.load_path_async(source_uri, metadata))

    async def load_path_async(
        self,
        source_uri: str,
        metadata: FileLoadMetadata = FileLoadMetadata(),
    ) -> IntakeBatchResult:
        uploads = await read_uploaded_files_async(source_uri, self._config)
        return await self._orchestrator.load_files(uploads, metadata)

    def load_manifest(self, manifest_path: str) -> IntakeBatchResult:
        """Load every report listed in a YAML manifest.

        Args:
            manifest_path: Path to the manifest file.

        Returns:
            Batch outcome across all entries; unreadable entries are
            reported as failures.

        Raises:
            IntakeManifestError: If the manifest is invalid.
        """
        manifest = load_intake_manifest(manifest_path)
        return asyncio.run(self.load_manifest_async(manifest))

    async def load_manifest_async(self, manifest: IntakeManifest) -> IntakeBatchResult:
        results = await asyncio.gather(
            *(self._load_manifest_entry(manifest, entry) for entry in manifest.entries)
        )
        batch = IntakeBatchResult(
            loaded=tuple(loaded for result in results for loaded in result.loaded),
            failures=tuple(failure for result in results for failure in result.failures),
        )
        _LOGGER.info(
            "manifest_load_completed",
            entry_count=len(manifest.entries),
            file_count=len(batch.file_ids),
            failure_count=len(batch.failures),
        )
        return batch

    def reset(self) -> None:
        """Clear registered records, selections, and sent notifications."""
        self._data_store.clear()
        self._selection_store.clear()
        if isinstance(self._notifier, LoggingNotifier):
            self._notifier.clear()
        _LOGGER.info("session_reset")

    async def _load_manifest_entry(
        self,
        manifest: IntakeManifest,
        entry: ManifestEntry,
    ) -> IntakeBatchResult:
        try:
            uploads = await read_uploaded_files_async(entry.source, self._config)
        except IntakeReadError as error:
            _LOGGER.error("manifest_entry_unreadable", source=entry.source, error=str(error))
            failure = LoadFailure(
                filename=entry.filename or entry.source,
                source_uri=entry.source,
                error=str(error),
            )
            return IntakeBatchResult(loaded=(), failures=(failure,))
        if entry.filename and len(uploads) == 1:
            uploads = [replace(uploads[0], filename=entry.filename)]
        metadata = FileLoadMetadata(
            database_id=entry.database_id,
            tags=as_tags(manifest.default_tags + entry.tags),
        )
        return await self._orchestrator.load_files(uploads, metadata)
