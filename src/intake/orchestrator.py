"""Ingestion orchestration for uploaded reports.

This module sequences validation, conversion, and record creation.
Every successful load mints a fresh random id, freezes the content,
registers the file record, and marks it selected.
"""

from __future__ import annotations

import asyncio
from typing import Iterable
from uuid import uuid4

from core.constants import DEFAULT_MAX_CONCURRENT_LOADS, UNRECOGNIZED_HDF_MESSAGE
from core.errors import IntakeParseError
from core.logging_config import get_logger
from core.types import (
    ExecJsonLoadOptions,
    FileID,
    FileLoadMetadata,
    IntakeBatchResult,
    LoadedFile,
    LoadFailure,
    TextLoadOptions,
    UploadedFile,
)
from convert.dispatcher import ConverterDispatcher
from detect.hdf_validator import is_hdf
from normalize.contextualize import contextualize_evaluation, contextualize_profile
from normalize.hdf_schema import convert_file
from store.data_store import InspecDataStore
from store.file_records import build_evaluation_file, build_profile_file
from store.selection_store import SelectionStore

_LOGGER = get_logger(__name__)


class IntakeOrchestrator:
    """Top-level entry point turning uploads into registered records."""

    def __init__(
        self,
        data_store: InspecDataStore,
        selection_store: SelectionStore,
        dispatcher: ConverterDispatcher,
        max_concurrent_loads: int = DEFAULT_MAX_CONCURRENT_LOADS,
    ) -> None:
        self._data_store = data_store
        self._selection_store = selection_store
        self._dispatcher = dispatcher
        self._max_concurrent_loads = max_concurrent_loads

    async def load_file(
        self,
        upload: UploadedFile,
        metadata: FileLoadMetadata = FileLoadMetadata(),
    ) -> tuple[FileID, ...]:
        """Load one upload, converting it when it is not normalized yet.

        Args:
            upload: Raw upload to load.
            metadata: Optional bookkeeping applied to every created record.

        Returns:
            Ids of the registered records; empty when no format matched.

        Raises:
            IntakeParseError: If normalized-looking text matches no schema.
            Exception: Whatever the selected transformer raises.
        """
        if is_hdf(upload.text):
            file_id = await self.load_text(
                TextLoadOptions(filename=upload.filename, text=upload.text, metadata=metadata)
            )
            return (file_id,)
        outcome = await self._dispatcher.convert(upload.text, upload.filename)
        file_ids: list[FileID] = []
        for execution in outcome.executions:
            file_ids.append(
                await self.load_exec_json(
                    ExecJsonLoadOptions(
                        filename=upload.filename, data=execution, metadata=metadata
                    )
                )
            )
        return tuple(file_ids)

    async def load_text(self, options: TextLoadOptions) -> FileID:
        """Load already-normalized text as an evaluation or profile file.

        Args:
            options: Text and bookkeeping for the new record.

        Returns:
            Id of the registered record.

        Raises:
            IntakeParseError: If the text is neither an execution nor a profile.
        """
        result = convert_file(options.text)
        file_id: FileID = str(uuid4())
        if result.execution is not None:
            evaluation = contextualize_evaluation(result.execution, from_file=file_id)
            evaluation_file = build_evaluation_file(
                file_id, options.filename, evaluation, options.metadata
            )
            self._data_store.add_execution(evaluation_file)
            self._selection_store.toggle_evaluation(file_id)
            _log_file_loaded(file_id, options.filename, "evaluation")
            return file_id
        if result.profile is not None:
            profile = contextualize_profile(result.profile, from_file=file_id)
            profile_file = build_profile_file(file_id, options.filename, profile, options.metadata)
            self._data_store.add_profile(profile_file)
            self._selection_store.toggle_profile(file_id)
            _log_file_loaded(file_id, options.filename, "profile")
            return file_id
        _LOGGER.error(
            "normalized_text_unrecognized",
            filename=options.filename,
            errors=list(result.errors),
        )
        raise IntakeParseError(UNRECOGNIZED_HDF_MESSAGE)

    async def load_exec_json(self, options: ExecJsonLoadOptions) -> FileID:
        """Load an execution document without re-parsing it.

        Args:
            options: Execution document and bookkeeping for the new record.

        Returns:
            Id of the registered record.
        """
        file_id: FileID = str(uuid4())
        evaluation = contextualize_evaluation(options.data, from_file=file_id)
        evaluation_file = build_evaluation_file(
            file_id, options.filename, evaluation, options.metadata
        )
        self._data_store.add_execution(evaluation_file)
        self._selection_store.toggle_evaluation(file_id)
        _log_file_loaded(file_id, options.filename, "evaluation")
        return file_id

    async def load_files(
        self,
        uploads: Iterable[UploadedFile],
        metadata: FileLoadMetadata = FileLoadMetadata(),
    ) -> IntakeBatchResult:
        """Load several uploads concurrently.

        Failures are collected per upload instead of aborting the batch.
        Results are listed in completion order, which need not match the
        order of ``uploads``.

        Args:
            uploads: Uploads to load.
            metadata: Optional bookkeeping applied to every created record.

        Returns:
            Loaded uploads and failures.
        """
        semaphore = asyncio.Semaphore(self._max_concurrent_loads)
        loaded: list[LoadedFile] = []
        failures: list[LoadFailure] = []

        async def _load_one(upload: UploadedFile) -> None:
            async with semaphore:
                try:
                    file_ids = await self.load_file(upload, metadata)
                except Exception as error:
                    _LOGGER.error(
                        "file_load_failed",
                        filename=upload.filename,
                        source_uri=upload.source_uri,
                        error=str(error),
                        error_type=type(error).__name__,
                    )
                    failures.append(
                        LoadFailure(
                            filename=upload.filename,
                            source_uri=upload.source_uri,
                            error=str(error),
                        )
                    )
                    return
            loaded.append(
                LoadedFile(
                    filename=upload.filename,
                    source_uri=upload.source_uri,
                    file_ids=file_ids,
                )
            )

        await asyncio.gather(*(_load_one(upload) for upload in uploads))
        _LOGGER.info(
            "batch_load_completed",
            loaded_count=len(loaded),
            failure_count=len(failures),
        )
        return IntakeBatchResult(loaded=tuple(loaded), failures=tuple(failures))


def _log_file_loaded(file_id: FileID, filename: str, kind: str) -> None:
    _LOGGER.info("file_loaded", file_id=file_id, filename=filename, kind=kind)
