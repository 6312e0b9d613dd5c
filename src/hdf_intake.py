"""Public SDK surface for report intake.

This module provides a stable import path for library users.
It re-exports the session client, typed models, and transformer hooks.
"""

from __future__ import annotations

from core.config import IntakeConfig
from core.types import (
    ConversionOutcome,
    ExecJsonLoadOptions,
    FileLoadMetadata,
    IntakeBatchResult,
    Tag,
    TextLoadOptions,
    UploadedFile,
)
from convert.dispatcher import ConverterDispatcher
from convert.report_formats import ReportFormat
from convert.transformer_registry import TransformerRegistry, mapper_transformer
from detect.fingerprints import FILE_TYPE_FINGERPRINTS
from detect.hdf_validator import is_hdf
from detect.type_guesser import guess_type
from intake.orchestrator import IntakeOrchestrator
from store.intake_session import DetectionReport, IntakeSession

__all__ = [
    "ConversionOutcome",
    "ConverterDispatcher",
    "DetectionReport",
    "ExecJsonLoadOptions",
    "FILE_TYPE_FINGERPRINTS",
    "FileLoadMetadata",
    "IntakeBatchResult",
    "IntakeConfig",
    "IntakeOrchestrator",
    "IntakeSession",
    "ReportFormat",
    "Tag",
    "TextLoadOptions",
    "TransformerRegistry",
    "UploadedFile",
    "guess_type",
    "is_hdf",
    "mapper_transformer",
]
