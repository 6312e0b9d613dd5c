"""Converter dispatch for raw scanner uploads.

This module decides which transformer handles an upload. JSON uploads
are routed by fingerprint scoring; anything else falls back to ordered
filename and marker heuristics. A total miss is reported once through
the notifier and yields an empty outcome rather than an exception.
"""

from __future__ import annotations

import inspect
from typing import Mapping, Sequence

from core.constants import NO_FINGERPRINT_MATCH_MESSAGE
from core.json_text import parse_json_text
from core.logging_config import get_logger
from core.types import ConversionOutcome, DetectionPhase, Execution
from convert.text_heuristics import match_text_format
from convert.transformer_registry import TransformerRegistry, TransformerResult
from detect.fingerprints import FILE_TYPE_FINGERPRINTS, FingerprintTable
from detect.type_guesser import guess_type
from store.notifications import Notifier

_LOGGER = get_logger(__name__)


class ConverterDispatcher:
    """Route raw text to the transformer registered for its format."""

    def __init__(
        self,
        registry: TransformerRegistry,
        notifier: Notifier,
        fingerprints: FingerprintTable = FILE_TYPE_FINGERPRINTS,
    ) -> None:
        self._registry = registry
        self._notifier = notifier
        self._fingerprints = fingerprints

    def detect(self, text: str, filename: str) -> tuple[str | None, DetectionPhase]:
        """Detect the format tag for an upload without converting it.

        Args:
            text: Raw upload text.
            filename: Name the file was uploaded under.

        Returns:
            Pair of guessed tag (None when no heuristic matched) and the
            detection phase that produced it.
        """
        try:
            parsed = parse_json_text(text)
        except ValueError:
            text_format = match_text_format(text, filename)
            return (text_format.value if text_format else None), "heuristic"
        return guess_type(parsed, self._fingerprints), "json"

    async def convert(self, text: str, filename: str) -> ConversionOutcome:
        """Convert raw text into normalized executions.

        Args:
            text: Raw upload text.
            filename: Name the file was uploaded under.

        Returns:
            Outcome carrying zero, one, or many executions.

        Raises:
            Exception: Whatever the selected transformer raises.
        """
        report_format, detection = self.detect(text, filename)
        transformer = self._registry.get(report_format) if report_format else None
        if report_format is None or transformer is None:
            return self._report_no_match(filename, report_format, detection)
        result = transformer(text)
        if inspect.isawaitable(result):
            result = await result
        executions, is_sequence = _normalize_result(result)
        _LOGGER.info(
            "conversion_completed",
            filename=filename,
            report_format=report_format,
            detection=detection,
            execution_count=len(executions),
        )
        return ConversionOutcome(
            report_format=report_format,
            detection=detection,
            executions=executions,
            is_sequence=is_sequence,
        )

    def _report_no_match(
        self,
        filename: str,
        report_format: str | None,
        detection: DetectionPhase,
    ) -> ConversionOutcome:
        _LOGGER.warning(
            "conversion_no_match",
            filename=filename,
            guessed_format=report_format,
            detection=detection,
        )
        self._notifier.failure(NO_FINGERPRINT_MATCH_MESSAGE)
        return ConversionOutcome(report_format=None, detection=None, executions=())


def _normalize_result(result: TransformerResult) -> tuple[tuple[Execution, ...], bool]:
    """Flatten a transformer result into an execution tuple."""
    if result is None:
        return (), False
    if isinstance(result, Mapping):
        return (result,), False
    if isinstance(result, Sequence) and not isinstance(result, (str, bytes)):
        return tuple(result), True
    raise TypeError(
        f"Transformer returned {type(result).__name__}; "
        "expected an execution mapping or a sequence of them."
    )
