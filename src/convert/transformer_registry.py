"""Transformer contract and format-tag dispatch table.

A transformer takes raw report text and returns one normalized execution
or an ordered sequence of them. It may be a plain callable or a coroutine
function. Errors raised by a transformer are not handled here.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Protocol, Sequence, Union

from core.errors import IntakeTransformerError
from core.types import Execution
from convert.report_formats import ReportFormat, format_tag

TransformerResult = Union[Execution, Sequence[Execution], None]
Transformer = Callable[[str], Union[TransformerResult, Awaitable[TransformerResult]]]


class HdfMapper(Protocol):
    """Class-style converter built from raw text and exposing ``to_hdf``."""

    def to_hdf(self) -> Any: ...


def mapper_transformer(mapper_class: Callable[[str], HdfMapper]) -> Transformer:
    """Adapt a class-style mapper into a transformer callable.

    Args:
        mapper_class: Class constructed with raw text, exposing ``to_hdf()``.

    Returns:
        Transformer that builds the mapper and returns its output.
    """

    def _transform(text: str) -> Any:
        return mapper_class(text).to_hdf()

    _transform.__name__ = getattr(mapper_class, "__name__", "mapper_transformer")
    return _transform


class TransformerRegistry:
    """Mapping of format tags to transformer callables."""

    def __init__(self, transformers: Mapping[str, Transformer] | None = None) -> None:
        self._transformers: dict[str, Transformer] = {}
        for report_format, transformer in (transformers or {}).items():
            self.register(report_format, transformer)

    def register(self, report_format: ReportFormat | str, transformer: Transformer) -> None:
        """Register the transformer for one format tag.

        Args:
            report_format: Format tag to route.
            transformer: Callable converting raw text to executions.

        Raises:
            IntakeTransformerError: If the transformer is not callable or the
                tag is already registered.
        """
        tag = format_tag(report_format)
        if not callable(transformer):
            raise IntakeTransformerError(
                f"Transformer for '{tag}' is not callable. "
                "Register a function taking the raw report text."
            )
        if tag in self._transformers:
            raise IntakeTransformerError(
                f"A transformer is already registered for '{tag}'. "
                "Register each format at most once."
            )
        self._transformers[tag] = transformer

    def get(self, report_format: ReportFormat | str) -> Transformer | None:
        """Return the transformer for a tag, or None when unregistered."""
        return self._transformers.get(format_tag(report_format))

    def formats(self) -> tuple[str, ...]:
        """Return registered tags in registration order."""
        return tuple(self._transformers)

    def as_mapping(self) -> Mapping[str, Transformer]:
        """Return a read-only view of the dispatch table."""
        return MappingProxyType(self._transformers)

    def __contains__(self, report_format: object) -> bool:
        if not isinstance(report_format, (ReportFormat, str)):
            return False
        return format_tag(report_format) in self._transformers

    def __len__(self) -> int:
        return len(self._transformers)
