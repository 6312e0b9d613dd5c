"""Unit tests for the transformer registry."""

from __future__ import annotations

import pytest

from convert.report_formats import ReportFormat
from convert.transformer_registry import TransformerRegistry, mapper_transformer
from core.errors import IntakeTransformerError


class _EchoMapper:
    def __init__(self, text: str) -> None:
        self._text = text

    def to_hdf(self) -> dict:
        return {"profiles": [], "echo": self._text}


def test_register_accepts_enum_and_string_tags() -> None:
    """Enum members and plain strings address the same tag."""
    registry = TransformerRegistry()
    registry.register(ReportFormat.SNYK, lambda text: {"profiles": []})

    assert "snyk" in registry and registry.get(ReportFormat.SNYK) is registry.get("snyk")


def test_register_rejects_duplicates() -> None:
    """Each tag can only be registered once."""
    registry = TransformerRegistry({"zap": lambda text: None})

    with pytest.raises(IntakeTransformerError, match="already registered"):
        registry.register("zap", lambda text: None)


def test_register_rejects_non_callables() -> None:
    """Transformers must be callable."""
    with pytest.raises(IntakeTransformerError, match="not callable"):
        TransformerRegistry().register("zap", "not-a-function")  # type: ignore[arg-type]


def test_formats_keep_registration_order() -> None:
    """Registered tags are listed in registration order."""
    registry = TransformerRegistry()
    registry.register("nikto", lambda text: None)
    registry.register("jfrog", lambda text: None)

    assert registry.formats() == ("nikto", "jfrog") and len(registry) == 2


def test_mapper_transformer_adapts_class_style_mappers() -> None:
    """Class-style mappers are built with the text and asked for HDF."""
    transformer = mapper_transformer(_EchoMapper)

    assert transformer("raw")["echo"] == "raw"
    assert transformer.__name__ == "_EchoMapper"


def test_as_mapping_is_read_only() -> None:
    """The exposed dispatch table cannot be mutated."""
    registry = TransformerRegistry({"zap": lambda text: None})

    with pytest.raises(TypeError):
        registry.as_mapping()["nikto"] = lambda text: None  # type: ignore[index]
