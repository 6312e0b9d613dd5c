"""Unit tests for strict JSON decoding."""

from __future__ import annotations

import pytest

from core.json_text import parse_json_text


def test_parse_json_text_decodes_plain_json() -> None:
    """Ordinary JSON decodes unchanged."""
    assert parse_json_text('{"a": [1, 2.5, null]}') == {"a": [1, 2.5, None]}


@pytest.mark.parametrize("text", ["NaN", "Infinity", "-Infinity", '{"impact": NaN}'])
def test_parse_json_text_rejects_non_standard_constants(text: str) -> None:
    """Literals outside strict JSON are parse errors."""
    with pytest.raises(ValueError, match="Unsupported JSON constant"):
        parse_json_text(text)


def test_parse_json_text_reports_deep_nesting_as_value_error() -> None:
    """Deeply nested text fails like any other invalid JSON."""
    with pytest.raises(ValueError, match="nested too deeply"):
        parse_json_text("[" * 100000)
