"""Recognition of content that is already in the normalized format."""

from __future__ import annotations

from typing import Mapping

from core.json_text import parse_json_text


def is_hdf(text: str) -> bool:
    """Return whether raw text is already normalized HDF.

    Execution documents carry a ``profiles`` list; profile documents carry
    both ``controls`` and ``sha256``; empty containers still count as
    present. Text that is not strict JSON is never HDF.

    Args:
        text: Raw uploaded text.

    Returns:
        True for execution or profile documents, False otherwise.
    """
    try:
        parsed = parse_json_text(text)
    except ValueError:
        return False
    return is_hdf_document(parsed)


def is_hdf_document(document: object) -> bool:
    """Return whether a parsed JSON value has a normalized shape."""
    if not isinstance(document, Mapping):
        return False
    if isinstance(document.get("profiles"), list):
        return True
    return _is_present(document.get("controls")) and _is_present(document.get("sha256"))


def _is_present(value: object) -> bool:
    """Return False only for null, false, zero, and empty strings."""
    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0
    return True
