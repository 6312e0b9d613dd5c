"""Safe nested property lookup for parsed JSON documents.

This module resolves dot/bracket paths such as ``a.b[0].c`` against
nested mappings and lists without raising for missing segments.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Sequence

_PATH_TOKEN_PATTERN = re.compile(r"[^.\[\]]+|\[(\d+)\]")

MISSING = object()
"""Sentinel returned when a path does not resolve."""


def split_property_path(path: str) -> tuple[str | int, ...]:
    """Split a property path into key and index segments.

    Args:
        path: Dot/bracket path, e.g. ``vulnerabilities[0].identifiers``.

    Returns:
        Ordered path segments; list indexes are returned as ints.
    """
    segments: list[str | int] = []
    for match in _PATH_TOKEN_PATTERN.finditer(path):
        index_value = match.group(1)
        segments.append(int(index_value) if index_value is not None else match.group(0))
    return tuple(segments)


def resolve_property_path(document: object, path: str) -> object:
    """Resolve a property path, returning ``MISSING`` when absent.

    Args:
        document: Parsed JSON value.
        path: Dot/bracket property path.

    Returns:
        The value found at the path, or ``MISSING``.
    """
    current: Any = document
    for segment in split_property_path(path):
        current = _step(current, segment)
        if current is MISSING:
            return MISSING
    return current


def has_property_path(document: object, path: str) -> bool:
    """Return whether a property path resolves to a present value."""
    return resolve_property_path(document, path) is not MISSING


def _step(current: Any, segment: str | int) -> Any:
    if isinstance(current, Mapping):
        key = str(segment)
        return current[key] if key in current else MISSING
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
        index = _as_index(segment)
        if index is None or index >= len(current):
            return MISSING
        return current[index]
    return MISSING


def _as_index(segment: str | int) -> int | None:
    if isinstance(segment, int):
        return segment
    return int(segment) if segment.isdigit() else None
