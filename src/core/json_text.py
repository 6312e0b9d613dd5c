"""Strict JSON decoding for uploaded report text."""

from __future__ import annotations

import json
from typing import Any


def parse_json_text(text: str) -> Any:
    """Decode text as strict JSON.

    ``NaN`` and ``Infinity`` literals are rejected, and text nested too
    deeply for the decoder counts as invalid instead of escaping as a
    recursion failure.

    Args:
        text: Raw uploaded text.

    Returns:
        Decoded JSON value.

    Raises:
        ValueError: If the text is not strict JSON.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except RecursionError as error:
        raise ValueError("JSON text is nested too deeply to decode.") from error


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unsupported JSON constant: {name}.")
