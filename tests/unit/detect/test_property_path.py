"""Unit tests for safe property path lookup."""

from __future__ import annotations

from detect.property_path import (
    MISSING,
    has_property_path,
    resolve_property_path,
    split_property_path,
)


def test_split_property_path_handles_brackets_and_symbols() -> None:
    """Splitter should keep symbol-prefixed keys and parse list indexes."""
    assert split_property_path("vulnerabilities[0].identifiers") == (
        "vulnerabilities",
        0,
        "identifiers",
    )
    assert split_property_path("$schema") == ("$schema",)
    assert split_property_path("@generated") == ("@generated",)


def test_resolve_property_path_reads_nested_values() -> None:
    """Resolver should walk mappings and lists."""
    document = {"FVDL": {"EngineData": {"EngineVersion": "20.1"}}, "runs": [{"id": 7}]}

    assert resolve_property_path(document, "FVDL.EngineData.EngineVersion") == "20.1"
    assert resolve_property_path(document, "runs[0].id") == 7


def test_resolve_property_path_returns_missing_for_absent_segments() -> None:
    """Missing keys, short lists, and scalars should never raise."""
    document = {"vulnerabilities": [], "summary": "ok"}

    assert resolve_property_path(document, "vulnerabilities[0].identifiers") is MISSING
    assert resolve_property_path(document, "summary.count") is MISSING
    assert resolve_property_path(None, "anything") is MISSING


def test_has_property_path_counts_present_null_values() -> None:
    """A key that is present with a null value still resolves."""
    assert has_property_path({"policy": None}, "policy")
    assert not has_property_path({"policy": None}, "projectName")
