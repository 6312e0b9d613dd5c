"""Unit tests for fingerprint-based type guessing."""

from __future__ import annotations

from types import MappingProxyType

import pytest

from core.errors import IntakeConfigError
from detect.fingerprints import FILE_TYPE_FINGERPRINTS
from detect.type_guesser import guess_type, score_fingerprints


def test_guess_type_prefers_highest_match_count() -> None:
    """A full match on a small table entry beats a partial match elsewhere."""
    fingerprints = MappingProxyType(
        {
            "alpha": ("a", "b", "c"),
            "beta": ("a", "d", "e", "f", "g"),
        }
    )
    document = {"a": 1, "b": 2, "c": 3}

    assert guess_type(document, fingerprints) == "alpha"


def test_guess_type_breaks_ties_by_declaration_order() -> None:
    """Equal scores should keep the earliest declared format."""
    fingerprints = MappingProxyType({"first": ("shared",), "second": ("shared",)})

    assert guess_type({"shared": True}, fingerprints) == "first"


def test_guess_type_picks_snyk_for_snyk_report() -> None:
    """Snyk fingerprints should win over nikto for a Snyk report."""
    document = {
        "vulnerabilities": [{"identifiers": {"CVE": []}}],
        "projectName": "x",
        "policy": "y",
        "summary": "z",
    }

    assert guess_type(document) == "snyk"


def test_guess_type_picks_zap_and_sarif() -> None:
    """Symbol-prefixed fingerprints should resolve."""
    zap_document = {"@generated": "now", "@version": "2.11", "site": []}
    sarif_document = {"$schema": "sarif-2.1.0", "version": "2.1.0", "runs": []}

    assert guess_type(zap_document) == "zap" and guess_type(sarif_document) == "sarif"


def test_guess_type_returns_first_entry_for_unmatched_document() -> None:
    """An unmatched document still yields a format name."""
    assert guess_type({}) == next(iter(FILE_TYPE_FINGERPRINTS))
    assert guess_type([1, 2, 3]) == "fortify"


def test_guess_type_raises_for_empty_table() -> None:
    """An empty fingerprint table is a configuration error."""
    with pytest.raises(IntakeConfigError):
        guess_type({"a": 1}, MappingProxyType({}))


def test_score_fingerprints_counts_each_format() -> None:
    """Scores should be reported per format in table order."""
    scores = score_fingerprints({"total_count": 3, "data": []}, FILE_TYPE_FINGERPRINTS)

    assert list(scores) == list(FILE_TYPE_FINGERPRINTS)
    assert scores["jfrog"] == 2 and scores["snyk"] == 0
