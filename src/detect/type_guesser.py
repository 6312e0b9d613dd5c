"""Best-effort scanner format guessing for parsed JSON reports."""

from __future__ import annotations

from core.errors import IntakeConfigError
from detect.fingerprints import FILE_TYPE_FINGERPRINTS, FingerprintTable
from detect.property_path import has_property_path


def score_fingerprints(document: object, fingerprints: FingerprintTable) -> dict[str, int]:
    """Count resolvable fingerprint paths per format.

    Args:
        document: Parsed JSON value.
        fingerprints: Fingerprint table to score against.

    Returns:
        Match counts keyed by format tag, in table order.
    """
    return {
        format_name: sum(1 for path in paths if has_property_path(document, path))
        for format_name, paths in fingerprints.items()
    }


def guess_type(
    document: object,
    fingerprints: FingerprintTable = FILE_TYPE_FINGERPRINTS,
) -> str:
    """Return the format whose fingerprints match the document best.

    Ties keep the format declared earliest in the table, so a document
    that matches nothing still yields the first entry. The guess is never
    "no match"; a wrong guess only surfaces when its transformer fails.

    Args:
        document: Parsed JSON value.
        fingerprints: Fingerprint table to score against.

    Returns:
        Guessed format tag.

    Raises:
        IntakeConfigError: If the fingerprint table is empty.
    """
    scores = score_fingerprints(document, fingerprints)
    if not scores:
        raise IntakeConfigError(
            "Cannot guess report type with an empty fingerprint table. "
            "Declare at least one format."
        )
    best_format, best_score = next(iter(scores.items()))
    for format_name, score in scores.items():
        if score > best_score:
            best_format, best_score = format_name, score
    return best_format
