"""Ordered filename and marker rules for uploads that are not JSON.

Rules are evaluated top to bottom and the first match wins, so the order
of ``TEXT_HEURISTIC_RULES`` is part of the routing contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from convert.report_formats import ReportFormat

XCCDF_SCHEMA_MARKER = 'schemaLocation="http://checklists.nist.gov/xccdf'
BURP_MARKER = "issues burpVersion"
SCOUTSUITE_MARKER = "scoutsuite_results"
DBPROTECT_MARKERS = ("Policy", "Job Name", "Check ID", "Result Status")
NETSPARKER_MARKER = "netsparker-enterprise"


@dataclass(frozen=True)
class HeuristicRule:
    """One text routing rule.

    Attributes:
        report_format: Format routed to when the rule matches.
        matches: Predicate over ``(text, filename)``.
    """

    report_format: ReportFormat
    matches: Callable[[str, str], bool]


def _is_nessus(text: str, filename: str) -> bool:
    return filename.lower().endswith(".nessus")


def _is_xccdf(text: str, filename: str) -> bool:
    return XCCDF_SCHEMA_MARKER in text or "xccdf" in filename.lower()


def _is_burp(text: str, filename: str) -> bool:
    return BURP_MARKER in text


def _is_scoutsuite(text: str, filename: str) -> bool:
    return SCOUTSUITE_MARKER in text


def _is_dbprotect(text: str, filename: str) -> bool:
    return all(marker in text for marker in DBPROTECT_MARKERS)


def _is_netsparker(text: str, filename: str) -> bool:
    # A marker at index 0 does not count as a match.
    return text.find(NETSPARKER_MARKER) > 0


TEXT_HEURISTIC_RULES: tuple[HeuristicRule, ...] = (
    HeuristicRule(ReportFormat.NESSUS, _is_nessus),
    HeuristicRule(ReportFormat.XCCDF, _is_xccdf),
    HeuristicRule(ReportFormat.BURP, _is_burp),
    HeuristicRule(ReportFormat.SCOUTSUITE, _is_scoutsuite),
    HeuristicRule(ReportFormat.DBPROTECT, _is_dbprotect),
    HeuristicRule(ReportFormat.NETSPARKER, _is_netsparker),
)


def match_text_format(
    text: str,
    filename: str,
    rules: tuple[HeuristicRule, ...] = TEXT_HEURISTIC_RULES,
) -> ReportFormat | None:
    """Return the first format whose rule matches, or None.

    Args:
        text: Raw upload text that failed JSON parsing.
        filename: Name the file was uploaded under.
        rules: Ordered rules to evaluate.

    Returns:
        Matched format, or None when every rule misses.
    """
    for rule in rules:
        if rule.matches(text, filename):
            return rule.report_format
    return None
