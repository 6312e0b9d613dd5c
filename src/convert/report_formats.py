"""Format tags for scanner reports the dispatcher can route."""

from __future__ import annotations

from enum import Enum


class ReportFormat(str, Enum):
    """Scanner report format tags.

    JSON formats are picked by fingerprint scoring; text formats are picked
    by filename and marker heuristics when the upload is not JSON.
    """

    FORTIFY = "fortify"
    JFROG = "jfrog"
    NIKTO = "nikto"
    SARIF = "sarif"
    SNYK = "snyk"
    ZAP = "zap"
    NESSUS = "nessus"
    XCCDF = "xccdf"
    BURP = "burp"
    SCOUTSUITE = "scoutsuite"
    DBPROTECT = "dbprotect"
    NETSPARKER = "netsparker"


JSON_REPORT_FORMATS: tuple[ReportFormat, ...] = (
    ReportFormat.JFROG,
    ReportFormat.ZAP,
    ReportFormat.NIKTO,
    ReportFormat.SARIF,
    ReportFormat.SNYK,
)
TEXT_REPORT_FORMATS: tuple[ReportFormat, ...] = (
    ReportFormat.NESSUS,
    ReportFormat.XCCDF,
    ReportFormat.BURP,
    ReportFormat.SCOUTSUITE,
    ReportFormat.DBPROTECT,
    ReportFormat.NETSPARKER,
)


def format_tag(report_format: ReportFormat | str) -> str:
    """Return the plain string tag for a format value."""
    if isinstance(report_format, ReportFormat):
        return report_format.value
    return report_format
