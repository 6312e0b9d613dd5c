"""Frozen contextual views over normalized documents.

This module deep-freezes execution and profile documents and derives
per-control status and severity. Each top-level view carries the id of
the file record that owns it; the registration store resolves that id,
so views never hold a reference to their wrapper.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from core.types import FileID

STATUS_PASSED = "Passed"
STATUS_FAILED = "Failed"
STATUS_NOT_APPLICABLE = "Not Applicable"
STATUS_NOT_REVIEWED = "Not Reviewed"
STATUS_PROFILE_ERROR = "Profile Error"
STATUS_FROM_PROFILE = "From Profile"

SEVERITY_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (0.1, "none"),
    (0.4, "low"),
    (0.7, "medium"),
    (0.9, "high"),
)


def deep_freeze(value: Any) -> Any:
    """Return a read-only copy of a JSON-like value.

    Mappings become ``MappingProxyType`` and lists become tuples, recursively.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({key: deep_freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(deep_freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Return a plain ``dict``/``list`` copy of a frozen value."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    return value


@dataclass(frozen=True)
class ContextualizedControl:
    """One control with its derived status.

    Attributes:
        control_id: Control identifier.
        title: Optional control title.
        impact: Impact score in [0, 1].
        severity: Severity bucket derived from impact.
        status: Derived control status.
        data: Frozen raw control document.
    """

    control_id: str
    title: str | None
    impact: float
    severity: str
    status: str
    data: Mapping[str, Any]


@dataclass(frozen=True)
class ContextualizedProfile:
    """Frozen view of one profile, standalone or inside an execution.

    Attributes:
        name: Profile name.
        version: Optional profile version.
        sha256: Optional content digest.
        controls: Contextualized controls in document order.
        data: Frozen raw profile document.
        from_file: Id of the file record that owns this profile.
    """

    name: str
    version: str | None
    sha256: str | None
    controls: tuple[ContextualizedControl, ...]
    data: Mapping[str, Any]
    from_file: FileID


@dataclass(frozen=True)
class ContextualizedEvaluation:
    """Frozen view of one execution.

    Attributes:
        version: Version of the tool that produced the execution.
        platform: Frozen platform description.
        profiles: Contextualized profiles in document order.
        data: Frozen raw execution document.
        from_file: Id of the file record that owns this evaluation.
    """

    version: str | None
    platform: Mapping[str, Any]
    profiles: tuple[ContextualizedProfile, ...]
    data: Mapping[str, Any]
    from_file: FileID

    @property
    def controls(self) -> tuple[ContextualizedControl, ...]:
        """Return every control across profiles, in document order."""
        return tuple(control for profile in self.profiles for control in profile.controls)

    def status_counts(self) -> dict[str, int]:
        """Count controls per derived status."""
        return dict(Counter(control.status for control in self.controls))


def contextualize_evaluation(
    data: Mapping[str, Any],
    from_file: FileID,
) -> ContextualizedEvaluation:
    """Build a frozen evaluation view from an execution document.

    Args:
        data: Normalized execution document.
        from_file: Id of the file record that will own the view.

    Returns:
        Frozen contextualized evaluation.
    """
    frozen_data = deep_freeze(data)
    profiles = tuple(
        _contextualize_profile_data(profile, from_file, from_execution=True)
        for profile in frozen_data.get("profiles", ())
        if isinstance(profile, Mapping)
    )
    return ContextualizedEvaluation(
        version=_optional_str(frozen_data.get("version")),
        platform=frozen_data.get("platform", MappingProxyType({})),
        profiles=profiles,
        data=frozen_data,
        from_file=from_file,
    )


def contextualize_profile(data: Mapping[str, Any], from_file: FileID) -> ContextualizedProfile:
    """Build a frozen profile view from a standalone profile document.

    Args:
        data: Normalized profile document.
        from_file: Id of the file record that will own the view.

    Returns:
        Frozen contextualized profile.
    """
    return _contextualize_profile_data(deep_freeze(data), from_file, from_execution=False)


def control_severity(impact: float) -> str:
    """Map an impact score onto a severity bucket."""
    for threshold, severity in SEVERITY_THRESHOLDS:
        if impact < threshold:
            return severity
    return "critical"


def control_status(control: Mapping[str, Any], from_execution: bool) -> str:
    """Derive a control status from its results.

    Args:
        control: Frozen control document.
        from_execution: Whether the control was run or only declared.

    Returns:
        Derived status label.
    """
    if not from_execution:
        return STATUS_FROM_PROFILE
    statuses = [
        result.get("status")
        for result in control.get("results", ())
        if isinstance(result, Mapping)
    ]
    if "error" in statuses:
        return STATUS_PROFILE_ERROR
    if _impact(control) == 0:
        return STATUS_NOT_APPLICABLE
    if not statuses:
        return STATUS_NOT_REVIEWED
    if "failed" in statuses:
        return STATUS_FAILED
    if "skipped" in statuses:
        return STATUS_NOT_REVIEWED
    return STATUS_PASSED


def _contextualize_profile_data(
    profile: Mapping[str, Any],
    from_file: FileID,
    from_execution: bool,
) -> ContextualizedProfile:
    controls = tuple(
        _contextualize_control(control, from_execution)
        for control in profile.get("controls", ())
        if isinstance(control, Mapping)
    )
    return ContextualizedProfile(
        name=str(profile.get("name", "")),
        version=_optional_str(profile.get("version")),
        sha256=_optional_str(profile.get("sha256")),
        controls=controls,
        data=profile,
        from_file=from_file,
    )


def _contextualize_control(
    control: Mapping[str, Any],
    from_execution: bool,
) -> ContextualizedControl:
    impact = _impact(control)
    return ContextualizedControl(
        control_id=str(control.get("id", "")),
        title=_optional_str(control.get("title")),
        impact=impact,
        severity=control_severity(impact),
        status=control_status(control, from_execution),
        data=control,
    )


def _impact(control: Mapping[str, Any]) -> float:
    raw_impact = control.get("impact", 0.5)
    if isinstance(raw_impact, bool) or not isinstance(raw_impact, (int, float)):
        return 0.5
    return float(raw_impact)


def _optional_str(value: object) -> str | None:
    return value if isinstance(value, str) else None

