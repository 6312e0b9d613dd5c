"""Intake exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class IntakeError(Exception):
    """Base exception for all intake failures."""


class IntakeConfigError(IntakeError):
    """Raised for invalid runtime configuration."""


class IntakeReadError(IntakeError):
    """Raised when an uploaded file cannot be read."""


class IntakeParseError(IntakeError):
    """Raised when normalized content matches no supported schema version."""


class IntakeTransformerError(IntakeError):
    """Raised for invalid transformer plugins or registrations."""


class IntakeStoreError(IntakeError):
    """Raised for registration and selection store failures."""


class IntakeDependencyError(IntakeError):
    """Raised when an optional runtime dependency is missing."""


class IntakeManifestError(IntakeError):
    """Raised for invalid or unsupported intake manifest files."""
