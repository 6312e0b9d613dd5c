"""Unit tests for intake manifest parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import IntakeManifestError
from core.intake_manifest import load_intake_manifest
from tests.fixture_paths import fixture_path


def test_load_intake_manifest_parses_entries() -> None:
    """Manifest should parse mapping and shorthand entries."""
    manifest = load_intake_manifest(str(fixture_path("manifests/intake.yaml")))

    first_entry, second_entry, _ = manifest.entries
    assert manifest.version == 1 and manifest.default_tags == ("nightly",)
    assert first_entry.filename == "baseline-run.json"
    assert first_entry.database_id == "42" and first_entry.tags == ("linux",)
    assert Path(first_entry.source) == fixture_path("hdf/execution.json").resolve()
    assert Path(second_entry.source).name == "scan.nessus"


def test_load_intake_manifest_rejects_unknown_root_fields() -> None:
    """Manifest should reject fields outside the schema."""
    with pytest.raises(IntakeManifestError, match="unknown fields steps"):
        load_intake_manifest(str(fixture_path("manifests/unknown_field.yaml")))


def test_load_intake_manifest_rejects_missing_file(tmp_path: Path) -> None:
    """Manifest loading should fail for a missing path."""
    with pytest.raises(IntakeManifestError, match="does not exist"):
        load_intake_manifest(str(tmp_path / "missing.yaml"))


def test_load_intake_manifest_rejects_wrong_version(tmp_path: Path) -> None:
    """Manifest should only accept version 1."""
    manifest_path = tmp_path / "intake.yaml"
    manifest_path.write_text("version: 2\nfiles: [a.json]\n", encoding="utf-8")

    with pytest.raises(IntakeManifestError, match="Unsupported manifest version"):
        load_intake_manifest(str(manifest_path))


def test_load_intake_manifest_rejects_empty_files(tmp_path: Path) -> None:
    """Manifest should require at least one file entry."""
    manifest_path = tmp_path / "intake.yaml"
    manifest_path.write_text("version: 1\nfiles: []\n", encoding="utf-8")

    with pytest.raises(IntakeManifestError, match="at least one entry"):
        load_intake_manifest(str(manifest_path))


def test_load_intake_manifest_keeps_s3_sources(tmp_path: Path) -> None:
    """S3 sources should not be resolved against the manifest directory."""
    manifest_path = tmp_path / "intake.yaml"
    manifest_path.write_text(
        "version: 1\nfiles:\n  - source: s3://scans/nightly/\n    tags: [cloud]\n",
        encoding="utf-8",
    )

    manifest = load_intake_manifest(str(manifest_path))

    assert manifest.entries[0].source == "s3://scans/nightly/"
