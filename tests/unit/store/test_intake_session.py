"""Unit tests for the intake session SDK."""

from __future__ import annotations

from core.config import IntakeConfig
from core.types import FileLoadMetadata, Tag
from store.file_records import EvaluationFile
from store.intake_session import IntakeSession
from store.notifications import LoggingNotifier
from tests.fixture_paths import fixture_path, fixture_upload, stub_transformers_config


def test_session_loads_transformers_from_config() -> None:
    """The configured plugin file populates the registry."""
    session = IntakeSession(stub_transformers_config())

    assert "snyk" in session.registry and "nessus" in session.registry


def test_detect_describes_routing() -> None:
    """Detection reports normalized files and guessed formats."""
    session = IntakeSession(stub_transformers_config())

    normalized = session.detect(fixture_upload("hdf/execution.json"))
    nessus = session.detect(fixture_upload("reports/scan.nessus"))
    unknown = session.detect(fixture_upload("reports/notes.txt"))

    assert normalized.is_normalized and normalized.report_format is None
    assert nessus.report_format == "nessus" and nessus.has_transformer
    assert unknown.report_format is None and not unknown.has_transformer


def test_load_path_applies_metadata_to_every_record() -> None:
    """Batch metadata is attached to each created record."""
    session = IntakeSession(stub_transformers_config())
    metadata = FileLoadMetadata(tags=(Tag(name="nightly"),))

    result = session.load_path(str(fixture_path("hdf")), metadata)

    assert len(result.failures) == 1
    assert all(
        session.data_store.get_file(file_id).tags == (Tag(name="nightly"),)
        for file_id in result.file_ids
    )


def test_load_manifest_uses_entry_metadata_and_reports_unreadable_entries() -> None:
    """Manifest entries carry filenames, ids, and merged tags."""
    session = IntakeSession(stub_transformers_config())

    result = session.load_manifest(str(fixture_path("manifests/intake.yaml")))

    records = [session.data_store.get_file(file_id) for file_id in result.file_ids]
    baseline = next(record for record in records if record.filename == "baseline-run.json")
    assert isinstance(baseline, EvaluationFile)
    assert baseline.database_id == "42"
    assert baseline.tags == (Tag(name="nightly"), Tag(name="linux"))
    assert any(record.filename == "scan.nessus" for record in records)
    assert [failure.source_uri.endswith("does-not-exist.json") for failure in result.failures] == [
        True
    ]


def test_reset_clears_session_state() -> None:
    """Reset empties both stores and the notifier history."""
    notifier = LoggingNotifier()
    session = IntakeSession(stub_transformers_config(), notifier=notifier)
    session.load_file(fixture_upload("hdf/execution.json"))
    session.load_file(fixture_upload("reports/notes.txt"))

    session.reset()

    assert len(session.data_store) == 0
    assert session.selection_store.selected_evaluation_ids == ()
    assert notifier.messages == ()


def test_session_without_plugin_has_empty_registry() -> None:
    """A bare config routes nothing."""
    session = IntakeSession(IntakeConfig())

    assert len(session.registry) == 0
