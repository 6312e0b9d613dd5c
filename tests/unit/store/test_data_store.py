"""Unit tests for the registration store."""

from __future__ import annotations

import json
from dataclasses import replace

import pytest

from core.errors import IntakeStoreError
from core.types import FileLoadMetadata, Tag
from normalize.contextualize import contextualize_evaluation, contextualize_profile
from store.data_store import InspecDataStore
from store.file_records import EvaluationFile, build_evaluation_file, build_profile_file
from tests.fixture_paths import fixture_text


def _evaluation_file(file_id: str) -> EvaluationFile:
    evaluation = contextualize_evaluation(
        json.loads(fixture_text("hdf/execution.json")), from_file=file_id
    )
    return build_evaluation_file(file_id, f"{file_id}.json", evaluation, FileLoadMetadata())


def test_add_execution_keeps_insertion_order() -> None:
    """Records are listed in the order they were registered."""
    store = InspecDataStore()
    for file_id in ("b", "a", "c"):
        store.add_execution(_evaluation_file(file_id))

    assert [record.unique_id for record in store.all_files] == ["b", "a", "c"]
    assert len(store.evaluation_files) == 3 and store.profile_files == ()


def test_add_execution_rejects_duplicate_ids() -> None:
    """An id can only be registered once."""
    store = InspecDataStore()
    store.add_execution(_evaluation_file("a"))

    with pytest.raises(IntakeStoreError, match="already registered"):
        store.add_execution(_evaluation_file("a"))


def test_resolve_source_follows_back_link() -> None:
    """A view's from_file key resolves to its wrapper."""
    store = InspecDataStore()
    evaluation_file = _evaluation_file("a")
    store.add_execution(evaluation_file)

    assert store.resolve_source(evaluation_file.evaluation) is evaluation_file


def test_add_profile_registers_profile_files() -> None:
    """Profile files are listed separately from evaluations."""
    store = InspecDataStore()
    profile = contextualize_profile(json.loads(fixture_text("hdf/profile.json")), "p")
    store.add_profile(build_profile_file("p", "profile.json", profile, FileLoadMetadata()))

    assert [record.unique_id for record in store.profile_files] == ["p"]


def test_replace_file_swaps_record_in_place() -> None:
    """Updates replace the record without changing its position."""
    store = InspecDataStore()
    store.add_execution(_evaluation_file("a"))
    store.add_execution(_evaluation_file("b"))
    tagged = replace(store.get_file("a"), tags=(Tag(name="reviewed"),))

    store.replace_file(tagged)

    assert store.all_files[0].tags == (Tag(name="reviewed"),)


def test_replace_file_rejects_kind_change() -> None:
    """An evaluation cannot be replaced by a profile."""
    store = InspecDataStore()
    store.add_execution(_evaluation_file("a"))
    profile = contextualize_profile(json.loads(fixture_text("hdf/profile.json")), "a")

    with pytest.raises(IntakeStoreError):
        store.replace_file(build_profile_file("a", "p.json", profile, FileLoadMetadata()))


def test_remove_file_and_clear() -> None:
    """Removed ids are unknown afterwards and clear empties the store."""
    store = InspecDataStore()
    store.add_execution(_evaluation_file("a"))
    store.add_execution(_evaluation_file("b"))

    removed = store.remove_file("a")

    assert removed.unique_id == "a" and "a" not in store
    with pytest.raises(IntakeStoreError):
        store.get_file("a")
    store.clear()
    assert len(store) == 0
