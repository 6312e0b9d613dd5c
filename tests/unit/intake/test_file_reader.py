"""Unit tests for upload readers."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from core.config import IntakeConfig
from core.errors import IntakeReadError
from intake.file_reader import read_local_upload, read_uploaded_files, read_uploaded_files_async
from tests.fixture_paths import fixture_path


class _FakeBody:
    def __init__(self, payload: bytes) -> None:
        self._payload = payload

    def read(self) -> bytes:
        return self._payload


class _FakePaginator:
    def __init__(self, keys: list[str]) -> None:
        self._keys = keys

    def paginate(self, Bucket: str, Prefix: str) -> list[dict]:
        return [{"Contents": [{"Key": key} for key in self._keys if key.startswith(Prefix)]}]


class _FakeS3Client:
    def __init__(self, objects: dict[str, bytes]) -> None:
        self._objects = objects

    def get_paginator(self, name: str) -> _FakePaginator:
        return _FakePaginator(sorted(self._objects))

    def get_object(self, Bucket: str, Key: str) -> dict:
        return {"Body": _FakeBody(self._objects[Key])}


def test_read_uploaded_files_reads_directory_in_sorted_order() -> None:
    """Directory sources yield one upload per file, sorted by path."""
    uploads = read_uploaded_files(str(fixture_path("reports")), IntakeConfig())

    assert [upload.filename for upload in uploads] == [
        "dbprotect.csv",
        "notes.txt",
        "scan.nessus",
        "snyk.json",
    ]


def test_read_uploaded_files_reads_single_file() -> None:
    """A file source yields exactly that upload."""
    uploads = read_uploaded_files(str(fixture_path("hdf/profile.json")), IntakeConfig())

    assert len(uploads) == 1 and uploads[0].source_uri.endswith("profile.json")


def test_read_uploaded_files_raises_for_missing_path(tmp_path: Path) -> None:
    """Missing sources fail with a read error."""
    with pytest.raises(IntakeReadError, match="does not exist"):
        read_uploaded_files(str(tmp_path / "missing"), IntakeConfig())


def test_read_uploaded_files_raises_for_empty_directory(tmp_path: Path) -> None:
    """Directories with only hidden files have nothing to load."""
    (tmp_path / ".DS_Store").write_text("x", encoding="utf-8")

    with pytest.raises(IntakeReadError, match="No report files"):
        read_uploaded_files(str(tmp_path), IntakeConfig())


def test_read_local_upload_rejects_binary_content(tmp_path: Path) -> None:
    """Uploads must decode as UTF-8 text."""
    binary_path = tmp_path / "scan.bin"
    binary_path.write_bytes(b"\xff\xfe\x00garbage")

    with pytest.raises(IntakeReadError, match="UTF-8"):
        read_local_upload(binary_path)


def test_read_local_upload_accepts_filename_override() -> None:
    """Callers can rename the upload."""
    upload = read_local_upload(fixture_path("reports/scan.nessus"), filename="weekly.nessus")

    assert upload.filename == "weekly.nessus"


def test_read_uploaded_files_async_matches_sync_reader() -> None:
    """The async reader returns the same uploads."""
    source = str(fixture_path("hdf"))

    uploads = asyncio.run(read_uploaded_files_async(source, IntakeConfig()))

    assert uploads == read_uploaded_files(source, IntakeConfig())


def test_read_uploaded_files_downloads_s3_objects(monkeypatch: pytest.MonkeyPatch) -> None:
    """S3 prefixes are listed and downloaded, skipping folder markers."""
    fake_client = _FakeS3Client(
        {
            "nightly/": b"",
            "nightly/scan.nessus": b"<NessusClientData_v2/>",
            "nightly/snyk.json": b'{"projectName": "x"}',
        }
    )
    monkeypatch.setattr("intake.file_reader._create_s3_client", lambda config: fake_client)

    uploads = read_uploaded_files("s3://scans/nightly/", IntakeConfig())

    assert [upload.filename for upload in uploads] == ["scan.nessus", "snyk.json"]
    assert uploads[0].source_uri == "s3://scans/nightly/scan.nessus"
