"""Unit tests for version metadata persistence."""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path

from core.config import GvtConfig
from store.metadata_store import VersionMetadataStore


def _metadata_store(tmp_path: Path) -> VersionMetadataStore:
    config = replace(
        GvtConfig.from_env(),
        work_dir=tmp_path,
        repository_root=tmp_path / ".gvt",
    )
    return VersionMetadataStore(config)


def test_save_and_load_record(tmp_path) -> None:
    """Saved records should load with the same fields."""
    store = _metadata_store(tmp_path)

    store.save(2, "edit\nmore detail", ["b.txt", "a.txt", "a.txt"])
    record = store.load(2)

    assert (record.number, record.message, record.files) == (
        2,
        "edit\nmore detail",
        frozenset({"a.txt", "b.txt"}),
    )


def test_save_writes_versioned_schema(tmp_path) -> None:
    """Records should be explicit JSON with a schema version."""
    store = _metadata_store(tmp_path)

    store.save(1, "first", ["b.txt", "a.txt"])
    payload = json.loads(store.record_path(1).read_text(encoding="utf-8"))

    assert payload == {
        "schema_version": 1,
        "number": 1,
        "message": "first",
        "files": ["a.txt", "b.txt"],
    }


def test_load_missing_version_zero_falls_back_to_initial_record(tmp_path) -> None:
    """Version 0 without a record should read as the initial record."""
    record = _metadata_store(tmp_path).load(0)

    assert record.message == "GVT initialized." and record.files == frozenset()


def test_load_missing_later_version_falls_back_to_empty_record(tmp_path) -> None:
    """Other versions without a record should read with an empty message."""
    record = _metadata_store(tmp_path).load(4)

    assert (record.number, record.message, record.files) == (4, "", frozenset())


def test_load_corrupt_record_falls_back(tmp_path) -> None:
    """Undecodable records should use the fallback path."""
    store = _metadata_store(tmp_path)
    store.save(0, "GVT initialized.", [])
    store.record_path(0).write_bytes(b"\xac\xed\x00\x05serialized-object")

    record = store.load(0)

    assert record.message == "GVT initialized."


def test_load_unknown_schema_falls_back(tmp_path) -> None:
    """Records from an unknown schema version should not be trusted."""
    store = _metadata_store(tmp_path)
    store.save(3, "third", ["a.txt"])
    payload = {"schema_version": 99, "number": 3, "message": "third", "files": []}
    store.record_path(3).write_text(json.dumps(payload), encoding="utf-8")

    record = store.load(3)

    assert record.message == ""


def test_list_numbers_sorts_numerically_and_skips_foreign_files(tmp_path) -> None:
    """Listing should sort by number, not by file name."""
    store = _metadata_store(tmp_path)
    for version in (10, 2, 0, 1):
        store.save(version, f"v{version}", [])
    (store.record_path(0).parent / "notes.info").write_text("x", encoding="utf-8")

    assert store.list_numbers() == [0, 1, 2, 10]


def test_list_numbers_without_history_is_empty(tmp_path) -> None:
    """No metadata directory means no history."""
    assert _metadata_store(tmp_path).list_numbers() == []


def test_list_numbers_skips_non_canonical_stems(tmp_path) -> None:
    """Padded or signed stems must not alias a real version."""
    store = _metadata_store(tmp_path)
    store.save(1, "one", [])
    info_dir = store.record_path(1).parent
    for name in ("01.info", "+1.info", "1_0.info"):
        (info_dir / name).write_text("{}", encoding="utf-8")

    assert store.list_numbers() == [1]


def test_discard_removes_record(tmp_path) -> None:
    """Discarding should delete the record and tolerate a missing one."""
    store = _metadata_store(tmp_path)
    store.save(2, "two", [])

    store.discard(2)
    store.discard(3)

    assert not store.record_path(2).exists() and store.list_numbers() == []
