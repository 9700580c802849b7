"""Version metadata persistence.

This module stores one JSON record per version under ``version_info``.
Reads are tolerant: a missing or unreadable record yields a synthetic
fallback so inspection commands never fail on damaged history.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from core.config import GvtConfig
from core.constants import (
    INITIAL_MESSAGE,
    INITIAL_VERSION,
    METADATA_SCHEMA_VERSION,
    VERSION_INFO_SUFFIX,
)
from core.errors import GvtStoreError
from core.logging_config import get_logger
from core.types import VersionMetadata, tracked_set

_LOGGER = get_logger(__name__)


class VersionMetadataStore:
    """Filesystem-backed metadata record store."""

    def __init__(self, config: GvtConfig) -> None:
        self._info_dir = config.version_info_dir

    def load(self, version: int) -> VersionMetadata:
        """Load the metadata record for a version.

        Args:
            version: Version number.

        Returns:
            Persisted record, or the fallback record when it is missing
            or cannot be decoded.

        Raises:
            GvtStoreError: If the record exists but cannot be read from disk.
        """
        record_path = self.record_path(version)
        if not record_path.exists():
            return _fallback_record(version)
        try:
            raw_bytes = record_path.read_bytes()
        except OSError as error:
            raise GvtStoreError(
                f"Failed to read version metadata at {record_path}: {error}."
            ) from error
        try:
            return metadata_from_dict(json.loads(raw_bytes.decode("utf-8")), version)
        except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as error:
            _LOGGER.warning("metadata_fallback", version=version, reason=str(error))
            return _fallback_record(version)

    def save(self, version: int, message: str, files: Iterable[str]) -> VersionMetadata:
        """Persist a metadata record, replacing any existing one.

        Args:
            version: Version number.
            message: Version message.
            files: Tracked relative paths.

        Returns:
            Saved record.
        """
        metadata = VersionMetadata(number=version, message=message, files=tracked_set(files))
        self._info_dir.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(metadata_to_dict(metadata), indent=2, sort_keys=True)
        self.record_path(version).write_text(payload + "\n", encoding="utf-8")
        return metadata

    def discard(self, version: int) -> None:
        """Remove the record of a version the pointer never reached."""
        record_path = self.record_path(version)
        if not record_path.is_file():
            return
        try:
            record_path.unlink()
        except OSError as error:
            _LOGGER.warning("metadata_discard_failed", version=version, reason=str(error))
            return
        _LOGGER.warning("metadata_discarded", version=version, path=str(record_path))

    def list_numbers(self) -> list[int]:
        """Return every version number with a persisted record, ascending."""
        if not self._info_dir.is_dir():
            return []
        numbers: list[int] = []
        for record_path in self._info_dir.glob(f"*{VERSION_INFO_SUFFIX}"):
            if not record_path.is_file():
                continue
            stem = record_path.stem
            if not stem.isascii() or not stem.isdigit() or stem != str(int(stem)):
                _LOGGER.warning("history_entry_skipped", path=str(record_path))
                continue
            numbers.append(int(stem))
        return sorted(numbers)

    def record_path(self, version: int) -> Path:
        """Return the record file path for a version."""
        return self._info_dir / f"{version}{VERSION_INFO_SUFFIX}"


def metadata_to_dict(metadata: VersionMetadata) -> dict[str, Any]:
    """Serialize a metadata record into the versioned JSON schema."""
    return {
        "schema_version": METADATA_SCHEMA_VERSION,
        "number": metadata.number,
        "message": metadata.message,
        "files": sorted(metadata.files),
    }


def metadata_from_dict(payload: Any, version: int) -> VersionMetadata:
    """Deserialize a metadata record.

    Args:
        payload: Decoded JSON payload.
        version: Version number the record was loaded for.

    Returns:
        Typed metadata record.

    Raises:
        ValueError: If the payload does not match the schema.
    """
    if not isinstance(payload, dict):
        raise ValueError("expected JSON object at top level")
    if payload.get("schema_version") != METADATA_SCHEMA_VERSION:
        raise ValueError(f"unsupported schema version {payload.get('schema_version')!r}")
    number = payload.get("number")
    message = payload.get("message")
    files = payload.get("files")
    if number != version:
        raise ValueError(f"record number {number!r} does not match version {version}")
    if not isinstance(message, str):
        raise ValueError("message must be a string")
    if not isinstance(files, list) or not all(isinstance(item, str) for item in files):
        raise ValueError("files must be a list of strings")
    return VersionMetadata(number=version, message=message, files=tracked_set(files))


def _fallback_record(version: int) -> VersionMetadata:
    """Build the synthetic record used when no valid record is stored."""
    message = INITIAL_MESSAGE if version == INITIAL_VERSION else ""
    return VersionMetadata(number=version, message=message)
