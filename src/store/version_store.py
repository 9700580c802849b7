"""Snapshot directory store.

This module owns the per-version snapshot trees and the current-version
pointer. Every snapshot is a complete copy of the tracked files; a new
snapshot is seeded by copying the previous one forward.
"""

from __future__ import annotations

import shutil
from pathlib import Path, PurePosixPath
from typing import Iterable

from core.config import GvtConfig
from core.constants import INITIAL_VERSION
from core.errors import GvtAlreadyInitializedError, GvtStoreError
from core.logging_config import get_logger
from core.paths import working_file

_LOGGER = get_logger(__name__)


class VersionStore:
    """Filesystem-backed snapshot store.

    This class owns the repository root, the ``versions`` tree, and
    the plain-text current-version pointer.
    """

    def __init__(self, config: GvtConfig) -> None:
        """Initialize snapshot store from config.

        Args:
            config: Runtime configuration.
        """
        self._config = config
        self._versions_dir = config.versions_dir
        self._pointer_path = config.current_version_path

    def is_initialized(self) -> bool:
        """Return whether the repository root exists."""
        return self._config.repository_root.exists()

    def initialize(self) -> None:
        """Create the repository root and the empty version 0 snapshot.

        Raises:
            GvtAlreadyInitializedError: If the repository root exists.
        """
        if self.is_initialized():
            raise GvtAlreadyInitializedError("Current directory is already initialized.")
        self.snapshot_dir(INITIAL_VERSION).mkdir(parents=True)

    def snapshot_dir(self, version: int) -> Path:
        """Return the snapshot directory path for a version."""
        return self._versions_dir / str(version)

    def version_exists(self, version: int) -> bool:
        """Return whether a snapshot directory exists for the version."""
        return self.snapshot_dir(version).is_dir()

    def copy_snapshot(self, source: int, target: int, exclude: str | None = None) -> int:
        """Copy every regular file of one snapshot into another.

        Args:
            source: Version to copy from.
            target: Version to copy into; created when missing.
            exclude: Optional relative path skipped during the copy.

        Returns:
            Number of files copied.
        """
        source_dir = self.snapshot_dir(source)
        target_dir = self.snapshot_dir(target)
        target_dir.mkdir(parents=True, exist_ok=True)
        if not source_dir.is_dir():
            return 0
        copied = 0
        for source_file in sorted(source_dir.rglob("*")):
            if not source_file.is_file():
                continue
            relative_path = source_file.relative_to(source_dir)
            if exclude is not None and relative_path.as_posix() == exclude:
                continue
            destination = target_dir / relative_path
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source_file, destination)
            copied += 1
        _LOGGER.debug(
            "snapshot_copied",
            source=source,
            target=target,
            excluded=exclude,
            file_count=copied,
        )
        return copied

    def place_file(self, version: int, relative_path: str, source_path: Path) -> Path:
        """Write a working file's content into a snapshot.

        Args:
            version: Target snapshot version.
            relative_path: Tracked relative path inside the snapshot.
            source_path: File whose bytes are stored.

        Returns:
            Stored snapshot file path.
        """
        destination = self.snapshot_dir(version) / PurePosixPath(relative_path)
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source_path, destination)
        return destination

    def restore_tree(self, version: int, tracked_paths: Iterable[str]) -> int:
        """Copy stored snapshot content back into the working directory.

        Restoration is additive: files outside ``tracked_paths`` are left
        untouched. Paths without stored content are skipped.

        Args:
            version: Snapshot version to restore from.
            tracked_paths: Relative paths to restore.

        Returns:
            Number of files restored.
        """
        snapshot_dir = self.snapshot_dir(version)
        restored = 0
        for tracked_path in sorted(tracked_paths):
            stored = snapshot_dir / PurePosixPath(tracked_path)
            if not stored.is_file():
                continue
            destination = working_file(self._config.work_dir, tracked_path)
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(stored, destination)
            restored += 1
        return restored

    def discard_snapshot(self, version: int) -> None:
        """Remove a snapshot directory left by an unfinished command."""
        snapshot_dir = self.snapshot_dir(version)
        if not snapshot_dir.exists():
            return
        shutil.rmtree(snapshot_dir, ignore_errors=True)
        _LOGGER.warning("snapshot_discarded", version=version, path=str(snapshot_dir))

    def read_current_version(self) -> int:
        """Read the current-version pointer.

        Returns:
            Current version, or 0 when the pointer file is absent.

        Raises:
            GvtStoreError: If the pointer content is not an integer.
        """
        if not self._pointer_path.exists():
            return INITIAL_VERSION
        raw_value = self._pointer_path.read_text(encoding="utf-8").strip()
        try:
            return int(raw_value)
        except ValueError as error:
            raise GvtStoreError(
                f"Corrupt current-version pointer at {self._pointer_path}: "
                f"expected integer, got '{raw_value}'."
            ) from error

    def write_current_version(self, version: int) -> None:
        """Persist the current-version pointer."""
        self._pointer_path.parent.mkdir(parents=True, exist_ok=True)
        self._pointer_path.write_text(str(version), encoding="utf-8")
