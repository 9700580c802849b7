"""Version workflow engine.

This module implements init, add, detach, commit, checkout, history, and
version as transitions over the snapshot and metadata stores. Every
effective mutating command creates exactly one new version derived from
the current one; existing versions are never rewritten.
"""

from __future__ import annotations

from typing import Sequence

from core.command_args import extract_message, parse_last_count, parse_version_number
from core.config import GvtConfig
from core.constants import (
    EXIT_ADD_FAILED,
    EXIT_ADD_USAGE,
    EXIT_COMMIT_FAILED,
    EXIT_COMMIT_FILE_NOT_FOUND,
    EXIT_COMMIT_USAGE,
    EXIT_DETACH_FAILED,
    EXIT_DETACH_USAGE,
    INITIAL_MESSAGE,
    INITIAL_VERSION,
)
from core.errors import (
    GvtFileNotFoundError,
    GvtInvalidVersionError,
    GvtNotInitializedError,
    GvtStoreError,
    GvtUsageError,
)
from core.logging_config import get_logger
from core.paths import normalize_tracked_path, working_file
from core.types import CommandResult, VersionMetadata
from store.metadata_store import VersionMetadataStore
from store.version_history import VersionHistory, render_history
from store.version_store import VersionStore

_LOGGER = get_logger(__name__)


class WorkflowEngine:
    """Primary entry point for repository workflows."""

    def __init__(self, config: GvtConfig | None = None) -> None:
        """Create workflow engine.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or GvtConfig.from_env()
        self._store = VersionStore(self._config)
        self._metadata = VersionMetadataStore(self._config)
        self._history = VersionHistory(self._metadata)

    @property
    def config(self) -> GvtConfig:
        return self._config

    def init(self) -> CommandResult:
        """Create the repository with an empty version 0.

        Raises:
            GvtAlreadyInitializedError: If the repository root exists.
        """
        self._store.initialize()
        self._store.write_current_version(INITIAL_VERSION)
        self._metadata.save(INITIAL_VERSION, INITIAL_MESSAGE, ())
        _LOGGER.info("repository_initialized", root=str(self._config.repository_root))
        return CommandResult.success("Current directory initialized successfully.")

    def add(self, args: Sequence[str]) -> CommandResult:
        """Start tracking a file in a new version.

        Args:
            args: File name followed by an optional ``-m message`` pair.

        Raises:
            GvtFileNotFoundError: If the file is absent from the working directory.
            GvtStoreError: If the new snapshot cannot be written.
        """
        self._require_initialized()
        file_name = self._require_file_name(args, "Please specify file to add.", EXIT_ADD_USAGE)
        source_path = working_file(self._config.work_dir, file_name)
        if not source_path.is_file():
            raise GvtFileNotFoundError(f"File not found. File: {file_name}")
        current = self._load_current()
        if current.tracks(file_name):
            return CommandResult.success(f"File already added. File: {file_name}")

        report = f"File added successfully. File: {file_name}"
        failure = f"File cannot be added. See ERR for details. File: {file_name}"
        new_version = self._begin_version(current.number)
        try:
            self._store.copy_snapshot(current.number, new_version)
            self._store.place_file(new_version, file_name, source_path)
            self._finish_version(
                "add",
                new_version,
                _message_or_default(args, report),
                current.files_with(file_name),
                file_name,
            )
        except OSError as error:
            self._abort_version(new_version)
            raise GvtStoreError(failure, exit_code=EXIT_ADD_FAILED) from error
        return CommandResult.success(report)

    def detach(self, args: Sequence[str]) -> CommandResult:
        """Stop tracking a file in a new version.

        The detached file is excluded from the new snapshot only; earlier
        versions keep their copies.
        """
        self._require_initialized()
        file_name = self._require_file_name(
            args, "Please specify file to detach.", EXIT_DETACH_USAGE
        )
        current = self._load_current()
        if not current.tracks(file_name):
            return CommandResult.success(f"File is not added to gvt. File: {file_name}")

        report = f"File detached successfully. File: {file_name}"
        failure = f"File cannot be detached, see ERR for details. File: {file_name}"
        new_version = self._begin_version(current.number)
        try:
            self._store.copy_snapshot(current.number, new_version, exclude=file_name)
            self._finish_version(
                "detach",
                new_version,
                _message_or_default(args, report),
                current.files_without(file_name),
                file_name,
            )
        except OSError as error:
            self._abort_version(new_version)
            raise GvtStoreError(failure, exit_code=EXIT_DETACH_FAILED) from error
        return CommandResult.success(report)

    def commit(self, args: Sequence[str]) -> CommandResult:
        """Store the working content of a tracked file in a new version.

        Raises:
            GvtFileNotFoundError: If the tracked file is absent from disk.
            GvtStoreError: If the new snapshot cannot be written.
        """
        self._require_initialized()
        file_name = self._require_file_name(
            args, "Please specify file to commit.", EXIT_COMMIT_USAGE
        )
        current = self._load_current()
        if not current.tracks(file_name):
            return CommandResult.success(f"File is not added to gvt. File: {file_name}")
        source_path = working_file(self._config.work_dir, file_name)
        if not source_path.is_file():
            raise GvtFileNotFoundError(
                f"File not found. File: {file_name}", exit_code=EXIT_COMMIT_FILE_NOT_FOUND
            )

        report = f"File committed successfully. File: {file_name}"
        failure = f"File cannot be committed, see ERR for details. File: {file_name}"
        new_version = self._begin_version(current.number)
        try:
            self._store.copy_snapshot(current.number, new_version)
            self._store.place_file(new_version, file_name, source_path)
            self._finish_version(
                "commit", new_version, _message_or_default(args, report), current.files, file_name
            )
        except OSError as error:
            self._abort_version(new_version)
            raise GvtStoreError(failure, exit_code=EXIT_COMMIT_FAILED) from error
        return CommandResult.success(report)

    def checkout(self, args: Sequence[str]) -> CommandResult:
        """Restore every tracked file of a version into the working directory.

        Raises:
            GvtInvalidVersionError: If the version is missing, unparsable,
                or unknown.
        """
        self._require_initialized()
        if not args:
            raise GvtInvalidVersionError("Invalid version number: <missing>")
        version = parse_version_number(args[0])
        if not self._store.version_exists(version):
            raise GvtInvalidVersionError(f"Invalid version number: {version}")
        metadata = self._metadata.load(version)
        restored = self._store.restore_tree(version, metadata.files)
        _LOGGER.info("checkout_completed", version=version, restored_count=restored)
        return CommandResult.success(f"Checkout successful for version: {version}")

    def history(self, args: Sequence[str] = ()) -> CommandResult:
        """List versions newest first, optionally limited by ``-last N``."""
        self._require_initialized()
        entries = self._history.list_last(parse_last_count(args))
        return CommandResult.success(render_history(entries))

    def version(self, args: Sequence[str] = ()) -> CommandResult:
        """Show a version number with its full message.

        Defaults to the current version when no argument is given.

        Raises:
            GvtInvalidVersionError: If the requested version is unparsable
                or unknown.
        """
        self._require_initialized()
        if args:
            version = parse_version_number(args[0], message_suffix=".")
            if not self._store.version_exists(version):
                raise GvtInvalidVersionError(f"Invalid version number: {version}.")
        else:
            version = self._store.read_current_version()
        metadata = self._metadata.load(version)
        return CommandResult.success(f"Version: {version}\n{metadata.message}")

    def current_version(self) -> int:
        """Return the current-version pointer."""
        self._require_initialized()
        return self._store.read_current_version()

    def metadata(self, version: int) -> VersionMetadata:
        """Return the metadata record for a version."""
        self._require_initialized()
        return self._metadata.load(version)

    def _require_initialized(self) -> None:
        if not self._store.is_initialized():
            raise GvtNotInitializedError()

    def _require_file_name(self, args: Sequence[str], usage: str, exit_code: int) -> str:
        if not args:
            raise GvtUsageError(usage, exit_code=exit_code)
        return normalize_tracked_path(self._config.work_dir, args[0], exit_code)

    def _load_current(self) -> VersionMetadata:
        return self._metadata.load(self._store.read_current_version())

    def _begin_version(self, current: int) -> int:
        """Reserve the next version number, clearing unfinished leftovers."""
        new_version = current + 1
        self._discard_version(new_version)
        return new_version

    def _abort_version(self, version: int) -> None:
        """Drop a version that failed before the pointer reached it."""
        self._discard_version(version)

    def _discard_version(self, version: int) -> None:
        if self._store.version_exists(version):
            self._store.discard_snapshot(version)
        self._metadata.discard(version)

    def _finish_version(
        self,
        operation: str,
        version: int,
        message: str,
        files: frozenset[str],
        file_name: str,
    ) -> None:
        """Save metadata, then advance the pointer."""
        self._metadata.save(version, message, files)
        self._store.write_current_version(version)
        _LOGGER.info(
            "version_created",
            operation=operation,
            version=version,
            file=file_name,
            tracked_count=len(files),
        )


def _message_or_default(args: Sequence[str], default: str) -> str:
    """Return the ``-m`` message when given, even if empty, else the default."""
    message = extract_message(args)
    return default if message is None else message
