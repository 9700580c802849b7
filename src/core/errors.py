"""GVT exception hierarchy.

This module defines domain errors with clear reporting boundaries.
Each error carries the exit code the command dispatcher reports it with.
"""

from __future__ import annotations

from core.constants import (
    EXIT_ADD_FILE_NOT_FOUND,
    EXIT_ALREADY_INITIALIZED,
    EXIT_INVALID_VERSION,
    EXIT_NOT_INITIALIZED,
    EXIT_SYSTEM_FAILURE,
    EXIT_USAGE,
    NOT_INITIALIZED_MESSAGE,
)


class GvtError(Exception):
    """Base exception for all GVT failures."""

    default_exit_code = EXIT_SYSTEM_FAILURE

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = self.default_exit_code if exit_code is None else exit_code


class GvtConfigError(GvtError):
    """Raised for invalid runtime configuration."""


class GvtUsageError(GvtError):
    """Raised when a command or one of its required arguments is missing."""

    default_exit_code = EXIT_USAGE


class GvtNotInitializedError(GvtError):
    """Raised when the repository root does not exist."""

    default_exit_code = EXIT_NOT_INITIALIZED

    def __init__(self, message: str = NOT_INITIALIZED_MESSAGE) -> None:
        super().__init__(message)


class GvtAlreadyInitializedError(GvtError):
    """Raised by init when the repository root already exists."""

    default_exit_code = EXIT_ALREADY_INITIALIZED


class GvtFileNotFoundError(GvtError):
    """Raised when a working-directory file required by add/commit is absent."""

    default_exit_code = EXIT_ADD_FILE_NOT_FOUND


class GvtInvalidVersionError(GvtError):
    """Raised for unparsable or unknown version numbers."""

    default_exit_code = EXIT_INVALID_VERSION


class GvtStoreError(GvtError):
    """Raised for snapshot, metadata, and pointer persistence failures."""
