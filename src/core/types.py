"""Shared typed models.

This module defines immutable data models used by the store, workflow,
and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from core.constants import EXIT_SUCCESS


@dataclass(frozen=True)
class VersionMetadata:
    """Persisted record describing one version.

    Attributes:
        number: Version number, starting at 0.
        message: Full, possibly multi-line, version message.
        files: Tracked relative paths as of this version.
    """

    number: int
    message: str
    files: frozenset[str] = frozenset()

    @property
    def summary(self) -> str:
        """First line of the message, as shown in history listings."""
        return self.message.split("\n", 1)[0]

    def tracks(self, file_name: str) -> bool:
        """Return whether the file is tracked in this version."""
        return file_name in self.files

    def files_with(self, file_name: str) -> frozenset[str]:
        """Return the tracked set with one file added."""
        return self.files | {file_name}

    def files_without(self, file_name: str) -> frozenset[str]:
        """Return the tracked set with one file removed."""
        return self.files - {file_name}


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one dispatched command.

    Attributes:
        exit_code: 0 on success, negative for system failures,
            positive for command-specific failures.
        message: Human-readable report printed to stdout.
    """

    exit_code: int
    message: str

    @property
    def ok(self) -> bool:
        return self.exit_code == EXIT_SUCCESS

    @classmethod
    def success(cls, message: str) -> "CommandResult":
        return cls(exit_code=EXIT_SUCCESS, message=message)


def tracked_set(files: Iterable[str]) -> frozenset[str]:
    """Build an immutable tracked-file set from any iterable of paths."""
    return frozenset(str(item) for item in files)
