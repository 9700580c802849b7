"""Tracked path normalization.

File arguments are keyed by POSIX-style paths relative to the working
directory so that ``a.txt``, ``./a.txt`` and an absolute path to the same
file all name one tracked entry.
"""

from __future__ import annotations

import re
from pathlib import Path, PurePosixPath
from typing import Final

from core.errors import GvtUsageError

WINDOWS_ABSOLUTE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z]:[\\/]")


def normalize_tracked_path(work_dir: Path, candidate: str, exit_code: int) -> str:
    """Normalize a file argument into a working-directory-relative key.

    Args:
        work_dir: Absolute working directory.
        candidate: Raw file argument from the command line.
        exit_code: Usage exit code reported when the path is rejected.

    Returns:
        POSIX-style relative path.

    Raises:
        GvtUsageError: If the path is empty, escapes ``work_dir``, or
            uses ``..`` traversal.
    """
    normalized = candidate.replace("\\", "/")
    if normalized.startswith("/") or WINDOWS_ABSOLUTE_PATTERN.match(normalized):
        absolute = Path(normalized)
        if not absolute.is_relative_to(work_dir):
            raise GvtUsageError(
                f"File is outside the working directory. File: {candidate}",
                exit_code=exit_code,
            )
        normalized = absolute.relative_to(work_dir).as_posix()

    parts = [part for part in normalized.split("/") if part not in ("", ".")]
    if not parts:
        raise GvtUsageError(f"File path is empty. File: {candidate}", exit_code=exit_code)
    if any(part == ".." for part in parts):
        raise GvtUsageError(
            f"Path traversal is not allowed. File: {candidate}",
            exit_code=exit_code,
        )
    return str(PurePosixPath(*parts))


def working_file(work_dir: Path, tracked_path: str) -> Path:
    """Return the working-directory location of a tracked path."""
    return work_dir / PurePosixPath(tracked_path)
