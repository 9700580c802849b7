"""Runtime configuration model for GVT.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads
or working-directory-relative globals.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    CURRENT_VERSION_FILE_NAME,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REPOSITORY_ROOT,
    LOG_LEVELS,
    VERSION_INFO_DIR_NAME,
    VERSIONS_DIR_NAME,
)
from core.errors import GvtConfigError


@dataclass(frozen=True)
class GvtConfig:
    """Validated runtime configuration.

    Attributes:
        work_dir: Working directory holding tracked files.
        repository_root: Control directory owning versions and metadata.
        log_level: Minimum structured log level written to stderr.
    """

    work_dir: Path
    repository_root: Path
    log_level: str

    @classmethod
    def from_env(cls) -> "GvtConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            GvtConfigError: If environment values are invalid.
        """
        work_dir = Path(os.getenv("GVT_WORK_DIR", os.getcwd())).expanduser().resolve()
        root_value = os.getenv("GVT_ROOT", str(DEFAULT_REPOSITORY_ROOT))
        log_level = parse_log_level(os.getenv("GVT_LOG_LEVEL", DEFAULT_LOG_LEVEL))
        return cls(
            work_dir=work_dir,
            repository_root=resolve_repository_root(work_dir, root_value),
            log_level=log_level,
        )

    @property
    def versions_dir(self) -> Path:
        """Directory holding one snapshot tree per version."""
        return self.repository_root / VERSIONS_DIR_NAME

    @property
    def version_info_dir(self) -> Path:
        """Directory holding one metadata record per version."""
        return self.repository_root / VERSION_INFO_DIR_NAME

    @property
    def current_version_path(self) -> Path:
        """Plain-text current-version pointer file."""
        return self.repository_root / CURRENT_VERSION_FILE_NAME


def resolve_repository_root(work_dir: Path, raw_value: str) -> Path:
    """Resolve the repository root against the working directory.

    Args:
        work_dir: Absolute working directory.
        raw_value: Raw root path, absolute or relative to ``work_dir``.

    Returns:
        Absolute repository root path.
    """
    root = Path(raw_value).expanduser()
    if not root.is_absolute():
        root = work_dir / root
    return root.resolve()


def parse_log_level(raw_value: str) -> str:
    """Parse the log level environment value.

    Args:
        raw_value: Raw string from environment or CLI.

    Returns:
        Normalized lowercase level name.

    Raises:
        GvtConfigError: If value is not a supported level.
    """
    level = raw_value.strip().lower()
    if level not in LOG_LEVELS:
        raise GvtConfigError(
            f"Invalid GVT_LOG_LEVEL value: expected one of {', '.join(LOG_LEVELS)}, "
            f"got '{raw_value}'. Set GVT_LOG_LEVEL to a supported level."
        )
    return level
