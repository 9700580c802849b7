"""Core constants used across GVT modules.

This module centralizes on-disk names, default messages, and exit codes.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_REPOSITORY_ROOT = Path(".gvt")
VERSIONS_DIR_NAME = "versions"
VERSION_INFO_DIR_NAME = "version_info"
VERSION_INFO_SUFFIX = ".info"
CURRENT_VERSION_FILE_NAME = "current_version"
METADATA_SCHEMA_VERSION = 1
INITIAL_VERSION = 0
INITIAL_MESSAGE = "GVT initialized."
DEFAULT_LOG_LEVEL = "warning"
LOG_LEVELS = {
    "debug": 10,
    "info": 20,
    "warning": 30,
    "error": 40,
}
MESSAGE_FLAG = "-m"
LAST_FLAG = "-last"

EXIT_SUCCESS = 0
EXIT_USAGE = 1
EXIT_NOT_INITIALIZED = -2
EXIT_SYSTEM_FAILURE = -3
EXIT_ALREADY_INITIALIZED = 10
EXIT_ADD_USAGE = 20
EXIT_ADD_FILE_NOT_FOUND = 21
EXIT_ADD_FAILED = 22
EXIT_DETACH_USAGE = 30
EXIT_DETACH_FAILED = 31
EXIT_COMMIT_USAGE = 50
EXIT_COMMIT_FILE_NOT_FOUND = 51
EXIT_COMMIT_FAILED = 52
EXIT_INVALID_VERSION = 60

SYSTEM_FAILURE_MESSAGE = "Underlying system problem. See ERR for details."
NOT_INITIALIZED_MESSAGE = (
    "Current directory is not initialized. Please use init command to initialize."
)
