"""Public SDK surface for GVT.

This module provides a stable import path for library users.
It re-exports the workflow engine, dispatcher, and typed models.
"""

from __future__ import annotations

from core.config import GvtConfig
from core.errors import GvtError
from core.types import CommandResult, VersionMetadata
from workflow.dispatch import run_command
from workflow.engine import WorkflowEngine

__all__ = [
    "CommandResult",
    "GvtConfig",
    "GvtError",
    "VersionMetadata",
    "WorkflowEngine",
    "run_command",
]
