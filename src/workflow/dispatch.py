"""Command dispatch boundary.

This module maps command names onto workflow engine calls and converts
every outcome, expected or not, into a reported ``CommandResult``.
"""

from __future__ import annotations

from typing import Callable, Sequence

from core.constants import EXIT_SYSTEM_FAILURE, SYSTEM_FAILURE_MESSAGE
from core.errors import GvtError, GvtStoreError, GvtUsageError
from core.logging_config import get_logger
from core.types import CommandResult
from workflow.engine import WorkflowEngine

_LOGGER = get_logger(__name__)

SUPPORTED_COMMANDS = ("init", "add", "detach", "commit", "checkout", "history", "version")


def run_command(
    engine: WorkflowEngine,
    command: str | None,
    args: Sequence[str] = (),
) -> CommandResult:
    """Run one command and report its outcome.

    Args:
        engine: Workflow engine bound to a repository.
        command: Command name; None when the user gave none.
        args: Raw trailing arguments.

    Returns:
        Exit code and message. Never raises.
    """
    try:
        handler = _resolve_handler(engine, command)
        return handler(list(args))
    except GvtStoreError as error:
        _LOGGER.error("command_failed", command=command, error=str(error), exc_info=True)
        return CommandResult(exit_code=error.exit_code, message=_store_failure_message(error))
    except GvtError as error:
        return CommandResult(exit_code=error.exit_code, message=error.message)
    except Exception as error:
        _LOGGER.error("command_failed", command=command, error=str(error), exc_info=True)
        return CommandResult(exit_code=EXIT_SYSTEM_FAILURE, message=SYSTEM_FAILURE_MESSAGE)


def _resolve_handler(
    engine: WorkflowEngine,
    command: str | None,
) -> Callable[[Sequence[str]], CommandResult]:
    """Return the engine method handling a command name.

    Raises:
        GvtUsageError: If the command is missing or unknown.
    """
    if not command:
        raise GvtUsageError("Please specify command.")
    if command not in SUPPORTED_COMMANDS:
        raise GvtUsageError(f"Unknown command {command}.")
    if command == "init":
        return lambda args: engine.init()
    return getattr(engine, command)


def _store_failure_message(error: GvtStoreError) -> str:
    """Keep operation-specific failure reports; hide internal details otherwise."""
    if error.exit_code == EXIT_SYSTEM_FAILURE:
        return SYSTEM_FAILURE_MESSAGE
    return error.message
