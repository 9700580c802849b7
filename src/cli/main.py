"""GVT CLI entry points.

This module parses global options and hands the command name with its raw
trailing arguments to the dispatcher, then reports the result.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from core.config import GvtConfig, parse_log_level, resolve_repository_root
from core.constants import LOG_LEVELS
from core.errors import GvtConfigError
from core.logging_config import configure_logging
from core.types import CommandResult
from workflow.dispatch import SUPPORTED_COMMANDS, run_command
from workflow.engine import WorkflowEngine


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="gvt",
        description="Local snapshot version control for explicitly added files",
        epilog=f"commands: {', '.join(SUPPORTED_COMMANDS)}",
    )
    parser.add_argument("--work-dir", help="Override GVT_WORK_DIR for this command")
    parser.add_argument("--repository-root", help="Override GVT_ROOT for this command")
    parser.add_argument(
        "--log-level",
        choices=tuple(LOG_LEVELS),
        help="Override GVT_LOG_LEVEL for this command",
    )
    parser.add_argument("command", nargs="?", help="Command name")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Command arguments")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the GVT CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args)
    except GvtConfigError as error:
        print(f"config_error={error}", file=sys.stderr)
        return error.exit_code
    configure_logging(config.log_level)
    result = run_command(WorkflowEngine(config), args.command, args.args)
    return _report(result)


def _build_config(args: argparse.Namespace) -> GvtConfig:
    """Build config with optional command-line overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Validated runtime config.
    """
    config = GvtConfig.from_env()
    if args.work_dir:
        work_dir = Path(args.work_dir).expanduser().resolve()
        root = config.repository_root
        if root.is_relative_to(config.work_dir):
            root = work_dir / root.relative_to(config.work_dir)
        config = replace(config, work_dir=work_dir, repository_root=root)
    if args.repository_root:
        root = resolve_repository_root(config.work_dir, args.repository_root)
        config = replace(config, repository_root=root)
    if args.log_level:
        config = replace(config, log_level=parse_log_level(args.log_level))
    return config


def _report(result: CommandResult) -> int:
    """Print the result message and return its exit code."""
    if result.message:
        print(result.message)
    return result.exit_code
