"""Raw trailing-argument helpers.

Commands receive their arguments unparsed, so the optional ``-m`` message
and ``-last`` filter are located here rather than in argparse.
"""

from __future__ import annotations

import re
from typing import Final, Sequence

from core.constants import LAST_FLAG, MESSAGE_FLAG
from core.errors import GvtInvalidVersionError

VERSION_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[0-9]+$")


def extract_message(args: Sequence[str]) -> str | None:
    """Return the value following the first ``-m`` flag, without quotes.

    Args:
        args: Trailing command arguments.

    Returns:
        Custom message, or None when no ``-m`` pair is present.
    """
    for index in range(len(args) - 1):
        if args[index] == MESSAGE_FLAG:
            return args[index + 1].replace('"', "")
    return None


def parse_version_number(raw_value: str, message_suffix: str = "") -> int:
    """Parse a version argument into an integer.

    Args:
        raw_value: Raw argument text.
        message_suffix: Trailing text appended to the error message.

    Returns:
        Parsed version number.

    Raises:
        GvtInvalidVersionError: If the value is not a non-negative integer.
    """
    if not VERSION_PATTERN.match(raw_value.strip()):
        raise GvtInvalidVersionError(f"Invalid version number: {raw_value}{message_suffix}")
    return int(raw_value.strip())


def parse_last_count(args: Sequence[str]) -> int | None:
    """Return N from a leading ``-last N`` pair.

    An absent flag, a missing value, or a value that is not a
    non-negative integer all disable the filter.
    """
    if len(args) < 2 or args[0] != LAST_FLAG:
        return None
    try:
        count = int(args[1])
    except ValueError:
        return None
    return count if count >= 0 else None
