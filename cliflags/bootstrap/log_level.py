"""Process-wide log verbosity.

The engine logger is the only global state touched while flags are
resolved. ``set_log_level`` may be called any number of times, by the flag
normalizer and by callers outside of it; the last call wins and nothing
besides verbosity changes.
"""

import logging
import sys

from cliflags.bootstrap.logging_setup import LEVELS, LOGGER_NAME
from cliflags.domain.errors import InvalidLogLevelError


def parse_level(level_name: str) -> int:
    """Return the numeric logging level for a supported level name."""
    try:
        return LEVELS[level_name.lower()]
    except KeyError:
        raise InvalidLogLevelError(level_name) from None


def set_log_level(level_name: str) -> int:
    """Apply ``level_name`` to the engine logger; empty means info."""
    if level_name:
        level = parse_level(level_name)
    else:
        level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
    return level


def set_log_level_or_exit(level_name: str) -> int:
    """Like ``set_log_level`` but terminates the process on a bad name."""
    try:
        return set_log_level(level_name)
    except InvalidLogLevelError as error:
        print(error, file=sys.stderr)
        sys.exit(1)
