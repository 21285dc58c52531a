"""
Logging configuration for the statement_converter package.

Library modules only call logging.getLogger(__name__). The package logger
carries a NullHandler (installed in __init__) until an entry point calls
configure_logging().
"""

import logging
import os
import sys
from typing import IO, Optional, Union

PACKAGE_LOGGER = "statement_converter"
LEVEL_ENV_VAR = "STATEMENT_CONVERTER_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def parse_level(level: Optional[Union[int, str]]) -> int:
    """Resolve a level given as int, name or None (environment, then INFO)."""
    if isinstance(level, int):
        return level
    if level is None:
        level = os.getenv(LEVEL_ENV_VAR)
        if not level:
            return logging.INFO
    level = level.strip().upper()
    if level.isdigit():
        return int(level)
    numeric = getattr(logging, level, None)
    if isinstance(numeric, int):
        return numeric
    raise ValueError(f"Unknown log level: {level}")


def configure_logging(level: Optional[Union[int, str]] = None, fmt: Optional[str] = None,
                      stream: Optional[IO[str]] = None) -> logging.Logger:
    """
    Attach a single StreamHandler to the package logger.

    Calling it again replaces the handler installed by the previous call.

    Args:
        level: Level as int or name; None reads STATEMENT_CONVERTER_LOG_LEVEL
        fmt: Log format string
        stream: Stream the handler writes to, sys.stderr when omitted

    Returns:
        The package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    logger.setLevel(parse_level(level))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
