# prautomator/utils/logging_utils.py
"""
Logging configuration for the prc command.

Library modules only create loggers; handlers are installed here, once,
by the CLI entry point.
"""

import logging

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def verbosity_to_level(verbosity: int) -> int:
    """
    Map the count of -v flags to a logging level.

    verbosity == 0 -> WARNING
    verbosity == 1 -> INFO
    verbosity >= 2 -> DEBUG
    """
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int = 0) -> None:
    """Configure the root logger based on a verbosity count."""
    logging.basicConfig(
        level=verbosity_to_level(verbosity),
        format=LOG_FORMAT,
    )
