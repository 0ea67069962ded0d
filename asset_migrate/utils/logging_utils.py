"""
Module: logging_utils

Logging helpers shared by every asset_migrate module. Defines a custom TRACE
level (used for per-field transform chatter that is too noisy for DEBUG),
reads the ``LOG_LEVEL`` environment variable once at import, and hands out
named loggers.

Functions:
    - trace(self, message, *args, **kwargs):
      Logs a message with the custom TRACE level.
    - get_log_level(level_name):
      Resolves a level name (including "TRACE") to its numeric value.
    - get_logger(name: str):
      Retrieves a logger instance configured with the specified name.

Example:
    from asset_migrate.utils.logging_utils import get_logger

    LOGGER = get_logger(__name__)
    LOGGER.trace("Probing legacy field %s", "NoPremultiply")
"""

import logging
import os

# Define a custom TRACE level
TRACE = 5

logging.addLevelName(TRACE, "TRACE")


def trace(self, message, *args, **kwargs):
    """
    Logs a message with TRACE level if the TRACE level is enabled for this logger.

    :param self: The logger instance handling the log dispatch.
    :param message: The log message to be processed and logged.
    :param args: Positional arguments to format the message, if needed.
    :param kwargs: Keyword arguments passed through to ``Logger._log``.
    :return: None
    """
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)


logging.Logger.trace = trace


def get_log_level(level_name):
    """
    Returns the numeric logging level for ``level_name``.

    "TRACE" maps to the custom TRACE level; unknown names fall back to
    ``logging.INFO``.

    :param level_name: Name of the logging level, e.g. "DEBUG" or "TRACE".
    :type level_name: str
    :return: The numeric logging level.
    :rtype: int
    """
    if level_name == "TRACE":
        return TRACE
    level = getattr(logging, level_name, logging.INFO)
    return level if isinstance(level, int) else logging.INFO


log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()

log_level = get_log_level(log_level_str)

# Configure the root logger once, unless the host application already did
if len(logging.getLogger().handlers) == 0:
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def get_logger(name: str):
    """
    Retrieve a logger instance configured with the specified name.

    :param name: A string representing the name of the logger to retrieve.
    :type name: str
    :return: An instance of `logging.Logger` configured with the provided name.
    :rtype: logging.Logger
    """
    return logging.getLogger(name)
