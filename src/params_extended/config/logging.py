# topmark:header:start
#
#   project      : ParamsExtended
#   file         : logging.py
#   file_relpath : src/params_extended/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Custom ParamsExtended logging with TRACE logging.

This module extends the standard logging module with a custom TRACE level, a
specialized logger class, and colored output formatting.

Unlike a CLI tool, a pytest plugin does not own the root logger: pytest installs
its own capture handlers there. Configuration is therefore applied to the
``params_extended`` package logger only.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Mapping

# Define TRACE_LEVEL as a module-level constant
TRACE_LEVEL: Final[int] = logging.DEBUG - 5

PACKAGE_LOGGER_NAME: Final[str] = "params_extended"

ENV_LOG_LEVEL: Final[str] = "PARAMS_EXTENDED_LOG_LEVEL"


class ParamsLogger(logging.Logger):
    """Custom logger class with support for a TRACE log level below DEBUG."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log 'msg % args' with severity 'TRACE'.

        Args:
            msg (object): The message to be logged.
            *args (object): Variable length argument list for the message.
            extra (Mapping[str, object] | None): Optional dictionary of extra information to pass
                to the logger.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(
                TRACE_LEVEL,
                msg=msg,
                args=args,
                extra=extra,
                stacklevel=2,
            )


if not hasattr(logging, "TRACE"):
    logging.addLevelName(TRACE_LEVEL, "TRACE")
    # Expose TRACE_LEVEL as logging.TRACE
    logging.TRACE = TRACE_LEVEL  # type: ignore


LOG_FORMAT = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "[%(levelname)s] [%(filename)s:%(lineno)d] [%(funcName)s] %(message)s"

_NAME_TO_LEVEL: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "NOTSET": logging.NOTSET,
}


class ChalkFormatter(logging.Formatter):
    """Formatter that outputs log records with chalk-colored formatting based on severity level."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the specified record with colors based on log level.

        Args:
            record (logging.LogRecord): The LogRecord to be formatted.

        Returns:
            str: The colorized formatted log message as a string.
        """
        level = record.levelno
        message = super().format(record)

        result: str = ""

        if level >= logging.CRITICAL:
            result = chalk.red_bright(message)
        elif level >= logging.ERROR:
            result = chalk.red(message)
        elif level >= logging.WARNING:
            result = chalk.yellow(message)
        elif level >= logging.INFO:
            result = chalk.green(message)
        elif level >= logging.DEBUG:
            result = chalk.gray(message)
        elif level >= TRACE_LEVEL:
            result = chalk.blue(message)
        else:
            # Fallback color for unknown or lower-than-TRACE levels
            result = chalk.dim.red(message)

        return result


def parse_log_level(value: str | int | None) -> int | None:
    """Translate a level name or number into a logging level.

    Accepts names such as ``"TRACE"`` or ``"debug"`` and numeric strings such as
    ``"10"``. Returns ``None`` for empty or unknown values.

    Args:
        value (str | int | None): The raw level value.

    Returns:
        int | None: The logging level, or ``None`` if ``value`` is not a level.
    """
    if value is None:
        return None
    if isinstance(value, int):
        return value
    v = value.strip().upper()
    if not v:
        return None
    if v.isdigit():
        return int(v)
    return _NAME_TO_LEVEL.get(v)


def resolve_env_log_level() -> int | None:
    """Return a logging level from environment or None if unset.

    Honors PARAMS_EXTENDED_LOG_LEVEL (e.g., "TRACE", "DEBUG", "INFO", numeric "10").
    """
    return parse_log_level(os.environ.get(ENV_LOG_LEVEL))


def setup_logging(level: int | None = None) -> None:
    """Configure the package logger with a specified log level and colored output.

    If ``level`` is None, environment variables are consulted via
    [`resolve_env_log_level`][params_extended.config.logging.resolve_env_log_level].
    When no level is configured at all, the package logger is left untouched so
    that records keep propagating to pytest's own handlers.

    Args:
        level (int | None): The logging level to apply.
    """
    if level is None:
        level = resolve_env_log_level()
    if level is None:
        return

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level)

    # Remove handlers installed by a previous call to prevent duplicate log messages
    for handler in package_logger.handlers[:]:
        if isinstance(handler.formatter, ChalkFormatter):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    # Use detailed logging format for levels below INFO, simpler otherwise
    formatter = ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT)
    handler.setFormatter(formatter)
    package_logger.addHandler(handler)

    # Disable propagation to avoid duplicate logs in pytest's captured output
    package_logger.propagate = False


def get_logger(name: str) -> ParamsLogger:
    """Retrieve a ParamsLogger instance with the specified name.

    Loggers are created through a private manager hook so that the process-wide
    logger class (owned by the host application) is never replaced.

    Args:
        name (str): The name of the logger.

    Returns:
        ParamsLogger: A ParamsLogger instance.
    """
    manager = logging.Logger.manager
    previous = manager.loggerClass
    manager.setLoggerClass(ParamsLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        manager.loggerClass = previous
    return cast("ParamsLogger", logger)
