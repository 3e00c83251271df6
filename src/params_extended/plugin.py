# topmark:header:start
#
#   project      : ParamsExtended
#   file         : plugin.py
#   file_relpath : src/params_extended/plugin.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""pytest plugin entry point (registered under the ``pytest11`` entry point group).

Registers the ``params_extended`` marker, the ini/command line options read by
[`Settings`][params_extended.config.settings.Settings], and configures the
package logger. Parameter injection itself is driven by the
[`extended`][params_extended.extension.extended] class decorator.
"""

from __future__ import annotations

import logging

import pytest

from params_extended.config.logging import ParamsLogger, get_logger, setup_logging
from params_extended.config.settings import (
    INI_FIXTURE_FALLBACK,
    INI_LOG_LEVEL,
    OPT_LOG_LEVEL,
    SETTINGS_KEY,
    Settings,
    settings_for,
)
from params_extended.constants import PARAMS_EXTENDED_VERSION, VALUE_NOT_SET
from params_extended.extension import MARKER_NAME

logger: ParamsLogger = get_logger(__name__)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register ParamsExtended command line and ini options.

    Args:
        parser (pytest.Parser): The pytest argument parser.
    """
    group = parser.getgroup("params_extended", "parameter injection (params-extended)")
    group.addoption(
        "--params-extended-log-level",
        dest=OPT_LOG_LEVEL,
        default=None,
        metavar="LEVEL",
        help="Log level for the params_extended logger (TRACE, DEBUG, INFO, ...).",
    )
    parser.addini(
        INI_LOG_LEVEL,
        help="Log level for the params_extended logger (TRACE, DEBUG, INFO, ...).",
        default="",
    )
    parser.addini(
        INI_FIXTURE_FALLBACK,
        help="Let unregistered, unnamed parameters fall back to pytest fixtures (default: true).",
        type="bool",
        default=True,
    )


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:
    """Register the marker, resolve settings and configure logging.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    config.addinivalue_line(
        "markers",
        f"{MARKER_NAME}: test class using @extended parameter injection (params-extended).",
    )
    settings = Settings.from_pytest_config(config)
    config.stash[SETTINGS_KEY] = settings
    setup_logging(settings.log_level)
    logger.debug(
        "Settings: log_level=%s fixture_fallback=%s", settings.log_level, settings.fixture_fallback
    )


def pytest_report_header(config: pytest.Config) -> list[str] | None:
    """Report the plugin version and effective log level in verbose runs.

    Args:
        config (pytest.Config): The pytest configuration object.

    Returns:
        list[str] | None: Header lines, or ``None`` when not verbose.
    """
    if config.get_verbosity() <= 0:
        return None
    settings = settings_for(config)
    level = (
        VALUE_NOT_SET if settings.log_level is None else logging.getLevelName(settings.log_level)
    )
    return [f"params-extended: {PARAMS_EXTENDED_VERSION}, log level: {level}"]
