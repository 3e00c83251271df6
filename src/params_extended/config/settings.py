# topmark:header:start
#
#   project      : ParamsExtended
#   file         : settings.py
#   file_relpath : src/params_extended/config/settings.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Plugin settings resolved from pytest configuration and the environment.

Resolution order for the log level (later wins):

1. ini option ``params_extended_log_level`` (``pytest.ini`` / ``[tool.pytest.ini_options]``)
2. command line option ``--params-extended-log-level``
3. environment variable ``PARAMS_EXTENDED_LOG_LEVEL``

The fixture fallback switch is read from the ``params_extended_fixture_fallback`` ini option.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

import pytest

from params_extended.config.logging import ENV_LOG_LEVEL, parse_log_level

INI_LOG_LEVEL: Final[str] = "params_extended_log_level"
INI_FIXTURE_FALLBACK: Final[str] = "params_extended_fixture_fallback"
OPT_LOG_LEVEL: Final[str] = "params_extended_log_level"


def _checked_level(raw: object, source: str) -> int | None:
    """Parse a configured log level; unset or blank values yield ``None``."""
    if raw is None or not str(raw).strip():
        return None
    level: int | None = parse_log_level(str(raw))
    if level is None:
        raise pytest.UsageError(
            f"Invalid log level {raw!r} for {source}: "
            "expected TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL or a number."
        )
    return level


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable plugin settings.

    Attributes:
        log_level (int | None): Level applied to the ``params_extended`` logger, or
            ``None`` to leave logging to pytest.
        fixture_fallback (bool): Whether an unnamed parameter whose type is not
            registered may fall back to the pytest fixture of the same name.
    """

    log_level: int | None = None
    fixture_fallback: bool = True

    @classmethod
    def from_pytest_config(cls, config: pytest.Config) -> Settings:
        """Build settings from a pytest configuration object.

        Args:
            config (pytest.Config): The active pytest configuration.

        Returns:
            Settings: The resolved settings.

        Raises:
            pytest.UsageError: If a configured log level is not a level name or number.
        """
        level: int | None = None
        sources: list[tuple[str, object]] = [
            (f"ini option {INI_LOG_LEVEL}", config.getini(INI_LOG_LEVEL)),
            ("--params-extended-log-level", config.getoption(OPT_LOG_LEVEL, default=None)),
            (f"environment variable {ENV_LOG_LEVEL}", os.environ.get(ENV_LOG_LEVEL)),
        ]
        # Later sources win.
        for source, raw in sources:
            parsed: int | None = _checked_level(raw, source)
            if parsed is not None:
                level = parsed

        fallback = config.getini(INI_FIXTURE_FALLBACK)
        return cls(log_level=level, fixture_fallback=bool(fallback))


SETTINGS_KEY: Final[pytest.StashKey[Settings]] = pytest.StashKey[Settings]()


def settings_for(config: pytest.Config) -> Settings:
    """Return the settings stored on ``config``, or defaults if the plugin is not active.

    Args:
        config (pytest.Config): The active pytest configuration.

    Returns:
        Settings: The stored settings or ``Settings()``.
    """
    return config.stash.get(SETTINGS_KEY, Settings())
