# topmark:header:start
#
#   project      : ParamsExtended
#   file         : __init__.py
#   file_relpath : src/params_extended/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for ParamsExtended: logging setup and plugin settings."""

from __future__ import annotations

from params_extended.config.settings import SETTINGS_KEY, Settings, settings_for

__all__ = [
    "SETTINGS_KEY",
    "Settings",
    "settings_for",
]
