# topmark:header:start
#
#   project      : ParamsExtended
#   file         : errors.py
#   file_relpath : src/params_extended/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for ParamsExtended.

Every error derives from [`ParamsExtendedError`][params_extended.errors.ParamsExtendedError]
and, where one fits, from the closest builtin exception, so callers can catch
either the project-specific or the generic type.

Usage:
    Errors are raised at the point of violation and never downgraded to a
    default value:

    - `DuplicateKeyError` during the setup phase aborts the test class.
    - `UnresolvedParameterError` and `TypeMismatchError` fail a single test.
    - `UnsupportedOperationError` is raised by the read-only view on any write.
    - `ConfigurationError` is raised during collection, before any test runs.
"""

from __future__ import annotations


class ParamsExtendedError(Exception):
    """Base class for all ParamsExtended errors."""


class DuplicateKeyError(ParamsExtendedError, ValueError):
    """Error when a key is registered a second time."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Argument for {key} was already registered")
        self.key: str = key


class UnresolvedParameterError(ParamsExtendedError, LookupError):
    """Error when a requested name or type was never registered."""


class TypeMismatchError(ParamsExtendedError, TypeError):
    """Error when a named value does not have the type the parameter declares."""


class UnsupportedOperationError(ParamsExtendedError, TypeError):
    """Error when a read-only view is asked to register a value."""


class ConfigurationError(ParamsExtendedError):
    """Error for a missing, duplicate or malformed setup hook."""
