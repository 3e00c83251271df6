# topmark:header:start
#
#   project      : ParamsExtended
#   file         : introspection.py
#   file_relpath : src/params_extended/utils/introspection.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Introspection helpers used for hook discovery and diagnostics."""

from __future__ import annotations

from inspect import getmodule
from typing import Any


def unwrap_descriptor(obj: Any) -> Any:
    """Return the function wrapped by a ``staticmethod``/``classmethod``, else ``obj``."""
    if isinstance(obj, (staticmethod, classmethod)):
        return obj.__func__
    return obj


def format_callable_pretty(obj: Any) -> str:
    """Return a human-friendly (module.qualname) for any callable.

    Handles functions, static and class methods, and callable instances. Falls
    back to the callable's class name when needed, and uses ``inspect.getmodule``
    as a last resort to resolve the module name.

    Args:
        obj: The callable object to describe.

    Returns:
        A string like ``"(package.module.QualifiedName)"`` or ``"(QualifiedName)"``
        if the module cannot be resolved.
    """
    obj = unwrap_descriptor(obj)
    mod_name: str | None = getattr(obj, "__module__", None)
    call_name: str | None = getattr(obj, "__qualname__", None)

    if call_name is None:
        call_name = getattr(obj, "__name__", None)
    if call_name is None:
        call_name = type(obj).__name__

    if not mod_name:
        mod = getmodule(obj)
        if mod is not None and getattr(mod, "__name__", None):
            mod_name = mod.__name__

    return f"({mod_name}.{call_name})" if mod_name else f"({call_name})"
