# topmark:header:start
#
#   project      : ParamsExtended
#   file         : access.py
#   file_relpath : src/params_extended/access.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Access control over a single parameter registry.

The registry has two phases (open for writes during setup, read-only afterwards).
They are enforced by which view is handed out, not by internal state.
"""

from __future__ import annotations

from params_extended.registry import ParameterRegistry, ReadOnlyParameters


class AccessController:
    """Owns one fresh `ParameterRegistry` and hands out its views.

    One controller is created per test class and per run; it is never shared
    across classes.
    """

    def __init__(self) -> None:
        self._registry: ParameterRegistry = ParameterRegistry()
        self._read_only: ReadOnlyParameters = ReadOnlyParameters(self._registry)

    def writable_view(self) -> ParameterRegistry:
        """Return the registry itself (register and lookup).

        Hand this only to the setup hook.
        """
        return self._registry

    def read_only_view(self) -> ReadOnlyParameters:
        """Return the lookup-only wrapper (the same instance on every call)."""
        return self._read_only

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._registry.names()!r})"
