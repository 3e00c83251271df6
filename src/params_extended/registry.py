# topmark:header:start
#
#   project      : ParamsExtended
#   file         : registry.py
#   file_relpath : src/params_extended/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Parameter registries: the insertion-once store and its read-only view.

[`Parameters`][params_extended.registry.Parameters] is the type test code
declares; it is implemented by two views over the same store:

* [`ParameterRegistry`][params_extended.registry.ParameterRegistry] - full access,
  handed only to the setup hook.
* [`ReadOnlyParameters`][params_extended.registry.ReadOnlyParameters] - lookups only,
  handed to test methods.

Named and typed entries share a single namespace: values registered with
`add()` are stored under their canonical type key (see
[`type_key`][params_extended.types.type_key]), so an explicit name equal to that
key collides with a typed registration.

Typical usage:
    ```python
    parameters.add(First("Hello")).add_named("Welcome", First("Welcome"))

    parameters.get("Welcome")  # First("Welcome")
    parameters.get_by_type(First)  # First("Hello")
    "Welcome" in parameters  # True
    ```
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeVar, cast

from params_extended.config.logging import get_logger
from params_extended.errors import DuplicateKeyError, UnsupportedOperationError
from params_extended.types import is_class, type_key

if TYPE_CHECKING:
    from collections.abc import Mapping

    from params_extended.config.logging import ParamsLogger

logger: ParamsLogger = get_logger(__name__)

T = TypeVar("T")


def _as_key(key: object) -> str | None:
    if isinstance(key, str):
        return key
    return type_key(key) if isinstance(key, type) and is_class(key) else None


class Parameters(ABC):
    """Parameters registered by the setup hook and shared with the tests of a class.

    Declare a test (or setup hook) parameter with this type to receive the
    registry itself: the setup hook gets the writable view, test methods get the
    read-only view.
    """

    @abstractmethod
    def add_named(self, name: str, value: object) -> Parameters:
        """Register ``value`` under an explicit name.

        Args:
            name (str): The name to bind.
            value (object): The value to register.

        Returns:
            Parameters: ``self``, to allow chained calls.
        """

    @abstractmethod
    def add(self, value: object) -> Parameters:
        """Register ``value`` under the canonical key of its runtime type.

        Args:
            value (object): The value to register.

        Returns:
            Parameters: ``self``, to allow chained calls.
        """

    @abstractmethod
    def get(self, name: str) -> object | None:
        """Return the value bound under ``name``, or ``None``."""

    @abstractmethod
    def get_by_type(self, tp: type[T]) -> T | None:
        """Return the value registered for the class ``tp``, or ``None``.

        Descriptors that are not plain classes (such as ``list[int]``) yield ``None``.
        """

    @abstractmethod
    def as_mapping(self) -> Mapping[str, object]:
        """Return a read-only mapping of all entries (key -> value)."""

    @abstractmethod
    def __contains__(self, key: object) -> bool: ...

    @abstractmethod
    def __len__(self) -> int: ...

    def names(self) -> tuple[str, ...]:
        """Return all bound keys (sorted).

        Returns:
            tuple[str, ...]: Sorted keys, explicit names and canonical type keys alike.
        """
        return tuple(sorted(self.as_mapping().keys()))


class ParameterRegistry(Parameters):
    """Insertion-once key/value store with full (read and write) access.

    A key, once bound, can never be rebound or removed.
    """

    def __init__(self) -> None:
        self._entries: dict[str, object] = {}

    def add_named(self, name: str, value: object) -> ParameterRegistry:
        """Register ``value`` under an explicit name.

        Args:
            name (str): The name to bind; must be non-empty.
            value (object): The value to register.

        Returns:
            ParameterRegistry: ``self``, to allow chained calls.

        Raises:
            ValueError: If ``name`` is empty.
            DuplicateKeyError: If ``name`` is already bound. The existing binding is
                left untouched.
        """
        if not name:
            raise ValueError("Parameter name is required.")
        if name in self._entries:
            raise DuplicateKeyError(name)
        self._entries[name] = value
        logger.debug("Registered %s -> %r", name, value)
        return self

    def add(self, value: object) -> ParameterRegistry:
        """Register ``value`` under the canonical key of its runtime type.

        Two values of the same runtime type cannot both be registered this way.

        Args:
            value (object): The value to register.

        Returns:
            ParameterRegistry: ``self``, to allow chained calls.
        """
        return self.add_named(type_key(type(value)), value)

    def get(self, name: str) -> object | None:
        """Return the value bound under ``name``, or ``None``.

        Args:
            name (str): The key to look up.

        Returns:
            object | None: The bound value, or ``None`` if nothing is bound.
        """
        value = self._entries.get(name)
        logger.trace("Lookup %s -> %r", name, value)
        return value

    def get_by_type(self, tp: type[T]) -> T | None:
        """Return the value registered for the class ``tp``, or ``None``.

        Args:
            tp (type[T]): The exact class the value was registered as.

        Returns:
            T | None: The registered value, or ``None`` if nothing is registered
                for ``tp`` or ``tp`` is not a plain class.
        """
        if not is_class(tp):
            return None
        return cast("T | None", self.get(type_key(tp)))

    def as_mapping(self) -> Mapping[str, object]:
        """Return a read-only mapping of all entries.

        Returns:
            Mapping[str, object]: Key -> value mapping.

        Notes:
            The returned mapping is a `MappingProxyType` and must not be mutated.
            It reflects later registrations.
        """
        return MappingProxyType(self._entries)

    def __contains__(self, key: object) -> bool:
        k = _as_key(key)
        return k is not None and k in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.names()!r})"


class ReadOnlyParameters(Parameters):
    """Read-only view over a `ParameterRegistry`.

    Lookups delegate to the wrapped registry; any attempt to register raises
    `UnsupportedOperationError` and leaves the registry unchanged.
    """

    def __init__(self, registry: ParameterRegistry) -> None:
        self._registry: ParameterRegistry = registry

    def add_named(self, name: str, value: object) -> Parameters:
        """Reject the registration.

        Raises:
            UnsupportedOperationError: Always.
        """
        raise UnsupportedOperationError("Cannot modify arguments in the tests.")

    def add(self, value: object) -> Parameters:
        """Reject the registration.

        Raises:
            UnsupportedOperationError: Always.
        """
        raise UnsupportedOperationError("Cannot modify arguments in the tests.")

    def get(self, name: str) -> object | None:
        return self._registry.get(name)

    def get_by_type(self, tp: type[T]) -> T | None:
        return self._registry.get_by_type(tp)

    def as_mapping(self) -> Mapping[str, object]:
        return self._registry.as_mapping()

    def __contains__(self, key: object) -> bool:
        return key in self._registry

    def __len__(self) -> int:
        return len(self._registry)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.names()!r})"
