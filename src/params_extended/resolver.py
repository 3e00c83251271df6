# topmark:header:start
#
#   project      : ParamsExtended
#   file         : resolver.py
#   file_relpath : src/params_extended/resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolution policy: which registered value (if any) satisfies a request.

Rules, applied in order:

1. A request for [`Parameters`][params_extended.registry.Parameters] itself
   returns a view: writable for the setup hook, read-only otherwise. This never
   fails.
2. A request with an explicit name looks up by name only. A missing name raises
   `UnresolvedParameterError`; a value whose runtime type is not exactly the
   declared type raises `TypeMismatchError`. A name is never overridden by a
   type match.
3. A request without a name looks up the canonical key of the declared type.
   A miss raises `UnresolvedParameterError`; a value stored under that key by
   an explicit name but of another type raises `TypeMismatchError`.

The pre-check (`supports_parameter`) and the resolution (`resolve_parameter`)
run the same lookup, so anything reported as supported resolves without
failure and vice versa.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, get_origin

from params_extended.config.logging import get_logger
from params_extended.errors import TypeMismatchError, UnresolvedParameterError
from params_extended.registry import Parameters
from params_extended.types import is_class, type_key

if TYPE_CHECKING:
    from params_extended.access import AccessController
    from params_extended.config.logging import ParamsLogger
    from params_extended.types import ParameterRequest

logger: ParamsLogger = get_logger(__name__)


def matches_declared_type(value: object, declared: Any) -> bool:
    """Return True if ``value`` satisfies the declared type by exact type identity.

    ``typing.Any`` and ``object`` declare no constraint. A parameterized generic
    such as ``list[int]`` is compared against its origin class (``list``).

    Args:
        value (object): The registered value.
        declared (Any): The declared parameter type.

    Returns:
        bool: ``True`` if the value is acceptable for the declared type.
    """
    if declared is Any or declared is object:
        return True
    origin = get_origin(declared)
    if isinstance(origin, type):
        declared = origin
    if not isinstance(declared, type):
        return False
    return type(value) is declared


class ParameterResolver:
    """Applies the resolution policy against the views of an `AccessController`."""

    def __init__(self, controller: AccessController) -> None:
        self._controller: AccessController = controller

    def _lookup(self, request: ParameterRequest) -> object:
        declared: Any = request.declared_type

        if declared is Parameters:
            if request.from_setup:
                return self._controller.writable_view()
            return self._controller.read_only_view()

        parameters = self._controller.read_only_view()

        if request.name is not None:
            if request.name not in parameters:
                raise UnresolvedParameterError(
                    f"No named argument registered for: {request.name}"
                )
            value = parameters.get(request.name)
            if not matches_declared_type(value, declared):
                raise TypeMismatchError(
                    f"Parameter registered under '{request.name}' is of type "
                    f"{type_key(type(value))}, which does not match the declared type {declared!r}"
                )
            return value

        if not is_class(declared):
            raise UnresolvedParameterError(
                f"No argument can be registered by type for {request.describe()}"
            )
        key = type_key(declared)
        if key not in parameters:
            raise UnresolvedParameterError(f"No argument registered for type: {key}")
        value = parameters.get(key)
        # An explicit name may occupy a type key with a value of another type.
        if not matches_declared_type(value, declared):
            raise TypeMismatchError(
                f"Parameter registered under type key {key} is of type "
                f"{type_key(type(value))}, which does not match the declared type {declared!r}"
            )
        return value

    def check_parameter(self, request: ParameterRequest) -> None:
        """Raise the error that resolving ``request`` would raise, if any.

        Args:
            request (ParameterRequest): The lookup request.
        """
        self._lookup(request)

    def supports_parameter(self, request: ParameterRequest) -> bool:
        """Return True if ``request`` can be satisfied.

        Args:
            request (ParameterRequest): The lookup request.

        Returns:
            bool: ``True`` if `resolve_parameter` would succeed for ``request``.
        """
        try:
            self._lookup(request)
        except (UnresolvedParameterError, TypeMismatchError) as exc:
            logger.trace("Unsupported %s: %s", request.describe(), exc)
            return False
        return True

    def resolve_parameter(self, request: ParameterRequest) -> object:
        """Return the value satisfying ``request``.

        Args:
            request (ParameterRequest): The lookup request.

        Returns:
            object: The registered value, or a registry view for `Parameters` requests.

        Raises:
            UnresolvedParameterError: If nothing is registered under the name or type.
            TypeMismatchError: If the named value does not match the declared type.
        """
        value = self._lookup(request)
        logger.debug("Resolved %s", request.describe())
        return value
