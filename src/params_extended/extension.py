# topmark:header:start
#
#   project      : ParamsExtended
#   file         : extension.py
#   file_relpath : src/params_extended/extension.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The ``@extended`` class decorator: parameter injection for pytest test classes.

This extension allows setting up multiple parameters for tests without using
class attributes that may be changed throughout the tests, and extends pytest
with parameters resolved by type or by explicit name.

Example:
    ```python
    from typing import Annotated

    from params_extended import Name, Parameters, extended, setup


    @extended
    class TestGreetings:
        @setup
        @staticmethod
        def set_up(parameters: Parameters) -> None:
            parameters.add(First("Hello")).add_named("Welcome", First("Welcome"))

        def test_by_type(self, first: First) -> None:
            assert first.name == "Hello"

        def test_by_name(self, first: Annotated[First, Name("Welcome")]) -> None:
            assert first.name == "Welcome"

        def test_registry(self, parameters: Parameters) -> None:
            assert parameters.get_by_type(First) == First("Hello")
    ```

How it works:
    * The setup hook is validated when the class is decorated, i.e. during
      collection; a bad hook fails collection before any test runs.
    * A class-scoped fixture creates a fresh `AccessController` and calls the
      hook once with the writable view.
    * Every annotated parameter of a ``test*`` method is claimed by the
      extension and hidden from pytest's fixture resolution, except ``request``
      and names parametrized by ``pytest.mark.parametrize`` marks applied before
      ``@extended``.
    * At call time a claimed parameter resolves from the registry. An unnamed
      parameter whose type is not registered falls back to the pytest fixture of
      the same name (unless disabled with ``params_extended_fixture_fallback``).

Notes:
    Type hints are resolved with ``typing.get_type_hints`` against the test
    module's globals, one claimed parameter at a time, so classes used in
    annotations must be defined at module level when
    ``from __future__ import annotations`` is in effect. An annotation naming
    something imported only under ``if TYPE_CHECKING:`` cannot be evaluated;
    that parameter is served by the pytest fixture of the same name.
"""

from __future__ import annotations

import functools
import inspect
import sys
import typing
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final, TypeVar

import pytest

from params_extended.access import AccessController
from params_extended.config.logging import get_logger
from params_extended.config.settings import settings_for
from params_extended.discovery import discover_setup_hook, invoke_setup_hook
from params_extended.errors import UnresolvedParameterError
from params_extended.registry import Parameters
from params_extended.resolver import ParameterResolver
from params_extended.types import ParameterRequest

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from params_extended.config.logging import ParamsLogger
    from params_extended.discovery import SetupHook

logger: ParamsLogger = get_logger(__name__)

CONTROLLER_FIXTURE: Final[str] = "params_extended_controller"
MARKER_NAME: Final[str] = "params_extended"

C = TypeVar("C", bound=type)

_RESERVED: Final[frozenset[str]] = frozenset({"request", CONTROLLER_FIXTURE})


def _parametrized_names(*holders: object) -> set[str]:
    """Return argument names parametrized by marks already applied to ``holders``."""
    names: set[str] = set()
    for holder in holders:
        marks: Any = getattr(holder, "pytestmark", [])
        if not isinstance(marks, list):
            marks = [marks]
        for mark in marks:
            if getattr(mark, "name", None) != "parametrize" or not mark.args:
                continue
            argnames = mark.args[0]
            if isinstance(argnames, str):
                names.update(n.strip() for n in argnames.split(",") if n.strip())
            else:
                names.update(argnames)
    return names


def _claimed_parameters(cls: type, func: Callable[..., Any]) -> list[str]:
    """Return the names of the parameters of ``func`` the extension resolves."""
    params = list(inspect.signature(func).parameters.values())[1:]
    skip = _parametrized_names(cls, func) | _RESERVED
    return [
        p.name
        for p in params
        if p.annotation is not inspect.Parameter.empty
        and p.default is inspect.Parameter.empty
        and p.name not in skip
        and p.kind in (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)
    ]


def _exposed_signature(func: Callable[..., Any], claimed: Iterable[str]) -> inspect.Signature:
    """Return the signature pytest should see: claimed parameters removed, plumbing added."""
    sig = inspect.signature(func)
    hidden = set(claimed)
    params = [p for p in sig.parameters.values() if p.name not in hidden]
    extra = [
        inspect.Parameter(name, inspect.Parameter.KEYWORD_ONLY)
        for name in ("request", CONTROLLER_FIXTURE)
        if name not in sig.parameters
    ]
    # Keyword-only parameters must come after any positional ones; drop **kwargs last.
    var_kw = [p for p in params if p.kind is inspect.Parameter.VAR_KEYWORD]
    params = [p for p in params if p.kind is not inspect.Parameter.VAR_KEYWORD]
    return sig.replace(parameters=[*params, *extra, *var_kw])


@dataclass(frozen=True)
class _UnresolvedHint:
    """Placeholder for an annotation that cannot be evaluated at call time."""

    reason: str


def _raw_annotations(func: Callable[..., Any]) -> dict[str, Any]:
    """Return the annotations of ``func`` without evaluating postponed ones."""
    if sys.version_info >= (3, 14):
        import annotationlib

        return dict(annotationlib.get_annotations(func, format=annotationlib.Format.STRING))
    return dict(getattr(func, "__annotations__", {}))


def _claimed_hints(func: Callable[..., Any], claimed: Iterable[str]) -> dict[str, Any]:
    """Evaluate the annotations of the claimed parameters of ``func``.

    Annotations are evaluated one parameter at a time, so a name that only
    exists for type checkers (imported under ``if TYPE_CHECKING:``) affects only
    the parameter that uses it. Such a parameter maps to `_UnresolvedHint`.
    """
    target: Any = inspect.unwrap(func)
    globalns: dict[str, Any] = getattr(target, "__globals__", {})
    raw: dict[str, Any] = _raw_annotations(target)
    hints: dict[str, Any] = {}
    for parameter in claimed:

        def holder() -> None: ...

        holder.__annotations__ = {parameter: raw[parameter]}
        try:
            resolved = typing.get_type_hints(holder, globalns, include_extras=True)
            hints[parameter] = resolved[parameter]
        except NameError as exc:
            logger.debug(
                "Cannot evaluate annotation of %s.%s: %s", func.__qualname__, parameter, exc
            )
            hints[parameter] = _UnresolvedHint(str(exc))
    return hints


def _fixture_value(request: pytest.FixtureRequest, parameter: str, what: str) -> object:
    """Return the pytest fixture named ``parameter`` for an unresolved claimed parameter."""
    logger.trace("Falling back to pytest fixture for %s", what)
    try:
        return request.getfixturevalue(parameter)
    except pytest.FixtureLookupError as exc:
        raise UnresolvedParameterError(
            f"No argument registered and no fixture available for {what}"
        ) from exc


def _resolve_claimed(
    resolver: ParameterResolver,
    request: pytest.FixtureRequest,
    parameter: str,
    hint: Any,
) -> object:
    """Resolve one claimed parameter, falling back to pytest fixtures for unnamed misses."""
    fallback: bool = settings_for(request.config).fixture_fallback

    if isinstance(hint, _UnresolvedHint):
        what = f"parameter '{parameter}' (unresolvable annotation: {hint.reason})"
        if not fallback:
            raise UnresolvedParameterError(f"Cannot resolve {what}")
        return _fixture_value(request, parameter, what)

    req = ParameterRequest.from_hint(parameter, hint)
    if resolver.supports_parameter(req):
        return resolver.resolve_parameter(req)

    if req.name is None and fallback:
        try:
            resolver.check_parameter(req)
        except UnresolvedParameterError:
            return _fixture_value(request, parameter, req.describe())

    resolver.check_parameter(req)
    # check_parameter raises for every unsupported request.
    raise UnresolvedParameterError(f"Cannot resolve {req.describe()}")


def _inject(cls: type, func: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap a test method so its claimed parameters resolve from the registry."""
    claimed: list[str] = _claimed_parameters(cls, func)
    takes_request: bool = "request" in inspect.signature(func).parameters
    hints: dict[str, Any] = {}

    @functools.wraps(func)
    def wrapper(self: object, *args: Any, **kwargs: Any) -> Any:
        controller: AccessController = kwargs.pop(CONTROLLER_FIXTURE)
        request: pytest.FixtureRequest = (
            kwargs["request"] if takes_request else kwargs.pop("request")
        )
        # Evaluated on first call: annotations may name classes defined after the test class.
        if claimed and not hints:
            hints.update(_claimed_hints(func, claimed))
        resolver = ParameterResolver(controller)
        for parameter in claimed:
            kwargs[parameter] = _resolve_claimed(resolver, request, parameter, hints[parameter])
        return func(self, *args, **kwargs)

    wrapper.__signature__ = _exposed_signature(func, claimed)  # type: ignore[attr-defined]
    logger.trace("Injecting %s into %s", claimed, func.__qualname__)
    return wrapper


def _controller_fixture(hook: SetupHook) -> Any:
    """Build the class-scoped fixture that creates and populates the registry."""

    # A classmethod: the fixture runs once per class, not per test instance.
    def controller(cls: type) -> AccessController:
        access = AccessController()
        resolver = ParameterResolver(access)
        writable = resolver.resolve_parameter(
            ParameterRequest(declared_type=Parameters, from_setup=True, parameter=hook.name)
        )
        invoke_setup_hook(hook, typing.cast("Parameters", writable))
        return access

    controller.__name__ = CONTROLLER_FIXTURE
    controller.__qualname__ = f"{hook.owner.__qualname__}.{CONTROLLER_FIXTURE}"
    return pytest.fixture(scope="class", name=CONTROLLER_FIXTURE)(classmethod(controller))


def extended(cls: C) -> C:
    """Enable parameter injection for the test class ``cls``.

    Args:
        cls (C): The test class; it must declare exactly one `setup` hook.

    Returns:
        C: The same class, with its test methods wrapped.

    Raises:
        TypeError: If ``cls`` is not a class.
    """
    if not inspect.isclass(cls):
        raise TypeError("@extended can only decorate test classes.")

    hook = discover_setup_hook(cls)
    setattr(cls, CONTROLLER_FIXTURE, _controller_fixture(hook))

    for attr, value in list(vars(cls).items()):
        if attr.startswith("test") and inspect.isfunction(value):
            setattr(cls, attr, _inject(cls, value))

    pytest.mark.params_extended(cls)
    logger.debug("Enabled parameter injection for %s", cls.__qualname__)
    return cls
