# topmark:header:start
#
#   project      : ParamsExtended
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the ParamsExtended test suite.

Provides fresh registries, controllers and resolvers per test. The small value
classes used throughout the suite live in `tests.samples`.

Notes:
    Tests should respect the writable/read-only split:

    - Populate values through `AccessController.writable_view()` only.
    - Hand `AccessController.read_only_view()` to anything acting as a test method.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any, TypeVar, cast

import pytest

from params_extended import AccessController, ParameterRegistry, ParameterResolver
from params_extended.config.logging import ENV_LOG_LEVEL, PACKAGE_LOGGER_NAME

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.hypothesis_slow`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


@pytest.fixture(autouse=True)
def silence_params_extended_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(ENV_LOG_LEVEL, raising=False)


@pytest.fixture
def controller() -> AccessController:
    """Return a fresh access controller with an empty registry."""
    return AccessController()


@pytest.fixture
def registry(controller: AccessController) -> ParameterRegistry:
    """Return the writable view of the `controller` fixture."""
    return controller.writable_view()


@pytest.fixture
def resolver(controller: AccessController) -> ParameterResolver:
    """Return a resolver bound to the `controller` fixture."""
    return ParameterResolver(controller)


@pytest.fixture
def restore_package_logger() -> Iterator[logging.Logger]:
    """Yield the ``params_extended`` logger and restore its state afterwards.

    Yields:
        logging.Logger: The package logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    level = package_logger.level
    handlers = package_logger.handlers[:]
    propagate = package_logger.propagate
    try:
        yield package_logger
    finally:
        package_logger.setLevel(level)
        package_logger.handlers[:] = handlers
        package_logger.propagate = propagate
