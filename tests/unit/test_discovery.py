# topmark:header:start
#
#   project      : ParamsExtended
#   file         : test_discovery.py
#   file_relpath : tests/unit/test_discovery.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for setup hook discovery, validation and invocation.

The test classes below are plain holders; their names do not start with
``Test`` so pytest does not collect them.
"""

from __future__ import annotations

import pytest

from params_extended import (
    AccessController,
    ConfigurationError,
    DuplicateKeyError,
    Parameters,
    discover_setup_hook,
    extended,
    invoke_setup_hook,
    setup,
)
from params_extended.discovery import SETUP_MARKER, is_setup_hook
from tests.samples import First, Second


class StaticHook:
    @setup
    @staticmethod
    def set_up(parameters: Parameters) -> None:
        parameters.add(First("Hello")).add_named("Again", Second("Again"))


class HookAboveDecorator:
    @staticmethod
    @setup
    def set_up(parameters: Parameters) -> None:
        parameters.add(First("Hello"))


class ClassHook:
    greeting = "Hi"

    @setup
    @classmethod
    def set_up(cls, parameters: Parameters) -> None:
        parameters.add_named("greeting", cls.greeting)


class NoHook:
    @staticmethod
    def set_up(parameters: Parameters) -> None:
        pass


class TwoHooks:
    @setup
    @staticmethod
    def one(parameters: Parameters) -> None:
        pass

    @setup
    @staticmethod
    def two(parameters: Parameters) -> None:
        pass


class InstanceHook:
    @setup
    def set_up(self, parameters: Parameters) -> None:
        pass


class NoParameterHook:
    @setup
    @staticmethod
    def set_up() -> None:
        pass


class TwoParameterHook:
    @setup
    @staticmethod
    def set_up(parameters: Parameters, other: Parameters) -> None:
        pass


class WrongTypeHook:
    @setup
    @staticmethod
    def set_up(parameters: dict) -> None:  # type: ignore[type-arg]
        pass


class UnannotatedHook:
    @setup
    @staticmethod
    def set_up(parameters) -> None:  # type: ignore[no-untyped-def]
        pass


class UnresolvableHook:
    @setup
    @staticmethod
    def set_up(parameters: DoesNotExist) -> None:  # type: ignore[name-defined]  # noqa: F821
        pass


class DuplicateRegistrationHook:
    @setup
    @staticmethod
    def set_up(parameters: Parameters) -> None:
        parameters.add(First("Hello")).add(First("Again"))


class InheritedHook(StaticHook):
    pass


def test_setup_tags_the_underlying_function() -> None:
    """`@setup` works above and below `@staticmethod`."""
    assert getattr(StaticHook.__dict__["set_up"].__func__, SETUP_MARKER) is True
    assert is_setup_hook(StaticHook.__dict__["set_up"])
    assert is_setup_hook(HookAboveDecorator.__dict__["set_up"])
    assert not is_setup_hook(NoHook.__dict__["set_up"])


@pytest.mark.parametrize("holder", [StaticHook, HookAboveDecorator, ClassHook])
def test_valid_hooks_are_discovered(holder: type) -> None:
    """Static and class methods with one `Parameters` parameter are accepted."""
    hook = discover_setup_hook(holder)

    assert hook.owner is holder
    assert hook.name == "set_up"
    assert "set_up" in str(hook)


def test_static_hook_receives_writable_view() -> None:
    """Invoking the hook populates the writable view."""
    controller = AccessController()
    invoke_setup_hook(discover_setup_hook(StaticHook), controller.writable_view())

    view = controller.read_only_view()
    assert view.get_by_type(First) == First("Hello")
    assert view.get("Again") == Second("Again")


def test_class_hook_is_bound_to_its_class() -> None:
    """A classmethod hook receives its class as the first argument."""
    controller = AccessController()
    invoke_setup_hook(discover_setup_hook(ClassHook), controller.writable_view())

    assert controller.read_only_view().get("greeting") == "Hi"


@pytest.mark.parametrize(
    ("holder", "message"),
    [
        (NoHook, "needs to provide a static method decorated with @setup"),
        (InheritedHook, "needs to provide a static method decorated with @setup"),
        (TwoHooks, "more than one @setup method: one, two"),
        (InstanceHook, "needs to be static"),
        (NoParameterHook, "take one parameter of type Parameters"),
        (TwoParameterHook, "take one parameter of type Parameters"),
        (WrongTypeHook, "take one parameter of type Parameters"),
        (UnannotatedHook, "take one parameter of type Parameters"),
        (UnresolvableHook, "cannot resolve parameter annotation"),
    ],
)
def test_malformed_hooks_are_configuration_errors(holder: type, message: str) -> None:
    """Missing, duplicate and malformed hooks are rejected before anything runs."""
    with pytest.raises(ConfigurationError, match=message):
        discover_setup_hook(holder)


def test_extended_rejects_class_without_hook() -> None:
    """Decorating a class without a hook fails immediately."""
    with pytest.raises(ConfigurationError):

        @extended
        class _Broken:
            def test_nothing(self) -> None:
                pass


def test_extended_rejects_non_classes() -> None:
    """Only classes can be decorated."""
    with pytest.raises(TypeError, match="test classes"):
        extended(lambda: None)  # type: ignore[arg-type]


def test_duplicate_registration_propagates_from_hook() -> None:
    """A duplicate registration inside the hook surfaces to the caller of setup."""
    controller = AccessController()

    with pytest.raises(DuplicateKeyError):
        invoke_setup_hook(discover_setup_hook(DuplicateRegistrationHook), controller.writable_view())

    assert controller.read_only_view().get_by_type(First) == First("Hello")
