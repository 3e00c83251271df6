# topmark:header:start
#
#   project      : ParamsExtended
#   file         : discovery.py
#   file_relpath : src/params_extended/discovery.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Setup hook tagging, discovery and invocation.

A test class provides exactly one setup hook: a ``staticmethod`` (or
``classmethod``) decorated with [`setup`][params_extended.discovery.setup] that
takes a single parameter declared as
[`Parameters`][params_extended.registry.Parameters]:

```python
@extended
class TestGreetings:
    @setup
    @staticmethod
    def set_up(parameters: Parameters) -> None:
        parameters.add(First("Hello"))
```

Only the class's own namespace is searched; hooks defined on base classes are
not discovered.
"""

from __future__ import annotations

import inspect
import typing
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final, TypeVar

from params_extended.config.logging import get_logger
from params_extended.errors import ConfigurationError
from params_extended.registry import Parameters
from params_extended.utils.introspection import format_callable_pretty, unwrap_descriptor

if TYPE_CHECKING:
    from params_extended.config.logging import ParamsLogger

logger: ParamsLogger = get_logger(__name__)

SETUP_MARKER: Final[str] = "__params_extended_setup__"

_SIGNATURE_HINT: Final[str] = (
    "Method decorated with @setup needs to be static and take one parameter of type Parameters."
)

F = TypeVar("F")


def setup(func: F) -> F:
    """Tag ``func`` as the setup hook of its class.

    Works above or below ``@staticmethod`` / ``@classmethod``.

    Args:
        func (F): The function or static/class method descriptor to tag.

    Returns:
        F: ``func`` itself.
    """
    setattr(unwrap_descriptor(func), SETUP_MARKER, True)
    return func


def is_setup_hook(obj: Any) -> bool:
    """Return True if ``obj`` (or the function it wraps) is tagged with `setup`."""
    return bool(getattr(unwrap_descriptor(obj), SETUP_MARKER, False))


@dataclass(frozen=True)
class SetupHook:
    """A validated setup hook.

    Attributes:
        owner (type): The test class declaring the hook.
        name (str): The attribute name of the hook on ``owner``.
    """

    owner: type
    name: str

    def __str__(self) -> str:
        return format_callable_pretty(self.owner.__dict__[self.name])


def discover_setup_hook(cls: type) -> SetupHook:
    """Locate and validate the setup hook declared on ``cls``.

    Args:
        cls (type): The test class.

    Returns:
        SetupHook: The validated hook.

    Raises:
        ConfigurationError: If there is no tagged hook, more than one, or the hook
            is not static or does not take exactly one ``Parameters`` parameter.
    """
    candidates: list[str] = [name for name, attr in vars(cls).items() if is_setup_hook(attr)]
    if not candidates:
        raise ConfigurationError(
            f"Test class {cls.__qualname__} using @extended needs to provide "
            "a static method decorated with @setup."
        )
    if len(candidates) > 1:
        raise ConfigurationError(
            f"Test class {cls.__qualname__} declares more than one @setup method: "
            f"{', '.join(sorted(candidates))}"
        )

    name: str = candidates[0]
    attr: Any = vars(cls)[name]
    if not isinstance(attr, (staticmethod, classmethod)):
        raise ConfigurationError(f"{cls.__qualname__}.{name}: {_SIGNATURE_HINT}")

    func = attr.__func__
    params = list(inspect.signature(func).parameters.values())
    if isinstance(attr, classmethod):
        params = params[1:]
    positional = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    if len(params) != 1 or params[0].kind not in positional:
        raise ConfigurationError(f"{cls.__qualname__}.{name}: {_SIGNATURE_HINT}")

    try:
        hints: dict[str, Any] = typing.get_type_hints(func)
    except (NameError, TypeError) as exc:
        raise ConfigurationError(
            f"{cls.__qualname__}.{name}: cannot resolve parameter annotation: {exc}"
        ) from exc
    if hints.get(params[0].name) is not Parameters:
        raise ConfigurationError(f"{cls.__qualname__}.{name}: {_SIGNATURE_HINT}")

    hook = SetupHook(owner=cls, name=name)
    logger.debug("Discovered setup hook %s", hook)
    return hook


def invoke_setup_hook(hook: SetupHook, parameters: Parameters) -> None:
    """Call the setup hook once with the writable view.

    Errors raised by the hook (including `DuplicateKeyError`) propagate unchanged.

    Args:
        hook (SetupHook): The validated hook.
        parameters (Parameters): The writable view.
    """
    logger.debug("Invoking setup hook %s", hook)
    getattr(hook.owner, hook.name)(parameters)
    logger.debug("Setup hook %s registered %d parameter(s)", hook, len(parameters))
