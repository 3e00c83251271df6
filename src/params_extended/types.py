# topmark:header:start
#
#   project      : ParamsExtended
#   file         : types.py
#   file_relpath : src/params_extended/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Value types shared by the registry, the resolver and the pytest integration.

* `Name` gives a test parameter an explicit name:

  ```python
  def test_greeting(self, greeting: Annotated[First, Name("Welcome")]) -> None: ...
  ```

* `ParameterRequest` carries what one lookup asks for: the declared type, the
  optional explicit name, and whether the request comes from the setup hook.

* `type_key` computes the canonical type key (the `TypeDescriptor`) under which
  values registered by type are stored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, get_args, get_origin

# Canonical type key of a class, e.g. ``"tests.test_extended.First"``.
TypeDescriptor = str


def is_class(tp: object) -> bool:
    """Return True if ``tp`` is a plain class (not a parameterized generic such as ``list[int]``)."""
    return isinstance(tp, type) and get_origin(tp) is None


def type_key(tp: type[Any]) -> TypeDescriptor:
    """Return the canonical type key for a class.

    The key is the fully-qualified name ``"<module>.<qualname>"``. Two classes
    share a key only if they are the same class (or indistinguishable by name).

    Args:
        tp (type[Any]): The class to describe.

    Returns:
        TypeDescriptor: The canonical type key.

    Raises:
        TypeError: If ``tp`` is not a class.
    """
    if not is_class(tp):
        raise TypeError(f"Expected a class, got {tp!r}")
    return f"{tp.__module__}.{tp.__qualname__}"


@dataclass(frozen=True, slots=True)
class Name:
    """Explicit name annotation for a test parameter (use inside ``typing.Annotated``)."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Name.value must be a non-empty string.")


@dataclass(frozen=True, slots=True)
class ParameterRequest:
    """A single lookup request handed to the resolver.

    Attributes:
        declared_type (Any): The parameter's declared type, with any ``Annotated``
            metadata stripped.
        name (str | None): The explicit name, if the parameter carries a `Name`.
        from_setup (bool): ``True`` when the request originates from the setup hook.
        parameter (str): The parameter name, used in diagnostics only.
    """

    declared_type: Any
    name: str | None = None
    from_setup: bool = False
    parameter: str = ""

    @classmethod
    def from_hint(cls, parameter: str, hint: Any, *, from_setup: bool = False) -> ParameterRequest:
        """Build a request from a resolved type hint.

        ``Annotated[T, Name("n")]`` yields ``declared_type=T`` and ``name="n"``;
        the first `Name` in the metadata wins. Any other hint is used as the
        declared type verbatim.

        Args:
            parameter (str): The parameter name.
            hint (Any): The resolved type hint (``include_extras=True``).
            from_setup (bool): Whether the request comes from the setup hook.

        Returns:
            ParameterRequest: The request.
        """
        name: str | None = None
        declared: Any = hint
        if get_origin(hint) is Annotated:
            declared, *metadata = get_args(hint)
            for meta in metadata:
                if isinstance(meta, Name):
                    name = meta.value
                    break
        return cls(declared_type=declared, name=name, from_setup=from_setup, parameter=parameter)

    def describe(self) -> str:
        """Return a short human-readable description for error messages."""
        tp = getattr(self.declared_type, "__qualname__", repr(self.declared_type))
        target = f"name '{self.name}'" if self.name is not None else f"type {tp}"
        return f"parameter '{self.parameter}' ({target})" if self.parameter else target
