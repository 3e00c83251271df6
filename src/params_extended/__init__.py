# topmark:header:start
#
#   project      : ParamsExtended
#   file         : __init__.py
#   file_relpath : src/params_extended/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ParamsExtended package.

ParamsExtended is a per-test-class parameter registry for pytest. A single setup
hook registers values by name or by type; test methods then receive them as
parameters, or receive a read-only view of the registry itself.

Most users only need the public names exported here:

```python
from params_extended import Name, Parameters, extended, setup
```
"""

from __future__ import annotations

from params_extended.access import AccessController
from params_extended.discovery import SetupHook, discover_setup_hook, invoke_setup_hook, setup
from params_extended.errors import (
    ConfigurationError,
    DuplicateKeyError,
    ParamsExtendedError,
    TypeMismatchError,
    UnresolvedParameterError,
    UnsupportedOperationError,
)
from params_extended.extension import extended
from params_extended.registry import ParameterRegistry, Parameters, ReadOnlyParameters
from params_extended.resolver import ParameterResolver
from params_extended.types import Name, ParameterRequest, TypeDescriptor, type_key

__all__ = [
    # Test-facing API
    "Name",
    "Parameters",
    "extended",
    "setup",
    # Registry and views
    "AccessController",
    "ParameterRegistry",
    "ReadOnlyParameters",
    # Resolution and discovery
    "ParameterRequest",
    "ParameterResolver",
    "SetupHook",
    "TypeDescriptor",
    "discover_setup_hook",
    "invoke_setup_hook",
    "type_key",
    # Errors
    "ConfigurationError",
    "DuplicateKeyError",
    "ParamsExtendedError",
    "TypeMismatchError",
    "UnresolvedParameterError",
    "UnsupportedOperationError",
]
