"""Pluggable value validation with sync and async checks.

This package provides:

- **Engine**: ``Scrutiny`` instances owning a registry of named checks
- **Primitives**: ``undef``, ``string``, ``bool``, ``number``, ``func``,
  ``array`` and ``object`` checks installed into every engine
- **Composites**: ``one_of``, ``array_of``, ``object_of``, ``one_of_type``
  and ``shape`` factories
- **Async primitive**: a process-wide hook deciding how pending check
  results are awaited
- **Configuration**: build engines from dicts or YAML/JSON files

Example:
    ```python
    from scrutiny import Scrutiny, ValidationError

    engine = Scrutiny()
    try:
        await engine.validate(543, engine.checks.object)
    except ValidationError as e:
        print(e)
        # Value is not an object
    ```
"""

from scrutiny.composites import array_of, object_of, one_of, one_of_type, shape
from scrutiny.config import EngineConfig
from scrutiny.engine import Scrutiny
from scrutiny.exceptions import (
    ConfigurationError,
    DuplicateCheckError,
    InvalidArgumentError,
    NotFoundError,
    ScrutinyError,
    ValidationError,
)
from scrutiny.registry import CheckNamespace, CheckRegistry
from scrutiny.settings import (
    AsyncioPrimitive,
    AsyncPrimitive,
    get_async_primitive,
    reset_async_primitive,
    set_async_primitive,
)

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Engine
    "Scrutiny",
    "CheckRegistry",
    "CheckNamespace",
    "EngineConfig",
    # Composites
    "one_of",
    "array_of",
    "object_of",
    "one_of_type",
    "shape",
    # Async primitive
    "AsyncPrimitive",
    "AsyncioPrimitive",
    "set_async_primitive",
    "get_async_primitive",
    "reset_async_primitive",
    # Exceptions
    "ScrutinyError",
    "ValidationError",
    "InvalidArgumentError",
    "DuplicateCheckError",
    "NotFoundError",
    "ConfigurationError",
]
