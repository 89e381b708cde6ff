"""Engine configuration.

An engine can be described declaratively, in a dict or a YAML/JSON file:

```yaml
name: orders
async_primitive: myapp.runtime.TrioPrimitive
checks:
  sku: myapp.checks.sku
  currency: myapp.checks.currency
```

Check and primitive entries are dotted import paths. A primitive path may
point at a class (instantiated without arguments) or at an instance.
``apply_environment_overrides`` lets the ``SCRUTINY_ASYNC_PRIMITIVE``
environment variable override ``async_primitive``; ``Scrutiny.from_config``
applies it after loading.
"""

from __future__ import annotations

import importlib
import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from scrutiny.exceptions import ConfigurationError, NotFoundError

logger = logging.getLogger(__name__)

ASYNC_PRIMITIVE_ENV = "SCRUTINY_ASYNC_PRIMITIVE"


def load_object(path: str) -> Any:
    """Import an object from a dotted path such as ``package.module.attr``.

    Raises:
        ConfigurationError: If the path is malformed or cannot be imported
    """
    if not isinstance(path, str) or "." not in path:
        raise ConfigurationError(f"Invalid import path: {path!r}", context={"path": path})

    module_path, attr_name = path.rsplit(".", 1)
    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise ConfigurationError(f"Failed to import {path}: {e}", context={"path": path}) from e

    if not hasattr(module, attr_name):
        raise ConfigurationError(
            f"{attr_name} not found in {module_path}",
            context={"path": path},
        )
    return getattr(module, attr_name)


@dataclass
class EngineConfig:
    """Declarative description of a ``Scrutiny`` engine.

    Attributes:
        name: Engine (registry) name
        checks: Check name to dotted import path of the check callable
        async_primitive: Optional dotted import path of an async primitive
    """

    name: str = "scrutiny"
    checks: dict[str, str] = field(default_factory=dict)
    async_primitive: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EngineConfig:
        """Create a configuration from a dictionary.

        Raises:
            ConfigurationError: On unknown keys or wrongly typed values
        """
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Engine configuration must be a mapping, got {type(data).__name__}"
            )

        unknown = set(data) - {"name", "checks", "async_primitive"}
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}",
                context={"unknown_keys": sorted(unknown)},
            )

        name = data.get("name", "scrutiny")
        checks = data.get("checks") or {}
        primitive = data.get("async_primitive")

        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"Engine name must be a non-empty string, got {name!r}")
        if not isinstance(checks, dict) or not all(
            isinstance(key, str) and isinstance(value, str) for key, value in checks.items()
        ):
            raise ConfigurationError(
                "'checks' must map check names to import paths",
                context={"checks": checks},
            )
        if primitive is not None and not isinstance(primitive, str):
            raise ConfigurationError(
                f"'async_primitive' must be an import path, got {type(primitive).__name__}"
            )

        return cls(name=name, checks=dict(checks), async_primitive=primitive)

    @classmethod
    def from_file(cls, path: str | Path) -> EngineConfig:
        """Load a configuration from a ``.yaml``, ``.yml`` or ``.json`` file.

        Raises:
            NotFoundError: If the file does not exist
            ConfigurationError: If the format is unsupported or unparsable
        """
        path = Path(path).resolve()
        if not path.exists():
            raise NotFoundError(f"Configuration file not found: {path}", context={"path": str(path)})

        suffix = path.suffix.lower()
        try:
            with open(path) as f:
                if suffix in [".yaml", ".yml"]:
                    data = yaml.safe_load(f)
                elif suffix == ".json":
                    data = json.load(f)
                else:
                    raise ConfigurationError(f"Unsupported file format: {suffix}")
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot parse {path}: {e}", context={"path": str(path)}) from e

        logger.debug("Loaded engine configuration from %s", path)
        return cls.from_dict(data or {})

    @classmethod
    def load(cls, source: EngineConfig | dict[str, Any] | str | Path) -> EngineConfig:
        """Coerce any supported source into an ``EngineConfig``."""
        if isinstance(source, EngineConfig):
            return source
        if isinstance(source, dict):
            return cls.from_dict(source)
        if isinstance(source, (str, Path)):
            return cls.from_file(source)
        raise ConfigurationError(f"Invalid configuration source: {type(source).__name__}")

    def build_checks(self) -> dict[str, Any]:
        """Resolve every configured check path.

        Raises:
            ConfigurationError: If a path cannot be imported or is not callable
        """
        built = {}
        for check_name, path in self.checks.items():
            check = load_object(path)
            if not callable(check):
                raise ConfigurationError(
                    f"Check '{check_name}' at {path} is not callable",
                    context={"name": check_name, "path": path},
                )
            built[check_name] = check
        return built

    def build_async_primitive(self) -> Any | None:
        """Resolve the configured async primitive, instantiating classes."""
        if self.async_primitive is None:
            return None
        primitive = load_object(self.async_primitive)
        if isinstance(primitive, type):
            primitive = primitive()
        return primitive

    def apply_environment_overrides(self) -> EngineConfig:
        """Return a copy with environment variable overrides applied.

        ``SCRUTINY_ASYNC_PRIMITIVE`` replaces ``async_primitive`` when set.
        """
        primitive = os.environ.get(ASYNC_PRIMITIVE_ENV)
        if not primitive:
            return self
        logger.debug("Async primitive overridden by %s: %s", ASYNC_PRIMITIVE_ENV, primitive)
        return replace(self, async_primitive=primitive)
