"""The ``Scrutiny`` validation engine.

An engine owns a registry of named checks, pre-populated with the primitive
check library, and validates values against ordered sequences of checks.

Example:
    ```python
    from scrutiny import Scrutiny

    engine = Scrutiny()

    def veggie(value):
        if value not in ("potato", "tomato"):
            raise ValueError("ERR_INVALID_VEGGIE")

    engine.register("veggie", veggie)

    value = await engine.validate("tomato", engine.checks.string, engine.checks.veggie)
    # 'tomato'
    ```
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from scrutiny.composites import array_of, object_of, one_of, one_of_type, shape
from scrutiny.config import EngineConfig
from scrutiny.primitives import PRIMITIVES
from scrutiny.registry import CheckNamespace, CheckRegistry
from scrutiny.runner import Check, run_checks
from scrutiny.settings import set_async_primitive

logger = logging.getLogger(__name__)


class Scrutiny:
    """Validation engine with its own check registry.

    Engines are independent: a check registered on one engine is never
    visible from another.

    Args:
        name: Engine name used for its registry in logs and error context
    """

    one_of = staticmethod(one_of)
    array_of = staticmethod(array_of)
    object_of = staticmethod(object_of)
    one_of_type = staticmethod(one_of_type)
    shape = staticmethod(shape)

    def __init__(self, name: str = "scrutiny"):
        self._registry = CheckRegistry(name)
        self._checks = CheckNamespace(self._registry)
        for check_name, check in PRIMITIVES.items():
            self._registry.register(check_name, check, metadata={"builtin": True})

    @classmethod
    def from_config(cls, source: EngineConfig | dict[str, Any] | str | Path) -> Scrutiny:
        """Build an engine from a configuration.

        Installs the configured async primitive, if any, then registers
        every configured check.

        Args:
            source: ``EngineConfig``, plain dict, or path to a YAML/JSON file

        Raises:
            ConfigurationError: If the configuration is invalid or an
                import path cannot be resolved
        """
        config = EngineConfig.load(source).apply_environment_overrides()
        primitive = config.build_async_primitive()
        if primitive is not None:
            set_async_primitive(primitive)

        engine = cls(config.name)
        for check_name, check in config.build_checks().items():
            engine.register(check_name, check, metadata={"source": config.checks[check_name]})
        logger.debug("Built engine %s with %d configured checks", config.name, len(config.checks))
        return engine

    @property
    def name(self) -> str:
        return self._registry.name

    @property
    def registry(self) -> CheckRegistry:
        """The underlying check registry."""
        return self._registry

    @property
    def checks(self) -> CheckNamespace:
        """Read-only view of every registered check, primitives included."""
        return self._checks

    def register(self, name: str, check: Check, metadata: dict[str, Any] | None = None) -> None:
        """Register a check on this engine.

        Raises:
            InvalidArgumentError: If the name is not an identifier or the
                check is not callable
            DuplicateCheckError: If the name is already registered
        """
        self._registry.register(name, check, metadata=metadata)

    async def validate(self, value: Any, *checks: Check) -> Any:
        """Validate a value against checks, in order.

        Stops at the first failing check and re-raises its exception
        unchanged; later checks are not invoked. Nothing is raised before
        the returned coroutine is awaited.

        Args:
            value: Value under test
            *checks: One or more checks

        Returns:
            ``value`` itself when every check passes

        Raises:
            InvalidArgumentError: If no checks are given or one is not callable
            Exception: Whatever the first failing check raised
        """
        return await run_checks(value, checks)

    def __repr__(self) -> str:
        return f"Scrutiny({self.name!r}, checks={self._registry.list_keys()!r})"
