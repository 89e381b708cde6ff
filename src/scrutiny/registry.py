"""Per-engine registry of named checks.

Each ``Scrutiny`` engine owns exactly one ``CheckRegistry``; registrations
never leak between engines. Names move monotonically from absent to
present: there is no unregister and no overwrite.

Example:
    ```python
    registry = CheckRegistry("my_engine")
    registry.register("even", lambda v: ...)
    registry.get("even")

    checks = CheckNamespace(registry)
    checks.even
    ```
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterator
from typing import Any

from scrutiny.exceptions import (
    DuplicateCheckError,
    InvalidArgumentError,
    NotFoundError,
)
from scrutiny.runner import Check

logger = logging.getLogger(__name__)


class CheckRegistry:
    """Thread-safe mapping of check names to checks.

    Args:
        name: Registry name, used in error messages and logs

    Example:
        ```python
        registry = CheckRegistry("checks")
        registry.register("veggie", veggie, metadata={"source": "app"})
        registry.count()
        # 1
        ```
    """

    def __init__(self, name: str = "checks"):
        self._name = name
        self._items: dict[str, Check] = {}
        self._metadata: dict[str, dict[str, Any]] = {}
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        """Get registry name."""
        return self._name

    def register(
        self,
        name: str,
        check: Check,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Register a check under a unique name.

        Args:
            name: Non-empty identifier for the check
            check: Callable taking the value under test
            metadata: Optional metadata stored alongside the check

        Raises:
            InvalidArgumentError: If the name is not an identifier or the
                check is not callable
            DuplicateCheckError: If the name is already registered
        """
        # Leading underscores would shadow CheckNamespace internals
        if not isinstance(name, str) or not name.isidentifier() or name.startswith("_"):
            raise InvalidArgumentError(
                f"Check name must be a non-empty identifier not starting with '_', got {name!r}",
                context={"name": name, "registry": self._name},
            )
        if not callable(check):
            raise InvalidArgumentError(
                f"Check '{name}' must be callable, got {type(check).__name__}",
                context={"name": name, "registry": self._name},
            )

        with self._lock:
            if name in self._items:
                raise DuplicateCheckError(name, self._name)

            self._items[name] = check
            self._metadata[name] = {
                "registered_at": time.time(),
                "metadata": metadata or {},
            }

        logger.debug("Registered check %s in %s", name, self._name)

    def get(self, name: str) -> Check:
        """Get a check by name.

        Raises:
            NotFoundError: If no check is registered under ``name``
        """
        with self._lock:
            if name not in self._items:
                raise NotFoundError(
                    f"Check not found: {name}",
                    context={"name": name, "registry": self._name, "available_keys": list(self._items)},
                )
            return self._items[name]

    def get_optional(self, name: str) -> Check | None:
        """Get a check by name, returning None if not found."""
        with self._lock:
            return self._items.get(name)

    def get_metadata(self, name: str) -> dict[str, Any]:
        """Get registration metadata for a check.

        Returns:
            Dict with ``registered_at`` and ``metadata``, empty if unknown
        """
        with self._lock:
            return dict(self._metadata.get(name, {}))

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._items

    def list_keys(self) -> list[str]:
        with self._lock:
            return list(self._items)

    def items(self) -> list[tuple[str, Check]]:
        with self._lock:
            return list(self._items.items())

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self.list_keys())

    def __repr__(self) -> str:
        return f"CheckRegistry({self._name!r}, count={self.count()})"


class CheckNamespace:
    """Read-only, live view of a registry.

    Checks are reachable as attributes (``checks.string``) or items
    (``checks["string"]``).
    """

    __slots__ = ("_registry",)

    def __init__(self, registry: CheckRegistry):
        object.__setattr__(self, "_registry", registry)

    def __getattr__(self, name: str) -> Check:
        check = self._registry.get_optional(name)
        if check is None:
            raise AttributeError(f"No check named '{name}'")
        return check

    def __getitem__(self, name: str) -> Check:
        check = self._registry.get_optional(name)
        if check is None:
            raise KeyError(name)
        return check

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Checks are read-only; use register() to add one")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Checks cannot be removed")

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def __iter__(self) -> Iterator[str]:
        return iter(self._registry)

    def __len__(self) -> int:
        return len(self._registry)

    def __dir__(self) -> list[str]:
        return self._registry.list_keys()

    def __repr__(self) -> str:
        return f"CheckNamespace({self._registry.list_keys()!r})"
