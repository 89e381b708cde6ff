"""Process-wide asynchronous completion primitive.

A check may hand back a pending result instead of returning or raising
directly. The active ``AsyncPrimitive`` decides what counts as pending and
how to wait for it. The default ``AsyncioPrimitive`` understands:

- awaitables (coroutines, ``asyncio.Future``, objects with ``__await__``)
- ``concurrent.futures.Future``
- "thenables": objects exposing ``then(on_fulfilled, on_rejected)``

Hosts running on another event loop, or using their own promise-like
objects, can install a different primitive once at start-up:

Example:
    ```python
    from scrutiny.settings import set_async_primitive

    set_async_primitive(MyLoopPrimitive())
    ```

The primitive is read on every check invocation, so a primitive installed
after engines were created still applies to later ``validate`` calls.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import inspect
import logging
import threading
from typing import Any, Protocol, runtime_checkable

from scrutiny.exceptions import InvalidArgumentError, ValidationError

logger = logging.getLogger(__name__)


@runtime_checkable
class AsyncPrimitive(Protocol):
    """Detects and awaits pending check results."""

    def is_pending(self, result: Any) -> bool:
        """Return True if ``result`` must be awaited to learn the outcome."""
        ...

    async def wait(self, result: Any) -> Any:
        """Wait for a pending result, raising its rejection reason on failure."""
        ...


def is_thenable(result: Any) -> bool:
    """Check whether an object exposes a callable ``then`` attribute."""
    return callable(getattr(result, "then", None))


class AsyncioPrimitive:
    """Default primitive built on the running asyncio event loop."""

    def is_pending(self, result: Any) -> bool:
        return (
            inspect.isawaitable(result)
            or isinstance(result, concurrent.futures.Future)
            or is_thenable(result)
        )

    async def wait(self, result: Any) -> Any:
        if inspect.isawaitable(result):
            return await result
        if isinstance(result, concurrent.futures.Future):
            return await asyncio.wrap_future(result)
        return await self._wait_thenable(result)

    async def _wait_thenable(self, thenable: Any) -> Any:
        """Bridge a ``then``-style object into an asyncio future.

        Callbacks may fire synchronously inside ``then`` or later from any
        thread; only the first settlement counts.
        """
        loop = asyncio.get_running_loop()
        future = loop.create_future()

        def _fulfill(value: Any = None) -> None:
            loop.call_soon_threadsafe(_settle, True, value)

        def _reject(reason: Any = None) -> None:
            loop.call_soon_threadsafe(_settle, False, reason)

        def _settle(fulfilled: bool, payload: Any) -> None:
            if future.done():
                return
            if fulfilled:
                future.set_result(payload)
            elif isinstance(payload, BaseException):
                future.set_exception(payload)
            else:
                future.set_exception(
                    ValidationError(str(payload), context={"reason": payload})
                )

        thenable.then(_fulfill, _reject)
        return await future

    def __repr__(self) -> str:
        return "AsyncioPrimitive()"


_DEFAULT_PRIMITIVE = AsyncioPrimitive()
_primitive: AsyncPrimitive = _DEFAULT_PRIMITIVE
_lock = threading.Lock()


def set_async_primitive(primitive: AsyncPrimitive) -> None:
    """Install the process-wide async primitive.

    Setting the primitive that is already installed is a no-op.

    Args:
        primitive: Object implementing ``is_pending`` and ``wait``

    Raises:
        InvalidArgumentError: If ``primitive`` does not implement the protocol
    """
    global _primitive

    if not isinstance(primitive, AsyncPrimitive):
        raise InvalidArgumentError(
            f"Async primitive must implement is_pending() and wait(), got {type(primitive).__name__}",
            context={"primitive": repr(primitive)},
        )

    with _lock:
        if primitive is _primitive:
            logger.debug("Async primitive %r already installed", primitive)
            return
        logger.info("Installing async primitive %r (was %r)", primitive, _primitive)
        _primitive = primitive


def get_async_primitive() -> AsyncPrimitive:
    """Return the currently installed async primitive."""
    with _lock:
        return _primitive


def reset_async_primitive() -> None:
    """Restore the default ``AsyncioPrimitive``."""
    set_async_primitive(_DEFAULT_PRIMITIVE)


__all__ = [
    "AsyncPrimitive",
    "AsyncioPrimitive",
    "is_thenable",
    "set_async_primitive",
    "get_async_primitive",
    "reset_async_primitive",
]
