"""Uniform execution of checks.

Checks come in three flavours: they return, they raise, or they hand back
a pending result. ``run_check`` collapses all three into a single awaitable
contract, and ``run_checks`` drives an ordered sequence of checks with
first-failure short-circuit.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterable
from typing import Any

from scrutiny.exceptions import InvalidArgumentError
from scrutiny.settings import get_async_primitive

logger = logging.getLogger(__name__)

Check = Callable[[Any], Any]


def check_name(check: Any) -> str:
    """Best-effort display name for a check."""
    return getattr(check, "__name__", None) or repr(check)


async def run_check(check: Check, value: Any) -> None:
    """Run one check against a value.

    A synchronous raise propagates as-is. Native awaitables (coroutines,
    asyncio futures) are always awaited directly; other pending results
    are awaited through the active async primitive. Rejections propagate
    as-is and any other return value counts as a pass.
    """
    result = check(value)
    if inspect.isawaitable(result):
        await result
        return
    primitive = get_async_primitive()
    if primitive.is_pending(result):
        await primitive.wait(result)


async def run_checks(value: Any, checks: Iterable[Check]) -> Any:
    """Run checks in order, stopping at the first failure.

    Args:
        value: Value under test
        checks: Ordered checks; at least one is required

    Returns:
        ``value`` unchanged when every check passes

    Raises:
        InvalidArgumentError: If no checks are given or one is not callable
        Exception: Whatever the first failing check raised
    """
    checks = list(checks)
    if not checks:
        raise InvalidArgumentError("At least one check is required")

    for position, check in enumerate(checks):
        if not callable(check):
            raise InvalidArgumentError(
                f"Check at position {position} is not callable: {type(check).__name__}",
                context={"position": position},
            )

    for position, check in enumerate(checks):
        try:
            await run_check(check, value)
        except Exception as e:
            logger.debug(
                "Check %s failed at position %d: %s",
                check_name(check), position, e,
            )
            raise

    return value
