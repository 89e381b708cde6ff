"""Factories that build new checks out of existing ones.

Every factory validates its arguments up front and returns a fresh check.
Checks that wrap other checks are coroutines, so the wrapped checks may be
synchronous or asynchronous. Elements, properties and shape keys are
checked one at a time, left to right, stopping at the first failure.

Failures always raise ``ValidationError`` with a fixed, generic message.
The inner error that caused it is kept in ``errors`` (and as
``__cause__``); which element or key failed is recorded in ``context``
but never in the message.

Example:
    ```python
    from scrutiny import Scrutiny, array_of, shape

    engine = Scrutiny()
    hero = shape({
        "name": engine.checks.string,
        "enemies": array_of(engine.checks.string),
    })
    await engine.validate({"name": "Flash", "enemies": ["Zoom"]}, hero)
    ```
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from scrutiny.exceptions import InvalidArgumentError, ValidationError
from scrutiny.primitives import array, object_
from scrutiny.runner import Check, check_name, run_check


def _require_check(check: Any, factory: str) -> None:
    if not callable(check):
        raise InvalidArgumentError(
            f"{factory}() expects a callable check, got {type(check).__name__}",
            context={"factory": factory},
        )


def _named(check: Check, name: str) -> Check:
    check.__name__ = name
    check.__qualname__ = name
    return check


def own_values(value: Any) -> list[Any]:
    """List the values an ``object_of`` check iterates over."""
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, (list, tuple)):
        return list(value)
    if hasattr(value, "__dict__"):
        return list(vars(value).values())
    return []


def get_property(value: Any, key: Any) -> Any:
    """Read a mapping item or attribute; missing keys read as None."""
    if isinstance(value, Mapping):
        return value.get(key)
    if not isinstance(key, str):
        return None
    return getattr(value, key, None)


def one_of(allowed: Iterable[Any]) -> Check:
    """Pass iff the value equals one of ``allowed`` with the same type.

    ``True`` does not match ``1`` and ``1`` does not match ``1.0``.
    """
    if isinstance(allowed, (str, bytes)) or not isinstance(allowed, Iterable):
        raise InvalidArgumentError(
            "one_of() expects a collection of allowed values",
            context={"factory": "one_of"},
        )
    candidates = tuple(allowed)

    def check(value: Any) -> None:
        for candidate in candidates:
            if type(candidate) is type(value) and candidate == value:
                return
        raise ValidationError(
            "Value is not one of the values",
            code="ERR_INVALID_ONE_OF",
            context={"allowed": list(candidates)},
        )

    return _named(check, f"one_of({len(candidates)} values)")


def array_of(inner: Check) -> Check:
    """Pass iff the value is an array and every element passes ``inner``."""
    _require_check(inner, "array_of")
    message = "Value is not an array of items passing the check"

    async def check(value: Any) -> None:
        try:
            array(value)
        except ValidationError as e:
            raise ValidationError(message, code="ERR_INVALID_ARRAY_OF", errors=[e]) from e

        for index, item in enumerate(value):
            try:
                await run_check(inner, item)
            except Exception as e:
                raise ValidationError(
                    message,
                    code="ERR_INVALID_ARRAY_OF",
                    context={"index": index},
                    errors=[e],
                ) from e

    return _named(check, f"array_of({check_name(inner)})")


def object_of(inner: Check) -> Check:
    """Pass iff the value is an object and every own value passes ``inner``."""
    _require_check(inner, "object_of")
    message = "Value is not an object of property values passing the check"

    async def check(value: Any) -> None:
        try:
            object_(value)
        except ValidationError as e:
            raise ValidationError(message, code="ERR_INVALID_OBJECT_OF", errors=[e]) from e

        for position, item in enumerate(own_values(value)):
            try:
                await run_check(inner, item)
            except Exception as e:
                raise ValidationError(
                    message,
                    code="ERR_INVALID_OBJECT_OF",
                    context={"position": position},
                    errors=[e],
                ) from e

    return _named(check, f"object_of({check_name(inner)})")


def one_of_type(checks: Iterable[Check]) -> Check:
    """Pass iff the value passes at least one of ``checks``, tried in order."""
    if not isinstance(checks, Iterable):
        raise InvalidArgumentError(
            "one_of_type() expects a collection of checks",
            context={"factory": "one_of_type"},
        )
    alternatives = tuple(checks)
    if not alternatives:
        raise InvalidArgumentError(
            "one_of_type() expects at least one check",
            context={"factory": "one_of_type"},
        )
    for alternative in alternatives:
        _require_check(alternative, "one_of_type")

    async def check(value: Any) -> None:
        errors: list[BaseException] = []
        for alternative in alternatives:
            try:
                await run_check(alternative, value)
            except Exception as e:
                errors.append(e)
            else:
                return
        raise ValidationError(
            "Value doesn't pass any of the checks",
            code="ERR_INVALID_ONE_OF_TYPE",
            errors=errors,
        )

    names = ", ".join(check_name(alternative) for alternative in alternatives)
    return _named(check, f"one_of_type({names})")


def shape(descriptor: Mapping[Any, Check]) -> Check:
    """Pass iff every described property passes its check.

    Properties not named in ``descriptor`` are ignored.
    """
    if not isinstance(descriptor, Mapping):
        raise InvalidArgumentError(
            f"shape() expects a mapping of property names to checks, got {type(descriptor).__name__}",
            context={"factory": "shape"},
        )
    fields = list(descriptor.items())
    for _, field_check in fields:
        _require_check(field_check, "shape")
    message = "Value doesn't match the shape"

    async def check(value: Any) -> None:
        try:
            object_(value)
        except ValidationError as e:
            raise ValidationError(message, code="ERR_INVALID_SHAPE", errors=[e]) from e

        for key, field_check in fields:
            try:
                await run_check(field_check, get_property(value, key))
            except Exception as e:
                raise ValidationError(
                    message,
                    code="ERR_INVALID_SHAPE",
                    context={"key": key},
                    errors=[e],
                ) from e

    return _named(check, f"shape({', '.join(str(key) for key, _ in fields)})")


__all__ = [
    "one_of",
    "array_of",
    "object_of",
    "one_of_type",
    "shape",
    "own_values",
    "get_property",
]
