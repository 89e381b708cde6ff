"""Primitive checks installed into every engine.

All primitives are synchronous and raise ``ValidationError`` with a
message naming the expected kind.
"""

from __future__ import annotations

import cmath
import inspect
import math
from decimal import Decimal
from numbers import Number
from typing import Any

from scrutiny.exceptions import ValidationError

_SCALAR_TYPES = (str, bytes, bytearray, Number)


def _is_nan(value: Any) -> bool:
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, complex):
        return cmath.isnan(value)
    if isinstance(value, Decimal):
        return value.is_nan()
    return False


def is_array(value: Any) -> bool:
    """True for real ordered sequences, not mappings that merely look like one."""
    return isinstance(value, (list, tuple))


def is_object(value: Any) -> bool:
    """True for any non-null structure that is neither a scalar nor a plain function."""
    return (
        value is not None
        and not isinstance(value, _SCALAR_TYPES)
        and not inspect.isroutine(value)
    )


def undef(value: Any) -> None:
    if value is not None:
        raise ValidationError("Value is not undefined", code="ERR_INVALID_UNDEF")


def string(value: Any) -> None:
    if not isinstance(value, str):
        raise ValidationError("Value is not a string", code="ERR_INVALID_STRING")


def bool_(value: Any) -> None:
    if not isinstance(value, bool):
        raise ValidationError("Value is not a boolean", code="ERR_INVALID_BOOL")


def number(value: Any) -> None:
    # bool is an int subclass but not a number here
    if not isinstance(value, Number) or isinstance(value, bool) or _is_nan(value):
        raise ValidationError("Value is not a number", code="ERR_INVALID_NUMBER")


def func(value: Any) -> None:
    if not callable(value):
        raise ValidationError("Value is not a function", code="ERR_INVALID_FUNC")


def array(value: Any) -> None:
    if not is_array(value):
        raise ValidationError("Value is not an array", code="ERR_INVALID_ARRAY")


def object_(value: Any) -> None:
    if not is_object(value):
        raise ValidationError("Value is not an object", code="ERR_INVALID_OBJECT")


bool_.__name__ = "bool"
object_.__name__ = "object"

PRIMITIVES = {
    "undef": undef,
    "string": string,
    "bool": bool_,
    "number": number,
    "func": func,
    "array": array,
    "object": object_,
}
