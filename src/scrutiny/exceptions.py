"""Exception hierarchy for scrutiny.

Every error raised by the library itself derives from ``ScrutinyError``,
which carries an optional context dictionary with structured details
about the failure.

``ValidationError`` is the canonical failure signal of primitive and
composite checks. User-authored checks may raise it or any other
exception; the engine propagates whatever the failing check raised
without rewrapping it.

Example:
    ```python
    from scrutiny.exceptions import ValidationError

    def even(value):
        if value % 2:
            raise ValidationError("Value is not even", code="ERR_NOT_EVEN")

    try:
        await engine.validate(3, even)
    except ValidationError as e:
        print(e.code)
        # 'ERR_NOT_EVEN'
    ```
"""

from __future__ import annotations

from typing import Any


class ScrutinyError(Exception):
    """Base exception for all scrutiny errors.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context
        details: Alternative to context (takes precedence if both given)
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = details or context or {}
        self.details = self.context


class ValidationError(ScrutinyError):
    """Raised when a value does not satisfy a check.

    Composite checks discard the errors of their inner checks in favour of
    their own generic message; the discarded errors are kept in ``errors``
    for diagnostics.

    Attributes:
        code: Optional machine-readable error code (e.g. ``ERR_INVALID_STRING``)
        errors: Inner errors swallowed by a composite check

    Example:
        ```python
        raise ValidationError("Value is not a string", code="ERR_INVALID_STRING")
        ```
    """

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        context: dict[str, Any] | None = None,
        errors: list[BaseException] | None = None,
    ):
        super().__init__(message, context=context)
        self.code = code
        self.errors = list(errors or [])

    def __repr__(self) -> str:
        return f"ValidationError({self.message!r}, code={self.code!r})"


class InvalidArgumentError(ScrutinyError, TypeError):
    """Raised when the library is called with malformed arguments.

    Covers empty or non-identifier check names, non-callable checks,
    malformed composite factory arguments and invalid async primitives.
    """

    pass


class DuplicateCheckError(ScrutinyError):
    """Raised when a check name is registered twice on one engine."""

    def __init__(self, name: str, registry: str):
        super().__init__(
            f"Check '{name}' already exists in {registry}",
            context={"name": name, "registry": registry},
        )


class NotFoundError(ScrutinyError, KeyError):
    """Raised when a check name is not registered."""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message


class ConfigurationError(ScrutinyError):
    """Raised when an engine configuration is invalid or cannot be loaded."""

    pass


__all__ = [
    "ScrutinyError",
    "ValidationError",
    "InvalidArgumentError",
    "DuplicateCheckError",
    "NotFoundError",
    "ConfigurationError",
]
