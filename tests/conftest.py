"""Pytest configuration and fixtures for scrutiny tests."""

import asyncio

import pytest

from scrutiny import Scrutiny, ValidationError
from scrutiny.settings import reset_async_primitive


class CallRecorder:
    """Check that records every value it sees and optionally fails."""

    def __init__(self, error: BaseException | None = None):
        self.calls = []
        self.error = error

    @property
    def call_count(self):
        return len(self.calls)

    def __call__(self, value):
        self.calls.append(value)
        if self.error is not None:
            raise self.error


class Thenable:
    """Minimal promise-like object with a ``then(on_fulfilled, on_rejected)`` method."""

    def __init__(self, value=None, reason=None, rejected=False):
        self.value = value
        self.reason = reason
        self.rejected = rejected

    def then(self, on_fulfilled, on_rejected):
        if self.rejected:
            on_rejected(self.reason)
        else:
            on_fulfilled(self.value)


@pytest.fixture(autouse=True)
def default_async_primitive():
    """Restore the default async primitive around every test."""
    reset_async_primitive()
    yield
    reset_async_primitive()


@pytest.fixture
def engine():
    """Fresh engine with only the primitive checks registered."""
    return Scrutiny()


@pytest.fixture
def recorder():
    """Factory for call-counting checks."""
    return CallRecorder


@pytest.fixture
def thenable():
    """Factory for promise-like results."""
    return Thenable


@pytest.fixture
def delayed():
    """Factory for async checks that settle after a short delay."""

    def make(error=None, delay=0.005):
        async def check(value):
            await asyncio.sleep(delay)
            if error is not None:
                raise error
            return value

        return check

    return make


@pytest.fixture
def failing():
    """Factory for synchronous checks raising a ValidationError."""

    def make(message):
        def check(value):
            raise ValidationError(message)

        return check

    return make
