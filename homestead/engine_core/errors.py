"""
Errors and Outcomes - Failure kinds raised or returned by the engine.

Recoverable failures (a colony that cannot pay, a colonist too sick to work)
are returned inside an Outcome so the caller decides what to do.
Programmer/data errors (an unknown resource type) are raised.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class ColonyError(Exception):
    """Base class for all engine errors."""

    error_code = "COLONY_ERROR"


class InsufficientResource(ColonyError):
    """A ledger operation would leave a resource below zero."""

    error_code = "INSUFFICIENT_RESOURCE"

    def __init__(self, resource: str, available: int = 0, requested: int = 0):
        self.resource = resource
        self.available = available
        self.requested = requested
        super().__init__(f"Insufficient {resource}")


class UnknownResourceType(ColonyError, KeyError):
    """A resource type was read that the ledger does not hold."""

    error_code = "UNKNOWN_RESOURCE_TYPE"

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"Unknown resource type: {resource}")

    def __str__(self) -> str:
        return self.args[0]


class ColonistUnwell(ColonyError):
    """Work was attempted below the health threshold."""

    error_code = "COLONIST_UNWELL"

    def __init__(self, name: str, health: int):
        self.name = name
        self.health = health
        super().__init__(f"{name} is too sick to work")


class ColonistDeceased(ColonyError):
    """Damage brought a colonist's health to zero."""

    error_code = "COLONIST_DECEASED"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} has died")


class SaveFormatError(ColonyError):
    """A save file could not be parsed."""

    error_code = "SAVE_FORMAT"

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class ConfigError(ColonyError):
    """Configuration file holds an invalid value."""

    error_code = "CONFIG_ERROR"


@dataclass
class Outcome(Generic[T]):
    """
    Result of an operation that may fail without raising.

    Either `value` is set (success) or `error` is set (failure).
    """
    success: bool
    value: T | None = None
    error: ColonyError | None = None

    @classmethod
    def ok(cls, value: Any = None) -> Outcome:
        """Create a success outcome."""
        return cls(success=True, value=value)

    @classmethod
    def failure(cls, error: ColonyError) -> Outcome:
        """Create a failure outcome."""
        return cls(success=False, error=error)

    @property
    def error_code(self) -> str | None:
        return self.error.error_code if self.error else None

    def unwrap(self) -> T | None:
        """Return the value, raising the carried error on failure."""
        if not self.success:
            raise self.error
        return self.value

    def __bool__(self) -> bool:
        return self.success
