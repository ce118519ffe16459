# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Result type for validation outcomes.

Validators return a :class:`Result` instead of raising, so that callers can
decide whether a failed check is fatal. The SOS response checks and the CLI
input validators use it; the submission orchestrator turns an error result
into an exception.

Example:
    >>> result = check_sensor_response(body)
    >>> if result.is_err:
    ...     print(result.format_errors())
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, Tuple, TypeVar

T = TypeVar('T')


@dataclass(frozen=True)
class ValidationError:
    """A single validation failure.

    Attributes:
        field: Name of the checked item (e.g. ``"sos_url"``, ``"response"``)
        message: Human readable description of the failure
        value: Offending value, if useful for diagnostics
        suggestion: Optional hint on how to fix the problem
    """
    field: str
    message: str
    value: Any = None
    suggestion: Optional[str] = None

    def __str__(self) -> str:
        text = f"{self.field}: {self.message}"
        if self.value is not None:
            text += f" (got: {self.value!r})"
        if self.suggestion:
            text += f". {self.suggestion}"
        return text


@dataclass(frozen=True)
class Result(Generic[T]):
    """Success value or a tuple of validation errors."""
    value: Optional[T] = None
    errors: Tuple[ValidationError, ...] = ()

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(value=value, errors=())

    @classmethod
    def err(cls, *errors: ValidationError) -> "Result[T]":
        return cls(value=None, errors=tuple(errors))

    @property
    def is_ok(self) -> bool:
        return not self.errors

    @property
    def is_err(self) -> bool:
        return bool(self.errors)

    def unwrap(self) -> T:
        """Return the value, raising ValueError on an error result."""
        if self.errors:
            raise ValueError(f"Unwrap called on error result: {self.format_errors()}")
        if self.value is None:
            raise ValueError("Unwrap called on result whose value is None")
        return self.value

    def first_error(self) -> Optional[ValidationError]:
        return self.errors[0] if self.errors else None

    def format_errors(self, prefix: str = "") -> str:
        return "\n".join(f"{prefix}{error}" for error in self.errors)


__all__ = ['Result', 'ValidationError']
