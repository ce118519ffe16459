# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Custom exception hierarchy for talsim-sos.

This module defines the base exception and the cross-cutting error types used
by the configuration, file handling and CLI layers. Conversion and submission
errors live in :mod:`talsim_sos.sos.exceptions` and inherit from
:class:`TalsimSosError`.
"""

import logging
from contextlib import contextmanager
from typing import Optional, TypeVar


class TalsimSosError(Exception):
    """
    Base exception for all talsim-sos errors.

    All custom exceptions should inherit from this class so that callers can
    catch every converter failure with a single except clause.
    """
    pass


class ConfigurationError(TalsimSosError):
    """
    Configuration-related errors.

    Raised when:
    - Required configuration keys are missing
    - Configuration values are invalid
    - Configuration, template or token files cannot be loaded or parsed
    """
    pass


class ValidationError(TalsimSosError):
    """
    Input validation failures.

    Raised when:
    - A precondition checked with :func:`require` does not hold
    - Command-line values fail validation
    """
    pass


class FileOperationError(TalsimSosError):
    """
    File I/O operation failures.

    Raised when:
    - Required file not found
    - File cannot be read or written
    - Directory creation fails
    """
    pass


# =============================================================================
# Validation Helpers
# =============================================================================

T = TypeVar('T')


def require(condition: bool, message: str, error_type: type = None) -> None:
    """
    Validate a condition, raising an exception if it fails.

    Args:
        condition: The condition that must be True
        message: Error message if condition is False
        error_type: Exception type to raise (default: ValidationError)

    Raises:
        ValidationError (or specified error_type) if condition is False

    Example:
        >>> require(len(series) > 0, "Document contains no series")
    """
    if error_type is None:
        error_type = ValidationError
    if not condition:
        raise error_type(message)


def require_not_none(value: Optional[T], name: str, error_type: type = None) -> T:
    """
    Validate that a value is not None, returning it if valid.

    Args:
        value: The value to check
        name: Name of the value (for error message)
        error_type: Exception type to raise (default: ValidationError)

    Returns:
        The value if it is not None

    Example:
        >>> sos_url = require_not_none(config.sos_url, "SOS_URL", ConfigurationError)
    """
    if error_type is None:
        error_type = ValidationError
    if value is None:
        raise error_type(f"{name} must not be None")
    return value


@contextmanager
def talsim_sos_error_handler(
    operation: str,
    logger: Optional[logging.Logger] = None,
    reraise: bool = True,
    error_type: type = TalsimSosError
):
    """
    Context manager for standardized error handling.

    Args:
        operation: Description of the operation being performed (for logging)
        logger: Logger instance for error messages. If None, errors are not logged.
        reraise: Whether to re-raise the exception after handling (default: True)
        error_type: Exception type generic exceptions are converted to

    Example:
        >>> with talsim_sos_error_handler("loading templates", logger, error_type=ConfigurationError):
        ...     template = path.read_text()
    """
    try:
        yield
    except TalsimSosError:
        if logger:
            logger.error(f"Error during {operation}", exc_info=True)
        if reraise:
            raise
    except Exception as e:
        if logger:
            logger.error(f"Error during {operation}: {e}", exc_info=True)
        if reraise:
            raise error_type(f"Failed during {operation}: {e}") from e


__all__ = [
    'TalsimSosError',
    'ConfigurationError',
    'ValidationError',
    'FileOperationError',
    'require',
    'require_not_none',
    'talsim_sos_error_handler',
]
