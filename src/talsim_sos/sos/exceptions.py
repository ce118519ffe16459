"""
SOS converter exceptions.

Provides specific exception types for reading TALSIM result documents and
submitting them to a transactional SOS. All exceptions inherit from
TalsimSosError for consistent error handling.
"""

from typing import Any, Dict, Optional

from talsim_sos.core.exceptions import TalsimSosError

# Context keys shown in the exception message; request and response bodies
# stay available on ``context`` only.
_SUMMARY_KEYS = ('operation', 'series_index', 'event_index', 'status_code')


class SOSConversionError(TalsimSosError):
    """Base exception for all conversion and submission errors.

    Carries a ``context`` dict that the submission orchestrator fills with the
    failing step (series/event index, rendered request, response body).
    """

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = {k: v for k, v in context.items() if v is not None}

    def add_context(self, **context: Any) -> 'SOSConversionError':
        """Attach context without overwriting keys that are already set."""
        for key, value in context.items():
            if value is not None:
                self.context.setdefault(key, value)
        return self

    def __str__(self) -> str:
        summary = ", ".join(
            f"{key}={self.context[key]}" for key in _SUMMARY_KEYS if key in self.context
        )
        return f"{self.message} [{summary}]" if summary else self.message


class NotFoundError(SOSConversionError):
    """Raised when a required element or attribute is absent from the document."""
    pass


class MalformedDocumentError(SOSConversionError):
    """Raised when the document is not XML, has no series, or a header is incomplete."""
    pass


class MalformedTimestampError(SOSConversionError):
    """Raised when an event date/time or the document time zone cannot be parsed."""
    pass


class PlaceholderCollisionError(SOSConversionError):
    """Raised when one placeholder is a proper substring of another in the same map."""
    pass


class InsertFailure(SOSConversionError):
    """Raised when the SOS response lacks the expected success marker."""

    def __init__(self, message: str, response_body: Optional[str] = None, **context: Any) -> None:
        super().__init__(message, response_body=response_body, **context)
        self.response_body = response_body


class TransportError(SOSConversionError):
    """Raised when the HTTP call could not complete (connection, timeout, protocol)."""
    pass
