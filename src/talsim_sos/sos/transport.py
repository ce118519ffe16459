"""
HTTP transport for SOS requests.

Requests are sent one at a time with POST. A response with any status code is
returned to the caller, which classifies it by body; only failures to complete
the exchange raise :class:`TransportError`. No retries are attempted.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Protocol

import requests

from .exceptions import TransportError

logger = logging.getLogger(__name__)

DEFAULT_ACCEPT_LANGUAGE = "en-US,en;q=0.5"


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    def post(self, url: str, body: str, headers: Dict[str, str]) -> TransportResponse:
        ...


def build_request_headers(token: str, accept_language: str = DEFAULT_ACCEPT_LANGUAGE) -> Dict[str, str]:
    """Headers sent with every request."""
    return {
        "Accept-Language": accept_language,
        "Content-Type": "application/xml",
        "Authorization": token,
    }


class SOSTransport:
    """``requests`` based transport; one session per instance."""

    def __init__(self, timeout: float = 60.0, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self._session = session or requests.Session()

    def post(self, url: str, body: str, headers: Dict[str, str]) -> TransportResponse:
        try:
            response = self._session.post(
                url,
                data=body.encode("utf-8"),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"POST to {url} failed: {exc}", url=url) from exc

        if response.encoding is None:
            response.encoding = "utf-8"
        logger.debug("POST %s -> HTTP %s", url, response.status_code)
        return TransportResponse(status_code=response.status_code, body=response.text)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> 'SOSTransport':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
