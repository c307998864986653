"""
Failure conditions raised by the Allure client.

Callers map these to transport-level responses; the client itself has no
notion of HTTP status codes of its own.
"""

from __future__ import annotations


class AllureClientError(Exception):
    """Base class for every failure surfaced by the Allure client."""


class TokenRefreshError(AllureClientError):
    """Raised when exchanging the API token for a bearer token fails."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        detail = message if status_code is None else f"{message} (status {status_code})"
        super().__init__(detail)


class UpstreamStatusError(AllureClientError):
    """Raised when Allure answers with a non-2xx status."""

    def __init__(self, status_code: int, *, operation: str) -> None:
        self.status_code = status_code
        self.operation = operation
        super().__init__(f"Allure API error during {operation}: status {status_code}")


class UpstreamDecodeError(AllureClientError):
    """Raised when an Allure response body cannot be decoded."""


class UpstreamTimeoutError(AllureClientError):
    """Raised when an upstream call exceeds its deadline."""


class UpstreamTransportError(AllureClientError):
    """Raised when the request could not be delivered to Allure at all."""


__all__ = [
    "AllureClientError",
    "TokenRefreshError",
    "UpstreamDecodeError",
    "UpstreamStatusError",
    "UpstreamTimeoutError",
    "UpstreamTransportError",
]
