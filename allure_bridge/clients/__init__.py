"""Expose constructed client wrappers."""

from .allure import AllureClient, LaunchReportProvider
from .allure_auth import BearerTokenCache
from .errors import (
    AllureClientError,
    TokenRefreshError,
    UpstreamDecodeError,
    UpstreamStatusError,
    UpstreamTimeoutError,
    UpstreamTransportError,
)

__all__ = [
    "AllureClient",
    "AllureClientError",
    "BearerTokenCache",
    "LaunchReportProvider",
    "TokenRefreshError",
    "UpstreamDecodeError",
    "UpstreamStatusError",
    "UpstreamTimeoutError",
    "UpstreamTransportError",
]
