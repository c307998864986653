"""
Factory functions to provide shared clients and services as FastAPI dependencies.
"""

from functools import lru_cache

from allure_bridge.clients import AllureClient
from allure_bridge.dependencies.config import get_app_settings
from allure_bridge.services import AllureReportService


@lru_cache()
def get_allure_client() -> AllureClient:
    """Create the process-wide Allure client; it owns the cached bearer token."""
    settings = get_app_settings()
    return AllureClient(settings.allure, timeout=settings.request_timeout_seconds)


def get_report_service() -> AllureReportService:
    """Build a report service around the shared Allure client."""
    settings = get_app_settings()
    return AllureReportService(
        get_allure_client(),
        request_timeout=settings.request_timeout_seconds,
        download_timeout=settings.download_timeout_seconds,
    )


__all__ = ["get_allure_client", "get_report_service"]
