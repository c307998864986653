"""Expose dependency helpers for FastAPI routers."""

from .clients import get_allure_client, get_report_service
from .config import get_app_settings

__all__ = [
    "get_allure_client",
    "get_app_settings",
    "get_report_service",
]
