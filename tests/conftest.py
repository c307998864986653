"""Pytest configuration shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from allure_bridge.core.config import AllureSettings


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def allure_settings() -> AllureSettings:
    return AllureSettings(
        ALLURE_BASE_URL="https://allure.example.com",
        ALLURE_API_URL="/api/rs/",
        ALLURE_API_TOKEN="long-lived-token",
        ALLURE_PROJECT_ID="1661",
    )
