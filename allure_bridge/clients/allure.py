"""
Allure TestOps REST client.

Wraps the launch listing and PDF export endpoints. Every network call first
makes sure a valid bearer token is cached, then issues exactly one request.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx
from pydantic import TypeAdapter, ValidationError

from allure_bridge.clients.allure_auth import DEFAULT_TIMEOUT_SECONDS, BearerTokenCache
from allure_bridge.clients.errors import (
    UpstreamDecodeError,
    UpstreamStatusError,
    UpstreamTimeoutError,
    UpstreamTransportError,
)
from allure_bridge.core.config import AllureSettings
from allure_bridge.models import DownloadedReport, Launch, PDFReport

logger = logging.getLogger(__name__)

LAUNCH_PAGE = 0
LAUNCH_PAGE_SIZE = 100

_LAUNCH_LIST = TypeAdapter(list[Launch])


class LaunchReportProvider(Protocol):
    """Capability consumed by the report service; implemented by ``AllureClient``."""

    async def get_launches(self, *, timeout: float | None = None) -> list[Launch]:
        ...

    async def generate_pdf_report(
        self, launch_id: int, launch_name: str, *, timeout: float | None = None
    ) -> PDFReport:
        ...

    def get_pdf_download_link(self, report_id: str) -> str:
        ...

    async def download_pdf_report(
        self, report_id: str, *, timeout: float | None = None
    ) -> DownloadedReport:
        ...


class AllureClient:
    """Thin async wrapper over the Allure TestOps API."""

    def __init__(
        self,
        settings: AllureSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        token_cache: BearerTokenCache | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._timeout = timeout
        self._tokens = token_cache or BearerTokenCache(
            settings, transport=transport, timeout=timeout
        )

    def _url(self, path: str) -> str:
        return f"{self._settings.base_url}{self._settings.api_url}{path}"

    async def _request(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        timeout: float | None,
        **kwargs: Any,
    ) -> httpx.Response:
        token = await self._tokens.ensure_valid(timeout=timeout)
        headers = {"Authorization": f"Bearer {token}", "Accept": "application/json"}
        headers.update(kwargs.pop("headers", {}))

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout if timeout is None else timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, url, headers=headers, **kwargs)
        except httpx.TimeoutException as exc:
            logger.error("Allure %s timed out", operation)
            raise UpstreamTimeoutError(f"Allure {operation} timed out") from exc
        except httpx.HTTPError as exc:
            logger.error("Allure %s failed: %s", operation, exc.__class__.__name__)
            raise UpstreamTransportError(f"Allure {operation} failed: {exc}") from exc

        logger.info(
            "Allure %s answered with status %d (%d bytes)",
            operation,
            response.status_code,
            len(response.content),
        )
        if not response.is_success:
            raise UpstreamStatusError(response.status_code, operation=operation)
        return response

    async def get_launches(self, *, timeout: float | None = None) -> list[Launch]:
        """Return the first page of launches for the configured project, in upstream order."""
        response = await self._request(
            "GET",
            self._url("launch"),
            operation="launch listing",
            timeout=timeout,
            params={
                "projectId": self._settings.project_id,
                "page": LAUNCH_PAGE,
                "size": LAUNCH_PAGE_SIZE,
            },
        )
        try:
            payload = response.json()
            return _LAUNCH_LIST.validate_python(payload["content"])
        except (ValueError, KeyError, TypeError, ValidationError) as exc:
            raise UpstreamDecodeError(f"Malformed launch list from Allure: {exc}") from exc

    async def generate_pdf_report(
        self, launch_id: int, launch_name: str, *, timeout: float | None = None
    ) -> PDFReport:
        """Ask Allure to render a PDF for the launch, with page numbers."""
        logger.info("Requesting PDF export for launch %d", launch_id)
        response = await self._request(
            "POST",
            self._url("export/launch/pdf"),
            operation="PDF generation",
            timeout=timeout,
            json={"launchId": launch_id, "name": launch_name, "withPageNumbers": True},
        )
        try:
            report = PDFReport.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise UpstreamDecodeError(f"Malformed PDF export response from Allure: {exc}") from exc

        logger.info("PDF export %d created for launch %d (%s)", report.id, launch_id, report.status)
        return report

    def get_pdf_download_link(self, report_id: str) -> str:
        return self._url(f"export/download/{report_id}")

    async def download_pdf_report(
        self, report_id: str, *, timeout: float | None = None
    ) -> DownloadedReport:
        """Fetch the rendered PDF bytes for an export job."""
        response = await self._request(
            "GET",
            self.get_pdf_download_link(report_id),
            operation="PDF download",
            timeout=timeout,
            headers={"Accept": "application/pdf"},
        )
        return DownloadedReport(
            content=response.content,
            filename=f"allure-report-{report_id}.pdf",
        )


__all__ = ["AllureClient", "LaunchReportProvider"]
