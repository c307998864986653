"""
Report orchestration: the operations behind the HTTP routes.

Each call is bounded by a deadline; when it expires the in-flight Allure
request is cancelled and ``UpstreamTimeoutError`` is raised.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, TypeVar

from allure_bridge.clients import LaunchReportProvider, UpstreamTimeoutError
from allure_bridge.models import DownloadedReport, Launch, PDFReport
from allure_bridge.services.launch_selector import LaunchNotFoundError, select_next_launch

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AllureReportService:
    """Coordinates launch lookup and PDF export through a ``LaunchReportProvider``."""

    def __init__(
        self,
        provider: LaunchReportProvider,
        *,
        request_timeout: float = 10.0,
        download_timeout: float = 30.0,
    ) -> None:
        self._provider = provider
        self._request_timeout = request_timeout
        self._download_timeout = download_timeout

    async def _bounded(self, call: Awaitable[T], *, deadline: float, operation: str) -> T:
        try:
            return await asyncio.wait_for(call, timeout=deadline)
        except asyncio.TimeoutError as exc:
            logger.error("%s exceeded its %.1fs deadline", operation, deadline)
            raise UpstreamTimeoutError(f"{operation} timed out after {deadline:g}s") from exc

    async def get_next_launch(self, after: datetime) -> Launch:
        """Find the launch created closest to, and not before, ``after``."""
        try:
            launches = await self._bounded(
                self._provider.get_launches(timeout=self._request_timeout),
                deadline=self._request_timeout,
                operation="Launch listing",
            )
        except Exception:
            logger.exception("Failed to fetch launches")
            raise

        if not launches:
            logger.warning("No launches available to search")
            raise LaunchNotFoundError("No launches available to search.")

        try:
            launch = select_next_launch(launches, after)
        except LaunchNotFoundError:
            logger.warning("No launch found after %s", after.isoformat())
            raise

        logger.info("Closest launch found: %s (ID: %d)", launch.name, launch.id)
        return launch

    async def generate_pdf_report(self, launch_id: int, launch_name: str) -> PDFReport:
        try:
            report = await self._bounded(
                self._provider.generate_pdf_report(
                    launch_id, launch_name, timeout=self._request_timeout
                ),
                deadline=self._request_timeout,
                operation="PDF generation",
            )
        except Exception:
            logger.exception("Failed to generate PDF report for launch %d", launch_id)
            raise

        logger.info("PDF report generated: %s (ID: %d)", report.name, report.id)
        return report

    def get_pdf_download_link(self, report_id: str) -> str:
        return self._provider.get_pdf_download_link(report_id)

    async def download_pdf_report(self, report_id: str) -> DownloadedReport:
        try:
            report = await self._bounded(
                self._provider.download_pdf_report(report_id, timeout=self._download_timeout),
                deadline=self._download_timeout,
                operation="PDF download",
            )
        except Exception:
            logger.exception("Failed to download PDF report %s", report_id)
            raise

        logger.info("PDF report downloaded: %s", report.filename)
        return report


__all__ = ["AllureReportService"]
