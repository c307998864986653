"""
FastAPI routes for the Allure report bridge.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from allure_bridge.dependencies import get_report_service
from allure_bridge.models import Launch
from allure_bridge.schemas import DownloadLinkResponse, PDFExportRequest, PDFExportResponse
from allure_bridge.services import AllureReportService

router = APIRouter()
logger = logging.getLogger(__name__)

ReportService = Annotated[AllureReportService, Depends(get_report_service)]

_RFC3339_EXAMPLE = "2025-01-30T22:00:38.625+03:00"
_RFC3339_PATTERN = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(?P<fraction>\d+))?(?P<offset>Z|[+-]\d{2}:\d{2})$",
    re.IGNORECASE,
)


def _parse_after(raw: str) -> datetime:
    # An unescaped "+" in the offset arrives as a space after URL decoding.
    corrected = raw.strip().replace(" ", "+")
    match = _RFC3339_PATTERN.match(corrected)
    if match is None:
        raise ValueError(corrected)

    fraction = match.group("fraction")
    offset = match.group("offset").upper()
    candidate = match.group("base")
    if fraction:
        candidate += "." + fraction[:6].ljust(6, "0")
    candidate += "+00:00" if offset == "Z" else offset
    return datetime.fromisoformat(candidate)


@router.get("/", status_code=HTTPStatus.OK)
async def root() -> dict:
    """Liveness endpoint."""
    return {"message": "Allure-service is running"}


@router.get("/next-launch", response_model=Launch, status_code=HTTPStatus.OK)
async def get_next_launch(
    service: ReportService,
    after: str | None = Query(
        default=None, description="RFC3339 timestamp; the launch must be created at or after it."
    ),
) -> Launch:
    """Return the launch created closest to, and not before, ``after``."""
    if not after:
        logger.warning("Parameter 'after' is missing")
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail="The 'after' parameter is required (RFC3339 format).",
        )

    try:
        after_date = _parse_after(after)
    except ValueError:
        logger.warning("Could not parse 'after' value %r", after)
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail=f"Invalid date format, use RFC3339 (for example {_RFC3339_EXAMPLE}).",
        ) from None

    try:
        return await service.get_next_launch(after_date)
    except Exception as exc:  # pylint: disable=broad-except
        logger.error("Next launch lookup failed: %s", exc)
        raise HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc


@router.post("/export/pdf/{launch_ref}", response_model=PDFExportResponse)
async def generate_pdf_report(
    launch_ref: str,
    payload: PDFExportRequest,
    service: ReportService,
) -> PDFExportResponse:
    """Trigger PDF generation for a launch and return the download link."""
    if payload.launch_id == 0:
        logger.warning("launchId is missing")
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST, detail="The launch ID is required."
        )
    if not payload.name:
        logger.warning("Launch name is missing")
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST, detail="The launch name is required."
        )

    try:
        report = await service.generate_pdf_report(payload.launch_id, payload.name)
    except Exception as exc:  # pylint: disable=broad-except
        logger.error("PDF generation failed for launch %d: %s", payload.launch_id, exc)
        raise HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail="Server error while generating the report.",
        ) from exc

    return PDFExportResponse(
        report_id=report.id,
        download_link=service.get_pdf_download_link(str(report.id)),
    )


@router.get("/export/download/{report_id}", response_model=DownloadLinkResponse)
async def get_pdf_download_link(report_id: str, service: ReportService) -> DownloadLinkResponse:
    return DownloadLinkResponse(download_link=service.get_pdf_download_link(report_id))


@router.get("/export/pdf/download/{report_id}")
async def download_pdf_report(report_id: str, service: ReportService) -> Response:
    """Stream the generated PDF back as an attachment."""
    try:
        report = await service.download_pdf_report(report_id)
    except Exception as exc:  # pylint: disable=broad-except
        logger.error("PDF download failed for report %s: %s", report_id, exc)
        raise HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail="Error while downloading the PDF report.",
        ) from exc

    return Response(
        content=report.content,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={report.filename}"},
    )


__all__ = ["router"]
