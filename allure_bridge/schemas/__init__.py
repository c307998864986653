"""Pydantic schemas exposed via the API surface."""

from .export import DownloadLinkResponse, PDFExportRequest, PDFExportResponse

__all__ = ["DownloadLinkResponse", "PDFExportRequest", "PDFExportResponse"]
