"""Domain models shared by the client, services and routes."""

from .allure import BearerToken, DownloadedReport, Launch, PDFReport

__all__ = ["BearerToken", "DownloadedReport", "Launch", "PDFReport"]
