"""
Request and response bodies for the PDF export routes.
"""

from pydantic import BaseModel, ConfigDict, Field


class PDFExportRequest(BaseModel):
    """Body accepted by ``POST /export/pdf/{id}``."""

    model_config = ConfigDict(populate_by_name=True)

    launch_id: int = Field(0, alias="launchId")
    name: str = ""
    with_page_numbers: bool = Field(True, alias="withPageNumbers")


class PDFExportResponse(BaseModel):
    report_id: int
    download_link: str


class DownloadLinkResponse(BaseModel):
    download_link: str


__all__ = ["DownloadLinkResponse", "PDFExportRequest", "PDFExportResponse"]
