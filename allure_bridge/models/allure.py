"""
Domain models for Allure TestOps payloads and the cached bearer credential.
"""

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict, Field


class _UpstreamModel(BaseModel):
    """Immutable value decoded from an Allure response, keyed by camelCase on the wire."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Launch(_UpstreamModel):
    """A recorded test-execution run."""

    id: int
    name: str = ""
    project_id: int = Field(0, alias="projectId")
    created_date: int = Field(..., alias="createdDate", description="Epoch milliseconds.")
    last_modified_date: int = Field(0, alias="lastModifiedDate", description="Epoch milliseconds.")

    @property
    def created_at(self) -> datetime:
        return datetime.fromtimestamp(self.created_date / 1000, tz=timezone.utc)


class PDFReport(_UpstreamModel):
    """Export job created by Allure for a launch; only ``id`` is used downstream."""

    id: int
    project_id: int = Field(0, alias="projectId")
    type: str = ""
    status: str = ""
    storage_key: str = Field("", alias="storageKey")
    name: str = ""
    created_date: int = Field(0, alias="createdDate")


class DownloadedReport(BaseModel):
    """Raw PDF bytes together with the file name presented to the user."""

    model_config = ConfigDict(frozen=True)

    content: bytes
    filename: str


class BearerToken(BaseModel):
    """Short-lived access token issued by the Allure UAA endpoint."""

    model_config = ConfigDict(frozen=True)

    access_token: str
    expires_at: datetime

    def is_usable(self, *, now: datetime, margin: timedelta) -> bool:
        return now < self.expires_at - margin


__all__ = ["BearerToken", "DownloadedReport", "Launch", "PDFReport"]
