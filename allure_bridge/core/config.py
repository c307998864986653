"""
Application configuration models and helpers.

Centralizes settings management so the FastAPI app, the upstream client and
the operational scripts share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigMissingError(RuntimeError):
    """Raised when mandatory configuration is absent; the service must not start."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(
            "Missing or invalid required configuration: " + ", ".join(missing)
        )


class AllureSettings(BaseSettings):
    """Connection details for the Allure TestOps instance."""

    base_url: str = Field(..., validation_alias="ALLURE_BASE_URL")
    api_url: str = Field(..., validation_alias="ALLURE_API_URL")
    api_token: SecretStr = Field(..., validation_alias="ALLURE_API_TOKEN")
    project_id: str = Field(..., validation_alias="ALLURE_PROJECT_ID")
    token_scope: str = Field("openid", validation_alias="ALLURE_TOKEN_SCOPE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    @field_validator("base_url", "api_url", "project_id")
    @classmethod
    def _require_value(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @field_validator("api_token")
    @classmethod
    def _require_token(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    server_port: int = Field(8080, validation_alias="SERVER_PORT")
    request_timeout_seconds: float = Field(
        10.0,
        validation_alias="REQUEST_TIMEOUT_SECONDS",
        description="Deadline for metadata calls (launch list, report generation).",
    )
    download_timeout_seconds: float = Field(
        30.0,
        validation_alias="DOWNLOAD_TIMEOUT_SECONDS",
        description="Deadline for streaming a generated PDF from Allure.",
    )
    cors_allow_origins: str = Field(
        "*",
        validation_alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated list of origins allowed by CORS.",
    )
    allure: AllureSettings = Field(default_factory=AllureSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def cors_origins(self) -> list[str]:
        """Origins allowed by the CORS middleware."""
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]


def load_settings(env_file: str | Path | None = ".env") -> AppSettings:
    """Build settings, translating validation failures into ``ConfigMissingError``."""
    try:
        return AppSettings(_env_file=env_file, allure=AllureSettings(_env_file=env_file))
    except ValidationError as exc:
        missing = []
        for error in exc.errors():
            location = error.get("loc", ())
            missing.append(str(location[-1]) if location else "unknown")
        raise ConfigMissingError(sorted(set(missing))) from exc


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return load_settings()


__all__ = [
    "AllureSettings",
    "AppSettings",
    "ConfigMissingError",
    "get_settings",
    "load_settings",
]
