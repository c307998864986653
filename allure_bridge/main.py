"""
FastAPI application entrypoint for the Allure report bridge.
"""

from __future__ import annotations

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from allure_bridge.api.routes import router as api_router
from allure_bridge.core.config import get_settings
from allure_bridge.core.logging import configure_logging


async def _malformed_request_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=HTTPStatus.BAD_REQUEST,
        content={"detail": "Malformed request body or parameters."},
    )


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Allure Report Bridge",
        version="0.1.0",
        description="REST API for locating Allure launches and exporting PDF reports.",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Accept"],
    )
    app.add_exception_handler(RequestValidationError, _malformed_request_handler)
    app.include_router(api_router)
    return app


app = create_app()

__all__ = ["app", "create_app"]
