"""
Allure UAA token exchange.

The long-lived API token from configuration is traded for a short-lived
bearer token which is cached in memory and refreshed shortly before expiry.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

import httpx

from allure_bridge.clients.errors import TokenRefreshError
from allure_bridge.core.config import AllureSettings
from allure_bridge.core.logging import redact_secrets
from allure_bridge.models import BearerToken

logger = logging.getLogger(__name__)

TOKEN_PATH = "/api/uaa/oauth/token"
GRANT_TYPE = "apitoken"
DEFAULT_TIMEOUT_SECONDS = 10.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BearerTokenCache:
    """Holds the current bearer token and refreshes it on demand.

    ``ensure_valid`` is the only mutator. The freshness check and the refresh
    run under one ``asyncio.Lock``, so concurrent callers wait for a single
    exchange instead of racing each other, and the token is always swapped as
    a whole ``BearerToken`` value.
    """

    REFRESH_MARGIN = timedelta(minutes=5)

    def __init__(
        self,
        settings: AllureSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._timeout = timeout
        self._clock = clock
        self._token: BearerToken | None = None
        self._lock = asyncio.Lock()

    async def ensure_valid(self, *, timeout: float | None = None) -> str:
        """Return a bearer token valid for at least the refresh margin."""
        async with self._lock:
            current = self._token
            if current is not None and current.is_usable(
                now=self._clock(), margin=self.REFRESH_MARGIN
            ):
                return current.access_token

            refreshed = await self._exchange(timeout=timeout)
            self._token = refreshed
            return refreshed.access_token

    async def _exchange(self, *, timeout: float | None) -> BearerToken:
        logger.info("Refreshing Allure bearer token")
        payload = {
            "grant_type": GRANT_TYPE,
            "scope": self._settings.token_scope,
            "token": self._settings.api_token.get_secret_value(),
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout if timeout is None else timeout,
                transport=self._transport,
                headers={"Accept": "application/json"},
            ) as client:
                response = await client.post(self._settings.base_url + TOKEN_PATH, data=payload)
        except httpx.HTTPError as exc:
            logger.error("Token exchange request failed: %s", exc.__class__.__name__)
            raise TokenRefreshError(f"Token exchange request failed: {exc}") from exc

        logger.info("Token exchange answered with status %d", response.status_code)
        body = redact_secrets(response.text)

        if not response.is_success:
            raise TokenRefreshError(
                "Token exchange rejected", status_code=response.status_code, body=body
            )

        try:
            token_payload = response.json()
        except ValueError as exc:
            raise TokenRefreshError(
                "Token exchange returned malformed JSON",
                status_code=response.status_code,
                body=body,
            ) from exc

        access_token = token_payload.get("access_token") if isinstance(token_payload, dict) else None
        expires_in = token_payload.get("expires_in") if isinstance(token_payload, dict) else None
        if not access_token or not isinstance(expires_in, (int, float)) or isinstance(expires_in, bool):
            raise TokenRefreshError(
                "Incomplete token payload returned from Allure.",
                status_code=response.status_code,
                body=body,
            )

        expires_at = self._clock() + timedelta(seconds=int(expires_in))
        logger.info("Allure bearer token refreshed, valid until %s", expires_at.isoformat())
        return BearerToken(access_token=access_token, expires_at=expires_at)


__all__ = ["BearerTokenCache", "GRANT_TYPE", "TOKEN_PATH"]
