from __future__ import annotations

import logging

import pytest

from allure_bridge.core.logging import SecretRedactingFilter, redact_secrets


@pytest.mark.parametrize(
    ("raw", "secret"),
    [
        ('{"access_token": "eyJhbGciOi.abc", "expires_in": 3600}', "eyJhbGciOi.abc"),
        ("grant_type=apitoken&scope=openid&token=long-lived", "long-lived"),
        ("Authorization: Bearer abc.def-123", "abc.def-123"),
        ("{'refresh_token': 'r-1'}", "r-1"),
    ],
)
def test_redact_secrets_masks_values(raw: str, secret: str) -> None:
    redacted = redact_secrets(raw)

    assert secret not in redacted
    assert "***" in redacted


def test_redact_secrets_leaves_plain_text() -> None:
    assert redact_secrets("status 500, internal error") == "status 500, internal error"


def test_filter_rewrites_formatted_message() -> None:
    record = logging.LogRecord(
        name="allure_bridge.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Token response: %s",
        args=('{"access_token": "secret-value"}',),
        exc_info=None,
    )

    assert SecretRedactingFilter().filter(record) is True
    assert "secret-value" not in record.getMessage()
