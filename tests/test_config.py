from __future__ import annotations

import pytest

from allure_bridge.core.config import ConfigMissingError, load_settings

REQUIRED_ENV_KEYS = [
    "ALLURE_BASE_URL",
    "ALLURE_API_URL",
    "ALLURE_API_TOKEN",
    "ALLURE_PROJECT_ID",
]


def test_settings_load_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALLURE_BASE_URL", "https://allure.example.com/")
    monkeypatch.setenv("SERVER_PORT", "9090")

    settings = load_settings(env_file=None)

    assert settings.allure.base_url == "https://allure.example.com"
    assert settings.allure.api_token.get_secret_value() == "test-api-token"
    assert settings.server_port == 9090
    assert settings.request_timeout_seconds == 10.0
    assert settings.download_timeout_seconds == 30.0
    assert settings.cors_origins == ["*"]


def test_api_token_is_not_rendered(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = load_settings(env_file=None)

    assert "test-api-token" not in repr(settings)


@pytest.mark.parametrize("missing_key", REQUIRED_ENV_KEYS)
def test_missing_required_value_is_fatal(monkeypatch: pytest.MonkeyPatch, missing_key: str) -> None:
    monkeypatch.delenv(missing_key, raising=False)

    with pytest.raises(ConfigMissingError) as excinfo:
        load_settings(env_file=None)

    assert missing_key in excinfo.value.missing


def test_blank_required_value_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALLURE_PROJECT_ID", "   ")

    with pytest.raises(ConfigMissingError) as excinfo:
        load_settings(env_file=None)

    assert excinfo.value.missing == ["ALLURE_PROJECT_ID"]


def test_cors_origins_split_on_commas(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example.com, https://b.example.com")

    settings = load_settings(env_file=None)

    assert settings.cors_origins == ["https://a.example.com", "https://b.example.com"]
