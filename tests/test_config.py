import pytest

import config


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for name in (
        "CRM_API_URL",
        "NEXT_PUBLIC_API_URL",
        "LOG_LEVEL",
        "DETAILED_LOGGING",
        "HTTP_TIMEOUT",
        "SEARCH_DEBOUNCE_MS",
        "CRM_LANGUAGE",
    ):
        monkeypatch.delenv(name, raising=False)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


def test_defaults():
    settings = config.get_settings()
    assert settings.api_url == config.DEFAULT_API_URL
    assert settings.search_debounce_ms == 300
    assert settings.default_language == "pt-BR"
    assert not settings.detailed_logging


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("NEXT_PUBLIC_API_URL", "https://crm.example.com/api/")
    monkeypatch.setenv("DETAILED_LOGGING", "yes")
    monkeypatch.setenv("HTTP_TIMEOUT", "abc")
    monkeypatch.setenv("SEARCH_DEBOUNCE_MS", "500")
    monkeypatch.setenv("CRM_LANGUAGE", "es")

    settings = config.get_settings()
    assert settings.api_url == "https://crm.example.com/api"
    assert settings.detailed_logging
    assert settings.http_timeout == 30.0
    assert settings.search_debounce_ms == 500
    assert settings.default_language == "es"


def test_crm_api_url_takes_precedence(monkeypatch):
    monkeypatch.setenv("NEXT_PUBLIC_API_URL", "https://a/api")
    monkeypatch.setenv("CRM_API_URL", "https://b/api")
    assert config.get_settings().api_url == "https://b/api"
