"""
Tests for settings loading
"""
from dc_agent.core.config import Settings, get_settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("API_PORT", raising=False)
    settings = Settings(_env_file=None)
    assert settings.log_level == "INFO"
    assert settings.api_port == 8100
    assert settings.log_format == "json"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("API_PORT", "9000")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.example, http://b.example,")
    settings = Settings(_env_file=None)
    assert settings.log_level == "DEBUG"
    assert settings.api_port == 9000
    assert settings.allowed_origins_list == ["http://a.example", "http://b.example"]


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
