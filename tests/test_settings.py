import pytest
from pydantic import ValidationError

from hotelpms.config.settings import Settings


def make_settings():
    return Settings(_env_file=None)


def test_app_name_and_cors_from_their_own_names(monkeypatch):
    monkeypatch.setenv("APP_NAME", "Seaside PMS")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")

    settings = make_settings()

    assert settings.APP_NAME == "Seaside PMS"
    assert settings.get_cors_origins() == ["https://a.example", "https://b.example"]


def test_legacy_project_names_still_accepted(monkeypatch):
    monkeypatch.delenv("APP_NAME", raising=False)
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    monkeypatch.setenv("PROJECT_NAME", "Harbor PMS")
    monkeypatch.setenv("BACKEND_CORS_ORIGINS", '["https://c.example"]')

    settings = make_settings()

    assert settings.APP_NAME == "Harbor PMS"
    assert settings.get_cors_origins() == ["https://c.example"]


def test_default_window_must_be_selectable(monkeypatch):
    monkeypatch.setenv("CALENDAR_DEFAULT_DAYS", "10")

    with pytest.raises(ValidationError):
        make_settings()
