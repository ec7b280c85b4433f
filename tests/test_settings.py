import pytest

import recrut_core.config.settings as settings


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    monkeypatch.setattr(settings, "load_dotenv", lambda: None)
    for k in ["API_BASE_URL", "API_TOKEN", "API_TIMEOUT", "ORGANIZATION_ID"]:
        monkeypatch.delenv(k, raising=False)
    settings.get_app_config.cache_clear()
    yield
    settings.get_app_config.cache_clear()


def test_defaults():
    cfg = settings.get_app_config()
    assert cfg.api_base_url == "http://localhost:3001"
    assert cfg.api_token == ""
    assert cfg.api_timeout == 10.0
    assert cfg.organization_id is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "https://recrut.example.com/api/")
    monkeypatch.setenv("API_TOKEN", " secret ")
    monkeypatch.setenv("API_TIMEOUT", "2.5")
    monkeypatch.setenv("ORGANIZATION_ID", "12")
    cfg = settings.get_app_config()
    assert cfg.api_base_url == "https://recrut.example.com/api"
    assert cfg.api_token == "secret"
    assert cfg.api_timeout == 2.5
    assert cfg.organization_id == 12


def test_invalid_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("API_TIMEOUT", "abc")
    monkeypatch.setenv("ORGANIZATION_ID", "x")
    cfg = settings.get_app_config()
    assert cfg.api_timeout == 10.0
    assert cfg.organization_id is None
