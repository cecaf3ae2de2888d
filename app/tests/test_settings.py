# tests/test_settings.py
import logging

import pytest
from pydantic import ValidationError

from app.config.settings import Settings, get_settings


class TestPortSetting:
    """PORT comes from the environment with a 3000 fallback"""

    def test_default_port(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        assert Settings(_env_file=None).PORT == 3000

    def test_port_from_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        assert Settings(_env_file=None).PORT == 8080

    @pytest.mark.parametrize("value", ["", "   ", "not-a-port"])
    def test_unusable_port_falls_back(self, monkeypatch, value):
        monkeypatch.setenv("PORT", value)
        assert Settings(_env_file=None).PORT == 3000

    def test_non_numeric_port_warns(self, monkeypatch, caplog):
        caplog.set_level(logging.WARNING, logger="app.config.settings")
        monkeypatch.setenv("PORT", "eighty")

        assert Settings(_env_file=None).PORT == 3000
        assert [r.getMessage() for r in caplog.records] == [
            "Invalid PORT value 'eighty', using 3000"
        ]

    def test_empty_port_does_not_warn(self, monkeypatch, caplog):
        caplog.set_level(logging.WARNING, logger="app.config.settings")
        monkeypatch.setenv("PORT", "")

        assert Settings(_env_file=None).PORT == 3000
        assert caplog.records == []


class TestCorsSetting:

    def test_allows_any_origin_by_default(self, monkeypatch):
        monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)
        assert Settings(_env_file=None).ALLOWED_ORIGINS == ["*"]

    def test_comma_separated_origins(self, monkeypatch):
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")
        settings = Settings(_env_file=None)
        assert settings.ALLOWED_ORIGINS == ["https://a.example", "https://b.example"]


class TestSearchEngineSetting:

    def test_engine_is_normalised(self):
        assert Settings(_env_file=None, SEARCH_ENGINE=" Brave ").SEARCH_ENGINE == "brave"

    def test_unknown_engine_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, SEARCH_ENGINE="altavista")


def test_get_settings_is_cached(monkeypatch):
    get_settings.cache_clear()
    monkeypatch.setenv("PORT", "4001")
    try:
        first = get_settings()
        monkeypatch.setenv("PORT", "4002")
        assert get_settings() is first
        assert first.PORT == 4001
    finally:
        get_settings.cache_clear()
