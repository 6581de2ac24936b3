"""
Tests for Settings loaded from the environment.
"""

import pytest

from product_api.config import Settings


class TestFallbackPort:

    def test_default_fallback_port(self, monkeypatch):
        monkeypatch.delenv("FALLBACK_PORT", raising=False)
        assert Settings().fallback_port == 3001

    def test_fallback_port_from_env(self, monkeypatch):
        monkeypatch.setenv("FALLBACK_PORT", "4001")
        assert Settings().fallback_port == 4001

    def test_none_disables_fallback(self, monkeypatch):
        monkeypatch.setenv("FALLBACK_PORT", "none")
        assert Settings().fallback_port is None


class TestLogLevel:

    def test_log_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Settings().log_level == "DEBUG"

    def test_unknown_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        with pytest.raises(ValueError):
            Settings()
