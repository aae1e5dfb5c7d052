"""Unit tests for environment-driven settings."""
import pytest

from showlister.config import env_int
from showlister.exceptions import ConfigError


class TestEnvInt:
    """Test cases for env_int."""

    def test_default_when_unset(self, monkeypatch):
        monkeypatch.delenv("EVENT_WINDOW_DAYS", raising=False)
        assert env_int("EVENT_WINDOW_DAYS", 90) == 90

    def test_default_when_blank(self, monkeypatch):
        monkeypatch.setenv("EVENT_WINDOW_DAYS", "  ")
        assert env_int("EVENT_WINDOW_DAYS", 90) == 90

    def test_reads_value(self, monkeypatch):
        monkeypatch.setenv("EVENT_WINDOW_DAYS", "30")
        assert env_int("EVENT_WINDOW_DAYS", 90) == 30

    def test_bad_value_names_the_variable(self, monkeypatch):
        monkeypatch.setenv("EVENT_WINDOW_DAYS", "ninety")
        with pytest.raises(ConfigError, match="EVENT_WINDOW_DAYS"):
            env_int("EVENT_WINDOW_DAYS", 90)
