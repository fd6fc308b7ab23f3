"""Tests for config/settings.py"""
import pytest
from pydantic import ValidationError

from config.settings import Settings


class TestGenerationTimeouts:
    def test_defaults_are_consistent(self):
        settings = Settings()
        assert settings.GENERATION_TIMEOUT_SECONDS < settings.GENERATION_STALE_MINUTES * 60

    def test_timeout_longer_than_stale_window_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Settings(GENERATION_TIMEOUT_SECONDS=600, GENERATION_STALE_MINUTES=5)
        assert "GENERATION_STALE_MINUTES" in str(exc.value)

    def test_timeout_equal_to_stale_window_is_rejected(self):
        with pytest.raises(ValidationError):
            Settings(GENERATION_TIMEOUT_SECONDS=300, GENERATION_STALE_MINUTES=5)


class TestCorsOrigins:
    def test_comma_separated(self):
        settings = Settings(CORS_ORIGINS=" http://localhost:3000, https://tripwise.app ")
        assert settings.get_cors_origins() == ["http://localhost:3000", "https://tripwise.app"]

    def test_empty_means_any(self):
        assert Settings(CORS_ORIGINS="").get_cors_origins() == ["*"]
