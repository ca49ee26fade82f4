"""Tests for runtime settings."""

import pytest

from ema_avails_validator.config import Settings, load_settings
from ema_avails_validator.validation.base import Severity
from ema_avails_validator.validation.specs import SpecVersion


class TestLoadSettings:
    """Tests for load_settings."""

    @pytest.fixture(autouse=True)
    def no_dotenv(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Keep a developer's .env file out of these tests."""
        monkeypatch.setattr("ema_avails_validator.config.load_dotenv", lambda: False)

    def test_defaults(self) -> None:
        """Test settings with no environment variables set."""
        assert load_settings() == Settings()

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test reading every variable."""
        monkeypatch.setenv("EMA_VALIDATOR_SPEC_VERSION", "ema 1.6 tv")
        monkeypatch.setenv("EMA_VALIDATOR_FAIL_ON", "WARNING")
        monkeypatch.setenv("EMA_VALIDATOR_LOG_LEVEL", "debug")

        settings = load_settings()

        assert settings.spec_version is SpecVersion.EMA_1_6_TV
        assert settings.fail_on is Severity.WARNING
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize(
        ("name", "value", "match"),
        [
            ("EMA_VALIDATOR_SPEC_VERSION", "EMA 9", "Unknown spec version"),
            ("EMA_VALIDATOR_FAIL_ON", "fatal", "Invalid EMA_VALIDATOR_FAIL_ON"),
            ("EMA_VALIDATOR_LOG_LEVEL", "LOUD", "Invalid EMA_VALIDATOR_LOG_LEVEL"),
        ],
    )
    def test_invalid_values(self, monkeypatch: pytest.MonkeyPatch, name: str, value: str, match: str) -> None:
        """Test that bad values are rejected with the variable named."""
        monkeypatch.setenv(name, value)

        with pytest.raises(ValueError, match=match):
            load_settings()
