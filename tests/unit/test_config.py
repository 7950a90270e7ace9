"""Unit tests for configuration loading."""

import pytest
from pydantic import ValidationError

from fundledger.services.config import AppConfig, get_app_config, reset_app_config
from fundledger.services.settings_service import RemainderPolicy, load_ledger_settings


@pytest.fixture(autouse=True)
def clean_config(monkeypatch, tmp_path):
    """Isolate from any .env file and from the cached instance."""
    monkeypatch.chdir(tmp_path)
    for name in ("REMAINDER_POLICY", "COUNT_ONLY_PRESENT_GUESTS", "LOG_LEVEL", "PORT"):
        monkeypatch.delenv(name, raising=False)
    reset_app_config()
    yield
    reset_app_config()


class TestAppConfig:
    def test_defaults(self):
        config = AppConfig()

        assert config.remainder_policy == "conservative"
        assert config.count_only_present_guests is False
        assert config.log_file == "logs/server.log"
        assert config.port == 8000

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("REMAINDER_POLICY", "theoretical")
        monkeypatch.setenv("COUNT_ONLY_PRESENT_GUESTS", "true")
        monkeypatch.setenv("PORT", "9001")

        config = AppConfig()

        assert config.remainder_policy == "theoretical"
        assert config.count_only_present_guests is True
        assert config.port == 9001

    def test_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("REMAINDER_POLICY=theoretical\nUNRELATED=1\n")

        assert AppConfig().remainder_policy == "theoretical"

    def test_unknown_policy_rejected(self, monkeypatch):
        monkeypatch.setenv("REMAINDER_POLICY", "generous")

        with pytest.raises(ValidationError):
            AppConfig()


class TestLazyConfig:
    def test_instance_is_cached_until_reset(self, monkeypatch):
        first = get_app_config()
        monkeypatch.setenv("REMAINDER_POLICY", "theoretical")

        assert get_app_config() is first

        reset_app_config()
        assert get_app_config().remainder_policy == "theoretical"

    def test_policy_flows_into_ledger_settings(self, monkeypatch, db_session):
        monkeypatch.setenv("REMAINDER_POLICY", "theoretical")
        monkeypatch.setenv("COUNT_ONLY_PRESENT_GUESTS", "1")

        settings = load_ledger_settings(db_session)

        assert settings.remainder_policy is RemainderPolicy.THEORETICAL
        assert settings.count_only_present_guests is True
