"""
Plexi Anti-Nuke - Configuration Tests
=====================================

Environment parsing, defaults and validation.
"""

import pytest

from plexi.core.config import ConfigValidationError, is_owner, load_config
from plexi.core.constants import ActionType, DEFAULT_THRESHOLDS, Threshold

ENV_KEYS = [
    "BOT_OWNER_ID", "LOG_WEBHOOK_URL", "ERROR_WEBHOOK_URL", "PREFIX",
    "DEFAULT_PUNISHMENT", "AUTO_RESTORE", "BRAND_NAME", "AUDIT_LOG_LOOKBACK",
    "THRESHOLD_BANS", "THRESHOLD_KICKS", "THRESHOLD_ROLE_DELETES",
    "THRESHOLD_CHANNEL_DELETES", "THRESHOLD_ROLE_CREATES",
]


@pytest.fixture
def env(monkeypatch):
    """Clean environment with only a token set."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("DISCORD_TOKEN", "test-token")
    return monkeypatch


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_token_raises(self, env):
        """Test DISCORD_TOKEN is required."""
        env.delenv("DISCORD_TOKEN")
        with pytest.raises(ConfigValidationError):
            load_config()

    def test_defaults(self, env):
        """Test defaults match the documented values."""
        config = load_config()
        assert config.prefix == "k!"
        assert config.default_punishment == "ban"
        assert config.auto_restore is True
        assert config.audit_log_lookback == 6
        assert config.brand_name == "Plexi Anti Nuke"
        assert config.owner_id is None
        assert config.log_webhook_url is None
        assert config.thresholds == DEFAULT_THRESHOLDS

    def test_default_thresholds(self, env):
        """Test the built-in per-action thresholds."""
        t = load_config().thresholds
        assert t[ActionType.BANS] == Threshold(3, 10)
        assert t[ActionType.KICKS] == Threshold(5, 10)
        assert t[ActionType.ROLE_DELETES] == Threshold(2, 10)
        assert t[ActionType.CHANNEL_DELETES] == Threshold(2, 10)
        assert t[ActionType.ROLE_CREATES] == Threshold(6, 10)

    def test_threshold_override(self, env):
        """Test THRESHOLD_* accepts count/seconds."""
        env.setenv("THRESHOLD_ROLE_DELETES", "3/20")
        assert load_config().thresholds[ActionType.ROLE_DELETES] == Threshold(3, 20)

    def test_threshold_count_only(self, env):
        """Test a bare count keeps the default window."""
        env.setenv("THRESHOLD_BANS", "5")
        assert load_config().thresholds[ActionType.BANS] == Threshold(5, 10)

    @pytest.mark.parametrize("value", ["abc", "0/10", "3/0", "-1/5"])
    def test_invalid_threshold_keeps_default(self, env, value):
        """Test malformed thresholds fall back to the default."""
        env.setenv("THRESHOLD_KICKS", value)
        assert load_config().thresholds[ActionType.KICKS] == Threshold(5, 10)

    def test_auto_restore_false(self, env):
        """Test AUTO_RESTORE can be disabled."""
        env.setenv("AUTO_RESTORE", "false")
        assert load_config().auto_restore is False

    def test_invalid_punishment_falls_back(self, env):
        """Test an unknown DEFAULT_PUNISHMENT becomes ban."""
        env.setenv("DEFAULT_PUNISHMENT", "explode")
        assert load_config().default_punishment == "ban"

    def test_valid_punishment(self, env):
        """Test a known DEFAULT_PUNISHMENT is kept."""
        env.setenv("DEFAULT_PUNISHMENT", "removeRoles")
        assert load_config().default_punishment == "removeRoles"

    def test_invalid_webhook_ignored(self, env):
        """Test non-http webhook URLs are dropped."""
        env.setenv("LOG_WEBHOOK_URL", "not-a-url")
        assert load_config().log_webhook_url is None

    def test_lookback_clamped(self, env):
        """Test AUDIT_LOG_LOOKBACK is clamped to the API limit."""
        env.setenv("AUDIT_LOG_LOOKBACK", "500")
        assert load_config().audit_log_lookback == 100

    def test_owner_id_parsed(self, env):
        """Test BOT_OWNER_ID is an int, bad values ignored."""
        env.setenv("BOT_OWNER_ID", "42")
        assert load_config().owner_id == 42
        env.setenv("BOT_OWNER_ID", "forty-two")
        assert load_config().owner_id is None


class TestIsOwner:
    """Tests for the owner check."""

    def test_is_owner(self, config):
        """Test only the configured owner matches."""
        assert is_owner(config.owner_id) is True
        assert is_owner(5) is False

    def test_no_owner_configured(self, config):
        """Test nobody is owner when unset."""
        config.owner_id = None
        assert is_owner(5) is False
