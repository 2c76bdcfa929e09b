"""
Plexi Anti-Nuke - Configuration Module
======================================

Centralized configuration management with environment variable validation.

DESIGN:
    Single source of truth for all configuration, loaded from environment
    variables at startup (main.py loads `.env` first). Thresholds are
    process-wide and read-only once loaded.

    Key patterns:
    - Singleton pattern via get_config() ensures one Config instance
    - Validation happens once at load time, not on every access
    - Permission helpers centralize authorization logic
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from zoneinfo import ZoneInfo

from plexi.core.constants import (
    AUDIT_LOG_LOOKBACK,
    BRAND_COLOR,
    BRAND_NAME,
    DEFAULT_PREFIX,
    DEFAULT_PUNISHMENT,
    DEFAULT_THRESHOLDS,
    THRESHOLD_ENV_KEYS,
    ActionType,
    Threshold,
)


# =============================================================================
# Timezone Configuration
# =============================================================================

NY_TZ = ZoneInfo("America/New_York")
"""Eastern timezone for consistent timestamps across all bot operations."""


# =============================================================================
# Configuration Dataclass
# =============================================================================

@dataclass
class Config:
    """
    Bot configuration loaded from environment variables.

    Attributes:
        discord_token: Discord bot authentication token.
        owner_id: Bot owner; always exempt and allowed to run admin commands.
        log_webhook_url: Webhook receiving mod-log embeds.
        error_webhook_url: Webhook receiving logger errors.
        thresholds: Enforcement policy per action type.
    """

    # -------------------------------------------------------------------------
    # Required: Discord
    # -------------------------------------------------------------------------

    discord_token: str

    # -------------------------------------------------------------------------
    # Optional: Principals & Webhooks
    # -------------------------------------------------------------------------

    owner_id: Optional[int] = None
    log_webhook_url: Optional[str] = None
    error_webhook_url: Optional[str] = None

    # -------------------------------------------------------------------------
    # Optional: Enforcement
    # -------------------------------------------------------------------------

    prefix: str = DEFAULT_PREFIX
    default_punishment: str = DEFAULT_PUNISHMENT
    auto_restore: bool = True
    thresholds: Dict[ActionType, Threshold] = field(
        default_factory=lambda: dict(DEFAULT_THRESHOLDS)
    )
    audit_log_lookback: int = AUDIT_LOG_LOOKBACK

    # -------------------------------------------------------------------------
    # Optional: Display
    # -------------------------------------------------------------------------

    brand_name: str = BRAND_NAME
    brand_color: int = BRAND_COLOR


# =============================================================================
# Embed Colors
# =============================================================================

class EmbedColors:
    """Standardized color palette for mod-log embeds."""

    BRAND = BRAND_COLOR
    RED = 0xDC3545      # Punishments, failures
    GOLD = 0xE6B84A     # Skips, warnings
    GREEN = 0x1F5E2E    # Restores


# =============================================================================
# Validation
# =============================================================================

class ConfigValidationError(Exception):
    """Raised when required configuration is missing or invalid."""

    pass


def _parse_int_optional(value: Optional[str]) -> Optional[int]:
    """
    Parse optional string to integer, returning None on failure.

    Args:
        value: String value from environment variable, may be None.

    Returns:
        Parsed integer or None if parsing fails.
    """
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _parse_int_with_default(value: Optional[str], default: int, name: str, min_val: int = None, max_val: int = None) -> int:
    """
    Parse optional integer with default and range validation.

    Args:
        value: String value from environment variable.
        default: Default value if not set or invalid.
        name: Variable name for warning messages.
        min_val: Minimum allowed value (inclusive).
        max_val: Maximum allowed value (inclusive).

    Returns:
        Parsed integer within valid range, or default.
    """
    if not value:
        return default
    try:
        parsed = int(value)
        if min_val is not None and parsed < min_val:
            from plexi.core.logger import logger
            logger.warning(f"Config {name}={parsed} below min {min_val}, using {min_val}")
            return min_val
        if max_val is not None and parsed > max_val:
            from plexi.core.logger import logger
            logger.warning(f"Config {name}={parsed} above max {max_val}, using {max_val}")
            return max_val
        return parsed
    except ValueError:
        from plexi.core.logger import logger
        logger.warning(f"Config {name}='{value}' invalid, using default {default}")
        return default


def _parse_bool(value: Optional[str], default: bool) -> bool:
    """Parse a boolean flag; anything but 0/false/off/no counts as true."""
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in {"0", "false", "off", "no"}


def _parse_threshold(value: Optional[str], default: Threshold, name: str) -> Threshold:
    """
    Parse a "count/seconds" threshold override.

    Args:
        value: Raw value such as "3/10".
        default: Threshold used when unset or malformed.
        name: Variable name for warning messages.

    Returns:
        Parsed Threshold, or default.
    """
    if not value:
        return default
    count_str, _, window_str = value.partition("/")
    try:
        count = int(count_str)
        window = int(window_str) if window_str else default.window_seconds
    except ValueError:
        count = window = 0
    if count < 1 or window < 1:
        from plexi.core.logger import logger
        logger.warning(f"Config {name}='{value}' invalid, using default {default.count}/{default.window_seconds}")
        return default
    return Threshold(count=count, window_seconds=window)


def _validate_url(value: Optional[str], name: str) -> Optional[str]:
    """
    Validate URL format for webhooks.

    Returns:
        URL if valid, None if invalid or empty.
    """
    if not value:
        return None
    if not value.startswith(("https://", "http://")):
        from plexi.core.logger import logger
        logger.warning(f"Config {name} invalid URL format, ignoring")
        return None
    return value


def _validate_punishment(value: Optional[str]) -> str:
    """Return the configured default punishment, falling back to ban."""
    from plexi.core.constants import PUNISHMENT_CHOICES

    if not value:
        return DEFAULT_PUNISHMENT
    if value not in PUNISHMENT_CHOICES:
        from plexi.core.logger import logger
        logger.warning(f"Config DEFAULT_PUNISHMENT='{value}' invalid, using {DEFAULT_PUNISHMENT}")
        return DEFAULT_PUNISHMENT
    return value


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config() -> Config:
    """
    Load and validate configuration from environment variables.

    Returns:
        Validated Config object with all settings.

    Raises:
        ConfigValidationError: If DISCORD_TOKEN is missing.
    """
    discord_token = os.getenv("DISCORD_TOKEN")
    if not discord_token:
        raise ConfigValidationError("Missing required environment variables: DISCORD_TOKEN")

    thresholds = {
        action: _parse_threshold(os.getenv(env_key), DEFAULT_THRESHOLDS[action], env_key)
        for action, env_key in THRESHOLD_ENV_KEYS.items()
    }

    return Config(
        discord_token=discord_token,
        owner_id=_parse_int_optional(os.getenv("BOT_OWNER_ID")),
        log_webhook_url=_validate_url(os.getenv("LOG_WEBHOOK_URL"), "LOG_WEBHOOK_URL"),
        error_webhook_url=_validate_url(os.getenv("ERROR_WEBHOOK_URL"), "ERROR_WEBHOOK_URL"),
        prefix=os.getenv("PREFIX") or DEFAULT_PREFIX,
        default_punishment=_validate_punishment(os.getenv("DEFAULT_PUNISHMENT")),
        auto_restore=_parse_bool(os.getenv("AUTO_RESTORE"), default=True),
        thresholds=thresholds,
        audit_log_lookback=_parse_int_with_default(
            os.getenv("AUDIT_LOG_LOOKBACK"), AUDIT_LOG_LOOKBACK, "AUDIT_LOG_LOOKBACK", min_val=1, max_val=100
        ),
        brand_name=os.getenv("BRAND_NAME") or BRAND_NAME,
    )


# =============================================================================
# Global Config Instance
# =============================================================================

_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance, loading if needed.

    Raises:
        ConfigValidationError: On first call if config is invalid.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def validate_and_log_config() -> None:
    """
    Validate configuration and log the enforcement policy at startup.

    Raises:
        ConfigValidationError: If required configuration is missing.
    """
    from plexi.core.logger import logger

    config = get_config()

    logger.tree("Configuration Validated", [
        ("Prefix", config.prefix),
        ("Default Punishment", config.default_punishment),
        ("Auto Restore", "Enabled" if config.auto_restore else "Disabled"),
        ("Mod Log", "Webhook" if config.log_webhook_url else "Console"),
        ("Bot Owner", str(config.owner_id) if config.owner_id else "Not set"),
    ], emoji="⚙️")

    logger.tree("Enforcement Thresholds", [
        (action.value, f"{t.count} / {t.window_seconds}s")
        for action, t in config.thresholds.items()
    ], emoji="🛡️")


# =============================================================================
# Permission Helpers
# =============================================================================

def is_owner(user_id: int) -> bool:
    """Check if user is the configured bot owner."""
    owner_id = get_config().owner_id
    return owner_id is not None and user_id == owner_id


__all__ = [
    "Config",
    "ConfigValidationError",
    "EmbedColors",
    "NY_TZ",
    "load_config",
    "get_config",
    "validate_and_log_config",
    "is_owner",
]
