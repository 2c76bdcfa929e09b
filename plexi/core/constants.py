"""
Plexi Anti-Nuke - Centralized Constants
=======================================

Enforcement defaults, action types and punishment kinds.
Import from this module instead of hardcoding values.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


# =============================================================================
# Branding
# =============================================================================

BRAND_NAME = "Plexi Anti Nuke"
BRAND_COLOR = 0x2E8B57
DEFAULT_PREFIX = "k!"


# =============================================================================
# Action Types
# =============================================================================

class ActionType(str, Enum):
    """Privileged administrative actions that are counted per executor."""

    BANS = "bans"
    KICKS = "kicks"
    ROLE_DELETES = "roleDeletes"
    CHANNEL_DELETES = "channelDeletes"
    ROLE_CREATES = "roleCreates"


RESTORABLE_ACTIONS = frozenset({ActionType.ROLE_DELETES, ActionType.CHANNEL_DELETES})
"""Action types whose target can be recreated from a snapshot."""


# =============================================================================
# Punishments
# =============================================================================

class PunishmentKind(str, Enum):
    """Enforcement actions a guild can select with setpunish."""

    BAN = "ban"
    KICK = "kick"
    DEMOTE = "demote"
    REMOVE_ROLES = "removeRoles"


PUNISHMENT_CHOICES = tuple(kind.value for kind in PunishmentKind)
DEFAULT_PUNISHMENT = PunishmentKind.BAN.value


# =============================================================================
# Thresholds
# =============================================================================

@dataclass(frozen=True)
class Threshold:
    """Allowed count of one action type inside a sliding window."""

    count: int
    window_seconds: int


DEFAULT_THRESHOLDS: Dict[ActionType, Threshold] = {
    ActionType.BANS: Threshold(count=3, window_seconds=10),
    ActionType.KICKS: Threshold(count=5, window_seconds=10),
    ActionType.ROLE_DELETES: Threshold(count=2, window_seconds=10),
    ActionType.CHANNEL_DELETES: Threshold(count=2, window_seconds=10),
    ActionType.ROLE_CREATES: Threshold(count=6, window_seconds=10),
}

THRESHOLD_ENV_KEYS: Dict[ActionType, str] = {
    ActionType.BANS: "THRESHOLD_BANS",
    ActionType.KICKS: "THRESHOLD_KICKS",
    ActionType.ROLE_DELETES: "THRESHOLD_ROLE_DELETES",
    ActionType.CHANNEL_DELETES: "THRESHOLD_CHANNEL_DELETES",
    ActionType.ROLE_CREATES: "THRESHOLD_ROLE_CREATES",
}


# =============================================================================
# Ingestion
# =============================================================================

AUDIT_LOG_LOOKBACK = 6            # Audit entries scanned to find the executor
WEBHOOK_TIMEOUT = 10              # Mod-log webhook request timeout (seconds)
DB_CONNECTION_TIMEOUT = 30.0      # sqlite connect timeout (seconds)
SQLITE_BUSY_TIMEOUT = 5000        # sqlite busy timeout (ms)


__all__ = [
    "BRAND_NAME",
    "BRAND_COLOR",
    "DEFAULT_PREFIX",
    "ActionType",
    "RESTORABLE_ACTIONS",
    "PunishmentKind",
    "PUNISHMENT_CHOICES",
    "DEFAULT_PUNISHMENT",
    "Threshold",
    "DEFAULT_THRESHOLDS",
    "THRESHOLD_ENV_KEYS",
    "AUDIT_LOG_LOOKBACK",
    "WEBHOOK_TIMEOUT",
    "DB_CONNECTION_TIMEOUT",
    "SQLITE_BUSY_TIMEOUT",
]
