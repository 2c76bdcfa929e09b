"""
Plexi Anti-Nuke - Enforcement Data Classes
==========================================

Normalized audit events and the offense records kept per bucket.
"""

from dataclasses import dataclass
from typing import Optional

from plexi.core.constants import ActionType


@dataclass(frozen=True)
class AuditEvent:
    """
    One privileged action with its executor already resolved.

    Produced by the audit log adapter and consumed once by
    AntiNukeService.handle().
    """
    guild_id: int
    action_type: ActionType
    target_id: Optional[int]
    executor_id: int
    timestamp: float


@dataclass(frozen=True)
class OffenseRecord:
    """A single counted action by an executor."""
    executor_id: int
    timestamp: float


__all__ = ["AuditEvent", "OffenseRecord"]
