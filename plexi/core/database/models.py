"""
Plexi Anti-Nuke - Database Type Definitions
===========================================

TypedDict definitions for records returned from the database.
"""

from typing import Optional, TypedDict


class RoleSnapshotRecord(TypedDict, total=False):
    """Type for role backup records."""
    guild_id: int
    role_id: int
    name: str
    permissions: int
    color: int
    hoist: bool
    mentionable: bool
    position: int
    updated_at: float


class ChannelSnapshotRecord(TypedDict, total=False):
    """Type for channel backup records."""
    guild_id: int
    channel_id: int
    name: str
    type: str
    topic: Optional[str]
    position: int
    parent_id: Optional[int]
    nsfw: bool
    updated_at: float


__all__ = [
    "RoleSnapshotRecord",
    "ChannelSnapshotRecord",
]
