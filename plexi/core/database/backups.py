"""
Plexi Anti-Nuke - Role/Channel Backups Database Mixin
=====================================================

Latest-wins snapshots of the recreatable attributes of roles and
channels, keyed by (guild, entity id). Read only during restore.
"""

import time
from typing import TYPE_CHECKING, Optional

from plexi.core.database.models import ChannelSnapshotRecord, RoleSnapshotRecord

if TYPE_CHECKING:
    from plexi.core.database.manager import DatabaseManager


class BackupsMixin:
    """Database mixin for role and channel snapshots."""

    # =========================================================================
    # Roles
    # =========================================================================

    def save_role_snapshot(
        self: "DatabaseManager",
        guild_id: int,
        role_id: int,
        name: str,
        permissions: int,
        color: int,
        hoist: bool,
        mentionable: bool,
        position: int,
    ) -> None:
        """Upsert the snapshot for a role."""
        self.execute(
            """
            INSERT INTO role_backups
                (guild_id, role_id, name, permissions, color, hoist,
                 mentionable, position, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(guild_id, role_id) DO UPDATE SET
                name = excluded.name,
                permissions = excluded.permissions,
                color = excluded.color,
                hoist = excluded.hoist,
                mentionable = excluded.mentionable,
                position = excluded.position,
                updated_at = excluded.updated_at
            """,
            (
                guild_id, role_id, name, permissions, color,
                int(hoist), int(mentionable), position, time.time()
            )
        )

    def get_role_snapshot(
        self: "DatabaseManager",
        guild_id: int,
        role_id: int,
    ) -> Optional[RoleSnapshotRecord]:
        """Get the latest snapshot of a role, or None."""
        row = self.fetchone(
            """
            SELECT guild_id, role_id, name, permissions, color, hoist,
                   mentionable, position, updated_at
            FROM role_backups
            WHERE guild_id = ? AND role_id = ?
            """,
            (guild_id, role_id)
        )
        if not row:
            return None

        return {
            "guild_id": row["guild_id"],
            "role_id": row["role_id"],
            "name": row["name"],
            "permissions": row["permissions"],
            "color": row["color"],
            "hoist": bool(row["hoist"]),
            "mentionable": bool(row["mentionable"]),
            "position": row["position"],
            "updated_at": row["updated_at"],
        }

    # =========================================================================
    # Channels
    # =========================================================================

    def save_channel_snapshot(
        self: "DatabaseManager",
        guild_id: int,
        channel_id: int,
        name: str,
        channel_type: str,
        topic: Optional[str],
        position: int,
        parent_id: Optional[int],
        nsfw: bool,
    ) -> None:
        """Upsert the snapshot for a channel."""
        self.execute(
            """
            INSERT INTO channel_backups
                (guild_id, channel_id, name, type, topic, position,
                 parent_id, nsfw, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(guild_id, channel_id) DO UPDATE SET
                name = excluded.name,
                type = excluded.type,
                topic = excluded.topic,
                position = excluded.position,
                parent_id = excluded.parent_id,
                nsfw = excluded.nsfw,
                updated_at = excluded.updated_at
            """,
            (
                guild_id, channel_id, name, channel_type, topic, position,
                parent_id, int(nsfw), time.time()
            )
        )

    def get_channel_snapshot(
        self: "DatabaseManager",
        guild_id: int,
        channel_id: int,
    ) -> Optional[ChannelSnapshotRecord]:
        """Get the latest snapshot of a channel, or None."""
        row = self.fetchone(
            """
            SELECT guild_id, channel_id, name, type, topic, position,
                   parent_id, nsfw, updated_at
            FROM channel_backups
            WHERE guild_id = ? AND channel_id = ?
            """,
            (guild_id, channel_id)
        )
        if not row:
            return None

        return {
            "guild_id": row["guild_id"],
            "channel_id": row["channel_id"],
            "name": row["name"],
            "type": row["type"],
            "topic": row["topic"],
            "position": row["position"],
            "parent_id": row["parent_id"],
            "nsfw": bool(row["nsfw"]),
            "updated_at": row["updated_at"],
        }


__all__ = ["BackupsMixin"]
