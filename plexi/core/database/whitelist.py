"""
Plexi Anti-Nuke - Whitelist Database Mixin
==========================================

Per-guild set of users exempt from automated punishment.
"""

import time
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from plexi.core.database.manager import DatabaseManager


class WhitelistMixin:
    """Database mixin for whitelist operations."""

    def add_whitelist(self: "DatabaseManager", guild_id: int, user_id: int) -> bool:
        """
        Add a user to a guild's whitelist.

        Returns:
            True if the user was added, False if already present.
        """
        cursor = self.execute(
            "INSERT OR IGNORE INTO whitelist (guild_id, user_id, added_at) VALUES (?, ?, ?)",
            (guild_id, user_id, time.time())
        )
        return cursor.rowcount > 0

    def remove_whitelist(self: "DatabaseManager", guild_id: int, user_id: int) -> bool:
        """
        Remove a user from a guild's whitelist.

        Returns:
            True if a row was removed.
        """
        cursor = self.execute(
            "DELETE FROM whitelist WHERE guild_id = ? AND user_id = ?",
            (guild_id, user_id)
        )
        return cursor.rowcount > 0

    def is_whitelisted(self: "DatabaseManager", guild_id: int, user_id: int) -> bool:
        """Check explicit whitelist membership."""
        row = self.fetchone(
            "SELECT 1 FROM whitelist WHERE guild_id = ? AND user_id = ?",
            (guild_id, user_id)
        )
        return row is not None

    def get_whitelist(self: "DatabaseManager", guild_id: int) -> List[int]:
        """Get whitelisted user IDs for a guild, oldest first."""
        rows = self.fetchall(
            "SELECT user_id FROM whitelist WHERE guild_id = ? ORDER BY added_at",
            (guild_id,)
        )
        return [row["user_id"] for row in rows]


__all__ = ["WhitelistMixin"]
