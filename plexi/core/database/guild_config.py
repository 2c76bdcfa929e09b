"""
Plexi Anti-Nuke - Guild Config Database Mixin
=============================================

Per-guild punishment policy selected with the setpunish command.
"""

import time
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from plexi.core.database.manager import DatabaseManager


class GuildConfigMixin:
    """Database mixin for guild punishment policy."""

    def set_punishment(self: "DatabaseManager", guild_id: int, punishment: str) -> None:
        """Store the punishment policy for a guild, replacing any previous one."""
        self.execute(
            """
            INSERT INTO guild_config (guild_id, punishment, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(guild_id) DO UPDATE SET
                punishment = excluded.punishment,
                updated_at = excluded.updated_at
            """,
            (guild_id, punishment, time.time())
        )

    def get_punishment(self: "DatabaseManager", guild_id: int) -> Optional[str]:
        """
        Get the stored punishment policy for a guild.

        Returns:
            The policy string, or None if the guild never set one.
        """
        row = self.fetchone(
            "SELECT punishment FROM guild_config WHERE guild_id = ?",
            (guild_id,)
        )
        return row["punishment"] if row else None


__all__ = ["GuildConfigMixin"]
