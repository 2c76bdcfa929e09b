"""
Database Schema Module
======================

Table definitions for whitelist, guild policy and entity backups.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from plexi.core.database.manager import DatabaseManager


class SchemaMixin:
    """Mixin for database schema initialization."""

    def _init_tables(self: "DatabaseManager") -> None:
        """
        Initialize all database tables.

        DESIGN: Tables are created if not exist, allowing safe restarts.
        Composite primary keys keep one row per (guild, entity).
        """
        conn = self._ensure_connection()
        cursor = conn.cursor()

        # -----------------------------------------------------------------
        # Whitelist Table
        # DESIGN: Set semantics, membership only
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS whitelist (
                guild_id INTEGER NOT NULL,
                user_id INTEGER NOT NULL,
                added_at REAL NOT NULL,
                PRIMARY KEY (guild_id, user_id)
            )
        """)

        # -----------------------------------------------------------------
        # Guild Config Table
        # DESIGN: One punishment policy per guild
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS guild_config (
                guild_id INTEGER PRIMARY KEY,
                punishment TEXT NOT NULL,
                updated_at REAL NOT NULL
            )
        """)

        # -----------------------------------------------------------------
        # Role Backups Table
        # DESIGN: Latest-wins snapshot of recreatable role attributes
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS role_backups (
                guild_id INTEGER NOT NULL,
                role_id INTEGER NOT NULL,
                name TEXT NOT NULL,
                permissions INTEGER NOT NULL DEFAULT 0,
                color INTEGER NOT NULL DEFAULT 0,
                hoist INTEGER NOT NULL DEFAULT 0,
                mentionable INTEGER NOT NULL DEFAULT 0,
                position INTEGER NOT NULL DEFAULT 0,
                updated_at REAL NOT NULL,
                PRIMARY KEY (guild_id, role_id)
            )
        """)

        # -----------------------------------------------------------------
        # Channel Backups Table
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS channel_backups (
                guild_id INTEGER NOT NULL,
                channel_id INTEGER NOT NULL,
                name TEXT NOT NULL,
                type TEXT NOT NULL,
                topic TEXT,
                position INTEGER NOT NULL DEFAULT 0,
                parent_id INTEGER,
                nsfw INTEGER NOT NULL DEFAULT 0,
                updated_at REAL NOT NULL,
                PRIMARY KEY (guild_id, channel_id)
            )
        """)

        conn.commit()


__all__ = ["SchemaMixin"]
