"""
Plexi Anti-Nuke - Database Module
=================================

SQLite storage for the whitelist, guild punishment policy and
role/channel backups.
"""

from plexi.core.database.manager import (
    DatabaseManager,
    get_db,
    DATA_DIR,
    DB_PATH,
)

from plexi.core.database.models import (
    RoleSnapshotRecord,
    ChannelSnapshotRecord,
)

__all__ = [
    "DatabaseManager",
    "get_db",
    "DATA_DIR",
    "DB_PATH",
    "RoleSnapshotRecord",
    "ChannelSnapshotRecord",
]
