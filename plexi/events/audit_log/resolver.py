"""
Plexi Anti-Nuke - Audit Log Executor Lookup
===========================================

Finds who performed a privileged action by scanning the most recent
audit log entries of the matching type.
"""

from typing import Optional

import discord

from plexi.core.logger import logger
from plexi.utils.discord_rate_limit import log_http_error


async def find_executor(
    guild: discord.Guild,
    action: "discord.AuditLogAction",
    target_id: int,
    limit: int,
) -> Optional[int]:
    """
    Return the id of the user behind the latest matching audit entry.

    Args:
        guild: Guild whose audit log is scanned.
        action: Audit log action type to filter on.
        target_id: Id of the affected role, channel or user.
        limit: Number of recent entries to scan.

    Returns:
        Executor id, or None if no entry targets `target_id` or the
        audit log can't be read.
    """
    try:
        async for entry in guild.audit_logs(limit=limit, action=action):
            entry_target = getattr(entry.target, "id", None)
            if entry_target != target_id:
                continue
            if entry.user_id is not None:
                return entry.user_id
            return getattr(entry.user, "id", None)
    except discord.HTTPException as e:
        log_http_error(e, "Audit Log Fetch", [
            ("Guild", str(guild.id)),
            ("Target", str(target_id)),
        ])
        return None

    logger.debug("Audit Entry Not Found", [
        ("Guild", str(guild.id)),
        ("Target", str(target_id)),
    ])
    return None


__all__ = ["find_executor"]
