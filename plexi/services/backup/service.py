"""
Plexi Anti-Nuke - Backup Service
================================

Snapshots role/channel configuration and recreates deleted entities.

DESIGN:
    Snapshots are latest-wins rows keyed by (guild, entity id) and are
    refreshed whenever a role or channel is created or updated. A restore
    creates a brand new entity from the snapshot; the platform assigns it
    a new id and the snapshot stays keyed by the old one.

    Restores are single attempts. A failure is reported to the mod log
    and the caller gets None back.
"""

from typing import TYPE_CHECKING, Optional, Tuple

import discord

from plexi.core.config import EmbedColors, get_config
from plexi.core.database import get_db
from plexi.core.logger import logger
from plexi.utils.discord_rate_limit import log_http_error

if TYPE_CHECKING:
    from plexi.bot import PlexiBot
    from plexi.services.mod_log import ModLogService


# channel type string -> guild factory method name
CHANNEL_FACTORIES = {
    "text": "create_text_channel",
    "news": "create_text_channel",
    "voice": "create_voice_channel",
    "category": "create_category",
    "stage_voice": "create_stage_channel",
    "forum": "create_forum",
}


class BackupService:
    """
    Role/channel snapshot store and restore operations.

    Features:
        - Snapshot on create/update (via the backup event cog)
        - Bulk guild backup for the backupnow command
        - Automated restore after a destructive burst
    """

    def __init__(
        self,
        bot: Optional["PlexiBot"] = None,
        mod_log: Optional["ModLogService"] = None,
    ) -> None:
        self.bot = bot
        self.config = get_config()
        self.db = get_db()
        self.mod_log = mod_log

    # =========================================================================
    # Snapshots
    # =========================================================================

    def snapshot_role(self, role: discord.Role) -> bool:
        """
        Store the recreatable attributes of a role.

        Returns False for the default role and integration-managed roles,
        which cannot be recreated.
        """
        if role.is_default() or role.managed:
            return False

        self.db.save_role_snapshot(
            guild_id=role.guild.id,
            role_id=role.id,
            name=role.name,
            permissions=role.permissions.value,
            color=role.colour.value,
            hoist=role.hoist,
            mentionable=role.mentionable,
            position=role.position,
        )
        logger.debug("Role Snapshot Saved", [
            ("Role", f"{role.name} ({role.id})"),
            ("Guild", str(role.guild.id)),
        ])
        return True

    def snapshot_channel(self, channel: discord.abc.GuildChannel) -> bool:
        """Store the recreatable attributes of a channel."""
        self.db.save_channel_snapshot(
            guild_id=channel.guild.id,
            channel_id=channel.id,
            name=channel.name,
            channel_type=str(channel.type),
            topic=getattr(channel, "topic", None),
            position=channel.position,
            parent_id=channel.category_id,
            nsfw=bool(getattr(channel, "nsfw", False)),
        )
        logger.debug("Channel Snapshot Saved", [
            ("Channel", f"{channel.name} ({channel.id})"),
            ("Guild", str(channel.guild.id)),
        ])
        return True

    def backup_guild(self, guild: discord.Guild) -> Tuple[int, int]:
        """
        Snapshot every role and channel of a guild.

        Returns:
            (roles saved, channels saved)
        """
        roles = sum(1 for role in guild.roles if self.snapshot_role(role))
        channels = sum(1 for channel in guild.channels if self.snapshot_channel(channel))

        logger.tree("Guild Backup Complete", [
            ("Guild", f"{guild.name} ({guild.id})"),
            ("Roles", str(roles)),
            ("Channels", str(channels)),
        ], emoji="💾")
        return roles, channels

    # =========================================================================
    # Restore
    # =========================================================================

    async def restore_role(self, guild: discord.Guild, role_id: int) -> Optional[discord.Role]:
        """
        Recreate a deleted role from its snapshot.

        Args:
            guild: Guild to create the role in.
            role_id: Id of the deleted role.

        Returns:
            The new role, or None when there is no snapshot or creation failed.
        """
        snap = self.db.get_role_snapshot(guild.id, role_id)
        if not snap:
            logger.info("Role Restore Skipped", [
                ("Role ID", str(role_id)),
                ("Reason", "No backup"),
            ])
            return None

        try:
            role = await guild.create_role(
                name=snap["name"],
                permissions=discord.Permissions(snap["permissions"]),
                colour=discord.Colour(snap["color"]),
                hoist=snap["hoist"],
                mentionable=snap["mentionable"],
                reason=f"{self.config.brand_name}: Automated role restore.",
            )
        except discord.HTTPException as e:
            log_http_error(e, "Role Restore", [
                ("Guild", str(guild.id)),
                ("Role ID", str(role_id)),
            ])
            await self._notify(
                guild.id,
                "Role restore failed",
                f"Failed to restore role **{snap['name']}**: {e}",
                EmbedColors.RED,
            )
            return None

        # Position is best-effort; the new role still exists if this fails
        try:
            await role.edit(position=snap["position"])
        except discord.HTTPException as e:
            log_http_error(e, "Role Position Restore", [
                ("Role", f"{snap['name']} ({role.id})"),
            ])

        logger.tree("Role Restored", [
            ("Guild", str(guild.id)),
            ("Old Role ID", str(role_id)),
            ("New Role ID", str(role.id)),
            ("Name", snap["name"]),
        ], emoji="♻️")
        await self._notify(
            guild.id,
            "Role restored",
            f"Recreated role **{snap['name']}** from backup.",
            EmbedColors.GREEN,
        )
        return role

    async def restore_channel(
        self,
        guild: discord.Guild,
        channel_id: int,
    ) -> Optional[discord.abc.GuildChannel]:
        """
        Recreate a deleted channel from its snapshot.

        Unknown channel types are recreated as text channels. The parent
        category is reattached only if it still exists.

        Returns:
            The new channel, or None when there is no snapshot or creation failed.
        """
        snap = self.db.get_channel_snapshot(guild.id, channel_id)
        if not snap:
            logger.info("Channel Restore Skipped", [
                ("Channel ID", str(channel_id)),
                ("Reason", "No backup"),
            ])
            return None

        channel_type = snap["type"] or "text"
        factory = getattr(guild, CHANNEL_FACTORIES.get(channel_type, "create_text_channel"))

        kwargs = {
            "name": snap["name"],
            "position": snap["position"],
            "reason": f"{self.config.brand_name}: Automated channel restore.",
        }
        if channel_type != "category":
            if snap["parent_id"]:
                category = guild.get_channel(snap["parent_id"])
                if category is not None:
                    kwargs["category"] = category
            if channel_type in ("text", "news", "forum"):
                kwargs["nsfw"] = snap["nsfw"]
                if snap["topic"]:
                    kwargs["topic"] = snap["topic"]

        try:
            channel = await factory(**kwargs)
        except discord.HTTPException as e:
            log_http_error(e, "Channel Restore", [
                ("Guild", str(guild.id)),
                ("Channel ID", str(channel_id)),
            ])
            await self._notify(
                guild.id,
                "Channel restore failed",
                f"Failed to restore channel **{snap['name']}**: {e}",
                EmbedColors.RED,
            )
            return None

        logger.tree("Channel Restored", [
            ("Guild", str(guild.id)),
            ("Old Channel ID", str(channel_id)),
            ("New Channel ID", str(channel.id)),
            ("Name", snap["name"]),
            ("Type", channel_type),
        ], emoji="♻️")
        await self._notify(
            guild.id,
            "Channel restored",
            f"Recreated channel **{snap['name']}** from backup.",
            EmbedColors.GREEN,
        )
        return channel

    async def _notify(self, guild_id: int, title: str, description: str, color: int) -> None:
        if self.mod_log is not None:
            await self.mod_log.send(guild_id, title, description, color=color)


__all__ = ["BackupService", "CHANNEL_FACTORIES"]
