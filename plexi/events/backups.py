"""
Plexi Anti-Nuke - Backup Events
===============================

Keeps role/channel snapshots current as the guild changes.
"""

from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from plexi.core.logger import logger

if TYPE_CHECKING:
    from plexi.bot import PlexiBot


class BackupEvents(commands.Cog):
    """Snapshot roles and channels on create and update."""

    def __init__(self, bot: "PlexiBot") -> None:
        self.bot = bot

    # =========================================================================
    # Role Events
    # =========================================================================

    @commands.Cog.listener()
    async def on_guild_role_create(self, role: discord.Role) -> None:
        if self.bot.backup_service:
            self.bot.backup_service.snapshot_role(role)

    @commands.Cog.listener()
    async def on_guild_role_update(self, before: discord.Role, after: discord.Role) -> None:
        if self.bot.backup_service:
            self.bot.backup_service.snapshot_role(after)

    # =========================================================================
    # Channel Events
    # =========================================================================

    @commands.Cog.listener()
    async def on_guild_channel_create(self, channel: discord.abc.GuildChannel) -> None:
        if self.bot.backup_service:
            self.bot.backup_service.snapshot_channel(channel)

    @commands.Cog.listener()
    async def on_guild_channel_update(
        self,
        before: discord.abc.GuildChannel,
        after: discord.abc.GuildChannel,
    ) -> None:
        if self.bot.backup_service:
            self.bot.backup_service.snapshot_channel(after)


async def setup(bot: "PlexiBot") -> None:
    """Add the backup events cog to the bot."""
    await bot.add_cog(BackupEvents(bot))
    logger.debug("Backup Events Loaded")


__all__ = ["BackupEvents"]
