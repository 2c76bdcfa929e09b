"""
Plexi Anti-Nuke - Audit Log Events
==================================

Destructive-action listeners. Each one hands off to AuditEventRouter.
"""

from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from plexi.core.logger import logger

from .router import AuditEventRouter

if TYPE_CHECKING:
    from plexi.bot import PlexiBot


class AuditLogEvents(commands.Cog):
    """Destructive-action listeners feeding the anti-nuke engine."""

    def __init__(self, bot: "PlexiBot") -> None:
        self.bot = bot
        self.router = AuditEventRouter(bot)

    @commands.Cog.listener()
    async def on_guild_role_delete(self, role: discord.Role) -> None:
        await self.router.role_deleted(role)

    @commands.Cog.listener()
    async def on_guild_channel_delete(self, channel: discord.abc.GuildChannel) -> None:
        await self.router.channel_deleted(channel)

    @commands.Cog.listener()
    async def on_member_ban(self, guild: discord.Guild, user: discord.User) -> None:
        await self.router.member_banned(guild, user)

    @commands.Cog.listener()
    async def on_member_remove(self, member: discord.Member) -> None:
        await self.router.member_removed(member)

    @commands.Cog.listener()
    async def on_guild_role_create(self, role: discord.Role) -> None:
        await self.router.role_created(role)


async def setup(bot: "PlexiBot") -> None:
    """Add the audit log events cog to the bot."""
    await bot.add_cog(AuditLogEvents(bot))
    logger.debug("Audit Log Events Loaded")
