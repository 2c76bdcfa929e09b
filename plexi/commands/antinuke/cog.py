"""
Plexi Anti-Nuke - Admin Command Cog
===================================

Prefix commands for whitelist, punishment policy and backups.
"""

from typing import TYPE_CHECKING, Optional

import discord
from discord.ext import commands

from plexi.core.logger import logger

from .handlers import AntiNukeCommandHandler

if TYPE_CHECKING:
    from plexi.bot import PlexiBot


class AntiNukeCog(commands.Cog):
    """Administrative prefix commands."""

    def __init__(self, bot: "PlexiBot") -> None:
        self.bot = bot
        self.handler = AntiNukeCommandHandler(bot)

        logger.tree("Anti-Nuke Commands Loaded", [
            ("Prefix", self.handler.config.prefix),
            ("Commands", "whitelist, setpunish, backupnow, help"),
        ], emoji="🛡️")

    # =========================================================================
    # Checks
    # =========================================================================

    async def cog_check(self, ctx: commands.Context) -> bool:
        if ctx.guild is None:
            raise commands.NoPrivateMessage()
        return self.handler.can_manage(ctx.author)

    async def cog_command_error(self, ctx: commands.Context, error: Exception) -> None:
        if isinstance(error, commands.NoPrivateMessage):
            return
        if isinstance(error, commands.CheckFailure):
            await ctx.reply(self.handler.refusal())
            return
        logger.error("Command Failed", [
            ("Command", str(ctx.command)),
            ("User", f"{ctx.author} ({ctx.author.id})"),
            ("Error", str(error)[:100]),
            ("Type", type(error).__name__),
        ])

    @staticmethod
    def _mentioned(ctx: commands.Context) -> Optional[discord.abc.User]:
        mentions = ctx.message.mentions
        return mentions[0] if mentions else None

    # =========================================================================
    # Whitelist
    # =========================================================================

    @commands.group(name="whitelist", invoke_without_command=True)
    async def whitelist(self, ctx: commands.Context) -> None:
        """Show whitelist usage."""
        await ctx.reply(self.handler.whitelist_usage())

    @whitelist.command(name="add")
    async def whitelist_add(self, ctx: commands.Context) -> None:
        """Exempt a user from automated punishment."""
        await ctx.reply(self.handler.whitelist_add(ctx.guild, self._mentioned(ctx)))

    @whitelist.command(name="remove")
    async def whitelist_remove(self, ctx: commands.Context) -> None:
        """Remove a user's exemption."""
        await ctx.reply(self.handler.whitelist_remove(ctx.guild, self._mentioned(ctx)))

    @whitelist.command(name="list")
    async def whitelist_list(self, ctx: commands.Context) -> None:
        """List exempt users."""
        await ctx.reply(self.handler.whitelist_list(ctx.guild))

    # =========================================================================
    # Policy & Backups
    # =========================================================================

    @commands.command(name="setpunish")
    async def setpunish(self, ctx: commands.Context, punishment: Optional[str] = None) -> None:
        """Select the automated enforcement action."""
        await ctx.reply(self.handler.set_punishment(ctx.guild, punishment))

    @commands.command(name="backupnow")
    async def backupnow(self, ctx: commands.Context) -> None:
        """Snapshot every role and channel now."""
        await ctx.reply(self.handler.backup_now(ctx.guild))

    @commands.command(name="help")
    async def help(self, ctx: commands.Context) -> None:
        """List administrative commands."""
        await ctx.reply(self.handler.help_text())


__all__ = ["AntiNukeCog"]
