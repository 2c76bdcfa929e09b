"""
Plexi Anti-Nuke - Main Bot Class
================================

Discord client that owns the enforcement services and loads the cogs.

DESIGN:
    Central orchestrator that:
    - Holds references to all services for cross-service communication
    - Loads command and event cogs
    - Routes unknown prefix commands to a help reply

SERVICE INITIALIZATION ORDER:
    setup_hook (before the gateway connects):
    1. Mod log
    2. Backup service
    3. Anti-nuke service
    4. Command cogs, then event cogs
"""

from typing import Optional

import discord
from discord.ext import commands

from plexi.core.config import get_config
from plexi.core.database import get_db
from plexi.core.logger import logger


# =============================================================================
# PlexiBot Class
# =============================================================================

class PlexiBot(commands.Bot):
    """Anti-nuke bot."""

    # =========================================================================
    # Initialization
    # =========================================================================

    def __init__(self) -> None:
        """Initialize the bot with the intents needed for audit events."""
        self.config = get_config()

        intents = discord.Intents.default()
        intents.message_content = True
        intents.members = True
        intents.moderation = True

        super().__init__(
            command_prefix=self.config.prefix,
            intents=intents,
            help_command=None,
        )

        self.db = get_db()

        # Service placeholders
        self.mod_log = None
        self.backup_service = None
        self.antinuke_service = None

        self._ready_initialized: bool = False

        logger.info("Bot Instance Created")

    # =========================================================================
    # Setup Hook
    # =========================================================================

    async def setup_hook(self) -> None:
        """Create services, then load cogs."""
        if self.config.error_webhook_url:
            logger.set_webhook(self.config.error_webhook_url)

        self._init_services()

        from plexi.commands import COMMAND_COGS
        for cog in COMMAND_COGS:
            try:
                await self.load_extension(cog)
                logger.info(f"Cog Loaded: {cog.split('.')[-1]}")
            except Exception as e:
                logger.error("Failed to Load Cog", [("Cog", cog), ("Error", str(e))])

        from plexi.events import EVENT_COGS
        for cog in EVENT_COGS:
            try:
                await self.load_extension(cog)
                logger.debug(f"Event Cog Loaded: {cog.split('.')[-1]}")
            except Exception as e:
                logger.error("Failed to Load Event Cog", [("Cog", cog), ("Error", str(e))])

    def _init_services(self) -> None:
        from plexi.services.mod_log import ModLogService
        self.mod_log = ModLogService(self)

        from plexi.services.backup import BackupService
        self.backup_service = BackupService(self, self.mod_log)

        from plexi.services.antinuke import AntiNukeService
        self.antinuke_service = AntiNukeService(self)

    # =========================================================================
    # On Ready
    # =========================================================================

    async def on_ready(self) -> None:
        """Log the connection once."""
        if self._ready_initialized:
            logger.info("Bot Reconnected (skipping re-initialization)")
            return

        self._ready_initialized = True

        if not self.user:
            return

        logger.tree("BOT ONLINE", [
            ("Name", self.user.name),
            ("ID", str(self.user.id)),
            ("Guilds", str(len(self.guilds))),
            ("Prefix", self.config.prefix),
        ], emoji="🚀")

    # =========================================================================
    # Command Errors
    # =========================================================================

    async def on_command_error(self, ctx: commands.Context, error: Exception) -> None:
        """Reply to unknown prefix commands; cog errors are handled by the cog."""
        if not isinstance(error, commands.CommandNotFound):
            return
        if ctx.guild is None or ctx.author.bot:
            return

        cog = self.get_cog("AntiNukeCog")
        if cog is None:
            return
        handler = cog.handler
        if not handler.can_manage(ctx.author):
            await ctx.reply(handler.refusal())
            return
        await ctx.reply(handler.unknown_command())

    # =========================================================================
    # Shutdown
    # =========================================================================

    async def close(self) -> None:
        """Close the database and the gateway connection."""
        logger.info("Shutting Down")
        self.db.close()
        await super().close()


__all__ = ["PlexiBot"]
