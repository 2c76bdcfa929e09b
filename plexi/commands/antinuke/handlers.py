"""
Plexi Anti-Nuke - Admin Command Handlers
========================================

Whitelist, punishment policy and backup commands. Each handler takes
plain arguments and returns the reply text; the cog only parses and
replies.
"""

from typing import TYPE_CHECKING, Optional

import discord

from plexi.core.config import get_config, is_owner
from plexi.core.constants import PUNISHMENT_CHOICES
from plexi.core.database import get_db
from plexi.core.logger import logger

if TYPE_CHECKING:
    from plexi.bot import PlexiBot


REFUSAL = (
    "You must be the server owner or have Manage Server permission "
    "to run {brand} configuration commands."
)


class AntiNukeCommandHandler:
    """Business logic behind the prefix commands."""

    def __init__(self, bot: Optional["PlexiBot"] = None) -> None:
        self.bot = bot
        self.config = get_config()
        self.db = get_db()

    # =========================================================================
    # Authorization
    # =========================================================================

    def can_manage(self, member: discord.Member) -> bool:
        """Bot owner, guild owner or Manage Server permission."""
        if is_owner(member.id):
            return True
        if member.guild is not None and member.id == member.guild.owner_id:
            return True
        return bool(member.guild_permissions.manage_guild)

    def refusal(self) -> str:
        return REFUSAL.format(brand=self.config.brand_name)

    # =========================================================================
    # Whitelist
    # =========================================================================

    def whitelist_usage(self) -> str:
        p = self.config.prefix
        return f"Usage: {p}whitelist add|remove @user | {p}whitelist list"

    def whitelist_add(self, guild: discord.Guild, user: Optional[discord.abc.User]) -> str:
        if user is None:
            return "Please mention the user to whitelist."

        added = self.db.add_whitelist(guild.id, user.id)
        logger.tree("Whitelist Updated", [
            ("Guild", f"{guild.name} ({guild.id})"),
            ("User", f"{user} ({user.id})"),
            ("Action", "Added" if added else "Already present"),
        ], emoji="📝")
        return f"✅ {user} has been added to the whitelist for this server."

    def whitelist_remove(self, guild: discord.Guild, user: Optional[discord.abc.User]) -> str:
        if user is None:
            return "Please mention the user to remove from the whitelist."

        removed = self.db.remove_whitelist(guild.id, user.id)
        logger.tree("Whitelist Updated", [
            ("Guild", f"{guild.name} ({guild.id})"),
            ("User", f"{user} ({user.id})"),
            ("Action", "Removed" if removed else "Not present"),
        ], emoji="📝")
        return f"✅ {user} has been removed from the whitelist for this server."

    def whitelist_list(self, guild: discord.Guild) -> str:
        user_ids = self.db.get_whitelist(guild.id)
        if not user_ids:
            return "The whitelist for this server is currently empty."
        return "Whitelisted users: " + ", ".join(f"<@{uid}>" for uid in user_ids)

    # =========================================================================
    # Policy
    # =========================================================================

    def set_punishment(self, guild: discord.Guild, punishment: Optional[str]) -> str:
        if not punishment or punishment not in PUNISHMENT_CHOICES:
            return (
                f"Usage: {self.config.prefix}setpunish {'|'.join(PUNISHMENT_CHOICES)}: "
                f"sets the enforcement action {self.config.brand_name} will take."
            )

        self.db.set_punishment(guild.id, punishment)
        logger.tree("Punishment Policy Set", [
            ("Guild", f"{guild.name} ({guild.id})"),
            ("Punishment", punishment),
        ], emoji="⚖️")
        return f"✅ Enforcement action set to **{punishment}** for this server."

    # =========================================================================
    # Backups
    # =========================================================================

    def backup_now(self, guild: discord.Guild) -> str:
        if self.bot is None or self.bot.backup_service is None:
            return "Backup service is not available."
        roles, channels = self.bot.backup_service.backup_guild(guild)
        return (
            f"✅ Immediate backup completed for {roles} roles and "
            f"{channels} channels (stored locally)."
        )

    # =========================================================================
    # Help
    # =========================================================================

    def help_text(self) -> str:
        p = self.config.prefix
        return "\n".join([
            f"{self.config.brand_name}: administrative commands:",
            f"• `{p}whitelist add @user`: Add a user to the whitelist.",
            f"• `{p}whitelist remove @user`: Remove a user from the whitelist.",
            f"• `{p}whitelist list`: List whitelisted users.",
            f"• `{p}setpunish <{'|'.join(PUNISHMENT_CHOICES)}>`: Select automated enforcement.",
            f"• `{p}backupnow`: Create immediate backups of roles & channels.",
            "Only Server Owners or users with Manage Server permission may use these commands.",
        ])

    def unknown_command(self) -> str:
        return f"Unknown command. Use {self.config.prefix}help for a list of administrative commands."


__all__ = ["AntiNukeCommandHandler", "REFUSAL"]
