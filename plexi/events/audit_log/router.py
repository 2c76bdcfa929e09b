"""
Plexi Anti-Nuke - Audit Event Router
====================================

Turns destructive gateway events into AuditEvents for the enforcement
engine.

DESIGN:
    The gateway event says what happened; the audit log says who did it.
    For each event the router scans the last few audit entries of the
    matching action and hands the result to AntiNukeService.handle().

    Actions performed by this bot (bans, restores) are ignored so
    enforcement never feeds back into itself.
"""

from typing import TYPE_CHECKING

import discord

from plexi.core.config import get_config
from plexi.core.constants import ActionType
from plexi.core.logger import logger
from plexi.services.antinuke import AuditEvent

from .resolver import find_executor

if TYPE_CHECKING:
    from plexi.bot import PlexiBot


class AuditEventRouter:
    """Maps gateway events to AuditEvents and forwards them."""

    def __init__(self, bot: "PlexiBot") -> None:
        self.bot = bot
        self.config = get_config()

    # =========================================================================
    # Event Entry Points
    # =========================================================================

    async def role_deleted(self, role: discord.Role) -> None:
        found = await self.dispatch(
            role.guild, discord.AuditLogAction.role_delete, ActionType.ROLE_DELETES, role.id
        )
        if not found:
            await self.unidentified(
                role.guild.id,
                "Role deleted",
                f"Role **{role.name}** ({role.id}) was deleted, executor not identified.",
            )

    async def channel_deleted(self, channel: discord.abc.GuildChannel) -> None:
        guild = getattr(channel, "guild", None)
        if guild is None:
            return
        found = await self.dispatch(
            guild, discord.AuditLogAction.channel_delete, ActionType.CHANNEL_DELETES, channel.id
        )
        if not found:
            await self.unidentified(
                guild.id,
                "Channel deleted",
                f"Channel **{channel.name}** ({channel.id}) was deleted, executor not identified.",
            )

    async def member_banned(self, guild: discord.Guild, user: discord.User) -> None:
        found = await self.dispatch(
            guild, discord.AuditLogAction.ban, ActionType.BANS, user.id
        )
        if not found:
            await self.unidentified(
                guild.id,
                "Member banned",
                f"User **{user}** was banned, executor not identified.",
            )

    async def member_removed(self, member: discord.Member) -> None:
        # No kick entry means the member left on their own
        await self.dispatch(
            member.guild, discord.AuditLogAction.kick, ActionType.KICKS, member.id
        )

    async def role_created(self, role: discord.Role) -> None:
        await self.dispatch(
            role.guild, discord.AuditLogAction.role_create, ActionType.ROLE_CREATES, role.id
        )

    # =========================================================================
    # Dispatch
    # =========================================================================

    async def dispatch(
        self,
        guild: discord.Guild,
        audit_action: "discord.AuditLogAction",
        action_type: ActionType,
        target_id: int,
    ) -> bool:
        """
        Resolve the executor and forward the event.

        Returns:
            True if an executor was identified, whether or not the event
            was forwarded.
        """
        executor_id = await find_executor(
            guild, audit_action, target_id, self.config.audit_log_lookback
        )
        if executor_id is None:
            return False

        if self.is_self(executor_id):
            logger.debug("Own Action Ignored", [
                ("Guild", str(guild.id)),
                ("Action", action_type.value),
                ("Target", str(target_id)),
            ])
            return True

        service = self.bot.antinuke_service
        if service is None:
            logger.debug("Event Not Forwarded", [
                ("Guild", str(guild.id)),
                ("Action", action_type.value),
                ("Reason", "Anti-nuke service not ready"),
            ])
            return True

        event = AuditEvent(
            guild_id=guild.id,
            action_type=action_type,
            target_id=target_id,
            executor_id=executor_id,
            timestamp=service.clock(),
        )
        await service.handle(event)
        return True

    def is_self(self, user_id: int) -> bool:
        user = self.bot.user
        return user is not None and user.id == user_id

    async def unidentified(self, guild_id: int, title: str, description: str) -> None:
        logger.info(title, [
            ("Guild", str(guild_id)),
            ("Executor", "Not identified"),
        ])
        if self.bot.mod_log is not None:
            await self.bot.mod_log.send(guild_id, title, description)


__all__ = ["AuditEventRouter"]
