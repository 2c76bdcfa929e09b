"""
Plexi Anti-Nuke - Enforcement Service
=====================================

Detects bursts of destructive actions and punishes the executor.

DESIGN:
    Every audit event goes through one handle() cycle:
        record -> count in window -> threshold check
        -> punish -> restore -> reset

    Cycles for the same (guild, action type) bucket are serialized with
    an asyncio.Lock held from record to reset, so a burst of concurrent
    events triggers enforcement exactly once. Different buckets never
    wait on each other.

    Once the threshold is crossed, notify, punish and restore are guarded
    separately and the bucket is reset in a finally block. A failing
    sink or database call is logged and never blocks the other steps.
"""

import asyncio
from collections import defaultdict
from typing import TYPE_CHECKING, Dict, Optional, Tuple

import discord

from plexi.core.config import EmbedColors, get_config
from plexi.core.constants import RESTORABLE_ACTIONS, ActionType, PunishmentKind
from plexi.core.database import get_db
from plexi.core.logger import logger
from plexi.utils.clock import Clock, system_clock
from plexi.utils.discord_rate_limit import log_http_error

from .models import AuditEvent
from .tracker import OffenseTracker

if TYPE_CHECKING:
    from plexi.bot import PlexiBot
    from plexi.services.backup import BackupService
    from plexi.services.mod_log import ModLogService


# =============================================================================
# Anti-Nuke Service
# =============================================================================

class AntiNukeService:
    """
    Sliding-window enforcement engine.

    Features:
        - Per-executor counting per (guild, action type)
        - Configurable punishment per guild (ban, kick, demote, removeRoles)
        - Whitelist, bot owner and guild owner exemptions
        - Automatic role/channel restore after deletion bursts
    """

    def __init__(
        self,
        bot: "PlexiBot",
        tracker: Optional[OffenseTracker] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.bot = bot
        self.config = get_config()
        self.db = get_db()
        self.tracker = tracker or OffenseTracker()
        self.clock = clock or system_clock

        self._locks: Dict[Tuple[int, ActionType], asyncio.Lock] = defaultdict(asyncio.Lock)

        logger.tree("Anti-Nuke Service Loaded", [
            (action.value, f"{t.count} / {t.window_seconds}s")
            for action, t in self.config.thresholds.items()
        ] + [
            ("Default Punishment", self.config.default_punishment),
            ("Auto Restore", "Enabled" if self.config.auto_restore else "Disabled"),
        ], emoji="🛡️")

    @property
    def mod_log(self) -> Optional["ModLogService"]:
        return getattr(self.bot, "mod_log", None)

    @property
    def backup(self) -> Optional["BackupService"]:
        return getattr(self.bot, "backup_service", None)

    # =========================================================================
    # Event Handling
    # =========================================================================

    async def handle(self, event: AuditEvent) -> bool:
        """
        Run one enforcement cycle for an audit event.

        Args:
            event: Normalized audit event with a known executor.

        Returns:
            True if the threshold was reached and enforcement ran.
        """
        try:
            async with self._locks[(event.guild_id, event.action_type)]:
                return await self._handle_locked(event)
        except Exception as e:
            logger.error("Anti-Nuke Handle Failed", [
                ("Guild", str(event.guild_id)),
                ("Action", event.action_type.value),
                ("Executor", str(event.executor_id)),
                ("Error", str(e)[:100]),
                ("Type", type(e).__name__),
            ])
            return False

    async def _handle_locked(self, event: AuditEvent) -> bool:
        action = event.action_type
        self.tracker.record(event.guild_id, action, event.executor_id, event.timestamp)

        threshold = self.config.thresholds.get(action)
        if threshold is None:
            return False

        count = self.tracker.count(
            event.guild_id,
            action,
            event.executor_id,
            threshold.window_seconds,
            event.timestamp,
        )

        logger.tree("Action Tracked", [
            ("Guild", str(event.guild_id)),
            ("Action", action.value),
            ("Executor", str(event.executor_id)),
            ("Count", f"{count} / {threshold.count}"),
        ], emoji="👁️")

        await self._notify(
            event.guild_id,
            f"Recorded activity: {action.value}",
            f"User <@{event.executor_id}> performed **{action.value}**. "
            f"Current count in {threshold.window_seconds}s: **{count}/{threshold.count}**.",
            fields=[("Target ID", str(event.target_id or "N/A"))],
        )

        if count < threshold.count:
            return False

        logger.tree("ENFORCEMENT TRIGGERED", [
            ("Guild", str(event.guild_id)),
            ("Action", action.value),
            ("Executor", str(event.executor_id)),
            ("Count", f"{count} / {threshold.count}"),
        ], emoji="🚨")

        try:
            await self._enforce(event)
        finally:
            self.tracker.reset(event.guild_id, action, event.executor_id)
        return True

    async def _enforce(self, event: AuditEvent) -> None:
        action = event.action_type

        await self._notify(
            event.guild_id,
            f"Enforcement triggered: {action.value}",
            f"User <@{event.executor_id}> exceeded the configured threshold for "
            f"**{action.value}**. Initiating automated enforcement and mitigation.",
            color=EmbedColors.RED,
        )

        guild = self.bot.get_guild(event.guild_id)
        if guild is None:
            logger.info("Enforcement Skipped", [
                ("Guild", str(event.guild_id)),
                ("Reason", "Guild not available"),
            ])
            await self._notify(
                event.guild_id,
                "Action skipped",
                f"Guild not available; no action taken against <@{event.executor_id}>.",
                color=EmbedColors.GOLD,
            )
            return

        note = f"Threshold exceeded for action type: {action.value}"
        try:
            await self.punish(guild, event.executor_id, note)
        except Exception as e:
            logger.error("Punishment Failed", [
                ("Guild", str(guild.id)),
                ("Executor", str(event.executor_id)),
                ("Error", str(e)[:100]),
                ("Type", type(e).__name__),
            ])

        if self.config.auto_restore and action in RESTORABLE_ACTIONS and event.target_id:
            try:
                await self._restore(guild, action, event.target_id)
            except Exception as e:
                logger.error("Restore Failed", [
                    ("Guild", str(guild.id)),
                    ("Action", action.value),
                    ("Target", str(event.target_id)),
                    ("Error", str(e)[:100]),
                    ("Type", type(e).__name__),
                ])

    # =========================================================================
    # Exemptions
    # =========================================================================

    def is_exempt(self, guild: discord.Guild, user_id: int) -> bool:
        """Whitelisted users, the bot owner and the guild owner are never punished."""
        if user_id == guild.owner_id:
            return True
        if self.config.owner_id is not None and user_id == self.config.owner_id:
            return True
        return self.db.is_whitelisted(guild.id, user_id)

    def get_policy(self, guild_id: int) -> str:
        """Punishment configured for a guild, or the default."""
        return self.db.get_punishment(guild_id) or self.config.default_punishment

    # =========================================================================
    # Punishment
    # =========================================================================

    async def punish(self, guild: discord.Guild, executor_id: int, note: str = "") -> Optional[str]:
        """
        Apply the guild's punishment to an executor.

        Returns:
            The punishment attempted, or None when it was skipped.
        """
        policy = self.get_policy(guild.id)

        member = await self._resolve_member(guild, executor_id)
        if member is None:
            await self._notify(
                guild.id,
                "Action skipped",
                f"Could not fetch executor ({executor_id}). {note}",
                color=EmbedColors.GOLD,
            )
            return None

        if self.is_exempt(guild, executor_id):
            logger.tree("Enforcement Skipped (Exempt)", [
                ("Guild", str(guild.id)),
                ("Executor", str(executor_id)),
            ], emoji="🛡️")
            await self._notify(
                guild.id,
                "Action skipped",
                f"Executor <@{executor_id}> is whitelisted; no punitive action taken.",
                color=EmbedColors.GOLD,
            )
            return None

        reason = f"{self.config.brand_name}: Automated enforcement. {note}".strip()

        if policy == PunishmentKind.BAN.value:
            await self._ban(guild, member, reason)
        elif policy == PunishmentKind.KICK.value:
            await self._kick(guild, member, reason)
        elif policy in (PunishmentKind.DEMOTE.value, PunishmentKind.REMOVE_ROLES.value):
            await self._strip_roles(guild, member)
        else:
            logger.warning("Unknown Punishment Configured", [
                ("Guild", str(guild.id)),
                ("Punishment", str(policy)),
            ])
            await self._notify(
                guild.id,
                "Unknown enforcement",
                f"Guild configuration specified an unknown action: {policy}.",
                color=EmbedColors.GOLD,
            )
        return policy

    async def _resolve_member(self, guild: discord.Guild, user_id: int) -> Optional[discord.Member]:
        member = guild.get_member(user_id)
        if member is not None:
            return member
        try:
            return await guild.fetch_member(user_id)
        except discord.HTTPException:
            logger.info("Executor Not Resolved", [
                ("Guild", str(guild.id)),
                ("User ID", str(user_id)),
            ])
            return None

    async def _ban(self, guild: discord.Guild, member: discord.Member, reason: str) -> bool:
        try:
            await member.ban(reason=reason)
        except discord.HTTPException as e:
            log_http_error(e, "Auto-Ban", [
                ("Guild", str(guild.id)),
                ("User", str(member.id)),
            ])
            await self._notify(
                guild.id,
                "Auto-ban failed",
                f"Failed to ban <@{member.id}>: {e}",
                color=EmbedColors.RED,
            )
            return False

        logger.tree("Executor Banned", [
            ("Guild", str(guild.id)),
            ("User", str(member.id)),
        ], emoji="🔨")
        await self._notify(
            guild.id,
            "Automated ban applied",
            f"Executor <@{member.id}> was banned by automated enforcement.",
            color=EmbedColors.RED,
        )
        return True

    async def _kick(self, guild: discord.Guild, member: discord.Member, reason: str) -> bool:
        try:
            await member.kick(reason=reason)
        except discord.HTTPException as e:
            log_http_error(e, "Auto-Kick", [
                ("Guild", str(guild.id)),
                ("User", str(member.id)),
            ])
            await self._notify(
                guild.id,
                "Auto-kick failed",
                f"Failed to kick <@{member.id}>: {e}",
                color=EmbedColors.RED,
            )
            return False

        logger.tree("Executor Kicked", [
            ("Guild", str(guild.id)),
            ("User", str(member.id)),
        ], emoji="👢")
        await self._notify(
            guild.id,
            "Automated kick applied",
            f"Executor <@{member.id}> was kicked by automated enforcement.",
            color=EmbedColors.RED,
        )
        return True

    async def _strip_roles(self, guild: discord.Guild, member: discord.Member) -> int:
        """Remove every non-default role, one at a time. Returns how many were removed."""
        reason = f"{self.config.brand_name}: Role removal as enforcement."
        removed = 0
        failed = 0

        for role in list(member.roles):
            if role.id == guild.id or role.is_default():
                continue
            try:
                await member.remove_roles(role, reason=reason)
                removed += 1
            except discord.HTTPException as e:
                failed += 1
                log_http_error(e, "Role Removal", [
                    ("Guild", str(guild.id)),
                    ("User", str(member.id)),
                    ("Role", f"{role.name} ({role.id})"),
                ])

        logger.tree("Executor Roles Removed", [
            ("Guild", str(guild.id)),
            ("User", str(member.id)),
            ("Removed", str(removed)),
            ("Failed", str(failed)),
        ], emoji="📉")
        await self._notify(
            guild.id,
            "Roles removed",
            f"All elevated roles removed from <@{member.id}> by automated enforcement.",
            color=EmbedColors.RED,
        )
        return removed

    # =========================================================================
    # Mitigation
    # =========================================================================

    async def _restore(self, guild: discord.Guild, action: ActionType, target_id: int) -> None:
        backup = self.backup
        if backup is None:
            return
        if action == ActionType.ROLE_DELETES:
            await backup.restore_role(guild, target_id)
        elif action == ActionType.CHANNEL_DELETES:
            await backup.restore_channel(guild, target_id)

    # =========================================================================
    # Notifications
    # =========================================================================

    async def _notify(
        self,
        guild_id: int,
        title: str,
        description: str,
        fields=None,
        color: Optional[int] = None,
    ) -> None:
        mod_log = self.mod_log
        if mod_log is None:
            return
        try:
            await mod_log.send(guild_id, title, description, fields=fields, color=color)
        except Exception as e:
            logger.warning("Notification Failed", [
                ("Guild", str(guild_id)),
                ("Title", title),
                ("Error", str(e)[:100]),
                ("Type", type(e).__name__),
            ])


__all__ = ["AntiNukeService"]
