"""
Plexi Anti-Nuke - Audit Log Ingestion Tests
===========================================

Executor lookup and AuditEvent routing.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

import discord

from conftest import BOT_USER_ID, EXECUTOR_ID, GUILD_ID, sent_titles

from plexi.core.constants import ActionType
from plexi.events.audit_log import AuditEventRouter, find_executor
from plexi.services.antinuke import AuditEvent


def make_entry(target_id, user_id):
    entry = MagicMock()
    entry.target.id = target_id
    entry.user_id = user_id
    return entry


def audit_logs(*entries):
    """Mock for guild.audit_logs(...) returning an async iterator."""
    def factory(**kwargs):
        async def gen():
            for entry in entries:
                yield entry
        return gen()
    return MagicMock(side_effect=factory)


@pytest.fixture
def antinuke():
    service = MagicMock()
    service.handle = AsyncMock(return_value=False)
    service.clock = MagicMock(return_value=1234.0)
    return service


@pytest.fixture
def router(config, mock_bot, antinuke):
    mock_bot.antinuke_service = antinuke
    return AuditEventRouter(mock_bot)


def make_role(guild, role_id=555, name="Moderators"):
    role = MagicMock()
    role.id = role_id
    role.name = name
    role.guild = guild
    return role


class TestFindExecutor:
    """Tests for audit log scanning."""

    @pytest.mark.asyncio
    async def test_matching_entry(self, mock_discord_guild):
        """Test the entry whose target matches is used."""
        mock_discord_guild.audit_logs = audit_logs(make_entry(1, 10), make_entry(555, 20))
        result = await find_executor(mock_discord_guild, discord.AuditLogAction.role_delete, 555, 6)
        assert result == 20

    @pytest.mark.asyncio
    async def test_lookback_and_action_passed(self, mock_discord_guild):
        """Test the scan is limited and filtered by action."""
        mock_discord_guild.audit_logs = audit_logs()
        await find_executor(mock_discord_guild, discord.AuditLogAction.ban, 555, 6)
        mock_discord_guild.audit_logs.assert_called_once_with(
            limit=6, action=discord.AuditLogAction.ban
        )

    @pytest.mark.asyncio
    async def test_no_matching_entry(self, mock_discord_guild):
        """Test None when no entry targets the entity."""
        mock_discord_guild.audit_logs = audit_logs(make_entry(1, 10))
        assert await find_executor(mock_discord_guild, discord.AuditLogAction.ban, 555, 6) is None

    @pytest.mark.asyncio
    async def test_fetch_failure(self, mock_discord_guild):
        """Test an audit log error yields None."""
        mock_discord_guild.audit_logs = MagicMock(side_effect=Exception("Missing Access"))
        assert await find_executor(mock_discord_guild, discord.AuditLogAction.ban, 555, 6) is None


class TestRouter:
    """Tests for gateway event routing."""

    @pytest.mark.asyncio
    async def test_role_delete_forwarded(self, router, antinuke, mock_discord_guild):
        """Test a role deletion with a known executor becomes an AuditEvent."""
        mock_discord_guild.audit_logs = audit_logs(make_entry(555, EXECUTOR_ID))
        await router.role_deleted(make_role(mock_discord_guild))

        antinuke.handle.assert_awaited_once_with(AuditEvent(
            guild_id=GUILD_ID,
            action_type=ActionType.ROLE_DELETES,
            target_id=555,
            executor_id=EXECUTOR_ID,
            timestamp=1234.0,
        ))

    @pytest.mark.asyncio
    async def test_role_delete_unidentified(self, router, antinuke, mock_discord_guild, mock_mod_log):
        """Test an unidentified deletion is only logged."""
        mock_discord_guild.audit_logs = audit_logs()
        await router.role_deleted(make_role(mock_discord_guild))

        antinuke.handle.assert_not_awaited()
        assert sent_titles(mock_mod_log) == ["Role deleted"]
        assert "executor not identified" in mock_mod_log.send.call_args.args[2]

    @pytest.mark.asyncio
    async def test_channel_delete_unidentified(self, router, mock_discord_guild, mock_mod_log):
        """Test an unidentified channel deletion is logged."""
        mock_discord_guild.audit_logs = audit_logs()
        channel = MagicMock()
        channel.id = 777
        channel.name = "general"
        channel.guild = mock_discord_guild
        await router.channel_deleted(channel)
        assert sent_titles(mock_mod_log) == ["Channel deleted"]

    @pytest.mark.asyncio
    async def test_ban_forwarded(self, router, antinuke, mock_discord_guild):
        """Test bans map to the bans action type."""
        mock_discord_guild.audit_logs = audit_logs(make_entry(42, EXECUTOR_ID))
        user = MagicMock()
        user.id = 42
        await router.member_banned(mock_discord_guild, user)
        assert antinuke.handle.call_args.args[0].action_type is ActionType.BANS

    @pytest.mark.asyncio
    async def test_ban_unidentified(self, router, mock_discord_guild, mock_mod_log):
        """Test an unidentified ban is logged."""
        mock_discord_guild.audit_logs = audit_logs()
        user = MagicMock()
        user.id = 42
        await router.member_banned(mock_discord_guild, user)
        assert sent_titles(mock_mod_log) == ["Member banned"]

    @pytest.mark.asyncio
    async def test_plain_leave_ignored(self, router, antinuke, mock_discord_guild, mock_mod_log):
        """Test a member leaving without a kick entry is ignored."""
        mock_discord_guild.audit_logs = audit_logs()
        member = MagicMock()
        member.id = 42
        member.guild = mock_discord_guild
        await router.member_removed(member)

        antinuke.handle.assert_not_awaited()
        mock_mod_log.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_kick_forwarded(self, router, antinuke, mock_discord_guild):
        """Test a kick entry maps to the kicks action type."""
        mock_discord_guild.audit_logs = audit_logs(make_entry(42, EXECUTOR_ID))
        member = MagicMock()
        member.id = 42
        member.guild = mock_discord_guild
        await router.member_removed(member)
        assert antinuke.handle.call_args.args[0].action_type is ActionType.KICKS

    @pytest.mark.asyncio
    async def test_role_create_forwarded(self, router, antinuke, mock_discord_guild):
        """Test role creations map to roleCreates."""
        mock_discord_guild.audit_logs = audit_logs(make_entry(555, EXECUTOR_ID))
        await router.role_created(make_role(mock_discord_guild))
        assert antinuke.handle.call_args.args[0].action_type is ActionType.ROLE_CREATES

    @pytest.mark.asyncio
    async def test_own_actions_ignored(self, router, antinuke, mock_discord_guild, mock_mod_log):
        """Test actions performed by this bot are not counted."""
        mock_discord_guild.audit_logs = audit_logs(make_entry(555, BOT_USER_ID))
        await router.role_deleted(make_role(mock_discord_guild))

        antinuke.handle.assert_not_awaited()
        mock_mod_log.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unidentified_reported_before_service_ready(self, config, mock_bot, mock_discord_guild, mock_mod_log):
        """Test the "executor not identified" notice doesn't depend on the engine being loaded."""
        mock_bot.antinuke_service = None
        router = AuditEventRouter(mock_bot)
        mock_discord_guild.audit_logs = audit_logs()

        await router.role_deleted(make_role(mock_discord_guild))

        assert sent_titles(mock_mod_log) == ["Role deleted"]

    @pytest.mark.asyncio
    async def test_identified_not_reported_before_service_ready(self, config, mock_bot, mock_discord_guild, mock_mod_log):
        """Test an identified executor is neither reported nor forwarded without the engine."""
        mock_bot.antinuke_service = None
        router = AuditEventRouter(mock_bot)
        mock_discord_guild.audit_logs = audit_logs(make_entry(555, EXECUTOR_ID))

        await router.role_deleted(make_role(mock_discord_guild))

        mock_mod_log.send.assert_not_awaited()
