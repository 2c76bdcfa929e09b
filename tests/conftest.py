"""
Plexi Anti-Nuke - Test Fixtures
===============================

Shared fixtures for all tests.
"""

import os
import sys
import pytest
from pathlib import Path
from unittest.mock import MagicMock, AsyncMock

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set up test environment before importing modules
os.environ["TESTING"] = "1"
os.environ.setdefault("DISCORD_TOKEN", "test-token")

# Mock aiohttp
aiohttp_mock = MagicMock()
sys.modules['aiohttp'] = aiohttp_mock


# Cog base that keeps listener methods as plain coroutines
class MockCog:
    """Mock discord.ext.commands.Cog."""

    @staticmethod
    def listener(name=None):
        def decorator(func):
            return func
        return decorator


# Mock discord module before any imports
discord_mock = MagicMock()
discord_mock.NotFound = Exception
discord_mock.Forbidden = Exception
discord_mock.HTTPException = Exception
discord_mock.abc = MagicMock()
discord_mock.abc.GuildChannel = MagicMock
discord_mock.abc.User = MagicMock

commands_mock = MagicMock()
commands_mock.Cog = MockCog
ext_mock = MagicMock()
ext_mock.commands = commands_mock
discord_mock.ext = ext_mock

sys.modules['discord'] = discord_mock
sys.modules['discord.ext'] = ext_mock
sys.modules['discord.ext.commands'] = commands_mock
sys.modules['discord.abc'] = discord_mock.abc


# =============================================================================
# Core Fixtures
# =============================================================================

GUILD_ID = 987654321
OWNER_ID = 111111111
GUILD_OWNER_ID = 222222222
EXECUTOR_ID = 123456789
BOT_USER_ID = 999888777


@pytest.fixture
def config(monkeypatch):
    """Install a fresh Config as the global instance."""
    from plexi.core import config as config_module

    cfg = config_module.Config(discord_token="test-token", owner_id=OWNER_ID)
    monkeypatch.setattr(config_module, "_config", cfg)
    return cfg


@pytest.fixture
def temp_db_path(tmp_path):
    """Create a temporary database path for testing."""
    return tmp_path / "test_plexi.db"


@pytest.fixture
def test_db(temp_db_path, monkeypatch):
    """Create a fresh test database instance."""
    from plexi.core.database import manager as db_module

    # Reset singleton
    db_module.DatabaseManager._instance = None

    # Patch the DB path
    monkeypatch.setattr(db_module, "DB_PATH", temp_db_path)
    monkeypatch.setattr(db_module, "DATA_DIR", temp_db_path.parent)

    db = db_module.DatabaseManager()

    yield db

    # Cleanup
    db.close()
    db_module.DatabaseManager._instance = None


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    """Manual clock starting at t=1000s."""
    return ManualClock(start=1000.0)


# =============================================================================
# Mock Discord Objects
# =============================================================================

def make_role(role_id, name="role", default=False, managed=False, guild=None):
    """Create a mock Discord role."""
    role = MagicMock()
    role.id = role_id
    role.name = name
    role.is_default = MagicMock(return_value=default)
    role.managed = managed
    role.hoist = False
    role.mentionable = True
    role.position = 3
    role.permissions.value = 8
    role.colour.value = 0xFF0000
    role.guild = guild
    return role


@pytest.fixture
def mock_discord_guild():
    """Create a mock Discord guild."""
    guild = MagicMock()
    guild.id = GUILD_ID
    guild.name = "Test Server"
    guild.owner_id = GUILD_OWNER_ID
    guild.get_member = MagicMock(return_value=None)
    guild.fetch_member = AsyncMock()
    guild.get_channel = MagicMock(return_value=None)
    guild.create_role = AsyncMock()
    guild.create_text_channel = AsyncMock()
    guild.create_voice_channel = AsyncMock()
    guild.create_category = AsyncMock()
    guild.create_stage_channel = AsyncMock()
    guild.create_forum = AsyncMock()
    guild.roles = []
    guild.channels = []
    return guild


@pytest.fixture
def mock_executor(mock_discord_guild):
    """Create a mock guild member performing destructive actions."""
    member = MagicMock()
    member.id = EXECUTOR_ID
    member.name = "nuker"
    member.guild = mock_discord_guild
    member.ban = AsyncMock()
    member.kick = AsyncMock()
    member.remove_roles = AsyncMock()
    member.roles = []
    mock_discord_guild.get_member.return_value = member
    return member


@pytest.fixture
def mock_mod_log():
    """Create a mock mod log that records notification titles."""
    mod_log = MagicMock()
    mod_log.send = AsyncMock(return_value=True)
    return mod_log


@pytest.fixture
def mock_bot(mock_discord_guild, mock_mod_log):
    """Create a mock bot instance."""
    bot = MagicMock()
    bot.user = MagicMock()
    bot.user.id = BOT_USER_ID
    bot.get_guild = MagicMock(return_value=mock_discord_guild)
    bot.mod_log = mock_mod_log
    bot.backup_service = MagicMock()
    bot.backup_service.restore_role = AsyncMock(return_value=None)
    bot.backup_service.restore_channel = AsyncMock(return_value=None)
    bot.antinuke_service = None
    return bot


def sent_titles(mod_log):
    """Titles of every notification sent through a mock mod log."""
    return [c.args[1] for c in mod_log.send.call_args_list]
