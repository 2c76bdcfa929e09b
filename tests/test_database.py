"""
Plexi Anti-Nuke - Database Tests
================================

Tests for the database layer to ensure data integrity.
"""

import pytest


class TestWhitelist:
    """Tests for whitelist operations."""

    def test_add_whitelist(self, test_db):
        """Test adding a user reports a new row."""
        assert test_db.add_whitelist(1, 100) is True
        assert test_db.is_whitelisted(1, 100) is True

    def test_add_whitelist_twice_is_idempotent(self, test_db):
        """Test re-adding a user keeps a single entry."""
        test_db.add_whitelist(1, 100)
        assert test_db.add_whitelist(1, 100) is False
        assert test_db.get_whitelist(1) == [100]

    def test_whitelist_is_per_guild(self, test_db):
        """Test an entry in one guild doesn't exempt in another."""
        test_db.add_whitelist(1, 100)
        assert test_db.is_whitelisted(2, 100) is False

    def test_remove_whitelist(self, test_db):
        """Test removing a user."""
        test_db.add_whitelist(1, 100)
        assert test_db.remove_whitelist(1, 100) is True
        assert test_db.is_whitelisted(1, 100) is False

    def test_remove_missing_user(self, test_db):
        """Test removing a user that was never added."""
        assert test_db.remove_whitelist(1, 100) is False

    def test_get_whitelist(self, test_db):
        """Test listing whitelisted users."""
        test_db.add_whitelist(1, 100)
        test_db.add_whitelist(1, 200)
        test_db.add_whitelist(2, 300)
        assert set(test_db.get_whitelist(1)) == {100, 200}

    def test_get_whitelist_empty(self, test_db):
        """Test listing an empty whitelist."""
        assert test_db.get_whitelist(1) == []


class TestGuildConfig:
    """Tests for punishment policy storage."""

    def test_punishment_default_is_none(self, test_db):
        """Test absence of a row means no configured policy."""
        assert test_db.get_punishment(1) is None

    def test_set_punishment(self, test_db):
        """Test storing a policy."""
        test_db.set_punishment(1, "kick")
        assert test_db.get_punishment(1) == "kick"

    def test_set_punishment_overwrites(self, test_db):
        """Test one row per guild, latest wins."""
        test_db.set_punishment(1, "kick")
        test_db.set_punishment(1, "removeRoles")
        assert test_db.get_punishment(1) == "removeRoles"
        row = test_db.fetchone("SELECT COUNT(*) AS count FROM guild_config WHERE guild_id = ?", (1,))
        assert row["count"] == 1


class TestRoleBackups:
    """Tests for role snapshots."""

    def _save(self, db, name="Moderators", position=5):
        db.save_role_snapshot(
            guild_id=1,
            role_id=10,
            name=name,
            permissions=8,
            color=0x00FF00,
            hoist=True,
            mentionable=False,
            position=position,
        )

    def test_save_and_get_role(self, test_db):
        """Test a snapshot round-trips with typed booleans."""
        self._save(test_db)
        snap = test_db.get_role_snapshot(1, 10)
        assert snap["name"] == "Moderators"
        assert snap["permissions"] == 8
        assert snap["color"] == 0x00FF00
        assert snap["hoist"] is True
        assert snap["mentionable"] is False
        assert snap["position"] == 5

    def test_role_snapshot_latest_wins(self, test_db):
        """Test re-saving replaces the previous snapshot."""
        self._save(test_db)
        self._save(test_db, name="Admins", position=9)
        snap = test_db.get_role_snapshot(1, 10)
        assert snap["name"] == "Admins"
        assert snap["position"] == 9
        row = test_db.fetchone("SELECT COUNT(*) AS count FROM role_backups WHERE guild_id = ?", (1,))
        assert row["count"] == 1

    def test_missing_role_snapshot(self, test_db):
        """Test unknown role returns None."""
        assert test_db.get_role_snapshot(1, 404) is None


class TestChannelBackups:
    """Tests for channel snapshots."""

    def test_save_and_get_channel(self, test_db):
        """Test a channel snapshot round-trips."""
        test_db.save_channel_snapshot(
            guild_id=1,
            channel_id=20,
            name="general",
            channel_type="text",
            topic="Welcome",
            position=2,
            parent_id=30,
            nsfw=False,
        )
        snap = test_db.get_channel_snapshot(1, 20)
        assert snap["name"] == "general"
        assert snap["type"] == "text"
        assert snap["topic"] == "Welcome"
        assert snap["parent_id"] == 30
        assert snap["nsfw"] is False

    def test_channel_without_parent(self, test_db):
        """Test nullable fields stay None."""
        test_db.save_channel_snapshot(1, 21, "lobby", "voice", None, 0, None, False)
        snap = test_db.get_channel_snapshot(1, 21)
        assert snap["topic"] is None
        assert snap["parent_id"] is None

    def test_snapshots_scoped_per_guild(self, test_db):
        """Test a snapshot is only visible to its own guild."""
        test_db.save_channel_snapshot(1, 20, "a", "text", None, 0, None, False)
        test_db.save_channel_snapshot(2, 22, "c", "text", None, 0, None, False)
        assert test_db.get_channel_snapshot(1, 20)["name"] == "a"
        assert test_db.get_channel_snapshot(2, 20) is None
        assert test_db.get_channel_snapshot(1, 22) is None


class TestDatabaseManager:
    """Tests for the manager singleton."""

    def test_singleton(self, test_db):
        """Test repeated construction returns the same instance."""
        from plexi.core.database import get_db
        assert get_db() is test_db

    def test_bad_query_raises(self, test_db):
        """Test SQL errors propagate to the caller."""
        import sqlite3
        with pytest.raises(sqlite3.Error):
            test_db.execute("SELECT * FROM missing_table")
