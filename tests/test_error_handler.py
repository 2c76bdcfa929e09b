"""
Plexi Anti-Nuke - Error Handler Tests
=====================================
"""

import sqlite3

from unittest.mock import patch

from plexi.core.config import ConfigValidationError
from plexi.utils.error_handler import ErrorHandler


class TestCategorize:
    """Tests for error categorization."""

    def test_config_error(self):
        """Test config errors are recognized first."""
        assert ErrorHandler.categorize_error(ConfigValidationError("missing")) == "config"

    def test_database_error(self):
        """Test sqlite errors are database errors."""
        assert ErrorHandler.categorize_error(sqlite3.OperationalError("locked")) == "database"

    def test_network_error(self):
        """Test connection errors are network errors."""
        assert ErrorHandler.categorize_error(ConnectionResetError()) == "network"


class TestHandle:
    """Tests for handle()."""

    def test_critical_logs_error(self):
        """Test critical errors are logged as errors with a hint."""
        with patch("plexi.utils.error_handler.logger") as log:
            category = ErrorHandler.handle(ConfigValidationError("missing"), "main", critical=True)
        assert category == "config"
        details = dict(log.error.call_args.args[1])
        assert "DISCORD_TOKEN" in details["Recovery"]

    def test_non_critical_logs_warning(self):
        """Test non-critical errors are warnings."""
        with patch("plexi.utils.error_handler.logger") as log:
            ErrorHandler.handle(sqlite3.Error("x"), "db")
        log.warning.assert_called_once()
        log.error.assert_not_called()
