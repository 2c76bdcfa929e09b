"""
Plexi Anti-Nuke - Startup Error Handler
=======================================

Categorizes fatal errors and logs them with a recovery hint.

Features:
- Error categorization (Config, Database, Network, Discord)
- Recovery suggestions
- Full traceback for critical errors
"""

import sqlite3
import traceback
from typing import Dict, Tuple, Type

import discord

from plexi.core.config import ConfigValidationError
from plexi.core.logger import logger


class ErrorHandler:
    """Top-level error reporting for the entry point."""

    # Checked in order; discord last since its errors are the broadest
    ERROR_CATEGORIES: Dict[str, Tuple[Type[BaseException], ...]] = {
        "config": (ConfigValidationError,),
        "database": (sqlite3.Error,),
        "network": (ConnectionError, TimeoutError),
        "discord": (discord.LoginFailure, discord.HTTPException),
    }

    SUGGESTIONS: Dict[str, str] = {
        "config": "Check the .env file; DISCORD_TOKEN is required",
        "database": "Check the data/ directory is writable and plexi.db isn't locked",
        "network": "Network connection issue, check connectivity to Discord",
        "discord": "Check the bot token and that the required intents are enabled",
    }

    @classmethod
    def categorize_error(cls, e: BaseException) -> str:
        """Return the first matching category name, or 'general'."""
        for category, error_types in cls.ERROR_CATEGORIES.items():
            if isinstance(e, error_types):
                return category
        return "general"

    @classmethod
    def get_recovery_suggestion(cls, category: str) -> str:
        return cls.SUGGESTIONS.get(category, "Unexpected error, check logs for details")

    @classmethod
    def handle(cls, e: BaseException, location: str, critical: bool = False) -> str:
        """
        Log an error with its category and recovery hint.

        Args:
            e: The exception.
            location: Where the error occurred.
            critical: Whether this error stops the bot.

        Returns:
            The error category.
        """
        category = cls.categorize_error(e)
        details = [
            ("Location", location),
            ("Category", category),
            ("Type", type(e).__name__),
            ("Error", str(e)[:200]),
            ("Recovery", cls.get_recovery_suggestion(category)),
        ]

        if critical:
            logger.error("CRITICAL ERROR", details)
            logger.info(f"Traceback:\n{''.join(traceback.format_exception(type(e), e, e.__traceback__))}")
        else:
            logger.warning("Error Handled", details)
        return category


__all__ = ["ErrorHandler"]
