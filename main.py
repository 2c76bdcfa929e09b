#!/usr/bin/env python3
"""
Plexi Anti-Nuke - Entry Point
=============================

Loads .env, validates configuration and runs the bot until interrupted.
"""

import asyncio
import sys

from dotenv import load_dotenv

from plexi.core.config import ConfigValidationError, get_config, validate_and_log_config
from plexi.core.logger import logger
from plexi.utils.error_handler import ErrorHandler


async def main() -> None:
    """
    Main entry point.

    Handles the bot lifecycle:
    1. Loads environment configuration
    2. Validates configuration (DISCORD_TOKEN is required)
    3. Creates the bot and connects to Discord

    Raises:
        SystemExit: If configuration is invalid.
    """
    load_dotenv()

    try:
        validate_and_log_config()
    except ConfigValidationError as e:
        ErrorHandler.handle(e, location="main.main", critical=True)
        sys.exit(1)

    config = get_config()
    logger.tree("PLEXI STARTING", [
        ("Brand", config.brand_name),
        ("Prefix", config.prefix),
    ], emoji="🛡️")

    from plexi.bot import PlexiBot

    bot = PlexiBot()
    async with bot:
        await bot.start(config.discord_token)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("🛑 Bot stopped by user (Ctrl+C)")
    except Exception as e:
        ErrorHandler.handle(e, location="main.__main__", critical=True)
        sys.exit(1)
