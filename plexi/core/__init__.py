"""
Plexi Anti-Nuke - Core Package
==============================

Configuration, logging, constants and database management.

DESIGN:
    Core modules are singletons or global instances so every service
    sees the same state:
    - get_config() returns the same Config instance
    - get_db() returns the same DatabaseManager instance
    - logger is a global TreeLogger instance
"""

from .config import (
    Config,
    ConfigValidationError,
    EmbedColors,
    NY_TZ,
    get_config,
    is_owner,
)

from .database import DatabaseManager, get_db

from .logger import logger, TreeLogger


__all__ = [
    # Config
    "Config",
    "ConfigValidationError",
    "EmbedColors",
    "NY_TZ",
    "get_config",
    "is_owner",
    # Database
    "DatabaseManager",
    "get_db",
    # Logger
    "logger",
    "TreeLogger",
]
