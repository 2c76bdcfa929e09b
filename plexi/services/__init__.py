"""
Plexi Anti-Nuke - Services Package
==================================

Enforcement engine, backups and the mod log.
"""

from .antinuke import AntiNukeService, AuditEvent, OffenseTracker
from .backup import BackupService
from .mod_log import ModLogService

__all__ = [
    "AntiNukeService",
    "AuditEvent",
    "OffenseTracker",
    "BackupService",
    "ModLogService",
]
