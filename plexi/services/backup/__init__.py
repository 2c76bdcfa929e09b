"""
Plexi Anti-Nuke - Backup Package
================================

Role/channel snapshots and restore.
"""

from .service import BackupService

__all__ = ["BackupService"]
