"""
Plexi Anti-Nuke - Enforcement Package
=====================================

Offense tracking and automated enforcement.
"""

from .models import AuditEvent, OffenseRecord
from .service import AntiNukeService
from .tracker import OffenseTracker

__all__ = [
    "AntiNukeService",
    "AuditEvent",
    "OffenseRecord",
    "OffenseTracker",
]
