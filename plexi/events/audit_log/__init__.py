"""
Plexi Anti-Nuke - Audit Log Events Package
==========================================

Structure:
    - resolver.py: Executor lookup in recent audit log entries
    - router.py: Gateway event -> AuditEvent -> enforcement engine
    - cog.py: AuditLogEvents cog with the destructive-action listeners
"""

from .cog import AuditLogEvents, setup
from .resolver import find_executor
from .router import AuditEventRouter

__all__ = ["AuditLogEvents", "AuditEventRouter", "find_executor", "setup"]
