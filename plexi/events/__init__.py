"""
Plexi Anti-Nuke - Events Package
================================

Event handler Cogs loaded by the bot with load_extension().

DESIGN:
    Each event module contains a Cog class with @commands.Cog.listener
    decorators and an async setup(bot) function.

    Event routing:
    - audit_log: Destructive actions -> anti-nuke engine
    - backups.py: Role/channel create and update -> snapshots
"""

# =============================================================================
# Event Cog Registry
# =============================================================================

EVENT_COGS = [
    "plexi.events.backups",
    "plexi.events.audit_log",
]
"""List of event cog module paths for dynamic loading."""


__all__ = [
    "EVENT_COGS",
]
