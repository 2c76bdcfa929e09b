"""
Plexi Anti-Nuke - Commands Package
==================================

Prefix command Cogs loaded by the bot with load_extension().

Available Commands (prefix from PREFIX, default k!):
    whitelist add|remove @user: Manage punishment exemptions
    whitelist list: Show exempt users
    setpunish ban|kick|demote|removeRoles: Select enforcement action
    backupnow: Snapshot all roles and channels
    help: List administrative commands
"""

# =============================================================================
# Command Cog Registry
# =============================================================================

COMMAND_COGS = [
    "plexi.commands.antinuke",
]
"""List of command cog module paths for dynamic loading."""


__all__ = [
    "COMMAND_COGS",
]
