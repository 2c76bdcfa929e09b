"""
Plexi Anti-Nuke - Admin Commands
================================

Prefix commands for whitelist, punishment policy and backups.
"""

from typing import TYPE_CHECKING

from .cog import AntiNukeCog
from .handlers import AntiNukeCommandHandler

if TYPE_CHECKING:
    from plexi.bot import PlexiBot


async def setup(bot: "PlexiBot") -> None:
    """Load the AntiNuke commands cog."""
    await bot.add_cog(AntiNukeCog(bot))


__all__ = ["AntiNukeCog", "AntiNukeCommandHandler", "setup"]
