"""
Plexi Anti-Nuke - Mod Log Service
=================================

Delivers human-readable moderation notifications.

DESIGN:
    Every notification is one webhook embed posted to LOG_WEBHOOK_URL.
    When no webhook is configured, or delivery fails, the same
    notification goes to the tree logger instead. send() never raises so
    a broken webhook can't interrupt an enforcement cycle.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

import aiohttp

from plexi.core.config import NY_TZ, get_config
from plexi.core.constants import WEBHOOK_TIMEOUT
from plexi.core.logger import logger

if TYPE_CHECKING:
    from plexi.bot import PlexiBot


Fields = Optional[List[Tuple[str, str]]]


class ModLogService:
    """Formats notifications into embeds and posts them to the mod-log webhook."""

    def __init__(self, bot: Optional["PlexiBot"] = None) -> None:
        self.bot = bot
        self.config = get_config()

    # =========================================================================
    # Payload
    # =========================================================================

    def build_payload(
        self,
        guild_id: Optional[int],
        title: str,
        description: str,
        fields: Fields = None,
        color: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Build the webhook JSON body for one notification.

        Args:
            guild_id: Guild the notification concerns, shown in the footer.
            title: Embed title.
            description: Embed body text.
            fields: Optional (name, value) pairs rendered as inline fields.
            color: Embed color, brand color by default.

        Returns:
            Dict with a single-element "embeds" list.
        """
        embed: Dict[str, Any] = {
            "title": title,
            "description": description,
            "color": color if color is not None else self.config.brand_color,
            "timestamp": datetime.now(NY_TZ).isoformat(),
            "footer": {"text": f"{self.config.brand_name} • Guild ID: {guild_id or 'unknown'}"},
        }
        if fields:
            embed["fields"] = [
                {"name": str(name), "value": str(value), "inline": True}
                for name, value in fields
            ]
        return {"embeds": [embed]}

    # =========================================================================
    # Delivery
    # =========================================================================

    async def send(
        self,
        guild_id: Optional[int],
        title: str,
        description: str,
        fields: Fields = None,
        color: Optional[int] = None,
    ) -> bool:
        """
        Deliver a notification.

        Returns:
            True if the webhook accepted it, False if it fell back to the log.
        """
        url = self.config.log_webhook_url
        if url:
            payload = self.build_payload(guild_id, title, description, fields, color)
            try:
                status = await self._post(url, payload)
                if 200 <= status < 300:
                    return True
                logger.warning("Mod Log Webhook Rejected", [
                    ("Status", str(status)),
                    ("Title", title),
                ])
            except Exception as e:
                logger.warning("Mod Log Webhook Failed", [
                    ("Title", title),
                    ("Error", str(e)[:100]),
                    ("Type", type(e).__name__),
                ])

        self._log_fallback(guild_id, title, description, fields)
        return False

    async def _post(self, url: str, payload: Dict[str, Any]) -> int:
        """POST the payload and return the HTTP status."""
        async with aiohttp.ClientSession() as session:
            async with session.post(
                url,
                json=payload,
                timeout=aiohttp.ClientTimeout(total=WEBHOOK_TIMEOUT),
            ) as resp:
                return resp.status

    def _log_fallback(
        self,
        guild_id: Optional[int],
        title: str,
        description: str,
        fields: Fields,
    ) -> None:
        items = [("Guild", str(guild_id)), ("Details", description)]
        if fields:
            items.extend((str(k), str(v)) for k, v in fields)
        logger.tree(f"[ModLog] {title}", items, emoji="📋")


__all__ = ["ModLogService"]
