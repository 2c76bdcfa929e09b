"""
Discord HTTP Error Utilities
============================

Consistent logging for failed Discord API operations.

Usage:
    from plexi.utils.discord_rate_limit import log_http_error

    try:
        await member.ban(reason=reason)
    except discord.HTTPException as e:
        log_http_error(e, "Auto-Ban", [("User", str(member.id))])
"""

from typing import Optional

from plexi.core.logger import logger


# HTTP status code descriptions for logging
HTTP_STATUS_DESCRIPTIONS = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    429: "Rate Limited",
    500: "Internal Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Timeout",
}


def log_http_error(
    e: Exception,
    operation: str,
    context: Optional[list] = None,
) -> None:
    """
    Log a Discord HTTPException with comprehensive details.

    Args:
        e: The HTTPException that occurred
        operation: Description of what operation failed
        context: Additional context tuples for logging [(key, value), ...]
    """
    status = getattr(e, "status", None)
    status_desc = HTTP_STATUS_DESCRIPTIONS.get(status, "Unknown")
    text = getattr(e, "text", None)

    log_items = [
        ("Status", f"{status} ({status_desc})"),
        ("Error", str(text) if text else str(e)),
    ]

    retry_after = getattr(e, "retry_after", None)
    if isinstance(retry_after, (int, float)):
        log_items.append(("Retry After", f"{retry_after:.1f}s"))

    if context:
        log_items.extend(context)

    # Use warning for recoverable statuses, error for others
    if status == 429:
        logger.warning(f"🚦 {operation} Rate Limited", log_items)
    elif status == 403:
        logger.warning(f"🚫 {operation} Forbidden", log_items)
    elif status == 404:
        logger.warning(f"❓ {operation} Not Found", log_items)
    else:
        logger.error(f"❌ {operation} Failed", log_items)


__all__ = [
    "log_http_error",
    "HTTP_STATUS_DESCRIPTIONS",
]
