"""
Plexi Anti-Nuke - Utilities Package
===================================

Small helpers shared across services.
"""

from .clock import Clock, system_clock
from .discord_rate_limit import log_http_error

__all__ = [
    "Clock",
    "system_clock",
    "log_http_error",
]
