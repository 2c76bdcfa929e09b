"""
Plexi Anti-Nuke - Clock
=======================

Injectable time source for sliding-window bookkeeping.

Tests pass a fake clock so time can be advanced without sleeping.
"""

import time
from typing import Callable

Clock = Callable[[], float]
"""Returns the current time as seconds since the epoch."""


def system_clock() -> float:
    """Wall-clock time in seconds."""
    return time.time()


__all__ = ["Clock", "system_clock"]
