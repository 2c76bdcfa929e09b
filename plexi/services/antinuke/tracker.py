"""
Plexi Anti-Nuke - Offense Tracker
=================================

In-memory sliding-window counters for privileged actions.

DESIGN:
    One append-only list per (guild, action type), shared by every
    executor and filtered per executor on read. Expired records are
    pruned lazily whenever a bucket is counted. Enforcement events are
    rare and bursts are short, so a linear scan per check is fine.

    State is volatile: a restart forgives every in-flight burst.
"""

import threading
from collections import defaultdict
from typing import Dict, List, Tuple

from plexi.core.constants import ActionType

from .models import OffenseRecord


BucketKey = Tuple[int, ActionType]


class OffenseTracker:
    """Sliding-window offense buckets keyed by (guild, action type)."""

    def __init__(self) -> None:
        self._buckets: Dict[BucketKey, List[OffenseRecord]] = defaultdict(list)
        self._lock = threading.Lock()

    def record(
        self,
        guild_id: int,
        action_type: ActionType,
        executor_id: int,
        now: float,
    ) -> None:
        """Append an offense stamped `now` to the guild's bucket for this action."""
        with self._lock:
            self._buckets[(guild_id, action_type)].append(
                OffenseRecord(executor_id=executor_id, timestamp=now)
            )

    def count(
        self,
        guild_id: int,
        action_type: ActionType,
        executor_id: int,
        window: float,
        now: float,
    ) -> int:
        """
        Count an executor's offenses inside the window ending at `now`.

        Records older than `now - window` are dropped from the bucket for
        every executor before counting.

        Args:
            guild_id: Guild the actions happened in.
            action_type: Bucket to count.
            executor_id: Executor whose records are counted.
            window: Window length in seconds.
            now: Current time in seconds.

        Returns:
            Number of non-expired records for the executor.
        """
        key = (guild_id, action_type)
        cutoff = now - window
        with self._lock:
            bucket = self._buckets.get(key)
            if not bucket:
                return 0
            bucket = [r for r in bucket if r.timestamp >= cutoff]
            if bucket:
                self._buckets[key] = bucket
            else:
                del self._buckets[key]
            return sum(1 for r in bucket if r.executor_id == executor_id)

    def reset(self, guild_id: int, action_type: ActionType, executor_id: int) -> None:
        """Forget every record of an executor in one bucket."""
        key = (guild_id, action_type)
        with self._lock:
            bucket = self._buckets.get(key)
            if bucket is None:
                return
            remaining = [r for r in bucket if r.executor_id != executor_id]
            if remaining:
                self._buckets[key] = remaining
            else:
                del self._buckets[key]

    def bucket_size(self, guild_id: int, action_type: ActionType) -> int:
        """Raw number of stored records in a bucket, expired or not."""
        with self._lock:
            return len(self._buckets.get((guild_id, action_type), ()))

    def clear(self) -> None:
        """Drop all buckets."""
        with self._lock:
            self._buckets.clear()


__all__ = ["OffenseTracker"]
