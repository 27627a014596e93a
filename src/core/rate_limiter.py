"""
Per-client request rate limiting.

Fixed-window counters keyed by client identifier. Counters live in a
``RateLimitStore`` so the in-process dictionary can be replaced by a shared
external store without touching the limiter or its callers.
"""

import math
import random
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple


@dataclass
class RateLimitEntry:
    count: int
    window_reset_at: float


@dataclass
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset_at: float
    retry_after: Optional[int] = None


class RateLimitStore(ABC):
    """Storage for rate limit counters. ``consume`` must be atomic per key."""

    @abstractmethod
    def consume(
        self, key: str, max_requests: int, window_seconds: float, now: float
    ) -> Tuple[bool, RateLimitEntry]:
        ...

    @abstractmethod
    def cleanup(self, now: float) -> int:
        ...


class InMemoryRateLimitStore(RateLimitStore):
    """Process-local store; each worker process keeps its own counters."""

    def __init__(self):
        self._entries: Dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()

    def consume(
        self, key: str, max_requests: int, window_seconds: float, now: float
    ) -> Tuple[bool, RateLimitEntry]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or now >= entry.window_reset_at:
                entry = RateLimitEntry(count=1, window_reset_at=now + window_seconds)
                self._entries[key] = entry
                return True, RateLimitEntry(entry.count, entry.window_reset_at)

            if entry.count < max_requests:
                entry.count += 1
                return True, RateLimitEntry(entry.count, entry.window_reset_at)

            return False, RateLimitEntry(entry.count, entry.window_reset_at)

    def cleanup(self, now: float) -> int:
        with self._lock:
            expired = [k for k, e in self._entries.items() if now >= e.window_reset_at]
            for key in expired:
                del self._entries[key]
            return len(expired)

    def __len__(self) -> int:
        return len(self._entries)


class RateLimiter:
    def __init__(
        self,
        store: RateLimitStore,
        max_requests: int = 100,
        window_seconds: int = 60,
        cleanup_probability: float = 0.01,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.cleanup_probability = cleanup_probability
        self.clock = clock

    def check(
        self,
        identifier: str,
        max_requests: Optional[int] = None,
        window_seconds: Optional[int] = None,
    ) -> RateLimitResult:
        limit = max_requests or self.max_requests
        window = window_seconds or self.window_seconds
        now = self.clock()

        # Housekeeping on a fraction of requests only
        if random.random() < self.cleanup_probability:
            self.store.cleanup(now)

        allowed, entry = self.store.consume(identifier, limit, window, now)
        remaining = max(0, limit - entry.count)

        retry_after = None
        if not allowed:
            retry_after = max(1, math.ceil(entry.window_reset_at - now))

        return RateLimitResult(
            allowed=allowed,
            limit=limit,
            remaining=remaining,
            reset_at=entry.window_reset_at,
            retry_after=retry_after,
        )
