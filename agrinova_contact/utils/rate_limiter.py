"""
Per-IP rate limiting for contact form submissions
"""
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class RateLimitEntry:
    count: int
    window_start: float


class IPRateLimiter:
    """
    Fixed window counter keyed by client IP.

    The window resets on the first request after it expires rather than
    sliding continuously. State is process-local, so several running
    instances each keep their own counts.
    """

    def __init__(
        self,
        max_requests: int = 10,
        window_seconds: float = 900.0,
        max_entries: int = 10000,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize rate limiter

        Args:
            max_requests: Submissions allowed per IP within one window
            window_seconds: Window length in seconds
            max_entries: Upper bound on tracked IPs before eviction kicks in
            clock: Time source returning seconds, defaults to time.time
        """
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.max_entries = max_entries
        self.clock = clock or time.time
        self._entries: "OrderedDict[str, RateLimitEntry]" = OrderedDict()
        self._lock = threading.Lock()

    def is_rate_limited(self, ip: str) -> bool:
        now = self.clock()
        with self._lock:
            entry = self._entries.get(ip)

            if entry is None or now - entry.window_start > self.window_seconds:
                if entry is None:
                    self._make_room(now)
                else:
                    # Re-insert so eviction order follows window start
                    del self._entries[ip]
                self._entries[ip] = RateLimitEntry(count=1, window_start=now)
                return False

            if entry.count >= self.max_requests:
                logger.info("Rate limit hit for %s (%d in window)", ip, entry.count)
                return True

            entry.count += 1
            return False

    def _make_room(self, now: float) -> None:
        if len(self._entries) < self.max_entries:
            return

        expired = [k for k, e in self._entries.items() if now - e.window_start > self.window_seconds]
        for key in expired:
            del self._entries[key]

        while len(self._entries) >= self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted rate limit entry for {evicted}")

    def get_entry(self, ip: str) -> Optional[RateLimitEntry]:
        with self._lock:
            return self._entries.get(ip)

    def get_stats(self) -> dict:
        """Get current rate limiter statistics"""
        with self._lock:
            tracked = len(self._entries)
        return {
            'tracked_ips': tracked,
            'limit': self.max_requests,
            'window_seconds': self.window_seconds,
            'max_entries': self.max_entries,
        }
