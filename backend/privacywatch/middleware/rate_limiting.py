"""
PrivacyWatch Rate Limiting
Fixed-window operation counters per (actor, operation) behind an injectable counter store
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Optional, Tuple

from ..config import OPERATION_RATE_LIMITS, get_settings
from ..utils.logging_security import sanitize_for_log, sanitize_id_for_log

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass
class RateWindow:
    """Counter for one (actor, operation) key"""

    count: int
    reset_at: float  # epoch seconds


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    reset_at: datetime
    limit: int = 0

    def retry_after_seconds(self, now: Optional[float] = None) -> int:
        """Whole seconds until the window resets, at least 1"""
        now = time.time() if now is None else now
        return max(1, int(self.reset_at.timestamp() - now) + 1)

    def headers(self) -> Dict[str, str]:
        """Industry-standard rate limit headers"""
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(int(self.reset_at.timestamp())),
        }


class CounterStore(ABC):
    """Storage for rate windows. Implementations must make consume() atomic per key."""

    @abstractmethod
    def consume(self, key: str, max_operations: int, window_seconds: float, now: float) -> Tuple[bool, RateWindow]:
        """
        Count one operation against key.

        A missing or expired window starts a new one with count 1. A window at
        or above max_operations is left unchanged and the call is refused.

        Returns:
            (allowed, window after the call)
        """

    @abstractmethod
    def cleanup_expired(self, now: float) -> int:
        """Drop windows whose reset time has passed. Returns how many were removed."""


class InMemoryCounterStore(CounterStore):
    """
    Process-local counter store with one lock per key.

    A key's lock is only evicted by cleanup while cleanup itself holds it.
    consume() re-checks after acquiring that its lock is still the registered
    one and retries with the current lock otherwise.
    """

    def __init__(self):
        self.windows: Dict[str, RateWindow] = {}
        self._locks: Dict[str, threading.Lock] = {}
        # Guards lock creation and eviction only, never the counting path
        self._locks_guard = threading.Lock()

    def _lock_for(self, key: str) -> threading.Lock:
        lock = self._locks.get(key)
        if lock is None:
            with self._locks_guard:
                lock = self._locks.setdefault(key, threading.Lock())
        return lock

    def consume(self, key: str, max_operations: int, window_seconds: float, now: float) -> Tuple[bool, RateWindow]:
        while True:
            lock = self._lock_for(key)
            with lock:
                if self._locks.get(key) is not lock:
                    continue
                return self._consume_locked(key, max_operations, window_seconds, now)

    def _consume_locked(
        self, key: str, max_operations: int, window_seconds: float, now: float
    ) -> Tuple[bool, RateWindow]:
        current = self.windows.get(key)

        if current is None or now > current.reset_at:
            if max_operations < 1:
                return False, RateWindow(0, now + window_seconds)
            window = RateWindow(count=1, reset_at=now + window_seconds)
            self.windows[key] = window
            return True, RateWindow(window.count, window.reset_at)

        if current.count >= max_operations:
            return False, RateWindow(current.count, current.reset_at)

        current.count += 1
        return True, RateWindow(current.count, current.reset_at)

    def cleanup_expired(self, now: float) -> int:
        removed = 0
        with self._locks_guard:
            for key in [k for k, w in list(self.windows.items()) if now > w.reset_at]:
                lock = self._locks.get(key)
                # Busy keys are skipped and picked up by a later cleanup
                if lock is not None and not lock.acquire(blocking=False):
                    continue
                try:
                    window = self.windows.get(key)
                    if window is not None and now > window.reset_at:
                        del self.windows[key]
                        self._locks.pop(key, None)
                        removed += 1
                finally:
                    if lock is not None:
                        lock.release()
        return removed


class RateLimiter:
    """Fixed-window rate limiter for sensitive operations"""

    def __init__(
        self,
        store: Optional[CounterStore] = None,
        clock: Optional[Clock] = None,
        cleanup_interval_seconds: Optional[float] = None,
        enabled: Optional[bool] = None,
    ):
        settings = get_settings()
        self.store = store if store is not None else InMemoryCounterStore()
        self.clock = clock or time.time
        self.cleanup_interval_seconds = (
            cleanup_interval_seconds
            if cleanup_interval_seconds is not None
            else settings.rate_limit_cleanup_interval_seconds
        )
        self.enabled = settings.rate_limiting_enabled if enabled is None else enabled
        self.default_max_operations = settings.rate_limit_max_operations
        self.default_window_minutes = settings.rate_limit_window_minutes
        self.last_cleanup = self.clock()

        logger.info(
            "Rate limiter initialized - Enabled: %s, default %s ops / %s min",
            self.enabled,
            self.default_max_operations,
            self.default_window_minutes,
        )

    def check(
        self,
        actor_id: str,
        operation: str,
        max_operations: Optional[int] = None,
        window_minutes: Optional[int] = None,
    ) -> RateLimitResult:
        """
        Count one operation and decide whether it may proceed.

        Args:
            actor_id: Acting user id
            operation: Operation name (e.g. "upload_document")
            max_operations: Operations allowed per window (default: 50)
            window_minutes: Window length (default: 60)

        Returns:
            RateLimitResult with allowed, remaining and reset_at
        """
        if max_operations is None:
            max_operations = self.default_max_operations
        if window_minutes is None:
            window_minutes = self.default_window_minutes
        now = self.clock()

        if not self.enabled:
            return RateLimitResult(
                allowed=True,
                remaining=max_operations,
                reset_at=datetime.fromtimestamp(now + window_minutes * 60, tz=timezone.utc),
                limit=max_operations,
            )

        self._maybe_cleanup(now)

        key = f"{actor_id}:{operation}"
        allowed, window = self.store.consume(key, max_operations, window_minutes * 60, now)
        remaining = max(0, max_operations - window.count) if allowed else 0

        if not allowed:
            logger.warning(
                "Rate limit exceeded for %s on %s",
                sanitize_id_for_log(actor_id),
                sanitize_for_log(operation),
            )

        return RateLimitResult(
            allowed=allowed,
            remaining=remaining,
            reset_at=datetime.fromtimestamp(window.reset_at, tz=timezone.utc),
            limit=max_operations,
        )

    def check_operation(self, actor_id: str, operation: str) -> RateLimitResult:
        """Check using the preset limits for a named operation, falling back to defaults"""
        max_operations, window_minutes = OPERATION_RATE_LIMITS.get(
            operation, (self.default_max_operations, self.default_window_minutes)
        )
        return self.check(actor_id, operation, max_operations, window_minutes)

    def _maybe_cleanup(self, now: float) -> None:
        """Clean up expired windows to prevent memory bloat"""
        if now - self.last_cleanup < self.cleanup_interval_seconds:
            return
        removed = self.store.cleanup_expired(now)
        self.last_cleanup = now
        if removed:
            logger.debug("Rate limit cleanup: removed %d expired windows", removed)


# Global instance for dependency injection
_rate_limiter = None


def get_rate_limiter() -> RateLimiter:
    """Get or create the global rate limiter"""
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = RateLimiter()
    return _rate_limiter
