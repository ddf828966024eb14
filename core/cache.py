# core/cache.py

"""
In-memory key/value store with per-entry TTL.

Backs every transient piece of console state (notifications, the
sign-in error banner). Expiry is evaluated against an injectable clock,
so an entry is visible strictly before `expires_at` and never after.
"""

from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Any, Callable, List, Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CacheEntry:
    """Represents a stored value with expiration time."""

    def __init__(self, value: Any, expires_at: datetime):
        self.value = value
        self.expires_at = expires_at

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class ExpiringStore:
    """
    TTL store. Thread-safe for concurrent access.
    Iteration order is newest-first.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or utc_now
        self._entries: dict[str, CacheEntry] = {}
        self._lock = Lock()

    def now(self) -> datetime:
        return self._clock()

    def get(self, key: str) -> Optional[Any]:
        """
        Returns:
            Stored value or None if not found or expired
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            if entry.is_expired(self._clock()):
                del self._entries[key]
                return None

            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: float) -> datetime:
        """Store `value` and return the instant it expires."""
        expires_at = self._clock() + timedelta(seconds=ttl_seconds)
        self.set_until(key, value, expires_at)
        return expires_at

    def set_until(self, key: str, value: Any, expires_at: datetime):
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = CacheEntry(value, expires_at)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self):
        with self._lock:
            self._entries.clear()

    def cleanup_expired(self):
        """Remove all expired entries."""
        now = self._clock()
        with self._lock:
            expired_keys = [
                key for key, entry in self._entries.items()
                if entry.is_expired(now)
            ]
            for key in expired_keys:
                del self._entries[key]

    def values(self) -> List[Any]:
        """Live values, newest first."""
        self.cleanup_expired()
        with self._lock:
            return [entry.value for entry in reversed(self._entries.values())]

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._entries.keys())

    def size(self) -> int:
        self.cleanup_expired()
        with self._lock:
            return len(self._entries)
