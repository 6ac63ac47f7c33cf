import logging
import threading
import time

from flask import current_app

logger = logging.getLogger(__name__)


class ContentCache:
    """Time-bounded get-or-compute store for public read queries.

    One instance lives on each app (``app.extensions["content_cache"]``).
    Entries expire ``ttl`` seconds after they were computed; a ttl of 0
    disables caching entirely. Section-admin writes call :meth:`clear`.
    """

    def __init__(self, ttl=300, clock=time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries = {}
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._entries)

    def get(self, key):
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, stored_at = entry
            if self._clock() - stored_at >= self.ttl:
                del self._entries[key]
                return None
            return value

    def set(self, key, value):
        if self.ttl <= 0:
            return
        with self._lock:
            self._entries[key] = (value, self._clock())

    def get_or_compute(self, key, compute):
        value = self.get(key)
        if value is not None:
            return value
        value = compute()
        self.set(key, value)
        return value

    def clear(self):
        with self._lock:
            count = len(self._entries)
            self._entries = {}
        if count:
            logger.debug("Content cache cleared (%d entries)", count)
        return count


def get_content_cache():
    return current_app.extensions["content_cache"]
