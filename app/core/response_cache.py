"""
In-memory TTL cache for upstream responses. Keyed by the outbound query parameters.
"""

import logging
import threading
import time
from typing import Any

logger = logging.getLogger(__name__)

# key -> (expires_at monotonic seconds, rows)
_entries: dict[str, tuple[float, list[dict[str, Any]]]] = {}
_lock = threading.Lock()


def get_cached(key: str) -> list[dict[str, Any]] | None:
    """Return cached rows for key (copy so caller cannot mutate store), or None if missing/expired."""
    now = time.monotonic()
    with _lock:
        entry = _entries.get(key)
        if entry is None:
            return None
        expires_at, rows = entry
        if expires_at <= now:
            del _entries[key]
            logger.info("[response_cache:get_cached] expired key=%r", key[:80])
            return None
        out = list(rows)
    logger.info("[response_cache:get_cached] hit key=%r rows=%d", key[:80], len(out))
    return out


def put_cached(key: str, rows: list[dict[str, Any]], ttl: float) -> None:
    """Store rows under key for ttl seconds, dropping expired entries. ttl <= 0 stores nothing."""
    if ttl <= 0:
        return
    now = time.monotonic()
    with _lock:
        expired = [k for k, (expires_at, _) in _entries.items() if expires_at <= now]
        for k in expired:
            del _entries[k]
        _entries[key] = (now + ttl, list(rows))
    logger.info("[response_cache:put_cached] key=%r rows=%d ttl=%.0fs", key[:80], len(rows), ttl)


def clear() -> int:
    """Drop every entry. Returns the number of entries removed."""
    with _lock:
        removed = len(_entries)
        _entries.clear()
    return removed
