"""Response Cache for the listing endpoint.

Entries are keyed by the serialised query string and stay fresh while
``now - created_at < ttl``. Expired entries are treated exactly like
missing ones and get overwritten by the next store for the same key.
There is no size bound and no explicit invalidation.
"""

import hashlib
import json
import logging
import math
import time
from typing import Any, Callable, Iterable

from cachetools import Cache
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class CacheEntry(BaseModel):
    key: str
    payload: Any
    created_at: float


class ResponseCache:
    """In-process TTL cache with hit/miss counters.

    Freshness is checked on lookup only; nothing is ever evicted.
    """

    def __init__(self, ttl_seconds: float = 300, timer: Callable[[], float] = time.monotonic):
        self.ttl = ttl_seconds
        self._timer = timer
        self._entries: Cache = Cache(maxsize=math.inf)
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(params: Iterable[tuple[str, str]]) -> str:
        """Deterministic key from query parameters, in arrival order.

        Repeated parameters collapse into a list, so ``?a=1&a=2`` and
        ``?a=2&a=1`` are different keys, as are ``?a=1&b=2`` and ``?b=2&a=1``.
        """
        ordered: dict[str, Any] = {}
        for name, value in params:
            if name in ordered:
                previous = ordered[name]
                ordered[name] = [*previous, value] if isinstance(previous, list) else [previous, value]
            else:
                ordered[name] = value
        serialized = json.dumps(ordered, separators=(",", ":"), ensure_ascii=False)
        return f"mt:{hashlib.sha256(serialized.encode()).hexdigest()[:32]}"

    def lookup(self, key: str) -> Any | None:
        """Return the cached payload, or None when absent or expired."""
        entry: CacheEntry | None = self._entries.get(key)
        if entry is None or not self.is_fresh(entry):
            self.misses += 1
            logger.info("Cache MISS | key=%s", key[:20])
            return None

        self.hits += 1
        logger.info("Cache HIT | key=%s | age=%.1fs", key[:20], self._timer() - entry.created_at)
        return entry.payload

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self._timer() - entry.created_at < self.ttl

    def store(self, key: str, payload: Any) -> CacheEntry:
        """Insert or overwrite the entry for ``key`` stamped with the current time."""
        entry = CacheEntry(key=key, payload=payload, created_at=self._timer())
        self._entries[key] = entry
        logger.debug("Cache SET | key=%s | ttl=%ss", key[:20], self.ttl)
        return entry

    def __len__(self) -> int:
        return len(self._entries)

    def stats(self) -> dict:
        return {"entries": len(self._entries), "hits": self.hits, "misses": self.misses}
