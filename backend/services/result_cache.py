"""Injected, time-boxed cache for scoring results.

Keyed by (resume id, job title, company). Stale or missing entries are
recomputed by the caller; the cache never affects correctness.
"""

import logging
import threading
import time
from typing import Callable, Protocol

from models.schemas.scoring import ScoringResult

logger = logging.getLogger(__name__)

CacheKey = tuple[str, str, str]


def make_cache_key(resume_id: str, job_title: str, company: str) -> CacheKey:
    return (resume_id.strip(), " ".join(job_title.lower().split()), " ".join(company.lower().split()))


class ResultCache(Protocol):
    def get(self, key: CacheKey) -> ScoringResult | None: ...

    def set(self, key: CacheKey, value: ScoringResult) -> None: ...

    def clear(self) -> None: ...


class TTLResultCache:
    """Thread-safe in-memory cache with a per-entry time-to-live."""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[CacheKey, tuple[float, ScoringResult]] = {}
        self._lock = threading.Lock()

    def get(self, key: CacheKey) -> ScoringResult | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                logger.debug("Cache entry expired: %s", key)
                return None
            return value

    def set(self, key: CacheKey, value: ScoringResult) -> None:
        with self._lock:
            self._entries[key] = (self._clock() + self._ttl, value)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
