# utils.py
# Helpers: haversine distance, candidate dedupe, simple in-memory TTL cache

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List
import math
import time

from models import Candidate

EARTH_RADIUS_KM = 6371.0


def distance_km(a: tuple[float, float], b: tuple[float, float]) -> float:
    """
    Great-circle distance between two (lat, lon) pairs in kilometers.
    Only used for ranking candidates, never for routing.
    """
    lat1, lon1 = a
    lat2, lon2 = b
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    h = (math.sin(d_lat / 2) ** 2
         + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2)
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def dedupe(items: List[Candidate]) -> List[Candidate]:
    """Deduplicate by provider id, first occurrence wins."""
    seen = set()
    out: List[Candidate] = []
    for it in items:
        if it.id not in seen:
            seen.add(it.id)
            out.append(it)
    return out


@dataclass
class CacheEntry:
    expires: float
    data: Any


class TTLCache:
    """Simple in-memory TTL cache (per-process)."""

    def __init__(self, ttl_seconds: int = 600):
        self.ttl = ttl_seconds
        self._store: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        entry = self._store.get(key)
        if not entry:
            return None
        if entry.expires < time.time():
            self._store.pop(key, None)
            return None
        return entry.data

    def set(self, key: str, value: Any) -> None:
        self._store[key] = CacheEntry(expires=time.time() + self.ttl, data=value)

    def purge(self) -> int:
        """Drop every expired entry; returns how many went."""
        now = time.time()
        stale = [k for k, e in self._store.items() if e.expires < now]
        for k in stale:
            del self._store[k]
        return len(stale)

    def __len__(self) -> int:
        return len(self._store)
