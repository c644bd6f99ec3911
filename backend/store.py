# store.py
# Key-value persistence and the itinerary store (current trip + resume pointer)

from __future__ import annotations
import json
import logging
import os
import tempfile
from typing import Optional, Protocol

from pydantic import ValidationError
from models import LastTrip, Trip

log = logging.getLogger("trip-planner.store")


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...


class MemoryKV:
    """Per-process string store."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileKV:
    """
    Durable string store backed by a single JSON object on disk.
    Every set() rewrites the file through a temp file + os.replace.
    """

    def __init__(self, path: str):
        self.path = path
        self._data: dict[str, str] = self._read()

    def _read(self) -> dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            log.warning("could not read %s, starting empty: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            log.warning("%s does not hold a JSON object, starting empty", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        # memory only changes once the file on disk holds the new value
        data = {**self._data, key: value}
        folder = os.path.dirname(os.path.abspath(self.path))
        fd, tmp = tempfile.mkstemp(dir=folder, prefix=".trips-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp, self.path)
        except OSError:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
        self._data = data


def trip_key(user: str, destination: str, days: int) -> str:
    return f"trip:{user}:{destination}:{days}"


def last_trip_key(user: str) -> str:
    return f"lastTrip:{user}"


class ItineraryStore:
    """Authoritative holder of one user's current Trip; every save writes the full payload."""

    def __init__(self, kv: KeyValueStore, user: str):
        self.kv = kv
        self.user = user
        self.trip: Optional[Trip] = None

    @property
    def key(self) -> Optional[str]:
        if self.trip is None:
            return None
        return trip_key(self.user, self.trip.destination, self.trip.dayCount)

    def replace(self, trip: Trip) -> None:
        """Install a freshly planned trip. Older trips stay under their own keys."""
        previous, self.trip = self.trip, trip
        try:
            self.save()
            self.save_pointer()
        except Exception:
            self.trip = previous
            raise

    def save(self) -> None:
        if self.trip is None:
            return
        self.kv.set(self.key, self.trip.model_dump_json())

    def payload(self) -> Optional[str]:
        key = self.key
        return self.kv.get(key) if key else None

    def load(self, destination: str, days: int) -> Optional[Trip]:
        raw = self.kv.get(trip_key(self.user, destination, days))
        if raw is None:
            return None
        try:
            trip = Trip.model_validate_json(raw)
        except ValidationError as e:
            # covers invalid JSON as well as broken invariants
            log.warning("ignoring corrupt trip payload for %s/%s/%s: %s",
                        self.user, destination, days, e.error_count())
            return None
        self.trip = trip
        return trip

    def save_pointer(self) -> None:
        if self.trip is None:
            return
        pointer = LastTrip(destination=self.trip.destination,
                           dayCount=self.trip.dayCount,
                           travelMode=self.trip.travelMode)
        self.kv.set(last_trip_key(self.user), pointer.model_dump_json())

    def load_pointer(self) -> Optional[LastTrip]:
        raw = self.kv.get(last_trip_key(self.user))
        if raw is None:
            return None
        try:
            return LastTrip.model_validate_json(raw)
        except ValidationError:
            log.warning("ignoring corrupt last-trip pointer for %s", self.user)
            return None

    def resume(self) -> Optional[Trip]:
        pointer = self.load_pointer()
        if pointer is None:
            return None
        return self.load(pointer.destination, pointer.dayCount)
