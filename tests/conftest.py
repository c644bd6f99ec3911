"""
Shared fixtures: candidate factories, in-memory persistence, ready-made trips.
"""

import pytest

from itinerary import build_trip
from models import Candidate
from store import ItineraryStore, MemoryKV
from session import TripSession

ORIGIN = (41.9028, 12.4964)  # Rome


@pytest.fixture
def make_candidates():
    """Candidates strung north of ORIGIN, each step about 1.1 km further out."""
    def _make(n, start=1, named=True):
        return [
            Candidate(
                id=f"n{i}",
                name=f"Place {i}" if named else None,
                lat=ORIGIN[0] + i * 0.01,
                lon=ORIGIN[1],
                tags={"tourism": "museum"},
            )
            for i in range(start, start + n)
        ]
    return _make


@pytest.fixture
def kv():
    return MemoryKV()


@pytest.fixture
def rome_trip(make_candidates):
    return build_trip(make_candidates(7), ORIGIN, 2, "Rome")


@pytest.fixture
def session(kv, rome_trip):
    s = TripSession(ItineraryStore(kv, "alice"))
    s.plan(rome_trip)
    return s
