# itinerary.py
# Turn an unordered candidate list into a day-partitioned Trip

import logging
import math
from typing import List

from models import Candidate, POI, Trip, TravelMode
from utils import dedupe, distance_km

log = logging.getLogger("trip-planner.itinerary")

DEFAULT_PER_DAY_CAP = 5


def search_radius_m(days: int) -> int:
    """Discovery radius policy: 3 km per day, capped at 10 km."""
    return min(10000, 3000 * days)


def build_trip(
    candidates: List[Candidate],
    origin: tuple[float, float],
    days: int,
    destination: str,
    travel_mode: TravelMode = "driving",
    per_day_cap: int = DEFAULT_PER_DAY_CAP,
) -> Trip:
    """
    Rank candidates by distance from origin, keep at most days * per_day_cap,
    and cut them into contiguous day buckets of ceil(selected / days).

    The last buckets may be short or empty when the split is uneven.
    """
    if days <= 0:
        raise ValueError("days must be a positive integer")

    named = [c for c in dedupe(candidates) if c.name and c.name.strip()]
    # sorted() is stable, so equal distances keep input order
    ranked = sorted(named, key=lambda c: distance_km(origin, (c.lat, c.lon)))
    chosen = ranked[:min(len(ranked), days * per_day_cap)]

    pois: List[POI] = []
    if chosen:
        bucket = math.ceil(len(chosen) / days)
        for i, c in enumerate(chosen):
            pois.append(POI(
                id=c.id,
                name=c.name,
                lat=c.lat,
                lon=c.lon,
                tags=c.tags,
                day=i // bucket,
            ))

    log.info("built %s: %d of %d candidates over %d days", destination, len(pois), len(candidates), days)
    return Trip(destination=destination, dayCount=days, travelMode=travel_mode, pois=pois)
