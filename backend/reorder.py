# reorder.py
# Structural edits: move a POI between/within days, reorder whole days

import logging
from typing import List

from models import POI, Trip

log = logging.getLogger("trip-planner.reorder")


def day_buckets(trip: Trip) -> List[List[POI]]:
    """POIs grouped by day index, each bucket in display order."""
    buckets: List[List[POI]] = [[] for _ in range(trip.dayCount)]
    for p in trip.pois:
        buckets[p.day].append(p)
    return buckets


def move_poi(trip: Trip, poi_id: str, day: int, position: int) -> bool:
    """
    Move one POI to `position` within `day`. Returns False when nothing changed
    (unknown id, or the POI already sits at that spot).
    """
    if not 0 <= day < trip.dayCount:
        raise ValueError(f"day must be between 0 and {trip.dayCount - 1}")

    poi = trip.find(poi_id)
    if poi is None:
        log.debug("move ignored, unknown poi %s", poi_id)
        return False

    current = [p.id for p in trip.pois if p.day == poi.day]
    target_len = len([p for p in trip.pois if p.day == day and p.id != poi_id])
    position = max(0, min(position, target_len))
    if poi.day == day and current.index(poi_id) == position:
        return False

    rest = [p for p in trip.pois if p.id != poi_id]
    target = [i for i, p in enumerate(rest) if p.day == day]
    if position < len(target):
        at = target[position]
    elif target:
        at = target[-1] + 1
    else:
        at = len(rest)

    poi.day = day
    rest.insert(at, poi)
    trip.pois = rest
    log.debug("moved %s to day %d position %d", poi_id, day, position)
    return True


def reorder_days(trip: Trip, permutation: List[int]) -> bool:
    """
    Remap every POI through permutation[old_day] -> new_day in one step.
    The permutation is checked before anything is touched.
    """
    if sorted(permutation) != list(range(trip.dayCount)):
        raise ValueError(f"permutation must reorder days 0..{trip.dayCount - 1}")
    if permutation == sorted(permutation):
        return False

    remapped = [p.model_copy(update={"day": permutation[p.day]}) for p in trip.pois]
    trip.pois = remapped
    log.debug("reordered days %s", permutation)
    return True
