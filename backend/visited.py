# visited.py
# Visited flag toggling and guarded description writes

import logging

from models import Trip

log = logging.getLogger("trip-planner.visited")

NO_DESCRIPTION = "No description available."


def toggle_visited(trip: Trip, poi_id: str) -> bool:
    # stale ids from the view are expected, not errors
    poi = trip.find(poi_id)
    if poi is None:
        log.debug("toggle ignored, unknown poi %s", poi_id)
        return False
    poi.visited = not poi.visited
    return True


def set_description(trip: Trip, poi_id: str, text: str | None) -> bool:
    """Store a fetched description if the POI is still part of the trip."""
    poi = trip.find(poi_id)
    if poi is None:
        log.debug("description for %s discarded, poi no longer in trip", poi_id)
        return False
    poi.description = text or NO_DESCRIPTION
    poi.descriptionLoaded = True
    return True
