# session.py
# Command interface for one user's trip: mutate, save, then publish a full render

import logging
from typing import Awaitable, Callable, List, Optional

from models import RenderSet, Trip, TravelMode
from reorder import move_poi, reorder_days
from store import ItineraryStore
from sync import render
from visited import set_description, toggle_visited

log = logging.getLogger("trip-planner.session")

Subscriber = Callable[[RenderSet], None]
DescriptionFetcher = Callable[[str], Awaitable[Optional[str]]]


class TripSession:
    """
    Owns the ItineraryStore for a user and is the only entry point for edits.
    Each apply_* call finishes its save before subscribers see the new render.
    Calls made while no trip is open are no-ops.
    """

    def __init__(self, store: ItineraryStore):
        self.store = store
        self._subscribers: List[Subscriber] = []

    @property
    def trip(self) -> Optional[Trip]:
        return self.store.trip

    def subscribe(self, fn: Subscriber) -> None:
        self._subscribers.append(fn)

    def _publish(self) -> Optional[RenderSet]:
        if self.trip is None:
            return None
        rs = render(self.trip)
        for fn in self._subscribers:
            try:
                fn(rs)
            except Exception:
                log.exception("render subscriber failed")
        return rs

    def _edit(self, change: Callable[[Trip], object]) -> Optional[RenderSet]:
        """Apply one change and save it; if anything fails the previous trip is put back."""
        if self.trip is None:
            return None
        before = self.trip.model_copy(deep=True)
        try:
            change(self.trip)
            self.store.save()
        except Exception:
            self.store.trip = before
            raise
        return self._publish()

    # ---- lifecycle ----

    def plan(self, trip: Trip) -> RenderSet:
        self.store.replace(trip)
        log.info("planned %s for %s (%d pois)", trip.destination, self.store.user, len(trip.pois))
        return self._publish()

    def open(self, destination: str, days: int) -> Optional[RenderSet]:
        if self.store.load(destination, days) is None:
            return None
        return self._publish()

    def resume(self) -> Optional[RenderSet]:
        if self.store.resume() is None:
            return None
        log.info("resumed %s for %s", self.trip.destination, self.store.user)
        return self._publish()

    def current(self) -> Optional[RenderSet]:
        return render(self.trip) if self.trip else None

    # ---- edits ----

    def apply_move(self, poi_id: str, day: int, position: int) -> Optional[RenderSet]:
        return self._edit(lambda trip: move_poi(trip, poi_id, day, position))

    def apply_day_reorder(self, permutation: List[int]) -> Optional[RenderSet]:
        return self._edit(lambda trip: reorder_days(trip, permutation))

    def apply_toggle(self, poi_id: str) -> Optional[RenderSet]:
        return self._edit(lambda trip: toggle_visited(trip, poi_id))

    def apply_travel_mode(self, mode: TravelMode) -> Optional[RenderSet]:
        def change(trip):
            trip.travelMode = mode
            # pointer first: if it fails nothing on disk has moved yet
            self.store.save_pointer()
        return self._edit(change)

    def apply_description(self, poi_id: str, text: Optional[str]) -> Optional[RenderSet]:
        if self.trip is None or self.trip.find(poi_id) is None:
            return None
        return self._edit(lambda trip: set_description(trip, poi_id, text))

    async def load_description(self, poi_id: str, fetch: DescriptionFetcher) -> None:
        """
        Fetch and store one POI's description. Safe to repeat; a result that
        arrives after the POI left the trip is dropped by apply_description.
        """
        poi = self.trip.find(poi_id) if self.trip else None
        if poi is None:
            return
        try:
            text = await fetch(poi.name)
        except Exception as e:
            log.warning("description fetch for %s failed: %s", poi.name, e)
            text = None
        self.apply_description(poi_id, text)
