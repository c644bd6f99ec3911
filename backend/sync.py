# sync.py
# Full render instruction set (day lists + map markers) derived from a Trip

from models import DayView, Marker, PoiView, RenderSet, Trip
from reorder import day_buckets

PALETTE = ["#e74c3c", "#3498db", "#27ae60", "#f39c12", "#9b59b6", "#1abc9c", "#e67e22", "#8e44ad"]


def marker_color(day: int) -> str:
    return PALETTE[day % len(PALETTE)]


def day_title(index: int) -> str:
    return f"Day {index + 1}"


def render(trip: Trip) -> RenderSet:
    """
    Rebuild every derived view from scratch. No diffing: the consumer replaces
    all lists and markers, trading render cost for never drifting out of sync.
    Visited POIs stay in their day list but get no marker.
    """
    days = [
        DayView(
            index=d,
            title=day_title(d),
            pois=[PoiView(id=p.id, name=p.name, day=p.day, visited=p.visited) for p in bucket],
        )
        for d, bucket in enumerate(day_buckets(trip))
    ]
    markers = [
        Marker(id=p.id, lat=p.lat, lon=p.lon, day=p.day, color=marker_color(p.day))
        for p in trip.pois
        if not p.visited
    ]
    return RenderSet(days=days, markers=markers)
