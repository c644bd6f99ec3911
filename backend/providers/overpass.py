# providers/overpass.py
# OpenStreetMap Overpass search for tourism nodes around a center

import httpx
from typing import List
from models import Candidate

HEADERS = {
    "User-Agent": "SmartTravelPlanner/0.1",
    "Accept": "application/json",
}

OVERPASS_URL = "https://overpass-api.de/api/interpreter"
CATEGORIES = "museum|attraction|gallery|viewpoint|zoo|aquarium|theme_park|monument|artwork|picnic_site|park"


def build_query(center: tuple[float, float], radius_m: int) -> str:
    lat, lon = center
    return f'[out:json];node(around:{radius_m},{lat},{lon})[tourism~"{CATEGORIES}"];out;'


def parse_elements(js: dict) -> List[Candidate]:
    """Keep nodes that carry coordinates; naming is left to the itinerary builder."""
    out: List[Candidate] = []
    for el in (js or {}).get("elements") or []:
        if el.get("lat") is None or el.get("lon") is None or el.get("id") is None:
            continue
        tags = el.get("tags") or {}
        out.append(Candidate(
            id=str(el["id"]),
            name=tags.get("name"),
            lat=float(el["lat"]),
            lon=float(el["lon"]),
            tags=tags,
        ))
    return out


async def discover_pois(center: tuple[float, float], radius_m: int) -> List[Candidate]:
    """Raises httpx.HTTPStatusError on non-200 so an outage is not mistaken for an empty area."""
    async with httpx.AsyncClient(timeout=30.0, headers=HEADERS) as client:
        r = await client.post(OVERPASS_URL, data={"data": build_query(center, radius_m)})
        r.raise_for_status()
        return parse_elements(r.json())
