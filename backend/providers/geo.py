# providers/geo.py
# nominatim geocoding (read-only, no key)

import httpx

HEADERS = {
    "User-Agent": "SmartTravelPlanner/0.1",
    "Accept-Language": "en",
    "Accept": "application/json",
}


def parse_geocode(data) -> tuple[float, float] | None:
    if not data:
        return None
    try:
        return (float(data[0]["lat"]), float(data[0]["lon"]))
    except (KeyError, TypeError, ValueError):
        return None


async def geocode(q: str) -> tuple[float, float] | None:
    url = "https://nominatim.openstreetmap.org/search"
    params = {"format": "jsonv2", "q": q, "limit": 1}
    async with httpx.AsyncClient(timeout=20.0, headers=HEADERS) as client:
        r = await client.get(url, params=params)
        if r.status_code != 200:
            return None
        return parse_geocode(r.json())
