# providers/wikipedia.py
# Wikipedia REST page summary lookup with gentle 429 backoff

import asyncio
import httpx
from urllib.parse import quote

HEADERS = {
    "User-Agent": "SmartTravelPlanner/0.1",
    "Accept": "application/json",
}

SUMMARY_URL = "https://en.wikipedia.org/api/rest_v1/page/summary/"


def summary_url(title: str) -> str:
    return SUMMARY_URL + quote(title.replace(" ", "_"), safe="")


async def fetch_summary(title: str) -> str | None:
    """Plain-text extract for a page title, or None when there is nothing usable."""
    async with httpx.AsyncClient(timeout=20.0, headers=HEADERS, follow_redirects=True) as client:
        backoff = 1.0
        for attempt in range(3):
            r = await client.get(summary_url(title))
            if r.status_code == 200:
                extract = (r.json() or {}).get("extract")
                return extract or None
            if r.status_code == 429:
                await asyncio.sleep(backoff)
                backoff *= 1.5
                continue
            return None
    return None
