# main.py
# FastAPI app exposing trip planning, resume and itinerary edit commands

import os
import logging
import asyncio
from dotenv import load_dotenv
from fastapi import BackgroundTasks, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from models import (ModeRequest, MoveRequest, PlanRequest, ReorderDaysRequest,
                    ToggleRequest, TripResponse)
from itinerary import build_trip, search_radius_m
from session import TripSession
from store import ItineraryStore, JsonFileKV
from utils import TTLCache
from providers.geo import geocode
from providers.overpass import discover_pois
from providers.wikipedia import fetch_summary

load_dotenv()

app = FastAPI(title="Smart Travel Planner API", version="0.1.0")
# CORS origins
FRONTEND_LOCAL = "http://localhost:3000"
FRONTEND_ORIGIN = os.getenv("FRONTEND_ORIGIN", "")

origins = [FRONTEND_LOCAL]
if FRONTEND_ORIGIN:
    origins.append(FRONTEND_ORIGIN)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# logging
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
log = logging.getLogger("trip-planner")

# config / env
TRIP_STORE_PATH = os.getenv("TRIP_STORE_PATH", "trips.json")
PER_DAY_CAP = int(os.getenv("PER_DAY_CAP", "5"))

# provider timeout (seconds)
PROVIDER_TIMEOUT_S = int(os.getenv("PROVIDER_TIMEOUT_S", "20"))
GEOCODE_TIMEOUT_S = int(os.getenv("GEOCODE_TIMEOUT_S", "10"))

# discovery results per (center, radius), per process
discovery_cache = TTLCache(ttl_seconds=int(os.getenv("DISCOVERY_CACHE_TTL_S", "600")))

kv_store = JsonFileKV(TRIP_STORE_PATH)
# one session per active user; idle ones expire and resume from the store on next use
sessions = TTLCache(ttl_seconds=int(os.getenv("SESSION_TTL_S", "3600")))


def get_session(user: str) -> TripSession:
    sessions.purge()
    s = sessions.get(user)
    if s is None:
        s = TripSession(ItineraryStore(kv_store, user))
    # sliding expiry
    sessions.set(user, s)
    return s


def open_session(user: str) -> TripSession:
    """Session with a trip loaded, resuming from the last-trip pointer if needed."""
    s = get_session(user)
    if s.trip is None and s.resume() is None:
        raise HTTPException(status_code=404, detail="No trip planned yet")
    return s


def respond(s: TripSession, **extra) -> dict:
    return TripResponse(trip=s.trip, render=s.current(), **extra).model_dump()


# global JSON error handling
# - HTTPException -> { "error": <detail> }
# - any other exception -> { "error": "Server error" }
@app.exception_handler(HTTPException)
async def http_error_handler(request: Request, exc: HTTPException):
    log.warning("HTTP %s: %s", exc.status_code, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    # log stack once. do not leak details to client
    log.exception("Unhandled exception")
    return JSONResponse(status_code=500, content={"error": "Server error"})

# timeout wrapper for providers
# returns (result, errstr) and never raises
async def run_with_timeout(coro, seconds: int, label: str, default=None):
    try:
        result = await asyncio.wait_for(coro, timeout=seconds)
        return result, None
    except asyncio.TimeoutError:
        msg = f"{label} timed out after {seconds}s"
        log.warning(msg)
        return default, msg
    except Exception as e:
        msg = f"{label} error: {e}"
        log.warning(msg)
        return default, msg


@app.post("/plan", response_model=TripResponse)
async def create_plan(req: PlanRequest):
    """
    Geocode the destination, discover nearby POIs within the radius policy,
    cut them into days and make the result the user's current trip.
    """
    center, geo_err = await run_with_timeout(geocode(req.destination), GEOCODE_TIMEOUT_S, "geocode")
    if geo_err or not center:
        raise HTTPException(status_code=400, detail="Destination not found")

    radius = search_radius_m(req.days)
    cache_key = f"{center[0]:.5f}|{center[1]:.5f}|{radius}"
    warnings = []
    candidates = discovery_cache.get(cache_key)
    if candidates is None:
        candidates, err = await run_with_timeout(
            discover_pois(center, radius), PROVIDER_TIMEOUT_S, "discovery", default=[])
        if err:
            warnings.append(err)
        else:
            discovery_cache.set(cache_key, candidates)

    trip = build_trip(candidates or [], center, req.days, req.destination,
                      travel_mode=req.travelMode, per_day_cap=PER_DAY_CAP)
    if not trip.pois:
        warnings.append("No points of interest found")

    s = get_session(req.user)
    s.plan(trip)
    return respond(s, center={"lat": center[0], "lon": center[1]}, warnings=warnings)


# trip handlers stay async (no awaits inside the edits): they run on the event
# loop one at a time, never in the threadpool, so edits cannot interleave
@app.get("/trips/{user}/resume", response_model=TripResponse)
async def resume_trip(user: str):
    s = get_session(user)
    if s.resume() is None:
        raise HTTPException(status_code=404, detail="No saved trip")
    return respond(s)


@app.get("/trips/{user}/{destination}/{days}", response_model=TripResponse)
async def load_trip(user: str, destination: str, days: int):
    s = get_session(user)
    if s.open(destination, days) is None:
        raise HTTPException(status_code=404, detail="No saved trip")
    return respond(s)


@app.post("/trips/{user}/move", response_model=TripResponse)
async def move(user: str, req: MoveRequest):
    s = open_session(user)
    try:
        s.apply_move(req.poiId, req.day, req.position)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return respond(s)


@app.post("/trips/{user}/reorder-days", response_model=TripResponse)
async def reorder(user: str, req: ReorderDaysRequest):
    s = open_session(user)
    try:
        s.apply_day_reorder(req.permutation)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return respond(s)


@app.post("/trips/{user}/toggle", response_model=TripResponse)
async def toggle(user: str, req: ToggleRequest):
    s = open_session(user)
    s.apply_toggle(req.poiId)
    return respond(s)


@app.post("/trips/{user}/mode", response_model=TripResponse)
async def change_mode(user: str, req: ModeRequest):
    s = open_session(user)
    s.apply_travel_mode(req.travelMode)
    return respond(s)


@app.post("/trips/{user}/pois/{poi_id}/description", status_code=202)
async def request_description(user: str, poi_id: str, background: BackgroundTasks):
    """Fire-and-forget: the description lands in the trip once the lookup returns."""
    s = open_session(user)
    if s.trip.find(poi_id) is None:
        raise HTTPException(status_code=404, detail="Unknown point of interest")
    background.add_task(s.load_description, poi_id, fetch_summary)
    return {"queued": poi_id}


@app.get("/health")
async def health():
    return {"ok": True}
