# models.py
# typed trip state, provider candidates, request/response and render models

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Any, Dict, List, Literal, Optional

TravelMode = Literal["driving", "walking", "transit", "cycling"]


class Candidate(BaseModel):
    """Raw POI as returned by the discovery provider (name may be missing)."""
    id: str
    name: Optional[str] = None
    lat: float
    lon: float
    tags: Dict[str, Any] = Field(default_factory=dict)


class POI(BaseModel):
    id: str
    name: str = Field(..., min_length=1)
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)
    # provider metadata, passed through untouched
    tags: Dict[str, Any] = Field(default_factory=dict)
    day: int = Field(..., ge=0)
    visited: bool = False
    description: str = ""
    descriptionLoaded: bool = False


class Trip(BaseModel):
    destination: str = Field(..., min_length=1)
    dayCount: int = Field(..., ge=1)
    travelMode: TravelMode = "driving"
    pois: List[POI] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_invariants(self):
        seen = set()
        for p in self.pois:
            if p.day >= self.dayCount:
                raise ValueError(f"POI {p.id} has day {p.day} outside 0..{self.dayCount - 1}")
            if p.id in seen:
                raise ValueError(f"duplicate POI id {p.id}")
            seen.add(p.id)
        return self

    def find(self, poi_id: str) -> Optional[POI]:
        for p in self.pois:
            if p.id == poi_id:
                return p
        return None


class LastTrip(BaseModel):
    """Resume pointer kept apart from the POI payload."""
    destination: str = Field(..., min_length=1)
    dayCount: int = Field(..., ge=1)
    travelMode: TravelMode = "driving"


# ---- HTTP bodies ----

class PlanRequest(BaseModel):
    user: str = Field(..., min_length=1)
    destination: str
    days: int = Field(..., ge=1)
    travelMode: TravelMode = "driving"

    @field_validator("destination")
    @classmethod
    def destination_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("destination must not be empty")
        return v


class MoveRequest(BaseModel):
    poiId: str
    day: int
    position: int = 0


class ReorderDaysRequest(BaseModel):
    permutation: List[int]


class ToggleRequest(BaseModel):
    poiId: str


class ModeRequest(BaseModel):
    travelMode: TravelMode


# ---- render instructions for view/map consumers ----

class PoiView(BaseModel):
    id: str
    name: str
    day: int
    visited: bool


class DayView(BaseModel):
    index: int
    title: str
    pois: List[PoiView]


class Marker(BaseModel):
    id: str
    lat: float
    lon: float
    day: int
    color: str


class RenderSet(BaseModel):
    # consumers drop every previous list and marker before applying this
    replace: bool = True
    days: List[DayView]
    markers: List[Marker]


class TripResponse(BaseModel):
    trip: Trip
    render: RenderSet
    center: Optional[dict] = Field(None, description="{'lat': number, 'lon': number}")
    warnings: List[str] = Field(default_factory=list)
