"""
Single source of truth for all Pydantic models (requests, responses, GraphQL records).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


# -----------------------------------------------------------------------------
# GraphQL Records
# -----------------------------------------------------------------------------


class Stamp(BaseModel):
    stamp_image: Optional[str] = None


class Location(BaseModel):
    """A row of the `locations` table. Queries select a subset of these fields."""

    id: str
    name: str
    description: Optional[str] = None
    hero_image: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipcode: Optional[str] = None
    geofence_radius: Optional[int] = None
    difficulty_level: Optional[int] = None
    estimated_time: Optional[int] = None
    best_time_to_visit: Optional[str] = None
    entry_fee: Optional[str] = None
    accessibility_info: Optional[str] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    is_trending: Optional[bool] = None
    admin_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    last_updated_at: Optional[datetime] = None
    created_by: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    stamp: Optional[Stamp] = None

    @property
    def stamp_image(self) -> Optional[str]:
        return self.stamp.stamp_image if self.stamp else None


# -----------------------------------------------------------------------------
# Request Models
# -----------------------------------------------------------------------------
# Required fields are checked in the handlers so a missing field yields the
# static 400 body rather than a schema error.


class BootstrapLocationsRequest(BaseModel):
    locations: Optional[list[str]] = Field(None, description="Location names, one row each")
    state: Optional[str] = Field(None, description="U.S. state the locations are in")


class StampLocation(BaseModel):
    name: Optional[str] = Field(None, description='For best results: "location_name"')
    city: Optional[str] = None
    state: Optional[str] = None
    stamp: Optional[Stamp] = None


class GenerateStampsRequest(BaseModel):
    # Items stay raw so one malformed entry becomes an item error, not a 400 for the batch.
    locations: Optional[list[Any]] = None


class ReferenceImagesRequest(BaseModel):
    locations: Optional[list[str]] = None


class GeofenceUpdateRequest(BaseModel):
    radius: int = Field(..., ge=1, le=100_000, description="Geofence radius in meters")


class CoordinatesUpdateRequest(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


# -----------------------------------------------------------------------------
# Response Models
# -----------------------------------------------------------------------------


class BootstrapLocationsResponse(BaseModel):
    success: bool = True
    sql: str


class StampResult(BaseModel):
    name: Optional[str] = None
    stamp_image: Optional[str] = None
    status: str = Field(..., description="'success' | 'error'")
    error: Optional[str] = None


class GenerateStampsResponse(BaseModel):
    success: bool
    results: list[StampResult]


class ReferenceImagesResponse(BaseModel):
    success: bool = True
    locations: list[str]
    files: list[str] = []


class LocationListResponse(BaseModel):
    locations: list[Location]
