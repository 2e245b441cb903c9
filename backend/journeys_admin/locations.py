"""
Journeys Admin Backend — Location Operations

Typed wrappers over the GraphQL documents in queries.py.
"""

from journeys_admin.config import log
from journeys_admin.graphql import GraphQLClient
from journeys_admin.models import Location
from journeys_admin.queries import (
    GET_ALL_ACTIVE_LOCATIONS,
    SET_LOCATION_COORDINATES,
    SET_LOCATION_GEOFENCE_RADIUS,
    SET_LOCATION_TO_INACTIVE,
)

COORDINATE_PRECISION = 4


class LocationNotFoundError(Exception):
    """An update matched no rows."""

    def __init__(self, location_id: str):
        self.location_id = location_id
        super().__init__(f"Location {location_id} not found")


async def get_active_locations(client: GraphQLClient, *, refresh: bool = False) -> list[Location]:
    """Active locations ordered by name. refresh=True bypasses the query cache."""
    data = await client.query(GET_ALL_ACTIVE_LOCATIONS, use_cache=not refresh)
    return [Location.model_validate(row) for row in data.get("locations", [])]


async def _update_one(client: GraphQLClient, document: str, variables: dict) -> Location:
    data = await client.mutate(document, variables)
    returning = (data.get("update_locations") or {}).get("returning") or []
    if not returning:
        raise LocationNotFoundError(variables["location"])
    return Location.model_validate(returning[0])


async def deactivate_location(client: GraphQLClient, location_id: str) -> Location:
    location = await _update_one(client, SET_LOCATION_TO_INACTIVE, {"location": location_id})
    log("INFO", "location deactivated", location_id=location_id, name=location.name)
    return location


async def set_geofence_radius(client: GraphQLClient, location_id: str, radius: int) -> Location:
    location = await _update_one(
        client,
        SET_LOCATION_GEOFENCE_RADIUS,
        {"location": location_id, "radius": radius},
    )
    log("INFO", "geofence radius updated", location_id=location_id, radius=radius)
    return location


async def set_coordinates(
    client: GraphQLClient,
    location_id: str,
    latitude: float,
    longitude: float,
) -> Location:
    """Coordinates are stored with 4 decimal places."""
    latitude = round(latitude, COORDINATE_PRECISION)
    longitude = round(longitude, COORDINATE_PRECISION)
    location = await _update_one(
        client,
        SET_LOCATION_COORDINATES,
        {"location": location_id, "latitude": latitude, "longitude": longitude},
    )
    log("INFO", "coordinates updated", location_id=location_id, latitude=latitude, longitude=longitude)
    return location
