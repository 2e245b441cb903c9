"""
Journeys Admin Backend — Location Admin API

GET  /api/locations                       active locations, ordered by name
POST /api/locations/{id}/deactivate       set is_active = false
POST /api/locations/{id}/geofence         set geofence_radius
POST /api/locations/{id}/coordinates      set latitude / longitude
"""

from fastapi import APIRouter, Depends, HTTPException

from journeys_admin.config import generate_error_code, log
from journeys_admin.graphql import GraphQLClient, GraphQLError, get_graphql_client
from journeys_admin.locations import (
    LocationNotFoundError,
    deactivate_location,
    get_active_locations,
    set_coordinates,
    set_geofence_radius,
)
from journeys_admin.models import CoordinatesUpdateRequest, GeofenceUpdateRequest, Location, LocationListResponse

router = APIRouter(prefix="/api/locations", tags=["locations"])


def _upstream_error(operation: str, e: Exception) -> HTTPException:
    code = generate_error_code()
    log("ERROR", "location operation failed", operation=operation, error=str(e), error_code=code)
    return HTTPException(
        status_code=500,
        detail={"error": "Location backend request failed", "details": str(e), "error_code": code},
    )


def _not_found(e: LocationNotFoundError) -> HTTPException:
    return HTTPException(status_code=404, detail={"error": "Location not found", "details": str(e)})


@router.get("", response_model=LocationListResponse)
async def list_locations(
    refresh: bool = False,
    client: GraphQLClient = Depends(get_graphql_client),
) -> LocationListResponse:
    try:
        locations = await get_active_locations(client, refresh=refresh)
    except GraphQLError as e:
        raise _upstream_error("list", e)
    return LocationListResponse(locations=locations)


@router.post("/{location_id}/deactivate", response_model=Location)
async def deactivate(location_id: str, client: GraphQLClient = Depends(get_graphql_client)) -> Location:
    try:
        return await deactivate_location(client, location_id)
    except LocationNotFoundError as e:
        raise _not_found(e)
    except GraphQLError as e:
        raise _upstream_error("deactivate", e)


@router.post("/{location_id}/geofence", response_model=Location)
async def update_geofence(
    location_id: str,
    body: GeofenceUpdateRequest,
    client: GraphQLClient = Depends(get_graphql_client),
) -> Location:
    try:
        return await set_geofence_radius(client, location_id, body.radius)
    except LocationNotFoundError as e:
        raise _not_found(e)
    except GraphQLError as e:
        raise _upstream_error("geofence", e)


@router.post("/{location_id}/coordinates", response_model=Location)
async def update_coordinates(
    location_id: str,
    body: CoordinatesUpdateRequest,
    client: GraphQLClient = Depends(get_graphql_client),
) -> Location:
    try:
        return await set_coordinates(client, location_id, body.latitude, body.longitude)
    except LocationNotFoundError as e:
        raise _not_found(e)
    except GraphQLError as e:
        raise _upstream_error("coordinates", e)
