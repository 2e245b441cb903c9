"""
Journeys Admin Backend — GraphQL Client Tests

Cache behaviour, mutation invalidation, error mapping, and the location
helpers built on top. Network calls go to an in-memory fake via httpx.MockTransport.
"""

import asyncio

import httpx
import pytest

from journeys_admin.graphql import ADMIN_SECRET_HEADER, GraphQLClient, GraphQLError
from journeys_admin.locations import (
    LocationNotFoundError,
    deactivate_location,
    get_active_locations,
    set_coordinates,
    set_geofence_radius,
)
from journeys_admin.queries import GET_ALL_ACTIVE_LOCATIONS, SET_LOCATION_TO_INACTIVE
from tests.conftest import GRAPHQL_ENDPOINT

GRIFFITH_ID = "2b6c1f0e-0000-4000-8000-000000000002"
BALBOA_ID = "2b6c1f0e-0000-4000-8000-000000000001"


class TestGraphQLClientCache:
    @pytest.mark.asyncio
    async def test_identical_query_is_served_from_cache(self, graphql_client, graphql_backend):
        first = await graphql_client.query(GET_ALL_ACTIVE_LOCATIONS)
        second = await graphql_client.query(GET_ALL_ACTIVE_LOCATIONS)

        assert first == second
        assert len(graphql_backend.requests) == 1

    @pytest.mark.asyncio
    async def test_different_variables_are_separate_entries(self, graphql_client, graphql_backend):
        await graphql_client.query(GET_ALL_ACTIVE_LOCATIONS, {"page": 1})
        await graphql_client.query(GET_ALL_ACTIVE_LOCATIONS, {"page": 2})
        await graphql_client.query(GET_ALL_ACTIVE_LOCATIONS, {"page": 1})

        assert len(graphql_backend.requests) == 2

    @pytest.mark.asyncio
    async def test_mutation_clears_cache(self, graphql_client, graphql_backend):
        await graphql_client.query(GET_ALL_ACTIVE_LOCATIONS)
        await graphql_client.mutate(SET_LOCATION_TO_INACTIVE, {"location": GRIFFITH_ID})
        await graphql_client.query(GET_ALL_ACTIVE_LOCATIONS)

        assert len(graphql_backend.requests) == 3

    @pytest.mark.asyncio
    async def test_use_cache_false_goes_to_network(self, graphql_client, graphql_backend):
        await graphql_client.query(GET_ALL_ACTIVE_LOCATIONS)
        await graphql_client.query(GET_ALL_ACTIVE_LOCATIONS, use_cache=False)

        assert len(graphql_backend.requests) == 2

    @pytest.mark.asyncio
    async def test_clear_cache_forces_refetch(self, graphql_client, graphql_backend):
        await graphql_client.query(GET_ALL_ACTIVE_LOCATIONS)
        graphql_client.clear_cache()
        await graphql_client.query(GET_ALL_ACTIVE_LOCATIONS)

        assert len(graphql_backend.requests) == 2

    @pytest.mark.asyncio
    async def test_sends_admin_secret_header(self, graphql_client, graphql_backend):
        await graphql_client.query(GET_ALL_ACTIVE_LOCATIONS)

        headers = graphql_backend.requests[0]["headers"]
        assert headers[ADMIN_SECRET_HEADER] == "test-admin-secret"


class TestGraphQLClientErrors:
    @pytest.mark.asyncio
    async def test_graphql_errors_raise(self, graphql_client, graphql_backend):
        graphql_backend.fail_with = "field 'locations' not found"

        with pytest.raises(GraphQLError, match="field 'locations' not found"):
            await graphql_client.query(GET_ALL_ACTIVE_LOCATIONS)

    @pytest.mark.asyncio
    async def test_failed_query_is_not_cached(self, graphql_client, graphql_backend):
        graphql_backend.fail_with = "temporary"
        with pytest.raises(GraphQLError):
            await graphql_client.query(GET_ALL_ACTIVE_LOCATIONS)

        graphql_backend.fail_with = None
        data = await graphql_client.query(GET_ALL_ACTIVE_LOCATIONS)
        assert len(data["locations"]) == 2

    @pytest.mark.asyncio
    async def test_http_status_error_raises(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(503, text="unavailable"))
        client = GraphQLClient(GRAPHQL_ENDPOINT, "secret", http_client=httpx.AsyncClient(transport=transport))

        with pytest.raises(GraphQLError):
            await client.query(GET_ALL_ACTIVE_LOCATIONS)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = GraphQLClient(
            GRAPHQL_ENDPOINT, "secret", http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
        )

        with pytest.raises(GraphQLError, match="connection refused"):
            await client.query(GET_ALL_ACTIVE_LOCATIONS)
        await client.aclose()


class TestLocationOperations:
    @pytest.mark.asyncio
    async def test_active_locations_ordered_by_name(self, graphql_client):
        locations = await get_active_locations(graphql_client)

        assert [loc.name for loc in locations] == ["Balboa Park", "Griffith Observatory"]
        assert locations[0].stamp_image == "balboa_park.png"

    @pytest.mark.asyncio
    async def test_deactivate_then_requery_omits_location(self, graphql_client):
        before = await get_active_locations(graphql_client)
        assert GRIFFITH_ID in {loc.id for loc in before}

        updated = await deactivate_location(graphql_client, GRIFFITH_ID)
        assert updated.is_active is False

        after = await get_active_locations(graphql_client)
        assert GRIFFITH_ID not in {loc.id for loc in after}

    @pytest.mark.asyncio
    async def test_query_overlapping_deactivate_does_not_cache_stale_rows(self, graphql_backend):
        query_in_flight = asyncio.Event()
        release_query = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            response = graphql_backend.handler(request)
            if b"GetAllActiveLocations" in request.content and not release_query.is_set():
                query_in_flight.set()
                await release_query.wait()
            return response

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = GraphQLClient(GRAPHQL_ENDPOINT, "test-admin-secret", http_client=http_client)

        async def deactivate_while_listing():
            await query_in_flight.wait()
            await deactivate_location(client, GRIFFITH_ID)
            release_query.set()

        try:
            listed, _ = await asyncio.gather(get_active_locations(client), deactivate_while_listing())
            assert GRIFFITH_ID in {loc.id for loc in listed}

            after = await get_active_locations(client)
            assert GRIFFITH_ID not in {loc.id for loc in after}
            assert [loc.id for loc in after] == [BALBOA_ID]
        finally:
            await client.aclose()

    @pytest.mark.asyncio
    async def test_deactivate_unknown_id_raises_not_found(self, graphql_client):
        with pytest.raises(LocationNotFoundError):
            await deactivate_location(graphql_client, "00000000-0000-0000-0000-000000000000")

    @pytest.mark.asyncio
    async def test_set_geofence_radius(self, graphql_client, graphql_backend):
        updated = await set_geofence_radius(graphql_client, BALBOA_ID, 750)

        assert updated.geofence_radius == 750
        assert graphql_backend.locations[BALBOA_ID]["geofence_radius"] == 750

    @pytest.mark.asyncio
    async def test_set_coordinates_rounds_to_four_places(self, graphql_client, graphql_backend):
        updated = await set_coordinates(graphql_client, BALBOA_ID, 32.731234567, -117.146912345)

        assert updated.latitude == 32.7312
        assert updated.longitude == -117.1469
        sent = graphql_backend.requests[-1]["body"]["variables"]
        assert sent == {"location": BALBOA_ID, "latitude": 32.7312, "longitude": -117.1469}
