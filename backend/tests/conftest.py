"""
Journeys Admin Backend — Shared Test Fixtures

Provides mocked versions of external services (LLM, image model, GraphQL
backend, stock photos) for deterministic, fast unit tests.
"""

import base64
import json
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Optional
from unittest.mock import AsyncMock

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

# Ensure journeys_admin is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


# -----------------------------------------------------------------------------
# Environment Setup (before importing app modules)
# -----------------------------------------------------------------------------

os.environ["GRAPHQL_ENDPOINT"] = "https://graphql.test/v1/graphql"
os.environ["GRAPHQL_ADMIN_SECRET"] = "test-admin-secret"
os.environ["ANTHROPIC_API_KEY"] = "test-anthropic-key"
os.environ["OPENAI_API_KEY"] = "test-openai-key"
os.environ["PIXABAY_API_KEY"] = "test-pixabay-key"
os.environ["ENVIRONMENT"] = "test"
os.environ["CORS_ORIGINS"] = "http://localhost:3000"

GRAPHQL_ENDPOINT = os.environ["GRAPHQL_ENDPOINT"]

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-stamp"


# -----------------------------------------------------------------------------
# Mock LLM Response Classes
# -----------------------------------------------------------------------------


@dataclass
class MockLLMMessage:
    content: Optional[str]


@dataclass
class MockLLMChoice:
    message: MockLLMMessage


@dataclass
class MockLLMUsage:
    total_tokens: int = 100


@dataclass
class MockLLMResponse:
    choices: list[MockLLMChoice]
    usage: MockLLMUsage = field(default_factory=MockLLMUsage)


def create_mock_llm_response(content: Optional[str]) -> MockLLMResponse:
    """Create a mock completion response with given content."""
    return MockLLMResponse(choices=[MockLLMChoice(message=MockLLMMessage(content=content))])


@dataclass
class MockImageObject:
    b64_json: Optional[str]


@dataclass
class MockImageResponse:
    data: list[MockImageObject]


def create_mock_image_response(image_bytes: Optional[bytes] = PNG_BYTES) -> MockImageResponse:
    payload = base64.b64encode(image_bytes).decode() if image_bytes is not None else None
    return MockImageResponse(data=[MockImageObject(b64_json=payload)])


# -----------------------------------------------------------------------------
# LLM Mocking Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def mock_llm(monkeypatch):
    """
    Mock litellm.acompletion to return a fixed response.

    Returns the mock so tests can customize responses or inspect calls.
    """
    mock = AsyncMock(return_value=create_mock_llm_response("INSERT INTO locations (name) VALUES ('Test');"))
    monkeypatch.setattr("litellm.acompletion", mock)
    return mock


@pytest.fixture
def mock_llm_failure(monkeypatch):
    """Mock litellm.acompletion to raise."""
    mock = AsyncMock(side_effect=Exception("Anthropic API unavailable"))
    monkeypatch.setattr("litellm.acompletion", mock)
    return mock


@pytest.fixture
def mock_image_model(monkeypatch):
    """Mock litellm.aimage_generation to return a small base64 PNG payload."""
    mock = AsyncMock(return_value=create_mock_image_response())
    monkeypatch.setattr("litellm.aimage_generation", mock)
    return mock


# -----------------------------------------------------------------------------
# Asset Directory Fixture
# -----------------------------------------------------------------------------


@pytest.fixture
def asset_dirs(tmp_path, monkeypatch):
    """Point stamp and image output at a temp directory."""
    stamps = tmp_path / "generated_stamps"
    images = tmp_path / "location_images"
    monkeypatch.setattr("journeys_admin.config.settings.stamps_dir", str(stamps))
    monkeypatch.setattr("journeys_admin.config.settings.images_dir", str(images))
    return {"stamps": stamps, "images": images}


# -----------------------------------------------------------------------------
# GraphQL Backend Fake
# -----------------------------------------------------------------------------


class FakeLocationsBackend:
    """
    In-memory stand-in for the GraphQL backend, served through httpx.MockTransport.

    Understands the documents in journeys_admin.queries by operation name.
    `requests` counts every network round trip.
    """

    def __init__(self, locations: list[dict]):
        self.locations = {loc["id"]: dict(loc) for loc in locations}
        self.requests: list[dict] = []
        self.fail_with: Optional[str] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append({"body": body, "headers": dict(request.headers)})
        if self.fail_with:
            return httpx.Response(200, json={"errors": [{"message": self.fail_with}]})

        query: str = body["query"]
        variables: dict[str, Any] = body.get("variables") or {}

        if "GetAllActiveLocations" in query:
            rows = sorted(
                (loc for loc in self.locations.values() if loc.get("is_active", True)),
                key=lambda loc: loc["name"],
            )
            public = [
                {k: loc.get(k) for k in ("id", "name", "hero_image", "city", "state", "stamp")}
                for loc in rows
            ]
            return httpx.Response(200, json={"data": {"locations": public}})

        location = self.locations.get(variables.get("location"))
        if location is None:
            return httpx.Response(200, json={"data": {"update_locations": {"returning": []}}})

        if "SetLocationToInactive" in query:
            location["is_active"] = False
            returning = {"id": location["id"], "name": location["name"], "is_active": False}
        elif "SetLocationGeofenceRadius" in query:
            location["geofence_radius"] = variables["radius"]
            returning = {"id": location["id"], "name": location["name"], "geofence_radius": variables["radius"]}
        elif "SetLocationCoordinates" in query:
            location["latitude"] = variables["latitude"]
            location["longitude"] = variables["longitude"]
            returning = {
                "id": location["id"],
                "name": location["name"],
                "latitude": variables["latitude"],
                "longitude": variables["longitude"],
            }
        else:
            return httpx.Response(400, json={"errors": [{"message": "unknown operation"}]})

        return httpx.Response(200, json={"data": {"update_locations": {"returning": [returning]}}})


@pytest.fixture
def sample_locations() -> list[dict]:
    return [
        {
            "id": "2b6c1f0e-0000-4000-8000-000000000002",
            "name": "Griffith Observatory",
            "hero_image": "griffith_observatory.jpg",
            "city": "Los Angeles",
            "state": "California",
            "is_active": True,
            "stamp": {"stamp_image": "griffith_observatory.png"},
        },
        {
            "id": "2b6c1f0e-0000-4000-8000-000000000001",
            "name": "Balboa Park",
            "hero_image": "balboa_park.jpg",
            "city": "San Diego",
            "state": "California",
            "is_active": True,
            "stamp": {"stamp_image": "balboa_park.png"},
        },
        {
            "id": "2b6c1f0e-0000-4000-8000-000000000003",
            "name": "Closed Pier",
            "hero_image": "closed_pier.jpg",
            "city": "Santa Cruz",
            "state": "California",
            "is_active": False,
            "stamp": {"stamp_image": "closed_pier.png"},
        },
    ]


@pytest.fixture
def graphql_backend(sample_locations) -> FakeLocationsBackend:
    return FakeLocationsBackend(sample_locations)


@pytest.fixture
async def graphql_client(graphql_backend):
    from journeys_admin.graphql import GraphQLClient

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(graphql_backend.handler))
    client = GraphQLClient(GRAPHQL_ENDPOINT, "test-admin-secret", http_client=http_client)
    yield client
    await client.aclose()


# -----------------------------------------------------------------------------
# HTTP Client Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
async def client(graphql_client):
    """Async HTTP client for testing FastAPI endpoints, wired to the fake backend."""
    from journeys_admin.graphql import get_graphql_client
    from journeys_admin.main import app

    app.dependency_overrides[get_graphql_client] = lambda: graphql_client
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
