"""
Journeys Admin Backend — GraphQL Client

Thin async client for the hosted GraphQL backend. Queries are cached in memory
keyed by document + variables; any mutation clears the cache.

One instance is built at startup (see main.lifespan) and handed to handlers
through the `get_graphql_client` dependency.
"""

import json
import time
from typing import Any

import httpx
from fastapi import Request

from journeys_admin.config import generate_error_code, log

ADMIN_SECRET_HEADER = "x-hasura-admin-secret"


class GraphQLError(Exception):
    """Transport failure, non-2xx status, or an `errors` array in the response."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)


def _cache_key(document: str, variables: dict | None) -> tuple[str, str]:
    return document, json.dumps(variables or {}, sort_keys=True, default=str)


def _operation_name(document: str) -> str:
    """First `query X` / `mutation X` name in the document, for logging."""
    tokens = document.split()
    for i, token in enumerate(tokens[:-1]):
        if token in ("query", "mutation"):
            return tokens[i + 1].split("(")[0]
    return "anonymous"


class GraphQLClient:
    def __init__(
        self,
        endpoint: str,
        admin_secret: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        self.endpoint = endpoint
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self._headers = {
            ADMIN_SECRET_HEADER: admin_secret,
            "Content-Type": "application/json",
        }
        self._cache: dict[tuple[str, str], dict] = {}
        # Bumped on every clear; a query only stores its result if no clear happened while it was in flight.
        self._generation = 0

    async def query(
        self,
        document: str,
        variables: dict | None = None,
        *,
        use_cache: bool = True,
    ) -> dict[str, Any]:
        """
        Run a read operation and return its `data` object.

        With use_cache=True an identical document + variables pair is served
        from memory. use_cache=False always goes to the network and refreshes
        the stored entry.
        """
        key = _cache_key(document, variables)
        if use_cache and key in self._cache:
            log("INFO", "graphql cache hit", operation=_operation_name(document))
            return self._cache[key]

        generation = self._generation
        data = await self._execute(document, variables)
        if generation == self._generation:
            self._cache[key] = data
        else:
            log("INFO", "graphql result not cached, cleared mid-flight", operation=_operation_name(document))
        return data

    async def mutate(self, document: str, variables: dict | None = None) -> dict[str, Any]:
        """Run a write operation. Clears cached query results."""
        data = await self._execute(document, variables)
        self.clear_cache()
        return data

    def clear_cache(self) -> None:
        self._cache.clear()
        self._generation += 1

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _execute(self, document: str, variables: dict | None) -> dict[str, Any]:
        operation = _operation_name(document)
        log("INFO", "graphql request started", operation=operation)
        start = time.perf_counter()

        try:
            response = await self._http.post(
                self.endpoint,
                headers=self._headers,
                json={"query": document, "variables": variables or {}},
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            code = generate_error_code()
            log("ERROR", "graphql request failed", operation=operation, error=str(e), error_code=code)
            raise GraphQLError(str(e)) from e

        errors = payload.get("errors") or []
        if errors:
            message = "; ".join(err.get("message", "Unknown GraphQL error") for err in errors)
            code = generate_error_code()
            log("ERROR", "graphql returned errors", operation=operation, error=message, error_code=code)
            raise GraphQLError(message, errors=errors)

        duration_ms = int((time.perf_counter() - start) * 1000)
        log("INFO", "graphql request succeeded", operation=operation, duration_ms=duration_ms)
        return payload.get("data") or {}


def get_graphql_client(request: Request) -> GraphQLClient:
    """FastAPI dependency — the client created in the app lifespan."""
    return request.app.state.graphql_client
