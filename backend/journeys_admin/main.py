"""
Journeys Admin Backend — FastAPI Application Factory

App creation, middleware (CORS, request ID logging), error envelope,
GraphQL client lifecycle, router registration.
Run with: uvicorn journeys_admin.main:app --reload
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from journeys_admin import ui
from journeys_admin.api import bootstrap, locations, reference_images, stamps
from journeys_admin.config import log, settings
from journeys_admin.graphql import GraphQLClient

VERSION = "0.1.0"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Log the X-Request-Id header from every incoming request.

    Operator scripts send X-Request-Id with batch calls so a failed
    location can be matched with backend logs.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-Id", "none")
        log(
            "INFO",
            "request received",
            method=request.method,
            path=request.url.path,
            request_id=request_id,
        )
        response = await call_next(request)
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the GraphQL client once per process and close it on shutdown."""
    client = GraphQLClient(
        settings.graphql_endpoint,
        settings.graphql_admin_secret,
        timeout=settings.http_timeout_seconds,
    )
    app.state.graphql_client = client
    log("INFO", "graphql client ready", endpoint=settings.graphql_endpoint)
    try:
        yield
    finally:
        await client.aclose()


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTP error as {"error": ..., "details"?: ...}."""
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies get the same 400 envelope as missing fields."""
    log("WARN", "request validation failed", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=400,
        content={"error": "Missing required fields", "details": str(exc.errors())},
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Steps:
        1. Create FastAPI instance with title, version, description, lifespan
        2. Add CORS middleware (origins from settings.cors_origins)
        3. Add request ID logging middleware
        4. Register the JSON error envelope handlers
        5. Register routers (bootstrap, stamps, reference images, locations, ui)
        6. Return the app
    """
    app = FastAPI(
        title="Journeys Admin API",
        version=VERSION,
        description="Internal admin tool for journeys locations and stamps.",
        lifespan=lifespan,
    )

    # CORS
    origins = [origin.strip() for origin in settings.cors_origins.split(",")]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request ID logging
    app.add_middleware(RequestIdMiddleware)

    # Error envelope
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Routers
    app.include_router(bootstrap.router)
    app.include_router(stamps.router)
    app.include_router(reference_images.router)
    app.include_router(locations.router)
    app.include_router(ui.router)

    return app


app = create_app()


@app.get("/api/health")
async def health_check():
    """
    GET /api/health

    Returns: { "status": "ok", "version": "0.1.0" }
    """
    return {"status": "ok", "version": VERSION}
