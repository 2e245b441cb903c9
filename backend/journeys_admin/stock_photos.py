"""
Journeys Admin Backend — Stock Photos

Pixabay search for location reference photos.
Uses httpx for the search and the image downloads.
"""

import time
from dataclasses import dataclass
import httpx

from journeys_admin.config import generate_error_code, log, settings

MAX_REFERENCE_IMAGES = 5


@dataclass
class PhotoHit:
    large_image_url: str
    downloads: int
    is_ai_generated: bool


class StockPhotoError(Exception):
    pass


def _describe_failure(action: str, e: Exception) -> str:
    """Error text for callers and logs. Never includes the request URL, which carries the API key."""
    if isinstance(e, httpx.HTTPStatusError):
        return f"{action} returned HTTP {e.response.status_code}"
    if isinstance(e, httpx.HTTPError):
        return f"{action} failed ({type(e).__name__})"
    return f"{action} returned a malformed response"


def rank_hits(hits: list[PhotoHit], limit: int = MAX_REFERENCE_IMAGES) -> list[PhotoHit]:
    """Drop AI-generated hits, sort by downloads (highest first), keep `limit`."""
    photos = [hit for hit in hits if not hit.is_ai_generated]
    photos.sort(key=lambda hit: hit.downloads, reverse=True)
    return photos[:limit]


async def search_photos(client: httpx.AsyncClient, query: str) -> list[PhotoHit]:
    """
    Search horizontal photos for `query` (already in '+'-joined form).

    Raises:
        StockPhotoError: On transport failure, non-2xx status, or a malformed body.
    """
    log("INFO", "stock photo search started", provider="pixabay", query=query)
    start = time.monotonic()

    params = {
        "key": settings.pixabay_api_key,
        # Pixabay treats spaces and "+" alike
        "q": query.replace("+", " "),
        "image_type": "photo",
        "orientation": "horizontal",
    }
    try:
        response = await client.get(settings.pixabay_api_url, params=params)
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        message = _describe_failure("Pixabay search", e)
        code = generate_error_code()
        log("ERROR", "stock photo search failed", provider="pixabay", query=query, error=message, error_code=code)
        raise StockPhotoError(message) from e

    hits = [
        PhotoHit(
            large_image_url=h.get("largeImageURL", ""),
            downloads=int(h.get("downloads") or 0),
            is_ai_generated=bool(h.get("isAiGenerated", False)),
        )
        for h in data.get("hits", [])
        if h.get("largeImageURL")
    ]
    log(
        "INFO",
        "stock photo search completed",
        provider="pixabay",
        query=query,
        results_count=len(hits),
        duration_ms=int((time.monotonic() - start) * 1000),
    )
    return hits


async def download_image(client: httpx.AsyncClient, url: str) -> bytes:
    """Fetch an image and return its bytes."""
    try:
        response = await client.get(url, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPError as e:
        message = _describe_failure("Image download", e)
        code = generate_error_code()
        log("ERROR", "image download failed", url=url, error=message, error_code=code)
        raise StockPhotoError(message) from e
    return response.content
