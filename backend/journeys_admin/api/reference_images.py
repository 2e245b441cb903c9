"""
Journeys Admin Backend — Reference Photo API

POST /api/fetch-reference-images: for each location name, search stock photos,
keep the 5 most downloaded non-AI results and save them to the images directory.
"""

import httpx
from fastapi import APIRouter, HTTPException, Request

from journeys_admin.assets import AssetError, save_reference_image
from journeys_admin.config import generate_error_code, log, settings
from journeys_admin.models import ReferenceImagesRequest, ReferenceImagesResponse
from journeys_admin.naming import reference_image_filename, stock_photo_query
from journeys_admin.stock_photos import StockPhotoError, download_image, rank_hits, search_photos

router = APIRouter(prefix="/api", tags=["reference-images"])


@router.post("/fetch-reference-images", response_model=ReferenceImagesResponse)
async def fetch_reference_images(body: ReferenceImagesRequest, request: Request) -> ReferenceImagesResponse:
    """
    POST /api/fetch-reference-images

    Body: { "locations": ["Griffith Observatory", ...] }
    Returns: { "success": true, "locations": [...], "files": ["griffith_observatory_0.jpg", ...] }
    """
    request_id = request.headers.get("X-Request-Id")
    if not body.locations:
        raise HTTPException(status_code=400, detail={"error": "Missing required fields"})

    files: list[str] = []
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
            for location_name in body.locations:
                hits = await search_photos(client, stock_photo_query(location_name))
                top_hits = rank_hits(hits)
                log(
                    "INFO",
                    "reference photos selected",
                    request_id=request_id,
                    location=location_name,
                    selected=len(top_hits),
                )
                for index, hit in enumerate(top_hits):
                    filename = reference_image_filename(location_name, index)
                    content = await download_image(client, hit.large_image_url)
                    await save_reference_image(filename, content)
                    files.append(filename)
    except (StockPhotoError, AssetError) as e:
        code = generate_error_code()
        log("ERROR", "reference photo fetch failed", request_id=request_id, error=str(e), error_code=code)
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to fetch reference images", "details": str(e), "error_code": code},
        )

    log("INFO", "reference photo fetch completed", request_id=request_id, file_count=len(files))
    return ReferenceImagesResponse(locations=body.locations, files=files)
