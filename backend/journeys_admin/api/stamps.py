"""
Journeys Admin Backend — Stamp Generation API

POST /api/generate-stamps: for each location, LLM writes an image prompt →
image model renders the stamp → PNG written to the stamps directory.

Locations are processed one after another. A failing location is recorded in
the results and the batch moves on; the response summarizes every location.
"""

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import ValidationError

from journeys_admin.assets import AssetError, save_stamp
from journeys_admin.config import LLM_CONFIG, generate_error_code, log
from journeys_admin.llm import ImageGenerationError, LLMError, call_llm, generate_image
from journeys_admin.models import GenerateStampsRequest, GenerateStampsResponse, StampLocation, StampResult
from journeys_admin.prompts import STAMP_PROMPT_SYSTEM_PROMPT, build_stamp_prompt_request

router = APIRouter(prefix="/api", tags=["stamps"])

MISSING_FIELDS_ERROR = "Missing required fields within location data"
INVALID_FIELDS_ERROR = "Invalid location data"


def _missing_fields(location: StampLocation) -> bool:
    return not (
        location.name
        and location.city
        and location.state
        and location.stamp
        and location.stamp.stamp_image
    )


def _invalid_entry(raw: Any, error: ValidationError, request_id: str | None) -> StampResult:
    name = raw.get("name") if isinstance(raw, dict) else None
    fields = ", ".join(".".join(str(part) for part in err["loc"]) or "location" for err in error.errors())
    log("WARN", "stamp skipped, invalid location data", request_id=request_id, location=name, fields=fields)
    return StampResult(
        name=name if isinstance(name, str) else None,
        status="error",
        error=f"{INVALID_FIELDS_ERROR}: {fields}",
    )


async def _generate_stamp(raw: Any, request_id: str | None) -> StampResult:
    """Run both generation stages for one location entry. Never raises."""
    try:
        location = StampLocation.model_validate(raw)
    except ValidationError as e:
        return _invalid_entry(raw, e, request_id)

    if _missing_fields(location):
        log("WARN", "stamp skipped, missing fields", request_id=request_id, location=location.name)
        return StampResult(
            name=location.name,
            stamp_image=location.stamp.stamp_image if location.stamp else None,
            status="error",
            error=MISSING_FIELDS_ERROR,
        )

    name = location.name
    stamp_image = location.stamp.stamp_image

    def _failed(message: str) -> StampResult:
        code = generate_error_code()
        log("ERROR", "stamp generation failed", request_id=request_id, location=name, error=message, error_code=code)
        return StampResult(name=name, stamp_image=stamp_image, status="error", error=message)

    # 1. Image prompt from the LLM
    try:
        image_prompt = await call_llm(
            [{"role": "user", "content": build_stamp_prompt_request(name, location.city, location.state)}],
            system_prompt=STAMP_PROMPT_SYSTEM_PROMPT,
            model=LLM_CONFIG["stamp_prompt_model"],
            request_id=request_id,
        )
    except LLMError as e:
        return _failed(f"Failed to generate an image prompt for {name}: {e}")

    image_prompt = image_prompt.strip()
    if not image_prompt:
        return _failed(f"No valid image prompt was returned for {name}... Please try again later.")
    log("INFO", "stamp image prompt ready", request_id=request_id, location=name, prompt_length=len(image_prompt))

    # 2. Render and store
    try:
        image_bytes = await generate_image(image_prompt, request_id=request_id)
    except ImageGenerationError as e:
        return _failed(f"No image was returned for {name}... Please try again later. Error: {e}")

    try:
        await save_stamp(stamp_image, image_bytes)
    except AssetError as e:
        return _failed(f"Could not save stamp for {name}: {e}")

    log("INFO", "stamp generated", request_id=request_id, location=name, stamp_image=stamp_image)
    return StampResult(name=name, stamp_image=stamp_image, status="success")


@router.post("/generate-stamps", response_model=GenerateStampsResponse)
async def generate_stamps(body: GenerateStampsRequest, request: Request) -> GenerateStampsResponse:
    """
    POST /api/generate-stamps

    Body: { "locations": [{ "name", "city", "state", "stamp": { "stamp_image" } }] }
    Returns: { "success": <every location succeeded>, "results": [...] }
    """
    request_id = request.headers.get("X-Request-Id")
    if not body.locations:
        raise HTTPException(status_code=400, detail={"error": "Missing required fields"})

    log("INFO", "stamp batch started", request_id=request_id, location_count=len(body.locations))

    results: list[StampResult] = []
    for location in body.locations:
        results.append(await _generate_stamp(location, request_id))

    failed = sum(1 for r in results if r.status != "success")
    log("INFO", "stamp batch completed", request_id=request_id, succeeded=len(results) - failed, failed=failed)
    return GenerateStampsResponse(success=failed == 0, results=results)
