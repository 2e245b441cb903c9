"""
Journeys Admin Backend — Location Bootstrap API

POST /api/bootstrap-locations: location names + state → LLM → SQL INSERT text.
The SQL is returned for review and applied out-of-band.
"""

from fastapi import APIRouter, HTTPException, Request

from journeys_admin.config import LLM_CONFIG, generate_error_code, log
from journeys_admin.llm import LLMError, call_llm
from journeys_admin.models import BootstrapLocationsRequest, BootstrapLocationsResponse
from journeys_admin.prompts import build_location_sql_prompt, build_location_sql_system_prompt

router = APIRouter(prefix="/api", tags=["bootstrap"])


@router.post("/bootstrap-locations", response_model=BootstrapLocationsResponse)
async def bootstrap_locations(body: BootstrapLocationsRequest, request: Request) -> BootstrapLocationsResponse:
    """
    POST /api/bootstrap-locations

    Body: { "locations": ["Griffith Observatory", ...], "state": "California" }
    Returns: { "success": true, "sql": "INSERT INTO locations ..." }
    """
    request_id = request.headers.get("X-Request-Id")
    locations = [name.strip() for name in body.locations or [] if name and name.strip()]
    state = (body.state or "").strip()

    if not locations or not state:
        raise HTTPException(status_code=400, detail={"error": "Missing required fields"})

    log("INFO", "location bootstrap started", request_id=request_id, location_count=len(locations), state=state)
    messages = [{"role": "user", "content": build_location_sql_prompt(locations, state)}]

    try:
        sql = await call_llm(
            messages,
            system_prompt=build_location_sql_system_prompt(),
            model=LLM_CONFIG["location_data_model"],
            max_tokens=LLM_CONFIG["max_tokens"],
            request_id=request_id,
        )
    except LLMError as e:
        code = generate_error_code()
        log("ERROR", "location bootstrap failed", request_id=request_id, error=str(e), error_code=code)
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to generate SQL statement", "details": str(e), "error_code": code},
        )

    log("INFO", "location bootstrap completed", request_id=request_id, sql_length=len(sql))
    return BootstrapLocationsResponse(sql=sql)
