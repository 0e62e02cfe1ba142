from __future__ import annotations

import uuid
from typing import Any, Dict, Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.errors import TravelPlanError
from shared.logging import configure_logging, get_logger
from travel_schemas.tool_schemas import AirportCodes, ErrorResponse, TravelPlanRequest, TravelPlanResponse

from .airport_resolver import AirportResolver
from .config import LOG_LEVEL, Settings
from .flight_search import FlightAggregator
from .gemini import GeminiClient
from .graph import app as planner_graph
from .itinerary import ItineraryRequester

configure_logging(LOG_LEVEL)
logger = get_logger(__name__)

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


app = FastAPI(title="travel_planner", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=CORS_ALLOW_HEADERS,
)

# Swapped for an httpx.MockTransport in tests; None means real network.
app.state.upstream_transport = None


def build_collaborators(settings: Settings, transport: Optional[httpx.AsyncBaseTransport]) -> Dict[str, Any]:
    # GeminiClient raises ConfigurationError before anything is sent upstream.
    gemini = GeminiClient(settings, transport=transport)
    aggregator = FlightAggregator(settings, transport=transport) if settings.serpapi_api_key else None
    return {
        "airport_resolver": AirportResolver(gemini),
        "flight_aggregator": aggregator,
        "itinerary_requester": ItineraryRequester(gemini),
    }


def _error(message: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    return _error(f"Invalid request: {where} {first.get('msg', '')}".strip(), status_code=422)


@app.get("/health")
async def health() -> dict:
    return {"ok": True, "service": "travel_planner"}


@app.post(
    "/v1/travel_plan",
    response_model=TravelPlanResponse,
    responses={422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def travel_plan(req: Request, body: TravelPlanRequest):
    trace_id = str(uuid.uuid4())
    logger.info(
        "travel_plan trace_id=%s source=%r destination=%r start=%s end=%s travelers=%s include_flights=%s",
        trace_id,
        body.source,
        body.destination,
        body.start_date,
        body.end_date,
        body.travelers,
        body.include_flights,
    )

    try:
        settings = Settings.from_env()
        configurable = build_collaborators(settings, req.app.state.upstream_transport)
        final = await planner_graph.ainvoke(
            {"request_body": body, "trace_id": trace_id},
            config={"configurable": configurable},
        )
    except TravelPlanError as e:
        logger.error("travel_plan_failed trace_id=%s err=%s", trace_id, e)
        return _error(str(e))
    except Exception as e:
        logger.exception("travel_plan_failed trace_id=%s", trace_id)
        return _error(str(e) or "An unexpected error occurred")

    if final.get("error"):
        logger.error("travel_plan_failed trace_id=%s err=%s", trace_id, final["error"])
        return _error(final["error"])

    flights = final.get("flights") or []
    return TravelPlanResponse(
        airport_codes=AirportCodes.from_resolution(final["resolution"]),
        selected_airport_code=final.get("selected_airport_code"),
        flight_data=flights or None,
        itinerary=final.get("itinerary", ""),
    )
