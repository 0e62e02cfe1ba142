# apps/orchestrator/app/nodes.py

from typing import Any, Dict
from langchain_core.runnables import RunnableConfig

from shared.errors import UpstreamError
from shared.logging import get_logger
from .flight_search import flight_date
from .state import GraphState

logger = get_logger(__name__)


def _no_flights() -> Dict[str, Any]:
    return {"flights": [], "selected_airport_code": None}


async def resolve_airports(state: GraphState, config: RunnableConfig) -> Dict[str, Any]:
    """
    Resolves source and destination text to IATA code lists. Never fails:
    the resolver degrades through its fallback tiers instead.
    """
    resolver = config["configurable"]["airport_resolver"]
    body = state["request_body"]
    logger.info("node=resolve_airports trace_id=%s", state.get("trace_id"))

    query = body.airport_query()
    resolution = await resolver.resolve(query.source, query.destination)
    return {"resolution": resolution}


async def search_flights(state: GraphState, config: RunnableConfig) -> Dict[str, Any]:
    """Prices every destination airport and picks the cheapest arrival airport."""
    aggregator = config["configurable"].get("flight_aggregator")
    body = state["request_body"]
    resolution = state["resolution"]
    logger.info("node=search_flights trace_id=%s", state.get("trace_id"))

    if aggregator is None:
        logger.warning("SERPAPI_API_KEY not configured, skipping flight details")
        return _no_flights()

    # first resolved source airport, or the raw text if nothing resolved
    origin = resolution.source_airports[0] if resolution.source_airports else body.source

    try:
        departure = flight_date(body.start_date)
    except ValueError as e:
        logger.error("flight_search_skipped bad start_date=%r err=%s", body.start_date, e)
        return _no_flights()

    result = await aggregator.search_flights(origin, resolution.destination_airports, departure)
    return {"flights": result.flights, "selected_airport_code": result.selected_airport_code}


async def build_itinerary(state: GraphState, config: RunnableConfig) -> Dict[str, Any]:
    """Final model call. A failure here fails the whole request."""
    requester = config["configurable"]["itinerary_requester"]
    logger.info("node=build_itinerary trace_id=%s", state.get("trace_id"))

    try:
        text = await requester.build_itinerary(
            state["request_body"],
            state.get("resolution"),
            state.get("selected_airport_code"),
            state.get("flights") or [],
        )
        return {"itinerary": text}
    except UpstreamError as e:
        return {"error": str(e)}
