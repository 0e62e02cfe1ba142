from __future__ import annotations

from typing import Optional, Sequence

from shared.logging import get_logger
from travel_schemas.models import AirportResolution, FlightOption
from travel_schemas.tool_schemas import TravelPlanRequest

from .config import ITINERARY_TEMPERATURE
from .gemini import GeminiClient, response_text
from .prompts import ARRIVAL_NOTE, ITINERARY_PROMPT

logger = get_logger(__name__)


def build_itinerary_prompt(
    query: TravelPlanRequest,
    selected_airport_code: Optional[str],
    flights: Sequence[FlightOption],
) -> str:
    destination = query.destination
    if selected_airport_code:
        destination = f"{query.destination} (arriving at airport {selected_airport_code})"
    arrival_note = ARRIVAL_NOTE.format(code=selected_airport_code) if flights else ""

    return ITINERARY_PROMPT.format(
        source=query.source,
        destination=destination,
        start_date=query.start_date,
        end_date=query.end_date,
        budget=query.budget,
        travelers=query.travelers,
        interests=query.interests,
        arrival_note=arrival_note,
    )


class ItineraryRequester:
    def __init__(self, gemini: GeminiClient):
        self.gemini = gemini

    async def build_itinerary(
        self,
        query: TravelPlanRequest,
        resolution: Optional[AirportResolution],
        selected_airport_code: Optional[str],
        flights: Sequence[FlightOption],
    ) -> str:
        """
        One creative model call. Upstream failure propagates (UpstreamError):
        there is no useful fallback for the itinerary itself.
        """
        prompt = build_itinerary_prompt(query, selected_airport_code, flights)
        payload = await self.gemini.generate(
            prompt, temperature=ITINERARY_TEMPERATURE, service="Gemini itinerary"
        )
        text = response_text(payload) or ""
        logger.info(
            "itinerary_generated chars=%s source_airports=%s",
            len(text),
            list(resolution.source_airports) if resolution else [],
        )
        return text
