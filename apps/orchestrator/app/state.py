# apps/orchestrator/app/state.py

from typing import TypedDict, List, Optional

from travel_schemas.models import AirportResolution, FlightOption
from travel_schemas.tool_schemas import TravelPlanRequest


# Central state of the planner graph; each node returns a partial update.
class GraphState(TypedDict, total=False):
    # Input state
    request_body: TravelPlanRequest
    trace_id: str

    # Populated by nodes
    resolution: AirportResolution
    flights: List[FlightOption]
    selected_airport_code: Optional[str]

    # Final output state
    itinerary: str

    # Centralized error handling
    error: Optional[str]
