from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from .models import AirportQuery, AirportResolution, FlightOption


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Request boundary
class TravelPlanRequest(_CamelModel):
    # budget/travelers arrive as numbers from some clients
    model_config = ConfigDict(coerce_numbers_to_str=True)

    source: str = Field(..., max_length=128)
    destination: str = Field(..., max_length=128)
    start_date: str = ""
    end_date: str = ""
    budget: str = ""
    travelers: str = ""
    interests: str = ""
    include_flights: bool = False

    def airport_query(self) -> AirportQuery:
        return AirportQuery(source=self.source, destination=self.destination)


class AirportCodes(_CamelModel):
    source: Optional[List[str]] = None
    destination: Optional[List[str]] = None

    @classmethod
    def from_resolution(cls, resolution: AirportResolution) -> "AirportCodes":
        return cls(
            source=list(resolution.source_airports) or None,
            destination=list(resolution.destination_airports) or None,
        )


class TravelPlanResponse(_CamelModel):
    airport_codes: AirportCodes
    selected_airport_code: Optional[str] = None
    flight_data: Optional[List[FlightOption]] = None
    itinerary: str = ""


class ErrorResponse(BaseModel):
    error: str
