from __future__ import annotations
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


class AirportQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str = ""
    destination: str = ""


class AirportResolution(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_airports: Tuple[str, ...] = ()
    destination_airports: Tuple[str, ...] = ()

    @property
    def is_complete(self) -> bool:
        return bool(self.source_airports) and bool(self.destination_airports)

    @property
    def is_empty(self) -> bool:
        return not self.source_airports and not self.destination_airports


# Wire names below match what the web client renders.
class FlightLeg(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_code: str = Field("", alias="from")
    to_code: str = Field("", alias="to")
    from_name: Optional[str] = Field(None, alias="fromName")
    to_name: Optional[str] = Field(None, alias="toName")


class FlightOption(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    destination_code: str = Field(..., alias="destination")
    destination_name: str = Field(..., alias="destinationName")
    price: Optional[float] = None
    duration_minutes: Optional[int] = Field(None, alias="duration")
    airline: str = "Unknown"
    legs: List[FlightLeg] = Field(default_factory=list, alias="route")
    departure_time: str = Field("", alias="departureTime")
    arrival_time: str = Field("", alias="arrivalTime")


class FlightSearchResult(BaseModel):
    flights: List[FlightOption] = Field(default_factory=list)
    selected_airport_code: Optional[str] = None
