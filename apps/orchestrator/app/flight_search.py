from __future__ import annotations

import asyncio
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

import httpx

from shared.errors import UpstreamError
from shared.logging import get_logger
from shared.upstream import request_json
from travel_schemas.models import FlightLeg, FlightOption, FlightSearchResult

from .config import Settings

logger = get_logger(__name__)

ONE_WAY = "2"


def flight_date(start_date: str) -> str:
    """
    Calendar date (YYYY-MM-DD, UTC) for a client-supplied start date such as
    "2026-11-02" or "2026-11-02T00:00:00.000Z". Raises ValueError if unparsable.
    """
    parsed = datetime.fromisoformat(start_date.strip())
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date().isoformat()


def _price_key(option: FlightOption) -> float:
    return option.price if option.price is not None else sys.maxsize


def normalize_offers(payload: Dict[str, Any], destination_code: str) -> List[FlightOption]:
    out: List[FlightOption] = []
    for offer in payload.get("best_flights") or []:
        legs_raw = offer.get("flights") or []
        first = legs_raw[0] if legs_raw else {}
        last = legs_raw[-1] if legs_raw else {}
        arrival = last.get("arrival_airport") or {}

        legs = []
        for leg in legs_raw:
            dep = leg.get("departure_airport") or {}
            arr = leg.get("arrival_airport") or {}
            legs.append(
                FlightLeg(
                    from_code=str(dep.get("id") or ""),
                    to_code=str(arr.get("id") or ""),
                    from_name=dep.get("name"),
                    to_name=arr.get("name"),
                )
            )

        out.append(
            FlightOption(
                destination_code=destination_code,
                destination_name=arrival.get("name") or destination_code,
                price=offer.get("price"),
                duration_minutes=offer.get("total_duration"),
                airline=first.get("airline") or "Unknown",
                legs=legs,
                departure_time=(first.get("departure_airport") or {}).get("time") or "",
                arrival_time=arrival.get("time") or "",
            )
        )
    return out


class FlightAggregator:
    """
    Scatter/gather over SerpAPI Google Flights: one one-way search per
    destination, all in flight at once, each failing on its own.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = settings.serpapi_api_key
        self.url = settings.serpapi_url
        self.timeout_s = settings.serpapi_timeout_s
        self.transport = transport

    async def search_flights(
        self,
        origin_code: str,
        destination_codes: Sequence[str],
        departure_date: str,
    ) -> FlightSearchResult:
        if not destination_codes:
            return FlightSearchResult()

        logger.info("flight_search origin=%s destinations=%s date=%s", origin_code, list(destination_codes), departure_date)
        per_destination = await asyncio.gather(
            *(self._search_one(origin_code, dest, departure_date) for dest in destination_codes)
        )

        flights = [f for batch in per_destination for f in batch]
        # sorted() is stable: equal prices keep destination request order
        flights = sorted(flights, key=_price_key)
        selected = flights[0].destination_code if flights else None
        if selected:
            logger.info("flight_selected airport=%s offers=%s", selected, len(flights))
        return FlightSearchResult(flights=flights, selected_airport_code=selected)

    async def _search_one(self, origin_code: str, destination_code: str, departure_date: str) -> List[FlightOption]:
        params = {
            "engine": "google_flights",
            "departure_id": origin_code,
            "arrival_id": destination_code,
            "outbound_date": departure_date,
            "type": ONE_WAY,
            "api_key": self.api_key,
        }
        try:
            payload = await request_json(
                f"SerpAPI {destination_code}",
                "GET",
                self.url,
                timeout_s=self.timeout_s,
                params=params,
                transport=self.transport,
            )
            return normalize_offers(payload or {}, destination_code)
        except UpstreamError:
            # already logged with status and latency
            return []
        except Exception:
            logger.exception("flight_normalize_failed destination=%s", destination_code)
            return []
