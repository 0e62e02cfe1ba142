"""Tests for the per-destination flight fan-out and its normalisation."""

import asyncio

import httpx
import pytest

from app.flight_search import FlightAggregator, flight_date, normalize_offers
from conftest import serp_offer


def _aggregator(settings, upstream) -> FlightAggregator:
    return FlightAggregator(settings, transport=upstream.transport)


class TestFlightDate:
    def test_plain_date(self):
        assert flight_date("2026-11-02") == "2026-11-02"

    def test_js_iso_timestamp_in_utc(self):
        assert flight_date("2026-11-02T00:00:00.000Z") == "2026-11-02"

    def test_offset_is_converted_to_utc(self):
        assert flight_date("2026-11-02T01:00:00+02:00") == "2026-11-01"

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            flight_date("next tuesday")


class TestNormalizeOffers:
    def test_multi_leg_offer(self):
        payload = {"best_flights": [serp_offer(640, legs=(("JFK", "LHR"), ("LHR", "CDG")), airline="British Airways")]}
        (option,) = normalize_offers(payload, "CDG")

        assert option.destination_code == "CDG"
        assert option.destination_name == "CDG Airport"
        assert option.price == 640
        assert option.duration_minutes == 430
        assert option.airline == "British Airways"
        assert [(leg.from_code, leg.to_code) for leg in option.legs] == [("JFK", "LHR"), ("LHR", "CDG")]
        assert option.departure_time == "2026-11-02 00:00"
        assert option.arrival_time == "2026-11-02 11:30"

    def test_missing_fields_fall_back(self):
        payload = {"best_flights": [{"price": 99, "flights": [{"departure_airport": {"id": "JFK"}, "arrival_airport": {"id": "ORY"}}]}]}
        (option,) = normalize_offers(payload, "ORY")

        assert option.destination_name == "ORY"
        assert option.airline == "Unknown"
        assert option.departure_time == ""
        assert option.arrival_time == ""
        assert option.duration_minutes is None

    def test_no_best_flights(self):
        assert normalize_offers({"other_flights": [serp_offer(100)]}, "CDG") == []

    def test_wire_names(self):
        (option,) = normalize_offers({"best_flights": [serp_offer(120)]}, "CDG")
        dumped = option.model_dump(by_alias=True)

        assert set(dumped) == {
            "destination",
            "destinationName",
            "price",
            "duration",
            "airline",
            "route",
            "departureTime",
            "arrivalTime",
        }
        assert dumped["route"][0] == {"from": "JFK", "to": "CDG", "fromName": "JFK Airport", "toName": "CDG Airport"}


class TestFlightAggregator:
    @pytest.mark.asyncio
    async def test_sorted_by_price_with_one_destination_failing(self, settings, upstream):
        upstream.serp("ORY", status=500)
        upstream.serp("CDG", offers=[serp_offer(500), serp_offer(200), serp_offer(800)])

        result = await _aggregator(settings, upstream).search_flights("JFK", ["ORY", "CDG"], "2026-11-02")

        assert [f.price for f in result.flights] == [200, 500, 800]
        assert result.selected_airport_code == "CDG"
        assert len(upstream.serp_requests) == 2

    @pytest.mark.asyncio
    async def test_cheapest_destination_is_selected(self, settings, upstream):
        upstream.serp("CDG", offers=[serp_offer(450)])
        upstream.serp("ORY", offers=[serp_offer(300, legs=(("JFK", "ORY"),))])

        result = await _aggregator(settings, upstream).search_flights("JFK", ["CDG", "ORY"], "2026-11-02")

        assert [f.destination_code for f in result.flights] == ["ORY", "CDG"]
        assert result.selected_airport_code == "ORY"

    @pytest.mark.asyncio
    async def test_missing_price_sorts_last_and_ties_keep_request_order(self, settings, upstream):
        upstream.serp("NCE", offers=[serp_offer(None), serp_offer(300)])
        upstream.serp("LYS", offers=[serp_offer(300)])

        result = await _aggregator(settings, upstream).search_flights("JFK", ["NCE", "LYS"], "2026-11-02")

        assert [(f.destination_code, f.price) for f in result.flights] == [("NCE", 300), ("LYS", 300), ("NCE", None)]
        assert result.selected_airport_code == "NCE"

    @pytest.mark.asyncio
    async def test_transport_errors_are_isolated(self, settings, upstream):
        upstream.serp_raises("MRS", httpx.ConnectError)
        upstream.serp_raises("NCE", httpx.ReadTimeout)
        upstream.serp("CDG", offers=[serp_offer(210)])

        result = await _aggregator(settings, upstream).search_flights("JFK", ["MRS", "NCE", "CDG"], "2026-11-02")

        assert [f.destination_code for f in result.flights] == ["CDG"]

    @pytest.mark.asyncio
    async def test_all_failing_gives_no_selection(self, settings, upstream):
        upstream.serp("CDG", status=429)

        result = await _aggregator(settings, upstream).search_flights("JFK", ["CDG"], "2026-11-02")

        assert result.flights == []
        assert result.selected_airport_code is None

    @pytest.mark.asyncio
    async def test_empty_destinations_issue_no_requests(self, settings, upstream):
        result = await _aggregator(settings, upstream).search_flights("JFK", [], "2026-11-02")

        assert result.flights == []
        assert result.selected_airport_code is None
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_query_parameters(self, settings, upstream):
        upstream.serp("CDG", offers=[])
        await _aggregator(settings, upstream).search_flights("JFK", ["CDG"], "2026-11-02")

        (request,) = upstream.serp_requests
        params = request.url.params
        assert params["engine"] == "google_flights"
        assert params["departure_id"] == "JFK"
        assert params["arrival_id"] == "CDG"
        assert params["outbound_date"] == "2026-11-02"
        assert params["type"] == "2"
        assert params["api_key"] == "test-serp-key"

    @pytest.mark.asyncio
    async def test_searches_run_concurrently(self, settings):
        in_flight = 0
        peak = 0

        async def handler(request: httpx.Request) -> httpx.Response:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.05)
            in_flight -= 1
            return httpx.Response(200, json={"best_flights": []})

        aggregator = FlightAggregator(settings, transport=httpx.MockTransport(handler))
        await aggregator.search_flights("JFK", ["CDG", "ORY", "NCE"], "2026-11-02")

        assert peak == 3
