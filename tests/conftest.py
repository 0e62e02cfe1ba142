"""Shared fixtures: fake Gemini / SerpAPI upstreams built on httpx.MockTransport."""

import json
from typing import Callable, Dict, List, Optional

import httpx
import pytest

from app.config import Settings


def gemini_payload(text: str) -> dict:
    """Minimal generateContent envelope carrying one text part."""
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


def serp_offer(price, *, legs=(("JFK", "CDG"),), airline="Air France", duration=430) -> dict:
    flights = []
    for i, (dep, arr) in enumerate(legs):
        flights.append(
            {
                "departure_airport": {"id": dep, "name": f"{dep} Airport", "time": f"2026-11-02 0{i}:00"},
                "arrival_airport": {"id": arr, "name": f"{arr} Airport", "time": f"2026-11-02 1{i}:30"},
                "airline": airline,
            }
        )
    offer = {"flights": flights, "total_duration": duration}
    if price is not None:
        offer["price"] = price
    return offer


class FakeUpstream:
    """
    Routes requests by host. Gemini replies are served in order; SerpAPI
    replies are looked up by arrival_id. Every request is recorded.
    """

    def __init__(self) -> None:
        self.gemini_replies: List[httpx.Response] = []
        self.serp_replies: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def gemini_text(self, text: str) -> "FakeUpstream":
        self.gemini_replies.append(httpx.Response(200, json=gemini_payload(text)))
        return self

    def gemini_status(self, status: int) -> "FakeUpstream":
        self.gemini_replies.append(httpx.Response(status, text="upstream unavailable"))
        return self

    def serp(self, arrival_id: str, offers: Optional[list] = None, status: int = 200) -> "FakeUpstream":
        def reply(request: httpx.Request) -> httpx.Response:
            if status != 200:
                return httpx.Response(status, text="serpapi failure")
            return httpx.Response(200, json={"best_flights": offers or []})

        self.serp_replies[arrival_id] = reply
        return self

    def serp_raises(self, arrival_id: str, exc_type=httpx.ConnectError) -> "FakeUpstream":
        def reply(request: httpx.Request) -> httpx.Response:
            raise exc_type("boom", request=request)

        self.serp_replies[arrival_id] = reply
        return self

    @property
    def gemini_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.host == "generativelanguage.googleapis.com"]

    @property
    def serp_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.host == "serpapi.com"]

    def gemini_prompts(self) -> List[str]:
        return [json.loads(r.content)["contents"][0]["parts"][0]["text"] for r in self.gemini_requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "generativelanguage.googleapis.com":
            if not self.gemini_replies:
                return httpx.Response(500, text="no scripted reply")
            return self.gemini_replies.pop(0)
        if request.url.host == "serpapi.com":
            arrival = request.url.params.get("arrival_id")
            if arrival not in self.serp_replies:
                return httpx.Response(404, text="no scripted reply")
            return self.serp_replies[arrival](request)
        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="test-gemini-key", serpapi_api_key="test-serp-key")
