"""
Airport-code resolution for a (source, destination) pair.

The model is asked for JSON, but whatever it returns goes through an
ordered chain of fallback tiers:

1. model JSON       - first balanced object in the reply, strictly parsed
2. token scan       - 3-letter words in the reply (only if 1 found no object)
3. per-side lookup  - input already code-shaped, then the country table
4. cross-side       - copy the other side's first code into an empty side

Each tier is a plain function so it can be tested on its own. resolve()
never raises.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Optional, Sequence, Tuple

from shared.errors import UpstreamError
from shared.logging import get_logger
from travel_schemas.models import AirportResolution

from . import location_resolver
from .config import AIRPORT_LOOKUP_TEMPERATURE
from .gemini import GeminiClient, response_text
from .json_extract import extract_first_json_object, extract_iata_codes, safe_parse_json_candidate
from .prompts import AIRPORT_PROMPT

logger = get_logger(__name__)

ModelTier = Callable[[Optional[str]], Optional[AirportResolution]]
SideTier = Callable[[Optional[str]], Optional[Tuple[str, ...]]]


def coerce_codes(value: Any) -> Tuple[str, ...]:
    if isinstance(value, list):
        return tuple(str(v).upper() for v in value)
    if isinstance(value, str):
        return (value.upper(),)
    return ()


def model_json_tier(text: Optional[str]) -> Optional[AirportResolution]:
    """
    None when no JSON object could be parsed. A parsed object without usable
    keys still counts as an answer (an empty resolution), so later model
    tiers are skipped.
    """
    parsed = safe_parse_json_candidate(extract_first_json_object(text))
    if not isinstance(parsed, dict):
        return None
    if not (parsed.get("source_airports") or parsed.get("destination_airports")):
        return AirportResolution()
    return AirportResolution(
        source_airports=coerce_codes(parsed.get("source_airports")),
        destination_airports=coerce_codes(parsed.get("destination_airports")),
    )


def token_scan_tier(text: Optional[str]) -> Optional[AirportResolution]:
    # Naive split: first token is the source, everything after is the destination.
    tokens = extract_iata_codes(text)
    if len(tokens) < 2:
        return None
    logger.info("airport_token_fallback tokens=%s", tokens)
    return AirportResolution(source_airports=(tokens[0],), destination_airports=tuple(tokens[1:]))


MODEL_TIERS: Tuple[ModelTier, ...] = (model_json_tier, token_scan_tier)


def first_model_result(text: Optional[str], tiers: Sequence[ModelTier] = MODEL_TIERS) -> AirportResolution:
    if text is None:
        return AirportResolution()
    for tier in tiers:
        try:
            result = tier(text)
        except Exception:
            logger.exception("airport_tier_failed tier=%s", tier.__name__)
            continue
        if result is not None:
            return result
    return AirportResolution()


def resolve_side(query: Optional[str], tiers: Sequence[SideTier] = location_resolver.SIDE_TIERS) -> Tuple[str, ...]:
    for tier in tiers:
        try:
            codes = tier(query)
        except Exception:
            logger.exception("airport_side_tier_failed tier=%s", tier.__name__)
            continue
        if codes:
            return tuple(codes)
    return ()


def fill_empty_sides(resolution: AirportResolution, source: str, destination: str) -> AirportResolution:
    return AirportResolution(
        source_airports=resolution.source_airports or resolve_side(source),
        destination_airports=resolution.destination_airports or resolve_side(destination),
    )


def substitute_across_sides(resolution: AirportResolution) -> AirportResolution:
    src, dst = resolution.source_airports, resolution.destination_airports
    if not src and dst:
        src = dst[:1]
    if not dst and src:
        dst = src[:1]
    return AirportResolution(source_airports=src, destination_airports=dst)


class AirportResolver:
    def __init__(self, gemini: GeminiClient):
        self.gemini = gemini

    async def resolve(self, source: str, destination: str) -> AirportResolution:
        text = await self._ask_model(source, destination)

        resolution = first_model_result(text)
        if not resolution.is_empty:
            logger.info(
                "airports_from_model source=%s destination=%s",
                list(resolution.source_airports),
                list(resolution.destination_airports),
            )

        resolution = fill_empty_sides(resolution, source, destination)
        resolution = substitute_across_sides(resolution)

        if not resolution.is_complete:
            logger.warning("airports_unresolved source=%r destination=%r", source, destination)
            return resolution
        logger.info(
            "airports_resolved source=%s destination=%s",
            list(resolution.source_airports),
            list(resolution.destination_airports),
        )
        return resolution

    async def _ask_model(self, source: str, destination: str) -> Optional[str]:
        prompt = AIRPORT_PROMPT.format(source=source, destination=destination)
        try:
            payload = await self.gemini.generate(
                prompt, temperature=AIRPORT_LOOKUP_TEMPERATURE, service="Gemini airport lookup"
            )
        except UpstreamError as e:
            logger.warning("airport_lookup_failed err=%s", e)
            return None

        text = response_text(payload)
        if text is None:
            # no text part (e.g. blocked prompt); scan the envelope itself
            text = json.dumps(payload)
        logger.debug("airport_lookup_raw text=%r", text[:500])
        return text
