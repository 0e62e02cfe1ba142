from __future__ import annotations

import time
from typing import Any, Dict, Optional

import httpx

from .errors import UpstreamError
from .logging import get_logger

logger = get_logger(__name__)


async def request_json(
    service: str,
    method: str,
    url: str,
    *,
    timeout_s: float,
    json: Optional[dict] = None,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Any:
    """
    Single upstream call, attempted exactly once.

    Any transport error, timeout, non-2xx status or undecodable body is logged
    and re-raised as UpstreamError so callers deal with one failure type.
    """
    started = time.time()
    status_code: Optional[int] = None

    try:
        async with httpx.AsyncClient(timeout=timeout_s, transport=transport) as client:
            resp = await client.request(method, url, json=json, params=params, headers=headers)
            status_code = resp.status_code
            resp.raise_for_status()
            return resp.json()
    except Exception as e:
        elapsed_ms = int((time.time() - started) * 1000)
        logger.warning(
            "upstream_call_failed service=%s status=%s latency_ms=%s err=%s",
            service,
            status_code,
            elapsed_ms,
            _describe(e),
        )
        reason = status_code if isinstance(e, httpx.HTTPStatusError) else type(e).__name__
        raise UpstreamError(
            f"{service} error: {reason}",
            cause=e,
            service=service,
            status_code=status_code,
        ) from e


def _describe(e: Exception) -> str:
    # HTTPStatusError repr embeds the request URL, which may carry an api key.
    if isinstance(e, httpx.HTTPStatusError):
        return f"HTTPStatusError({e.response.status_code}) body={e.response.text[:200]!r}"
    return repr(e)
