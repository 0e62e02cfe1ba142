from __future__ import annotations

from typing import Any, Optional

import httpx

from shared.upstream import request_json

from .config import Settings


class GeminiClient:
    """
    Thin async wrapper over generateContent.
    One request per call, no retries; failures surface as UpstreamError.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = settings.require_gemini_key()
        self.url = f"{settings.gemini_base_url.rstrip('/')}/models/{settings.gemini_model}:generateContent"
        self.timeout_s = settings.gemini_timeout_s
        self.transport = transport

    async def generate(self, prompt: str, *, temperature: float, service: str = "Gemini") -> dict:
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": temperature},
        }
        return await request_json(
            service,
            "POST",
            self.url,
            timeout_s=self.timeout_s,
            json=body,
            headers={"x-goog-api-key": self.api_key},
            transport=self.transport,
        )


def response_text(payload: Any) -> Optional[str]:
    # candidates[0].content.parts[0].text, tolerating any missing level
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None
