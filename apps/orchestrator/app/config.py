from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from shared.errors import ConfigurationError

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Sampling temperatures for the two model calls.
AIRPORT_LOOKUP_TEMPERATURE = 0.0
ITINERARY_TEMPERATURE = 0.7


@dataclass(frozen=True)
class Settings:
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_timeout_s: float = 60.0

    serpapi_api_key: Optional[str] = None
    serpapi_url: str = "https://serpapi.com/search.json"
    serpapi_timeout_s: float = 20.0

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            gemini_base_url=os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"),
            gemini_timeout_s=float(os.getenv("GEMINI_TIMEOUT_S", "60")),
            serpapi_api_key=os.getenv("SERPAPI_API_KEY") or None,
            serpapi_url=os.getenv("SERPAPI_URL", "https://serpapi.com/search.json"),
            serpapi_timeout_s=float(os.getenv("SERPAPI_TIMEOUT_S", "20")),
        )

    def require_gemini_key(self) -> str:
        if not self.gemini_api_key:
            raise ConfigurationError("GEMINI_API_KEY is not configured", setting_name="GEMINI_API_KEY")
        return self.gemini_api_key
