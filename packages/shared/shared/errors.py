"""
Typed errors shared by the planner service.

Only two kinds of failure are allowed to reach the request boundary:
configuration problems and upstream failures that have no fallback.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TravelPlanError(Exception):
    message: str
    cause: Optional[BaseException] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


@dataclass
class ConfigurationError(TravelPlanError):
    """A required setting (usually a credential) is missing."""

    setting_name: str = ""


@dataclass
class UpstreamError(TravelPlanError):
    """
    An external service call failed: transport error, timeout or non-2xx status.
    status_code is None when no response was received.
    """

    service: str = ""
    status_code: Optional[int] = None
