from __future__ import annotations

import logging
from datetime import datetime

from app.application.ports.travel_time import TravelTimePort
from app.domain.entities.scheduling import TravelTimeResult


class MockTravelTime(TravelTimePort):
    def __init__(self, default_minutes: int = 15, overrides: dict[str, int] | None = None) -> None:
        self._default_minutes = default_minutes
        self._overrides = {k.lower().strip(): v for k, v in (overrides or {}).items()}
        self._logger = logging.getLogger(__name__)

    async def estimate(self, address: str, at_time: datetime) -> TravelTimeResult:
        if not address.strip():
            return TravelTimeResult(success=False, error_message="Address is required")
        minutes = self._overrides.get(address.lower().strip(), self._default_minutes)
        self._logger.debug("Mock travel time", extra={"reason": f"{minutes}m"})
        return TravelTimeResult(success=True, travel_time_minutes=minutes, distance_meters=0)
