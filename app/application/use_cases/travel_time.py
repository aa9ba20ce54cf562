from __future__ import annotations

import logging
from datetime import datetime

from app.application.exceptions import TravelTimeError
from app.application.ports.travel_time import TravelTimePort
from app.domain.entities.scheduling import TravelTimeResult


class TravelTimeUseCase:
    def __init__(self, provider: TravelTimePort) -> None:
        self._provider = provider
        self._logger = logging.getLogger(__name__)

    async def calculate(self, address: str, at_time: datetime) -> TravelTimeResult:
        """Never raises: transport failures come back as success=False."""
        if not address or not address.strip():
            return TravelTimeResult(success=False, error_message="Address is required")
        try:
            result = await self._provider.estimate(address.strip(), at_time)
        except TravelTimeError as e:
            self._logger.warning("Travel time lookup failed", extra={"error": str(e)})
            return TravelTimeResult(success=False, error_message=str(e))

        if not result.success:
            self._logger.info("Travel time unavailable", extra={"reason": result.error_message})
        return result

    async def resolve_minutes(self, address: str | None, at_time: datetime) -> int:
        """Travel minutes to use for scheduling; any failure counts as zero travel."""
        if not address:
            return 0
        result = await self.calculate(address, at_time)
        return result.minutes_or_zero
