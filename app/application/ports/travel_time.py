from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from app.domain.entities.scheduling import TravelTimeResult


class TravelTimePort(ABC):
    @abstractmethod
    async def estimate(self, address: str, at_time: datetime) -> TravelTimeResult:
        """Estimate one-way travel to `address`.

        Returns success=False when no route is available; raises TravelTimeError on transport failures.
        """
        raise NotImplementedError
