from __future__ import annotations

import logging
import math
from datetime import datetime, timezone

import httpx

from app.application.exceptions import TravelTimeError
from app.application.ports.travel_time import TravelTimePort
from app.core.config import settings
from app.domain.entities.scheduling import TravelTimeResult


class GoogleMapsTravelTime(TravelTimePort):
    """Driving time from the provider's home base via the Distance Matrix API."""

    def __init__(
        self,
        api_key: str | None = None,
        origin: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key or settings.GOOGLE_MAPS_API_KEY
        self._origin = origin or settings.HOME_BASE_ADDRESS
        self._base_url = base_url or settings.GOOGLE_MAPS_BASE_URL
        if not self._api_key:
            raise ValueError("GOOGLE_MAPS_API_KEY is required for Google Maps travel time")

        self._client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.TRAVEL_TIME_TIMEOUT_SECONDS
        )
        self._logger = logging.getLogger(__name__)

    async def close(self) -> None:
        await self._client.aclose()

    async def estimate(self, address: str, at_time: datetime) -> TravelTimeResult:
        if not self._origin:
            return TravelTimeResult(success=False, error_message="No home base address configured")

        # Distance Matrix rejects departure times in the past.
        departure = max(int(at_time.timestamp()), int(datetime.now(timezone.utc).timestamp()))
        params = {
            "origins": self._origin,
            "destinations": address,
            "mode": "driving",
            "traffic_model": "best_guess",
            "departure_time": str(departure),
            "key": self._api_key,
        }

        try:
            response = await self._client.get(self._base_url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            self._logger.error("Travel time request failed", extra={"error": str(e)})
            raise TravelTimeError("Failed to connect to mapping service") from e
        except ValueError as e:
            raise TravelTimeError("Mapping service returned invalid JSON") from e

        if data.get("status") != "OK":
            return TravelTimeResult(
                success=False,
                error_message=data.get("error_message") or "Failed to calculate travel time",
            )

        rows = data.get("rows") or [{}]
        elements = rows[0].get("elements") or [{}]
        element = elements[0]
        if element.get("status") != "OK":
            return TravelTimeResult(success=False, error_message="No route found between the addresses")

        seconds = (element.get("duration_in_traffic") or {}).get("value") or (element.get("duration") or {}).get("value") or 0
        distance = (element.get("distance") or {}).get("value") or 0
        return TravelTimeResult(
            success=True,
            travel_time_minutes=math.ceil(seconds / 60),
            distance_meters=distance,
        )
