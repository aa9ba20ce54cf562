from __future__ import annotations

import logging
from datetime import timedelta
from zoneinfo import ZoneInfo

from app.application.ports.appointment_store import AppointmentStorePort
from app.application.ports.conflict_check import ConflictCheckPort
from app.application.use_cases.travel_time import TravelTimeUseCase
from app.application.utils.duration import occupied_interval
from app.application.utils.overlap import find_conflict
from app.application.utils.time_utils import to_provider_time
from app.domain.entities.appointment import BLOCKING_STATUSES, Interval
from app.domain.entities.scheduling import ConflictCheckRequest, ConflictCheckResponse


class LocalConflictChecker(ConflictCheckPort):
    """Checks a proposed window directly against the appointment store."""

    def __init__(
        self,
        store: AppointmentStorePort,
        timezone: ZoneInfo,
        travel: TravelTimeUseCase | None = None,
    ) -> None:
        self._store = store
        self._timezone = timezone
        self._travel = travel
        self._logger = logging.getLogger(__name__)

    async def check(self, request: ConflictCheckRequest) -> ConflictCheckResponse:
        start = to_provider_time(request.proposed_start, self._timezone)
        end = to_provider_time(request.proposed_end, self._timezone)

        travel_minutes = 0
        if self._travel is not None and request.client_address:
            travel_minutes = await self._travel.resolve_minutes(request.client_address, start)
        proposed = Interval(start=start, end=end + timedelta(minutes=travel_minutes))

        existing = [
            occupied_interval(a)
            for a in self._store.list_appointments()
            if a.status in BLOCKING_STATUSES
        ]
        conflict = find_conflict(proposed, existing)
        if conflict is None:
            return ConflictCheckResponse(is_valid=True)

        self._logger.info(
            "Scheduling conflict detected",
            extra={"appointment_id": conflict.appointment_id, "reason": f"travel={travel_minutes}m"},
        )
        return ConflictCheckResponse(is_valid=False, conflict_message=_conflict_message(conflict, travel_minutes))


def _conflict_message(conflict: Interval, travel_minutes: int) -> str:
    window = f"{conflict.start.strftime('%a %b %d %I:%M %p')} - {conflict.end.strftime('%I:%M %p')}"
    if travel_minutes:
        return (
            f"Overlaps an existing appointment ({window}) once {travel_minutes} mins of travel "
            "are included - try a later time or different location."
        )
    return f"Overlaps an existing appointment ({window}) - try a different time."
