from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.domain.entities.appointment import ServiceSelection


@dataclass(frozen=True)
class ScheduleForm:
    """Booking form state as seen by the interactive conflict pre-check."""

    scheduled_at: datetime | None = None
    client_id: int | None = None
    services: tuple[ServiceSelection, ...] = ()
    include_travel: bool = False
    address: str | None = None

    def is_complete(self) -> bool:
        if self.scheduled_at is None or self.client_id is None or not self.services:
            return False
        if self.include_travel and not (self.address or "").strip():
            return False
        return True
