from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.domain.entities.appointment import ServiceSelection


@dataclass(frozen=True)
class CreateAppointmentCommand:
    client_id: int
    services: tuple[ServiceSelection, ...]
    scheduled_at: datetime
    include_travel: bool = False
    address: str | None = None
    travel_minutes: int | None = None  # None -> look it up when travel is on
