from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from app.domain.entities.appointment import Appointment, AppointmentStatus

TZ = ZoneInfo("America/Los_Angeles")


def at(hour: int, minute: int = 0, day: int = 3) -> datetime:
    """Provider-local timestamp on 2025-07-<day>."""
    return datetime(2025, 7, day, hour, minute, tzinfo=TZ)


def make_appointment(
    appointment_id: int,
    start: datetime,
    duration: int,
    travel: int = 0,
    status: AppointmentStatus = AppointmentStatus.confirmed,
) -> Appointment:
    return Appointment(
        id=appointment_id,
        scheduled_at=start,
        duration_minutes=duration,
        travel_minutes=travel,
        status=status,
        client_id=100 + appointment_id,
        service_id=1,
    )
