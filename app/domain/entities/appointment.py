from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AppointmentStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    expired = "expired"


# Cancelled and expired appointments no longer block the calendar.
BLOCKING_STATUSES = frozenset({AppointmentStatus.pending, AppointmentStatus.confirmed})


@dataclass(frozen=True)
class ServiceSelection:
    service_id: int
    quantity: int = 1


@dataclass(frozen=True)
class Interval:
    start: datetime
    end: datetime
    appointment_id: int | None = None

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start


@dataclass(frozen=True)
class Appointment:
    id: int
    scheduled_at: datetime  # provider timezone, tz-aware
    duration_minutes: int
    travel_minutes: int = 0  # trailing; 0 when travel is off
    status: AppointmentStatus = AppointmentStatus.pending
    client_id: int | None = None
    service_id: int | None = None  # first selected service
    address: str | None = None  # only set when travel applies
    services: tuple[ServiceSelection, ...] = ()
    created_at: datetime | None = None
