from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable

from app.domain.entities.appointment import Appointment, AppointmentStatus

DEFAULT_PENDING_EXPIRY = timedelta(minutes=30)


def expires_at(appointment: Appointment, expiry: timedelta = DEFAULT_PENDING_EXPIRY) -> datetime | None:
    if appointment.created_at is None:
        return None
    return appointment.created_at + expiry


def is_pending_expired(
    appointment: Appointment,
    now: datetime,
    expiry: timedelta = DEFAULT_PENDING_EXPIRY,
) -> bool:
    """Only pending appointments expire, once the confirmation window has passed."""
    if appointment.status != AppointmentStatus.pending:
        return False
    deadline = expires_at(appointment, expiry)
    return deadline is not None and now > deadline


def split_expired(
    appointments: Iterable[Appointment],
    now: datetime,
    expiry: timedelta = DEFAULT_PENDING_EXPIRY,
) -> tuple[list[Appointment], list[Appointment]]:
    """Returns (active, expired)."""
    active: list[Appointment] = []
    expired: list[Appointment] = []
    for appointment in appointments:
        (expired if is_pending_expired(appointment, now, expiry) else active).append(appointment)
    return active, expired
