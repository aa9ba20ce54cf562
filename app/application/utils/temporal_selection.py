from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable

from app.application.utils.duration import occupied_end
from app.domain.entities.appointment import Appointment, AppointmentStatus
from app.domain.entities.temporal_selection import TemporalSelection

DEFAULT_GRACE_PERIOD = timedelta(minutes=10)


def is_in_current_window(
    appointment: Appointment,
    now: datetime,
    grace_period: timedelta = DEFAULT_GRACE_PERIOD,
) -> bool:
    # Trailing travel counts toward the window, same as for conflicts.
    return now - appointment.scheduled_at >= -grace_period and now <= occupied_end(appointment)


def select_current_and_next(
    now: datetime,
    appointments: Iterable[Appointment],
    grace_period: timedelta = DEFAULT_GRACE_PERIOD,
) -> TemporalSelection:
    """
    Derive the current and next appointment from scratch.

    Only confirmed appointments are eligible. Current is the earliest confirmed
    appointment whose window (grace period before start up to occupied end)
    contains `now`. Next is the earliest confirmed appointment starting after
    `now` that is not the current one, ties broken by id.
    """
    confirmed = [a for a in appointments if a.status == AppointmentStatus.confirmed]

    in_window = [a for a in confirmed if is_in_current_window(a, now, grace_period)]
    current = min(in_window, key=lambda a: (a.scheduled_at, a.id), default=None)

    upcoming = [
        a
        for a in confirmed
        if a.scheduled_at > now and (current is None or a.id != current.id)
    ]
    next_appointment = min(upcoming, key=lambda a: (a.scheduled_at, a.id), default=None)

    return TemporalSelection(current=current, next=next_appointment)
