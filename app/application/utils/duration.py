from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable

from app.application.ports.service_catalog import ServiceCatalogPort
from app.domain.entities.appointment import Appointment, Interval, ServiceSelection


def occupied_minutes(duration_minutes: int, travel_minutes: int, include_travel: bool) -> int:
    """Minutes an appointment blocks the calendar: service time plus trailing travel when enabled."""
    return duration_minutes + (travel_minutes if include_travel else 0)


def total_service_duration(selections: Iterable[ServiceSelection], catalog: ServiceCatalogPort) -> int:
    return sum(catalog.get_duration_minutes(s.service_id) * s.quantity for s in selections)


def occupied_end(appointment: Appointment) -> datetime:
    minutes = occupied_minutes(appointment.duration_minutes, appointment.travel_minutes, True)
    return appointment.scheduled_at + timedelta(minutes=minutes)


def occupied_interval(appointment: Appointment) -> Interval:
    return Interval(
        start=appointment.scheduled_at,
        end=occupied_end(appointment),
        appointment_id=appointment.id,
    )


def proposed_interval(
    start: datetime,
    duration_minutes: int,
    travel_minutes: int = 0,
    include_travel: bool = False,
) -> Interval:
    minutes = occupied_minutes(duration_minutes, travel_minutes, include_travel)
    return Interval(start=start, end=start + timedelta(minutes=minutes))
