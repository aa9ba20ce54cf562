from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime

from app.application.exceptions import AppointmentNotFoundError
from app.application.ports.appointment_store import AppointmentStorePort
from app.domain.entities.appointment import Appointment, AppointmentStatus, ServiceSelection


class MemoryAppointmentStore(AppointmentStorePort):
    def __init__(self, appointments: list[Appointment] | None = None) -> None:
        self._appointments: dict[int, Appointment] = {}
        self._next_id = 1
        # Single writer lock: the store is what serializes calendar writes.
        self._lock = threading.Lock()
        for appointment in appointments or []:
            self._appointments[appointment.id] = appointment
            self._next_id = max(self._next_id, appointment.id + 1)

    def list_appointments(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Appointment]:
        with self._lock:
            items = list(self._appointments.values())
        if start is not None:
            items = [a for a in items if a.scheduled_at >= start]
        if end is not None:
            items = [a for a in items if a.scheduled_at < end]
        return sorted(items, key=lambda a: (a.scheduled_at, a.id))

    def get(self, appointment_id: int) -> Appointment | None:
        with self._lock:
            return self._appointments.get(appointment_id)

    def create(
        self,
        scheduled_at: datetime,
        duration_minutes: int,
        travel_minutes: int,
        client_id: int,
        services: tuple[ServiceSelection, ...],
        address: str | None = None,
        status: AppointmentStatus = AppointmentStatus.pending,
        created_at: datetime | None = None,
    ) -> Appointment:
        with self._lock:
            appointment = Appointment(
                id=self._next_id,
                scheduled_at=scheduled_at,
                duration_minutes=duration_minutes,
                travel_minutes=travel_minutes,
                status=status,
                client_id=client_id,
                service_id=services[0].service_id if services else None,
                address=address,
                services=services,
                created_at=created_at,
            )
            self._appointments[appointment.id] = appointment
            self._next_id += 1
            return appointment

    def update_status(self, appointment_id: int, status: AppointmentStatus) -> Appointment:
        with self._lock:
            existing = self._appointments.get(appointment_id)
            if existing is None:
                raise AppointmentNotFoundError(appointment_id)
            updated = replace(existing, status=status)
            self._appointments[appointment_id] = updated
            return updated

    def delete(self, appointment_id: int) -> bool:
        with self._lock:
            return self._appointments.pop(appointment_id, None) is not None
