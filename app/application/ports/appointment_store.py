from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from app.domain.entities.appointment import Appointment, AppointmentStatus, ServiceSelection


class AppointmentStorePort(ABC):
    @abstractmethod
    def list_appointments(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Appointment]:
        """List appointments whose start falls in [start, end), ordered by scheduled_at."""
        raise NotImplementedError

    @abstractmethod
    def get(self, appointment_id: int) -> Appointment | None:
        raise NotImplementedError

    @abstractmethod
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
        """Persist a new appointment. Returns it with its assigned id."""
        raise NotImplementedError

    @abstractmethod
    def update_status(self, appointment_id: int, status: AppointmentStatus) -> Appointment:
        """Raises AppointmentNotFoundError if missing."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, appointment_id: int) -> bool:
        """Returns True if an appointment was removed."""
        raise NotImplementedError
