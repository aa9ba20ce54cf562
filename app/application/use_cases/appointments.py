from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable
from zoneinfo import ZoneInfo

from app.application.exceptions import AppointmentNotFoundError, InvalidAppointmentError
from app.application.ports.appointment_store import AppointmentStorePort
from app.application.ports.cache_invalidation import CacheInvalidationPort
from app.application.ports.service_catalog import ServiceCatalogPort
from app.application.use_cases.travel_time import TravelTimeUseCase
from app.application.utils.duration import occupied_minutes, total_service_duration
from app.application.utils.temporal_selection import select_current_and_next
from app.application.utils.time_utils import to_provider_time
from app.domain.entities.appointment import Appointment, AppointmentStatus
from app.domain.entities.commands import CreateAppointmentCommand
from app.domain.entities.dashboard import DashboardSummary
from app.domain.entities.invalidation import InvalidationEvent, MutationType
from app.domain.entities.temporal_selection import TemporalSelection


class AppointmentUseCase:
    def __init__(
        self,
        store: AppointmentStorePort,
        catalog: ServiceCatalogPort,
        invalidator: CacheInvalidationPort,
        timezone: ZoneInfo,
        travel: TravelTimeUseCase | None = None,
        grace_minutes: int = 10,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._invalidator = invalidator
        self._timezone = timezone
        self._travel = travel
        self._grace_period = timedelta(minutes=grace_minutes)
        self._clock = clock or (lambda: datetime.now(timezone))
        self._logger = logging.getLogger(__name__)

    def now(self) -> datetime:
        return to_provider_time(self._clock(), self._timezone)

    async def create(self, command: CreateAppointmentCommand) -> Appointment:
        if not command.services:
            raise InvalidAppointmentError("At least one service is required")
        if any(s.quantity < 1 for s in command.services):
            raise InvalidAppointmentError("Service quantity must be at least 1")
        if command.travel_minutes is not None and command.travel_minutes < 0:
            raise InvalidAppointmentError("Travel time cannot be negative")

        scheduled_at = to_provider_time(command.scheduled_at, self._timezone)
        if scheduled_at < self.now():
            raise InvalidAppointmentError("Cannot schedule appointments in the past")

        duration = total_service_duration(command.services, self._catalog)

        # Travel is neither counted nor stored when the toggle is off.
        address = (command.address or "").strip() or None
        travel_minutes = 0
        if command.include_travel:
            if not address:
                raise InvalidAppointmentError("Address is required when travel is enabled")
            if command.travel_minutes is not None:
                travel_minutes = command.travel_minutes
            elif self._travel is not None:
                travel_minutes = await self._travel.resolve_minutes(address, scheduled_at)
        else:
            address = None

        appointment = self._store.create(
            scheduled_at=scheduled_at,
            duration_minutes=duration,
            travel_minutes=travel_minutes,
            client_id=command.client_id,
            services=tuple(command.services),
            address=address,
            created_at=self.now(),
        )
        self._logger.info(
            "Appointment created",
            extra={
                "appointment_id": appointment.id,
                "reason": f"occupied={occupied_minutes(duration, travel_minutes, command.include_travel)}m",
            },
        )
        self._invalidate(appointment.id, MutationType.created)
        return appointment

    def update_status(self, appointment_id: int, status: AppointmentStatus) -> Appointment:
        appointment = self._store.update_status(appointment_id, status)
        self._logger.info(
            "Appointment status updated",
            extra={"appointment_id": appointment_id, "state": status.value},
        )
        self._invalidate(appointment_id, MutationType.updated)
        return appointment

    def delete(self, appointment_id: int) -> None:
        if not self._store.delete(appointment_id):
            raise AppointmentNotFoundError(appointment_id)
        self._logger.info("Appointment deleted", extra={"appointment_id": appointment_id})
        self._invalidate(appointment_id, MutationType.deleted)

    def get(self, appointment_id: int) -> Appointment:
        appointment = self._store.get(appointment_id)
        if appointment is None:
            raise AppointmentNotFoundError(appointment_id)
        return appointment

    def list_appointments(self, start: datetime | None = None, end: datetime | None = None) -> list[Appointment]:
        if start is not None:
            start = to_provider_time(start, self._timezone)
        if end is not None:
            end = to_provider_time(end, self._timezone)
        return self._store.list_appointments(start, end)

    def list_today(self, now: datetime | None = None) -> list[Appointment]:
        now = self.now() if now is None else to_provider_time(now, self._timezone)
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
        return self._store.list_appointments(start_of_day, start_of_day + timedelta(days=1))

    def list_pending(self) -> list[Appointment]:
        return [a for a in self._store.list_appointments() if a.status == AppointmentStatus.pending]

    def temporal_selection(self, now: datetime | None = None) -> TemporalSelection:
        """Current/next derived from the live appointment set on every call."""
        now = self.now() if now is None else to_provider_time(now, self._timezone)
        return select_current_and_next(now, self._store.list_appointments(), self._grace_period)

    def dashboard_summary(self, now: datetime | None = None) -> DashboardSummary:
        now = self.now() if now is None else to_provider_time(now, self._timezone)
        selection = self.temporal_selection(now)
        today = self.list_today(now)
        return DashboardSummary(
            current=selection.current,
            next=selection.next,
            today_count=len(today),
            confirmed_today_count=sum(1 for a in today if a.status == AppointmentStatus.confirmed),
            pending_count=len(self.list_pending()),
        )

    def _invalidate(self, appointment_id: int, operation: MutationType) -> None:
        self._invalidator.publish(InvalidationEvent(appointment_id=appointment_id, operation=operation))
