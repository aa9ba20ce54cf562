from __future__ import annotations

import logging
from datetime import datetime, timedelta

from app.application.ports.appointment_store import AppointmentStorePort
from app.application.ports.cache_invalidation import CacheInvalidationPort
from app.application.utils.expiry import split_expired
from app.domain.entities.appointment import Appointment, AppointmentStatus
from app.domain.entities.invalidation import InvalidationEvent, MutationType


class ExpirePendingUseCase:
    """Moves pending appointments that were never confirmed in time to `expired`."""

    def __init__(
        self,
        store: AppointmentStorePort,
        invalidator: CacheInvalidationPort,
        expiry_minutes: int = 30,
    ) -> None:
        self._store = store
        self._invalidator = invalidator
        self._expiry = timedelta(minutes=expiry_minutes)
        self._logger = logging.getLogger(__name__)

    def execute(self, now: datetime) -> list[Appointment]:
        _, expired = split_expired(self._store.list_appointments(), now, self._expiry)
        updated: list[Appointment] = []
        for appointment in expired:
            updated.append(self._store.update_status(appointment.id, AppointmentStatus.expired))
            self._invalidator.publish(
                InvalidationEvent(appointment_id=appointment.id, operation=MutationType.updated)
            )
        if updated:
            self._logger.info("Expired pending appointments", extra={"reason": f"count={len(updated)}"})
        return updated
