"""
Tests for pending appointment expiry.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import timedelta

from app.application.use_cases.expire_pending import ExpirePendingUseCase
from app.application.utils.expiry import expires_at, is_pending_expired, split_expired
from app.domain.entities.appointment import AppointmentStatus, ServiceSelection
from app.domain.entities.invalidation import MutationType
from tests.helpers import at, make_appointment


def _pending(appointment_id, created_at, status=AppointmentStatus.pending):
    return replace(make_appointment(appointment_id, at(11, 0), duration=20, status=status), created_at=created_at)


def test_expiry_is_thirty_minutes_after_creation():
    appointment = _pending(1, at(10, 0))
    assert expires_at(appointment) == at(10, 30)
    assert expires_at(appointment, timedelta(minutes=45)) == at(10, 45)


def test_only_pending_appointments_expire():
    now = at(10, 30)
    assert is_pending_expired(_pending(1, at(9, 55)), now)
    assert not is_pending_expired(_pending(2, at(10, 10)), now)
    assert not is_pending_expired(_pending(3, at(9, 30), AppointmentStatus.confirmed), now)
    assert not is_pending_expired(_pending(4, None), now)


def test_split_expired_keeps_order():
    appointments = [_pending(1, at(9, 55)), _pending(2, at(10, 10)), _pending(3, at(9, 0))]

    active, expired = split_expired(appointments, at(10, 30))

    assert [a.id for a in active] == [2]
    assert [a.id for a in expired] == [1, 3]


def test_use_case_marks_expired_and_invalidates(store, cache):
    old = store.create(
        scheduled_at=at(11, 0),
        duration_minutes=20,
        travel_minutes=0,
        client_id=1,
        services=(ServiceSelection(service_id=1),),
        created_at=at(9, 55),
    )
    fresh = store.create(
        scheduled_at=at(12, 0),
        duration_minutes=20,
        travel_minutes=0,
        client_id=2,
        services=(ServiceSelection(service_id=1),),
        created_at=at(10, 20),
    )

    expired = ExpirePendingUseCase(store=store, invalidator=cache).execute(at(10, 30))

    assert [a.id for a in expired] == [old.id]
    assert store.get(old.id).status == AppointmentStatus.expired
    assert store.get(fresh.id).status == AppointmentStatus.pending
    assert [(e.appointment_id, e.operation) for e in cache.events] == [(old.id, MutationType.updated)]
