"""
HTTP tests for the appointment and scheduling routes.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.application.use_cases.appointments import AppointmentUseCase
from app.domain.entities.invalidation import QueryKey
from app.main import app
from app.wiring import dependencies
from tests.helpers import TZ, at

class FrozenClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(at(8, 0))


@pytest.fixture
def client(clock):
    dependencies.reset_state()

    def use_case() -> AppointmentUseCase:
        return AppointmentUseCase(
            store=dependencies.get_appointment_store(),
            catalog=dependencies.get_service_catalog(),
            invalidator=dependencies.get_query_cache(),
            timezone=TZ,
            travel=dependencies.get_travel_use_case(),
            clock=clock,
        )

    app.dependency_overrides[dependencies.get_appointment_use_case] = use_case
    yield TestClient(app)
    app.dependency_overrides.clear()
    dependencies.reset_state()


def _create(client, start, **extra):
    payload = {
        "clientId": 1,
        "services": [{"serviceId": 1, "quantity": 1}],
        "scheduledAt": start.isoformat(),
    }
    payload.update(extra)
    response = client.post("/api/appointments", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_create_returns_occupied_window(client):
    body = _create(client, at(15, 0), includeTravel=True, address="123 Main St", travelMinutes=15)

    assert body["durationMinutes"] == 30
    assert body["travelMinutes"] == 15
    assert body["status"] == "pending"
    assert body["occupiedEnd"] == at(15, 45).isoformat()


def test_create_rejects_bad_input(client):
    past = client.post(
        "/api/appointments",
        json={"clientId": 1, "services": [{"serviceId": 1}], "scheduledAt": at(7, 0).isoformat()},
    )
    no_services = client.post(
        "/api/appointments",
        json={"clientId": 1, "services": [], "scheduledAt": at(15, 0).isoformat()},
    )

    assert past.status_code == 400
    assert no_services.status_code == 422


def test_mutations_mark_queries_stale(client):
    body = _create(client, at(15, 0))
    cache = dependencies.get_query_cache()
    for key in QueryKey:
        assert cache.is_stale(key)
        cache.mark_fresh(key)

    response = client.patch(f"/api/appointments/{body['id']}", json={"status": "confirmed"})
    assert response.status_code == 200
    assert response.json()["status"] == "confirmed"
    assert all(cache.is_stale(key) for key in QueryKey)

    assert client.delete(f"/api/appointments/{body['id']}").status_code == 204
    assert client.get(f"/api/appointments/{body['id']}").status_code == 404
    assert client.delete(f"/api/appointments/{body['id']}").status_code == 404
    assert [e.operation.value for e in cache.events] == ["created", "updated", "deleted"]


def test_list_views(client):
    first = _create(client, at(15, 0))
    second = _create(client, at(10, 0, day=4))
    client.patch(f"/api/appointments/{second['id']}", json={"status": "confirmed"})

    all_ids = [a["id"] for a in client.get("/api/appointments").json()]
    today_ids = [a["id"] for a in client.get("/api/appointments/today").json()]
    pending_ids = [a["id"] for a in client.get("/api/appointments/pending").json()]

    assert all_ids == [first["id"], second["id"]]
    assert today_ids == [first["id"]]
    assert pending_ids == [first["id"]]


def test_dashboard_shows_next_confirmed(client):
    pending = _create(client, at(9, 0))
    confirmed = _create(client, at(11, 0))
    client.patch(f"/api/appointments/{confirmed['id']}", json={"status": "confirmed"})

    body = client.get("/api/dashboard").json()

    assert body["currentAppointment"] is None
    assert body["nextAppointment"]["id"] == confirmed["id"]
    assert body["todayCount"] == 2
    assert body["pendingCount"] == 1
    assert pending["id"] != confirmed["id"]


def test_validate_scheduling_endpoint(client):
    existing = _create(client, at(15, 0), services=[{"serviceId": 5}], includeTravel=True, address="1 A St", travelMinutes=15)
    client.patch(f"/api/appointments/{existing['id']}", json={"status": "confirmed"})

    conflict = client.post(
        "/api/appointments/validate-scheduling",
        json={"proposedStart": at(16, 0).isoformat(), "proposedEnd": at(16, 30).isoformat()},
    ).json()
    free = client.post(
        "/api/appointments/validate-scheduling",
        json={"proposedStart": at(16, 15).isoformat(), "proposedEnd": at(16, 45).isoformat(), "clientAddress": "N/A"},
    ).json()
    backwards = client.post(
        "/api/appointments/validate-scheduling",
        json={"proposedStart": at(16, 45).isoformat(), "proposedEnd": at(16, 15).isoformat()},
    )

    assert conflict["isValid"] is False
    assert conflict["conflictMessage"]
    assert free == {"isValid": True, "conflictMessage": None}
    assert backwards.status_code == 400


def test_travel_time_endpoint_uses_mock_provider(client):
    body = client.post("/api/travel-time/calculate", json={"address": "123 Main St"}).json()

    assert body["success"] is True
    assert body["travelTimeMinutes"] == 15


def test_expire_pending_endpoint(client, clock):
    created = _create(client, at(15, 0))
    clock.now = at(8, 31)

    body = client.post("/api/appointments/expire-pending").json()

    assert [a["id"] for a in body["expired"]] == [created["id"]]
    assert body["expired"][0]["status"] == "expired"
