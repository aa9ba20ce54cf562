"""
Tests for the local and HTTP conflict check adapters.
"""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from app.application.exceptions import ConflictCheckError, ConflictCheckTimeout
from app.application.use_cases.travel_time import TravelTimeUseCase
from app.core.config import settings
from app.domain.entities.appointment import AppointmentStatus, ServiceSelection
from app.domain.entities.scheduling import ConflictCheckRequest
from app.infrastructure.scheduling.http_conflict_checker import HttpConflictChecker
from app.infrastructure.scheduling.local_conflict_checker import LocalConflictChecker
from app.infrastructure.travel.mock_travel import MockTravelTime
from app.wiring import dependencies
from tests.helpers import TZ, at


def _add(store, start, duration, travel=0, status=AppointmentStatus.confirmed):
    appointment = store.create(
        scheduled_at=start,
        duration_minutes=duration,
        travel_minutes=travel,
        client_id=1,
        services=(ServiceSelection(service_id=1),),
        status=status,
    )
    return appointment


def test_local_checker_respects_existing_travel(store):
    _add(store, at(15, 0), 60, travel=15)
    checker = LocalConflictChecker(store=store, timezone=TZ)

    response = asyncio.run(checker.check(ConflictCheckRequest(at(16, 0), at(16, 30))))

    assert response.is_valid is False
    assert "Thu Jul 03 03:00 PM - 04:15 PM" in response.conflict_message


def test_local_checker_allows_back_to_back(store):
    _add(store, at(15, 0), 60)
    checker = LocalConflictChecker(store=store, timezone=TZ)

    response = asyncio.run(checker.check(ConflictCheckRequest(at(16, 0), at(16, 30))))

    assert response.is_valid is True
    assert response.conflict_message is None


def test_local_checker_ignores_cancelled_and_expired(store):
    _add(store, at(15, 0), 60, status=AppointmentStatus.cancelled)
    _add(store, at(15, 30), 60, status=AppointmentStatus.expired)
    checker = LocalConflictChecker(store=store, timezone=TZ)

    response = asyncio.run(checker.check(ConflictCheckRequest(at(15, 0), at(16, 0))))

    assert response.is_valid is True


def test_local_checker_adds_proposed_travel(store):
    _add(store, at(17, 0), 30)
    travel = TravelTimeUseCase(MockTravelTime(default_minutes=20))
    checker = LocalConflictChecker(store=store, timezone=TZ, travel=travel)

    with_travel = asyncio.run(checker.check(ConflictCheckRequest(at(16, 0), at(16, 50), "5 Oak Ave")))
    without_address = asyncio.run(checker.check(ConflictCheckRequest(at(16, 0), at(16, 50))))

    assert with_travel.is_valid is False
    assert "20 mins of travel" in with_travel.conflict_message
    assert without_address.is_valid is True


def _http_checker(handler) -> HttpConflictChecker:
    client = httpx.AsyncClient(base_url="http://scheduler.test", transport=httpx.MockTransport(handler))
    return HttpConflictChecker(base_url="http://scheduler.test", client=client)


def test_http_checker_posts_camel_case_payload():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"isValid": False, "conflictMessage": "Busy"})

    response = asyncio.run(_http_checker(handler).check(ConflictCheckRequest(at(16, 0), at(16, 30), "1 Main St")))

    assert captured["path"] == "/api/appointments/validate-scheduling"
    assert captured["body"] == {
        "proposedStart": at(16, 0).isoformat(),
        "proposedEnd": at(16, 30).isoformat(),
        "clientAddress": "1 Main St",
    }
    assert response.is_valid is False
    assert response.conflict_message == "Busy"


def test_http_checker_omits_missing_address():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"isValid": True, "conflictMessage": None})

    response = asyncio.run(_http_checker(handler).check(ConflictCheckRequest(at(16, 0), at(16, 30))))

    assert "clientAddress" not in captured["body"]
    assert response.is_valid is True


@pytest.mark.parametrize(
    "handler,error",
    [
        (lambda request: httpx.Response(500, json={"message": "down"}), ConflictCheckError),
        (lambda request: httpx.Response(200, json={"unexpected": True}), ConflictCheckError),
        (lambda request: httpx.Response(200, content=b"not json"), ConflictCheckError),
    ],
)
def test_http_checker_translates_failures(handler, error):
    with pytest.raises(error):
        asyncio.run(_http_checker(handler).check(ConflictCheckRequest(at(16, 0), at(16, 30))))


def test_http_checker_timeout_and_network_errors():
    def timeout(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(ConflictCheckTimeout):
        asyncio.run(_http_checker(timeout).check(ConflictCheckRequest(at(16, 0), at(16, 30))))
    with pytest.raises(ConflictCheckError):
        asyncio.run(_http_checker(unreachable).check(ConflictCheckRequest(at(16, 0), at(16, 30))))


def test_http_checker_requires_base_url(monkeypatch):
    monkeypatch.setattr(settings, "SCHEDULING_API_BASE_URL", None)
    with pytest.raises(ValueError):
        HttpConflictChecker()


def test_local_checker_message_names_the_conflicting_day(store):
    _add(store, at(9, 0, day=4), 30)
    checker = LocalConflictChecker(store=store, timezone=TZ)

    response = asyncio.run(checker.check(ConflictCheckRequest(at(9, 15, day=4), at(9, 45, day=4))))

    assert "Fri Jul 04 09:00 AM - 09:30 AM" in response.conflict_message


def test_http_checker_keeps_explicit_zero_timeout():
    checker = HttpConflictChecker(base_url="http://scheduler.test", timeout=0)

    client = checker._ensure_client()

    assert client.timeout == httpx.Timeout(0)
    asyncio.run(checker.close())


def test_remote_checker_is_shared_and_closed(monkeypatch):
    monkeypatch.setattr(settings, "SCHEDULING_API_BASE_URL", "http://scheduler.test")
    dependencies.reset_state()

    first = dependencies.get_conflict_checker()
    second = dependencies.get_schedule_validation_service()._checker

    assert isinstance(first, HttpConflictChecker)
    assert second is first

    asyncio.run(dependencies.close_http_clients())

    assert dependencies.get_conflict_checker() is not first
    dependencies.reset_state()
