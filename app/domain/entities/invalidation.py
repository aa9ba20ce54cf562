from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MutationType(str, Enum):
    created = "created"
    updated = "updated"
    deleted = "deleted"


class QueryKey(str, Enum):
    appointments = "/api/appointments"
    today = "/api/appointments/today"
    pending = "/api/appointments/pending"
    dashboard = "/api/dashboard"


# Every query that lists appointments or derives current/next from them.
APPOINTMENT_QUERY_KEYS: tuple[QueryKey, ...] = (
    QueryKey.appointments,
    QueryKey.today,
    QueryKey.pending,
    QueryKey.dashboard,
)


@dataclass(frozen=True)
class InvalidationEvent:
    appointment_id: int
    operation: MutationType
    query_keys: tuple[QueryKey, ...] = APPOINTMENT_QUERY_KEYS
