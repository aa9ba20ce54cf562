from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.appointment import Appointment


@dataclass(frozen=True)
class DashboardSummary:
    current: Appointment | None
    next: Appointment | None
    today_count: int
    confirmed_today_count: int
    pending_count: int
