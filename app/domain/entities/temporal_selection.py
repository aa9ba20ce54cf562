from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.appointment import Appointment


@dataclass(frozen=True)
class TemporalSelection:
    current: Appointment | None = None
    next: Appointment | None = None
