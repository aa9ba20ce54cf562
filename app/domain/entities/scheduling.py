from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ConflictCheckRequest:
    proposed_start: datetime
    proposed_end: datetime
    client_address: str | None = None


@dataclass(frozen=True)
class ConflictCheckResponse:
    is_valid: bool
    conflict_message: str | None = None


@dataclass(frozen=True)
class TravelTimeResult:
    success: bool
    travel_time_minutes: int | None = None
    distance_meters: int | None = None
    error_message: str | None = None

    @property
    def minutes_or_zero(self) -> int:
        if not self.success or not self.travel_time_minutes:
            return 0
        return self.travel_time_minutes
