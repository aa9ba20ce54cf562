from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ServiceCatalogEntry:
    service_id: int
    display_name: str
    duration_minutes: int
    price: str | None = None
    notes: str | None = None
