from __future__ import annotations

from app.application.exceptions import InvalidAppointmentError
from app.application.ports.service_catalog import ServiceCatalogPort
from app.domain.entities.service_catalog import ServiceCatalogEntry

DEFAULT_SERVICES: dict[int, ServiceCatalogEntry] = {
    1: ServiceCatalogEntry(service_id=1, display_name="Haircut", duration_minutes=30, price="35.00"),
    2: ServiceCatalogEntry(service_id=2, display_name="Beard Trim", duration_minutes=15, price="15.00"),
    3: ServiceCatalogEntry(service_id=3, display_name="Buzz Cut", duration_minutes=20, price="25.00"),
    4: ServiceCatalogEntry(service_id=4, display_name="Line Up", duration_minutes=10, price="10.00"),
    5: ServiceCatalogEntry(service_id=5, display_name="Full Service", duration_minutes=60, price="60.00"),
}


class ServiceCatalogStore(ServiceCatalogPort):
    def __init__(self, catalog: dict[int, ServiceCatalogEntry] | None = None) -> None:
        self._catalog = catalog if catalog is not None else DEFAULT_SERVICES

    def get_service(self, service_id: int) -> ServiceCatalogEntry | None:
        return self._catalog.get(service_id)

    def get_duration_minutes(self, service_id: int) -> int:
        entry = self.get_service(service_id)
        if not entry:
            raise InvalidAppointmentError(f"Service {service_id} not found")
        return entry.duration_minutes

    def list_services(self) -> list[ServiceCatalogEntry]:
        return sorted(self._catalog.values(), key=lambda e: e.service_id)
