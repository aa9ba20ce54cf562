from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.service_catalog import ServiceCatalogEntry


class ServiceCatalogPort(ABC):
    @abstractmethod
    def get_service(self, service_id: int) -> ServiceCatalogEntry | None:
        """Get service catalog entry by id."""
        raise NotImplementedError

    @abstractmethod
    def get_duration_minutes(self, service_id: int) -> int:
        """Get service duration in minutes. Raises InvalidAppointmentError for unknown services."""
        raise NotImplementedError

    @abstractmethod
    def list_services(self) -> list[ServiceCatalogEntry]:
        raise NotImplementedError
