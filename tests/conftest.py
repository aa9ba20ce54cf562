from __future__ import annotations

import pytest

from app.infrastructure.cache.query_cache import QueryCache
from app.infrastructure.catalog.service_catalog_store import ServiceCatalogStore
from app.infrastructure.store.memory_appointment_store import MemoryAppointmentStore


@pytest.fixture
def catalog() -> ServiceCatalogStore:
    return ServiceCatalogStore()


@pytest.fixture
def store() -> MemoryAppointmentStore:
    return MemoryAppointmentStore()


@pytest.fixture
def cache() -> QueryCache:
    return QueryCache()
