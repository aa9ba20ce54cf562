from functools import lru_cache
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.application.ports.appointment_store import AppointmentStorePort
from app.application.ports.conflict_check import ConflictCheckPort
from app.application.ports.service_catalog import ServiceCatalogPort
from app.application.ports.travel_time import TravelTimePort
from app.application.use_cases.appointments import AppointmentUseCase
from app.application.use_cases.expire_pending import ExpirePendingUseCase
from app.application.use_cases.schedule_validation import ResultListener, ScheduleValidationService
from app.application.use_cases.travel_time import TravelTimeUseCase
from app.application.utils.time_utils import safe_timezone
from app.infrastructure.cache.query_cache import QueryCache
from app.infrastructure.catalog.service_catalog_store import ServiceCatalogStore
from app.infrastructure.scheduling.http_conflict_checker import HttpConflictChecker
from app.infrastructure.scheduling.local_conflict_checker import LocalConflictChecker
from app.infrastructure.store.memory_appointment_store import MemoryAppointmentStore
from app.infrastructure.travel.google_maps_travel import GoogleMapsTravelTime
from app.infrastructure.travel.mock_travel import MockTravelTime


_appointment_store: MemoryAppointmentStore | None = None
_query_cache: QueryCache | None = None
_http_conflict_checker: HttpConflictChecker | None = None


def get_timezone() -> ZoneInfo:
    return safe_timezone(settings.BUSINESS_TIMEZONE)


def get_appointment_store() -> AppointmentStorePort:
    global _appointment_store
    if _appointment_store is None:
        _appointment_store = MemoryAppointmentStore()
    return _appointment_store


def get_query_cache() -> QueryCache:
    global _query_cache
    if _query_cache is None:
        _query_cache = QueryCache()
    return _query_cache


def reset_state() -> None:
    """Drop in-memory singletons (used by tests)."""
    global _appointment_store, _query_cache, _http_conflict_checker
    _appointment_store = None
    _query_cache = None
    _http_conflict_checker = None
    get_travel_provider.cache_clear()


@lru_cache
def get_service_catalog() -> ServiceCatalogPort:
    return ServiceCatalogStore()


@lru_cache
def get_travel_provider() -> TravelTimePort:
    if not settings.GOOGLE_MAPS_API_KEY or settings.ENV.lower() in {"dev", "local"}:
        return MockTravelTime()
    return GoogleMapsTravelTime()


def get_travel_use_case() -> TravelTimeUseCase:
    return TravelTimeUseCase(provider=get_travel_provider())


def get_conflict_checker() -> ConflictCheckPort:
    global _http_conflict_checker
    if settings.SCHEDULING_API_BASE_URL:
        # One checker and connection pool for every form session.
        if _http_conflict_checker is None:
            _http_conflict_checker = HttpConflictChecker()
        return _http_conflict_checker
    return LocalConflictChecker(
        store=get_appointment_store(),
        timezone=get_timezone(),
        travel=get_travel_use_case(),
    )


def get_appointment_use_case() -> AppointmentUseCase:
    return AppointmentUseCase(
        store=get_appointment_store(),
        catalog=get_service_catalog(),
        invalidator=get_query_cache(),
        timezone=get_timezone(),
        travel=get_travel_use_case(),
        grace_minutes=settings.CURRENT_GRACE_MINUTES,
    )


def get_expire_pending_use_case() -> ExpirePendingUseCase:
    return ExpirePendingUseCase(
        store=get_appointment_store(),
        invalidator=get_query_cache(),
        expiry_minutes=settings.PENDING_EXPIRY_MINUTES,
    )


def get_schedule_validation_service(on_change: ResultListener | None = None) -> ScheduleValidationService:
    """One service per booking form session; its sequence counter must not be shared."""
    return ScheduleValidationService(
        checker=get_conflict_checker(),
        catalog=get_service_catalog(),
        timeout_seconds=settings.VALIDATION_TIMEOUT_SECONDS,
        on_change=on_change,
    )


async def close_http_clients() -> None:
    global _http_conflict_checker
    if _http_conflict_checker is not None:
        await _http_conflict_checker.close()
        _http_conflict_checker = None
    if get_travel_provider.cache_info().currsize:
        provider = get_travel_provider()
        if isinstance(provider, GoogleMapsTravelTime):
            await provider.close()
        get_travel_provider.cache_clear()
