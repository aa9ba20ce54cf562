from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.entities.appointment import Appointment, AppointmentStatus, ServiceSelection


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ServiceSelectionSchema(CamelModel):
    service_id: int
    quantity: int = Field(default=1, ge=1)


class CreateAppointmentSchema(CamelModel):
    client_id: int
    services: list[ServiceSelectionSchema] = Field(min_length=1)
    scheduled_at: datetime
    include_travel: bool = False
    address: str | None = None
    travel_minutes: int | None = Field(default=None, ge=0)


class UpdateAppointmentSchema(CamelModel):
    status: AppointmentStatus


class AppointmentSchema(CamelModel):
    id: int
    scheduled_at: datetime
    occupied_end: datetime
    duration_minutes: int
    travel_minutes: int
    status: AppointmentStatus
    client_id: int | None = None
    service_id: int | None = None
    address: str | None = None
    services: list[ServiceSelectionSchema] = Field(default_factory=list)
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, appointment: Appointment, occupied_end: datetime) -> "AppointmentSchema":
        return cls(
            id=appointment.id,
            scheduled_at=appointment.scheduled_at,
            occupied_end=occupied_end,
            duration_minutes=appointment.duration_minutes,
            travel_minutes=appointment.travel_minutes,
            status=appointment.status,
            client_id=appointment.client_id,
            service_id=appointment.service_id,
            address=appointment.address,
            services=[ServiceSelectionSchema(service_id=s.service_id, quantity=s.quantity) for s in appointment.services],
            created_at=appointment.created_at,
        )


class DashboardSchema(CamelModel):
    current_appointment: AppointmentSchema | None = None
    next_appointment: AppointmentSchema | None = None
    today_count: int
    confirmed_today_count: int
    pending_count: int


class ValidateSchedulingSchema(CamelModel):
    proposed_start: datetime
    proposed_end: datetime
    client_address: str | None = None


class ValidateSchedulingResponseSchema(CamelModel):
    is_valid: bool
    conflict_message: str | None = None


class TravelTimeRequestSchema(CamelModel):
    address: str = Field(min_length=1)
    at_time: datetime | None = None


class TravelTimeResponseSchema(CamelModel):
    success: bool
    travel_time_minutes: int | None = None
    error_message: str | None = None


class ExpirePendingResponseSchema(CamelModel):
    expired: list[AppointmentSchema]


def to_selections(items: list[ServiceSelectionSchema]) -> tuple[ServiceSelection, ...]:
    return tuple(ServiceSelection(service_id=i.service_id, quantity=i.quantity) for i in items)
