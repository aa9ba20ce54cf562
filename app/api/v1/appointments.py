from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from app.api.v1.schemas import (
    AppointmentSchema,
    CreateAppointmentSchema,
    DashboardSchema,
    ExpirePendingResponseSchema,
    UpdateAppointmentSchema,
    to_selections,
)
from app.application.exceptions import AppointmentNotFoundError, InvalidAppointmentError
from app.application.use_cases.appointments import AppointmentUseCase
from app.application.use_cases.expire_pending import ExpirePendingUseCase
from app.application.utils.duration import occupied_end
from app.domain.entities.appointment import Appointment
from app.domain.entities.commands import CreateAppointmentCommand
from app.wiring.dependencies import get_appointment_use_case, get_expire_pending_use_case

router = APIRouter()
logger = logging.getLogger(__name__)


def _schema(appointment: Appointment | None) -> AppointmentSchema | None:
    if appointment is None:
        return None
    return AppointmentSchema.from_entity(appointment, occupied_end(appointment))


@router.get("/appointments", response_model=list[AppointmentSchema])
def list_appointments(
    start: datetime | None = Query(None, alias="startDate"),
    end: datetime | None = Query(None, alias="endDate"),
    uc: AppointmentUseCase = Depends(get_appointment_use_case),
):
    return [_schema(a) for a in uc.list_appointments(start, end)]


@router.get("/appointments/today", response_model=list[AppointmentSchema])
def list_today(uc: AppointmentUseCase = Depends(get_appointment_use_case)):
    return [_schema(a) for a in uc.list_today()]


@router.get("/appointments/pending", response_model=list[AppointmentSchema])
def list_pending(uc: AppointmentUseCase = Depends(get_appointment_use_case)):
    return [_schema(a) for a in uc.list_pending()]


@router.get("/dashboard", response_model=DashboardSchema)
def dashboard(uc: AppointmentUseCase = Depends(get_appointment_use_case)):
    summary = uc.dashboard_summary()
    return DashboardSchema(
        current_appointment=_schema(summary.current),
        next_appointment=_schema(summary.next),
        today_count=summary.today_count,
        confirmed_today_count=summary.confirmed_today_count,
        pending_count=summary.pending_count,
    )


@router.post("/appointments", response_model=AppointmentSchema, status_code=201)
async def create_appointment(
    req: CreateAppointmentSchema,
    uc: AppointmentUseCase = Depends(get_appointment_use_case),
):
    command = CreateAppointmentCommand(
        client_id=req.client_id,
        services=to_selections(req.services),
        scheduled_at=req.scheduled_at,
        include_travel=req.include_travel,
        address=req.address,
        travel_minutes=req.travel_minutes,
    )
    try:
        appointment = await uc.create(command)
    except InvalidAppointmentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _schema(appointment)


@router.get("/appointments/{appointment_id}", response_model=AppointmentSchema)
def get_appointment(appointment_id: int, uc: AppointmentUseCase = Depends(get_appointment_use_case)):
    try:
        return _schema(uc.get(appointment_id))
    except AppointmentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/appointments/{appointment_id}", response_model=AppointmentSchema)
def update_appointment(
    appointment_id: int,
    req: UpdateAppointmentSchema,
    uc: AppointmentUseCase = Depends(get_appointment_use_case),
):
    try:
        return _schema(uc.update_status(appointment_id, req.status))
    except AppointmentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/appointments/{appointment_id}", status_code=204)
def delete_appointment(appointment_id: int, uc: AppointmentUseCase = Depends(get_appointment_use_case)):
    try:
        uc.delete(appointment_id)
    except AppointmentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)


@router.post("/appointments/expire-pending", response_model=ExpirePendingResponseSchema)
def expire_pending(
    uc: AppointmentUseCase = Depends(get_appointment_use_case),
    expire_uc: ExpirePendingUseCase = Depends(get_expire_pending_use_case),
):
    expired = expire_uc.execute(uc.now())
    return ExpirePendingResponseSchema(expired=[_schema(a) for a in expired])
