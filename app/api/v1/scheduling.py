from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.api.v1.schemas import (
    TravelTimeRequestSchema,
    TravelTimeResponseSchema,
    ValidateSchedulingResponseSchema,
    ValidateSchedulingSchema,
)
from app.application.ports.conflict_check import ConflictCheckPort
from app.application.use_cases.appointments import AppointmentUseCase
from app.application.use_cases.travel_time import TravelTimeUseCase
from app.domain.entities.scheduling import ConflictCheckRequest
from app.infrastructure.scheduling.local_conflict_checker import LocalConflictChecker
from app.wiring.dependencies import (
    get_appointment_store,
    get_appointment_use_case,
    get_timezone,
    get_travel_use_case,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def get_server_conflict_checker() -> ConflictCheckPort:
    # This endpoint is the authority, so it always checks the local store.
    return LocalConflictChecker(
        store=get_appointment_store(),
        timezone=get_timezone(),
        travel=get_travel_use_case(),
    )


@router.post("/appointments/validate-scheduling", response_model=ValidateSchedulingResponseSchema)
async def validate_scheduling(
    req: ValidateSchedulingSchema,
    checker: ConflictCheckPort = Depends(get_server_conflict_checker),
):
    if req.proposed_end < req.proposed_start:
        raise HTTPException(status_code=400, detail="Proposed end must not be before proposed start")

    address = (req.client_address or "").strip()
    response = await checker.check(
        ConflictCheckRequest(
            proposed_start=req.proposed_start,
            proposed_end=req.proposed_end,
            client_address=address if address and address != "N/A" else None,
        )
    )
    return ValidateSchedulingResponseSchema(is_valid=response.is_valid, conflict_message=response.conflict_message)


@router.post("/travel-time/calculate", response_model=TravelTimeResponseSchema)
async def calculate_travel_time(
    req: TravelTimeRequestSchema,
    travel: TravelTimeUseCase = Depends(get_travel_use_case),
    uc: AppointmentUseCase = Depends(get_appointment_use_case),
):
    result = await travel.calculate(req.address, req.at_time or uc.now())
    return TravelTimeResponseSchema(
        success=result.success,
        travel_time_minutes=result.travel_time_minutes if result.success else 0,
        error_message=result.error_message,
    )
