"""Appointment router - FastAPI endpoints for appointment operations"""

import logging
from datetime import date

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request
from sqlalchemy.orm import Session

from ...auth import require_permission
from ...database import get_db
from ...models import User
from ...shared.validators import validate_time_slot
from .schemas import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentSchedule,
    AppointmentUpdate,
    AvailabilityResponse,
    CancelRequest,
    CompleteRequest,
)
from .service import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/appointments", tags=["Appointments"])

can_read = require_permission("appointments.read")
can_create = require_permission("appointments.create")
can_update = require_permission("appointments.update")
can_delete = require_permission("appointments.delete")


def get_appointment_service(request: Request, db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db, provider=getattr(request.state, "database_provider", None))


# ============================================================================
# QUERIES
# ============================================================================


@router.get("", response_model=list[AppointmentResponse], dependencies=[Depends(can_read)])
async def get_appointments(service: AppointmentService = Depends(get_appointment_service)):
    return service.get_appointments()


@router.get("/all-including-inactive", response_model=list[AppointmentResponse], dependencies=[Depends(can_read)])
async def get_all_appointments(service: AppointmentService = Depends(get_appointment_service)):
    return service.get_appointments(include_inactive=True)


@router.get("/pending", response_model=list[AppointmentResponse], dependencies=[Depends(can_read)])
async def get_pending_appointments(service: AppointmentService = Depends(get_appointment_service)):
    return service.get_pending()


@router.get("/completed", response_model=list[AppointmentResponse], dependencies=[Depends(can_read)])
async def get_completed_appointments(service: AppointmentService = Depends(get_appointment_service)):
    return service.get_completed()


@router.get("/my-assigned", response_model=list[AppointmentResponse])
async def get_my_assigned_appointments(
    current_user: User = Depends(can_read),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Appointments of the types assigned to the current user"""
    return service.get_my_assigned(current_user)


@router.get("/availability", response_model=AvailabilityResponse, dependencies=[Depends(can_read)])
async def check_availability(
    branch_id: int = Query(..., alias="branchId"),
    day: date = Query(..., alias="date"),
    time: str = Query(...),
    service: AppointmentService = Depends(get_appointment_service),
):
    return AvailabilityResponse(is_available=service.is_time_available(branch_id, day, validate_time_slot(time)))


@router.get("/available-times", response_model=list[str], dependencies=[Depends(can_read)])
async def get_available_times(
    branch_id: int = Query(..., alias="branchId"),
    day: date = Query(..., alias="date"),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Half-hour slots from 08:00 to 17:30 not held by an active appointment"""
    return service.get_available_times(branch_id, day)


@router.get("/number/{appointment_number}", response_model=AppointmentResponse, dependencies=[Depends(can_read)])
async def get_appointment_by_number(
    appointment_number: str, service: AppointmentService = Depends(get_appointment_service)
):
    return service.get_appointment_by_number(appointment_number)


@router.get("/client/{client_number}", response_model=list[AppointmentResponse], dependencies=[Depends(can_read)])
async def get_client_appointments(client_number: str, service: AppointmentService = Depends(get_appointment_service)):
    return service.get_by_client_number(client_number)


@router.get("/date/{day}", response_model=list[AppointmentResponse], dependencies=[Depends(can_read)])
async def get_appointments_by_date(day: date, service: AppointmentService = Depends(get_appointment_service)):
    return service.get_by_date(day)


@router.get("/branch/{branch_id}", response_model=list[AppointmentResponse], dependencies=[Depends(can_read)])
async def get_appointments_by_branch(branch_id: int, service: AppointmentService = Depends(get_appointment_service)):
    return service.get_by_branch(branch_id)


@router.get("/status/{status_id}", response_model=list[AppointmentResponse], dependencies=[Depends(can_read)])
async def get_appointments_by_status(status_id: int, service: AppointmentService = Depends(get_appointment_service)):
    return service.get_by_status(status_id)


@router.get("/{appointment_id}", response_model=AppointmentResponse, dependencies=[Depends(can_read)])
async def get_appointment(appointment_id: int, service: AppointmentService = Depends(get_appointment_service)):
    return service.get_appointment(appointment_id)


# ============================================================================
# COMMANDS
# ============================================================================


@router.post("", response_model=AppointmentResponse, status_code=201, dependencies=[Depends(can_create)])
async def create_appointment(
    data: AppointmentCreate,
    background_tasks: BackgroundTasks,
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.create_appointment(data, background_tasks)


@router.post("/schedule", response_model=AppointmentResponse, status_code=201, dependencies=[Depends(can_create)])
async def schedule_appointment(
    data: AppointmentSchedule,
    background_tasks: BackgroundTasks,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book a confirmed appointment, enforcing daily capacity and slot conflicts"""
    return service.schedule_appointment(data, background_tasks)


@router.patch("/cancel/{appointment_id}", response_model=AppointmentResponse, dependencies=[Depends(can_update)])
async def cancel_appointment(
    appointment_id: int,
    data: CancelRequest,
    background_tasks: BackgroundTasks,
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.cancel_appointment(appointment_id, data.reason, background_tasks)


@router.patch("/complete/{appointment_id}", response_model=AppointmentResponse, dependencies=[Depends(can_update)])
async def complete_appointment(
    appointment_id: int,
    data: CompleteRequest,
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.complete_appointment(appointment_id, data.notes)


@router.patch("/delete-logical/{appointment_id}", dependencies=[Depends(can_delete)])
async def delete_appointment_logical(
    appointment_id: int, service: AppointmentService = Depends(get_appointment_service)
):
    return service.delete_logical(appointment_id)


@router.patch("/{appointment_id}", response_model=AppointmentResponse, dependencies=[Depends(can_update)])
async def update_appointment(
    appointment_id: int,
    data: AppointmentUpdate,
    background_tasks: BackgroundTasks,
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.update_appointment(appointment_id, data, background_tasks)
