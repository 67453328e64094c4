"""Public router - Self-service booking endpoints (no authentication)"""

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request
from sqlalchemy.orm import Session

from ...database import get_db
from ..appointment_types.schemas import AppointmentTypeResponse
from ..appointments.schemas import AppointmentResponse
from ..branches.schemas import BranchResponse
from .schemas import (
    PublicAppointmentSchedule,
    PublicCancelRequest,
    PublicClientResponse,
    SimpleAppointmentResponse,
    SimpleAppointmentSchedule,
)
from .service import PublicService

router = APIRouter(prefix="/api/v1/public", tags=["Public"])


def get_public_service(request: Request, db: Session = Depends(get_db)) -> PublicService:
    """Dependency injection for PublicService"""
    return PublicService(db, provider=getattr(request.state, "database_provider", None))


@router.get("/branches", response_model=list[BranchResponse])
async def get_branches(service: PublicService = Depends(get_public_service)):
    return service.get_branches()


@router.get("/appointment-types", response_model=list[AppointmentTypeResponse])
async def get_appointment_types(service: PublicService = Depends(get_public_service)):
    return service.get_appointment_types()


@router.get("/client/validate/{client_number}", response_model=PublicClientResponse)
async def validate_client(client_number: str, service: PublicService = Depends(get_public_service)):
    """Basic public data for a client number"""
    return service.get_client(client_number)


@router.get("/available-times", response_model=list[str])
async def get_available_times(
    day: date = Query(..., alias="date"),
    branch_id: Optional[int] = Query(None, alias="branchId"),
    service: PublicService = Depends(get_public_service),
):
    """
    Free times for a branch and date.

    Closed dates answer 400 with a coded detail such as
    `SUNDAY_NOT_AVAILABLE|Los domingos no se atienden citas`.
    """
    return service.get_available_times(branch_id, day)


@router.post("/schedule-appointment", response_model=AppointmentResponse, status_code=201)
async def schedule_appointment(
    data: PublicAppointmentSchedule,
    background_tasks: BackgroundTasks,
    service: PublicService = Depends(get_public_service),
):
    return service.schedule_appointment(data, background_tasks)


@router.post("/schedule-simple-appointment", response_model=SimpleAppointmentResponse)
async def schedule_simple_appointment(
    data: SimpleAppointmentSchedule,
    background_tasks: BackgroundTasks,
    service: PublicService = Depends(get_public_service),
):
    return service.schedule_simple_appointment(data, background_tasks)


@router.get("/appointment/{appointment_number}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_number: str,
    client_number: Optional[str] = Query(None, alias="clientNumber"),
    service: PublicService = Depends(get_public_service),
):
    return service.get_appointment(appointment_number, client_number)


@router.get("/client/{client_number}/appointments", response_model=list[AppointmentResponse])
async def get_client_appointments(client_number: str, service: PublicService = Depends(get_public_service)):
    return service.get_client_appointments(client_number)


@router.patch("/client/{client_number}/appointment/{appointment_id}/cancel")
async def cancel_appointment(
    client_number: str,
    appointment_id: int,
    data: PublicCancelRequest,
    background_tasks: BackgroundTasks,
    service: PublicService = Depends(get_public_service),
):
    return service.cancel_appointment(client_number, appointment_id, data.reason, background_tasks)


@router.get("/verify-appointment")
async def verify_appointment(
    number: Optional[str] = Query(None),
    client_number: Optional[str] = Query(None, alias="clientNumber"),
    service: PublicService = Depends(get_public_service),
):
    return service.verify_appointment(number, client_number)


@router.get("/health")
async def health():
    return {"status": "Healthy", "timestamp": datetime.utcnow().isoformat(), "version": "1.0.0"}
