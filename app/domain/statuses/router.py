"""Appointment status router - Public catalogue with an admin-only design update"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import require_role
from ...database import get_db
from .schemas import AppointmentStatusDesignUpdate, AppointmentStatusResponse
from .service import AppointmentStatusService

router = APIRouter(prefix="/api/v1/appointment-statuses", tags=["Appointment Statuses"])


def get_status_service(db: Session = Depends(get_db)) -> AppointmentStatusService:
    return AppointmentStatusService(db)


@router.get("", response_model=list[AppointmentStatusResponse])
async def get_statuses(service: AppointmentStatusService = Depends(get_status_service)):
    """Active statuses in display order"""
    return service.get_statuses()


@router.get("/{status_id}", response_model=AppointmentStatusResponse)
async def get_status(status_id: int, service: AppointmentStatusService = Depends(get_status_service)):
    return service.get_status(status_id)


@router.patch(
    "/{status_id}/design",
    response_model=AppointmentStatusResponse,
    dependencies=[Depends(require_role("ADMIN", "SUPERADMIN"))],
)
async def update_status_design(
    status_id: int,
    data: AppointmentStatusDesignUpdate,
    service: AppointmentStatusService = Depends(get_status_service),
):
    return service.update_design(status_id, data)
