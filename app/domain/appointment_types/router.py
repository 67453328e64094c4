"""Appointment type router - FastAPI endpoints for appointment types"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import require_permission
from ...database import get_db
from .schemas import AppointmentTypeCreate, AppointmentTypeResponse, AppointmentTypeUpdate
from .service import AppointmentTypeService

router = APIRouter(prefix="/api/v1/appointment-types", tags=["Appointment Types"])


def get_appointment_type_service(db: Session = Depends(get_db)) -> AppointmentTypeService:
    """Dependency injection for AppointmentTypeService"""
    return AppointmentTypeService(db)


@router.get("", response_model=list[AppointmentTypeResponse], dependencies=[Depends(require_permission("appointment_types.read"))])
async def get_types(service: AppointmentTypeService = Depends(get_appointment_type_service)):
    return service.get_types(include_inactive=True)


@router.get("/active", response_model=list[AppointmentTypeResponse], dependencies=[Depends(require_permission("appointment_types.read"))])
async def get_active_types(service: AppointmentTypeService = Depends(get_appointment_type_service)):
    return service.get_types()


@router.get("/name/{name}", response_model=AppointmentTypeResponse, dependencies=[Depends(require_permission("appointment_types.read"))])
async def get_type_by_name(name: str, service: AppointmentTypeService = Depends(get_appointment_type_service)):
    return service.get_type_by_name(name)


@router.get("/{type_id}", response_model=AppointmentTypeResponse, dependencies=[Depends(require_permission("appointment_types.read"))])
async def get_type(type_id: int, service: AppointmentTypeService = Depends(get_appointment_type_service)):
    return service.get_type(type_id)


@router.post("", response_model=AppointmentTypeResponse, status_code=201, dependencies=[Depends(require_permission("appointment_types.create"))])
async def create_type(
    data: AppointmentTypeCreate,
    service: AppointmentTypeService = Depends(get_appointment_type_service),
):
    return service.create_type(data)


@router.put("/{type_id}", response_model=AppointmentTypeResponse, dependencies=[Depends(require_permission("appointment_types.update"))])
async def update_type(
    type_id: int,
    data: AppointmentTypeUpdate,
    service: AppointmentTypeService = Depends(get_appointment_type_service),
):
    return service.update_type(type_id, data)


@router.patch("/{type_id}/activate", response_model=AppointmentTypeResponse, dependencies=[Depends(require_permission("appointment_types.update"))])
async def activate_type(type_id: int, service: AppointmentTypeService = Depends(get_appointment_type_service)):
    return service.set_active(type_id, True)


@router.patch("/{type_id}/deactivate", response_model=AppointmentTypeResponse, dependencies=[Depends(require_permission("appointment_types.update"))])
async def deactivate_type(type_id: int, service: AppointmentTypeService = Depends(get_appointment_type_service)):
    return service.set_active(type_id, False)


@router.delete("/{type_id}", dependencies=[Depends(require_permission("appointment_types.delete"))])
async def delete_type(type_id: int, service: AppointmentTypeService = Depends(get_appointment_type_service)):
    return service.delete_type(type_id)
