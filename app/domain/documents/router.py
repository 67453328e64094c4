"""Appointment document router - FastAPI endpoints for document metadata"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import require_permission
from ...database import get_db
from ...models import User
from .schemas import (
    AppointmentDocumentCreate,
    AppointmentDocumentResponse,
    AppointmentDocumentStats,
    AppointmentDocumentUpdate,
)
from .service import AppointmentDocumentService

router = APIRouter(prefix="/api/v1/appointment-documents", tags=["Appointment Documents"])

can_read = require_permission("appointments.read")
can_update = require_permission("appointments.update")
can_delete = require_permission("appointments.delete")


def get_document_service(db: Session = Depends(get_db)) -> AppointmentDocumentService:
    return AppointmentDocumentService(db)


@router.get("/appointment/{appointment_id}", response_model=list[AppointmentDocumentResponse], dependencies=[Depends(can_read)])
async def get_documents_by_appointment(
    appointment_id: int, service: AppointmentDocumentService = Depends(get_document_service)
):
    return service.get_by_appointment(appointment_id)


@router.get("/appointment/{appointment_id}/stats", response_model=AppointmentDocumentStats, dependencies=[Depends(can_read)])
async def get_document_stats(appointment_id: int, service: AppointmentDocumentService = Depends(get_document_service)):
    return service.get_stats(appointment_id)


@router.get("/{document_id}", response_model=AppointmentDocumentResponse, dependencies=[Depends(can_read)])
async def get_document(document_id: int, service: AppointmentDocumentService = Depends(get_document_service)):
    return service.get_document(document_id)


@router.post("", response_model=AppointmentDocumentResponse, status_code=201)
async def create_document(
    data: AppointmentDocumentCreate,
    user: User = Depends(can_update),
    service: AppointmentDocumentService = Depends(get_document_service),
):
    return service.create_document(data, user)


@router.patch("/{document_id}", response_model=AppointmentDocumentResponse, dependencies=[Depends(can_update)])
async def update_document(
    document_id: int,
    data: AppointmentDocumentUpdate,
    service: AppointmentDocumentService = Depends(get_document_service),
):
    return service.update_document(document_id, data)


@router.delete("/{document_id}", dependencies=[Depends(can_delete)])
async def delete_document(document_id: int, service: AppointmentDocumentService = Depends(get_document_service)):
    return service.delete_document(document_id)
