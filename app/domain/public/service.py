"""
Public booking service

Self-service scheduling for clients: no authentication, Spanish messages,
same date rules as the admin flow.
"""

import logging
from datetime import date
from typing import Optional

from fastapi import BackgroundTasks, HTTPException
from sqlalchemy.orm import Session

from ...models import Appointment, AppointmentStatus, AppointmentType, Branch, Client
from ...shared.numbers import generate_client_number
from ..appointment_types.repository import AppointmentTypeRepository
from ..appointments.repository import AppointmentRepository
from ..appointments.schemas import AppointmentCreate
from ..appointments.service import (
    HOLIDAY,
    PAST_DATE,
    SUNDAY,
    AppointmentService,
    ensure_bookable_date,
    find_date_restriction,
)
from ..available_times.repository import AvailableTimeRepository
from ..branches.repository import BranchRepository
from ..clients.repository import ClientRepository
from .schemas import PublicAppointmentSchedule, SimpleAppointmentSchedule

logger = logging.getLogger(__name__)

CLIENT_NOT_FOUND = "Cliente no encontrado"
APPOINTMENT_NOT_FOUND = "Cita no encontrada"

STATUS_DESCRIPTIONS = {
    AppointmentStatus.PENDING: "Cita programada, pendiente de asistir",
    AppointmentStatus.COMPLETED: "Cita completada exitosamente",
    AppointmentStatus.CANCELLED: "Cita cancelada",
}


def restriction_message(reason: str, holiday_name: Optional[str]) -> str:
    """Coded message for the public calendar: CODE|human readable text"""
    if reason == SUNDAY:
        return "SUNDAY_NOT_AVAILABLE|Los domingos no se atienden citas"
    if reason == HOLIDAY:
        return f"HOLIDAY_NOT_AVAILABLE|No se puede agendar porque es {holiday_name}"
    return "PAST_DATE_NOT_AVAILABLE|No se pueden agendar citas en fechas pasadas"


class PublicService:
    def __init__(self, db: Session, provider=None):
        self.db = db
        self.provider = provider
        self.appointments = AppointmentService(db, provider=provider)

    # ==========================================
    # Catalogue
    # ==========================================

    def get_branches(self) -> list[Branch]:
        return BranchRepository.get_branches(self.db)

    def get_appointment_types(self) -> list[AppointmentType]:
        return AppointmentTypeRepository.get_types(self.db)

    def get_client(self, client_number: str) -> Client:
        if not client_number or not client_number.strip():
            raise HTTPException(status_code=400, detail="El número de cliente es requerido")
        client = ClientRepository.get_client_by_number(self.db, client_number)
        if not client or not client.is_active:
            raise HTTPException(status_code=404, detail=CLIENT_NOT_FOUND)
        return client

    def get_available_times(self, branch_id: Optional[int], day: date) -> list[str]:
        """Configured active times for the branch minus the occupied ones"""
        if not branch_id or branch_id <= 0:
            raise HTTPException(status_code=400, detail="ID de sede requerido")

        restriction = find_date_restriction(self.db, day, branch_id)
        if restriction:
            raise HTTPException(status_code=400, detail=restriction_message(*restriction))

        configured = AvailableTimeRepository.get_times_by_branch(self.db, branch_id)
        if not configured:
            return []

        occupied = set(AppointmentRepository.get_occupied_times(self.db, branch_id, day))
        return sorted({slot.time for slot in configured if slot.time not in occupied})

    # ==========================================
    # Booking
    # ==========================================

    def schedule_appointment(
        self, data: PublicAppointmentSchedule, background_tasks: Optional[BackgroundTasks] = None
    ) -> Appointment:
        client = ClientRepository.get_client_by_number(self.db, data.client_number)
        if not client:
            raise HTTPException(status_code=400, detail=CLIENT_NOT_FOUND)

        return self.appointments.create_appointment(
            AppointmentCreate(
                client_id=client.id,
                branch_id=data.branch_id,
                appointment_type_id=data.appointment_type_id,
                appointment_date=data.appointment_date,
                appointment_time=data.appointment_time,
                notes=data.observations,
            ),
            background_tasks,
        )

    def schedule_simple_appointment(
        self, data: SimpleAppointmentSchedule, background_tasks: Optional[BackgroundTasks] = None
    ) -> dict:
        """Find or register the client by document number, then book"""
        branch = BranchRepository.get_active_branch(self.db, data.branch_id)
        if not branch:
            raise HTTPException(status_code=400, detail="La sucursal especificada no existe o no está activa")

        appointment_type = AppointmentTypeRepository.get_type_by_id(self.db, data.appointment_type_id)
        if not appointment_type or not appointment_type.is_active:
            raise HTTPException(status_code=400, detail="El tipo de cita especificado no existe o no está activo")

        # Reject the date before registering anybody
        ensure_bookable_date(self.db, data.appointment_date, data.branch_id)

        client = ClientRepository.get_client_by_document(self.db, data.document_number)
        is_new_client = client is None
        if is_new_client:
            client = ClientRepository.create_client(
                self.db,
                client_number=generate_client_number(),
                document_type=data.document_type,
                document_number=data.document_number,
                full_name=data.full_name,
                phone=data.phone,
                mobile=data.mobile,
                email=data.email,
                address=data.address,
            )
            logger.info(f"👤 Client {client.client_number} registered from public booking")

        appointment = self.appointments.create_appointment(
            AppointmentCreate(
                client_id=client.id,
                branch_id=data.branch_id,
                appointment_type_id=data.appointment_type_id,
                appointment_date=data.appointment_date,
                appointment_time=data.appointment_time,
                notes=data.observations,
            ),
            background_tasks,
        )

        return {
            "client_number": client.client_number,
            "appointment_number": appointment.appointment_number,
            "message": (
                "Cliente creado y cita agendada exitosamente" if is_new_client else "Cita agendada exitosamente"
            ),
            "appointment_date": appointment.appointment_date,
            "appointment_time": appointment.appointment_time or "",
            "branch_name": branch.name,
        }

    # ==========================================
    # Lookups and cancellation
    # ==========================================

    def get_appointment(self, appointment_number: str, client_number: Optional[str]) -> Appointment:
        if not client_number or not client_number.strip():
            raise HTTPException(status_code=400, detail="Número de cliente requerido para consultar la cita")

        appointment = AppointmentRepository.get_appointment_by_number(self.db, appointment_number)
        if not appointment or appointment.client_number != client_number.strip():
            raise HTTPException(status_code=404, detail=APPOINTMENT_NOT_FOUND)
        return appointment

    def get_client_appointments(self, client_number: str) -> list[Appointment]:
        client = self.get_client(client_number)
        return AppointmentRepository.get_by_client_id(self.db, client.id)

    def cancel_appointment(
        self,
        client_number: str,
        appointment_id: int,
        reason: Optional[str],
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> dict:
        if not client_number or not client_number.strip():
            raise HTTPException(status_code=400, detail="El número de cliente es requerido")
        if not reason or not reason.strip():
            raise HTTPException(status_code=400, detail="El motivo de cancelación es requerido")

        client = ClientRepository.get_client_by_number(self.db, client_number)
        if not client:
            raise HTTPException(status_code=400, detail=CLIENT_NOT_FOUND)

        appointment = AppointmentRepository.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise HTTPException(status_code=400, detail=APPOINTMENT_NOT_FOUND)
        if appointment.client_id != client.id:
            logger.warning(f"⚠️ Client {client.client_number} tried to cancel appointment {appointment_id}")
            raise HTTPException(status_code=400, detail="La cita no pertenece a este cliente")

        self.appointments.cancel_appointment(appointment_id, reason.strip(), background_tasks)
        return {"message": "Cita cancelada exitosamente"}

    def verify_appointment(self, appointment_number: Optional[str], client_number: Optional[str]) -> dict:
        """Verification payload shown when a QR code is scanned at a branch"""
        if not appointment_number or not appointment_number.strip():
            raise HTTPException(status_code=400, detail="Número de cita requerido")
        if not client_number or not client_number.strip():
            raise HTTPException(status_code=400, detail="Número de cliente requerido")

        appointment = AppointmentRepository.get_appointment_by_number(self.db, appointment_number)
        if not appointment:
            raise HTTPException(status_code=404, detail=APPOINTMENT_NOT_FOUND)
        if appointment.client_number != client_number.strip():
            raise HTTPException(status_code=404, detail="Cita no válida para este cliente")

        is_valid = bool(appointment.is_enabled) and appointment.status_id != AppointmentStatus.CANCELLED
        status = appointment.status
        status_name = status.name if status else "Desconocido"
        branch = appointment.branch
        appointment_type = appointment.appointment_type

        return {
            "isValid": is_valid,
            "appointmentNumber": appointment.appointment_number,
            "appointmentDate": appointment.appointment_date.isoformat(),
            "appointmentTime": appointment.appointment_time,
            "status": status.code if status else "UNKNOWN",
            "statusDescription": STATUS_DESCRIPTIONS.get(appointment.status_id, f"Estado: {status_name}"),
            "client": {
                "clientNumber": appointment.client.client_number,
                "fullName": appointment.client.full_name,
            },
            "branch": (
                {
                    "id": branch.id,
                    "name": branch.name,
                    "address": branch.address,
                    "phone": branch.phone,
                    "city": branch.city,
                }
                if branch
                else None
            ),
            "appointmentType": (
                {
                    "id": appointment_type.id,
                    "name": appointment_type.name,
                    "description": appointment_type.description,
                    "code": appointment_type.code,
                }
                if appointment_type
                else None
            ),
            "creationDate": appointment.created_at.isoformat() if appointment.created_at else None,
            "observations": appointment.notes,
            "message": "Cita verificada correctamente" if is_valid else "Cita encontrada pero no está activa",
        }
