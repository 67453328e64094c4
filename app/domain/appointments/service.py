"""Appointment service - Business logic for appointment scheduling"""

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from fastapi import BackgroundTasks, HTTPException
from sqlalchemy.orm import Session

from ...hub import send_notification_to_user
from ...models import (
    Appointment,
    AppointmentStatus,
    AppointmentType,
    Branch,
    Client,
    User,
    UserAssignment,
)
from ...services.notification_service import (
    send_cancellation_in_background,
    send_completed_in_background,
    send_confirmation_in_background,
)
from ...shared.numbers import generate_appointment_number
from ..holidays.repository import HolidayRepository
from ..settings.service import get_int_setting
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentSchedule, AppointmentUpdate

logger = logging.getLogger(__name__)

DEFAULT_HOLIDAY_NAME = "Día festivo"
MAX_APPOINTMENTS_SETTING = "MAX_APPOINTMENTS_PER_DAY"
DEFAULT_MAX_APPOINTMENTS_PER_DAY = 50

# Slots offered by the admin availability grid
FIRST_SLOT = "08:00"
LAST_SLOT = "17:30"
SLOT_MINUTES = 30

NO_SHOW_REASON = "No asistió a la cita programada"
ADMIN_CANCEL_REASON = "Cita cancelada por el administrador"

SUNDAY = "SUNDAY"
HOLIDAY = "HOLIDAY"
PAST_DATE = "PAST_DATE"


def today_utc() -> date:
    return datetime.utcnow().date()


def find_date_restriction(db: Session, day: date, branch_id: Optional[int]) -> Optional[tuple[str, Optional[str]]]:
    """
    Check whether a date can take appointments at a branch.

    Returns None when bookable, otherwise (reason, holiday_name) with reason one
    of SUNDAY, HOLIDAY or PAST_DATE. Checks run in that order.
    """
    if day.weekday() == 6:
        return SUNDAY, None

    holiday = HolidayRepository.get_holiday_for_date(db, day, branch_id)
    if holiday:
        return HOLIDAY, holiday.holiday_name or DEFAULT_HOLIDAY_NAME

    if day < today_utc():
        return PAST_DATE, None
    return None


def ensure_bookable_date(db: Session, day: date, branch_id: Optional[int]) -> None:
    """Raise 400 when the date is a Sunday, a holiday for the branch, or in the past"""
    restriction = find_date_restriction(db, day, branch_id)
    if not restriction:
        return

    reason, holiday_name = restriction
    if reason == SUNDAY:
        detail = "No se pueden agendar citas los domingos"
    elif reason == HOLIDAY:
        detail = f"No se pueden agendar citas en días festivos. {holiday_name}"
    else:
        detail = "No se pueden agendar citas en fechas pasadas"
    logger.info(f"📅 Date {day} rejected for branch {branch_id}: {reason}")
    raise HTTPException(status_code=400, detail=detail)


def generate_slots(first: str = FIRST_SLOT, last: str = LAST_SLOT, step_minutes: int = SLOT_MINUTES) -> list[str]:
    current = datetime.strptime(first, "%H:%M")
    end = datetime.strptime(last, "%H:%M")
    slots = []
    while current <= end:
        slots.append(current.strftime("%H:%M"))
        current += timedelta(minutes=step_minutes)
    return slots


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session, provider=None):
        self.db = db
        self.repo = AppointmentRepository()
        self.provider = provider

    # ==========================================
    # Queries
    # ==========================================

    def get_appointments(self, include_inactive: bool = False) -> list[Appointment]:
        return self.repo.get_appointments(self.db, include_inactive)

    def get_appointment(self, appointment_id: int) -> Appointment:
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise HTTPException(status_code=404, detail="Appointment not found")
        return appointment

    def get_appointment_by_number(self, appointment_number: str) -> Appointment:
        appointment = self.repo.get_appointment_by_number(self.db, appointment_number)
        if not appointment:
            raise HTTPException(status_code=404, detail="Appointment not found")
        return appointment

    def get_by_client_number(self, client_number: str) -> list[Appointment]:
        return self.repo.get_by_client_number(self.db, client_number)

    def get_by_date(self, day: date) -> list[Appointment]:
        return self.repo.get_by_date(self.db, day)

    def get_by_branch(self, branch_id: int) -> list[Appointment]:
        return self.repo.get_by_branch(self.db, branch_id)

    def get_by_status(self, status_id: int) -> list[Appointment]:
        return self.repo.get_by_status(self.db, status_id)

    def get_pending(self) -> list[Appointment]:
        return self.repo.get_by_status(self.db, AppointmentStatus.PENDING)

    def get_completed(self) -> list[Appointment]:
        return self.repo.get_by_status(self.db, AppointmentStatus.COMPLETED)

    def get_my_assigned(self, user: User) -> list[Appointment]:
        """Appointments whose type is assigned to the user; empty when none are assigned"""
        type_ids = self.repo.get_assigned_type_ids(self.db, user.id)
        if not type_ids:
            logger.debug(f"User {user.id} has no appointment types assigned")
            return []
        return self.repo.get_by_appointment_types(self.db, type_ids)

    def is_time_available(self, branch_id: int, day: date, time: str) -> bool:
        return not self.repo.has_time_conflict(self.db, branch_id, day, time)

    def get_available_times(self, branch_id: int, day: date) -> list[str]:
        occupied = set(self.repo.get_occupied_times(self.db, branch_id, day))
        return [slot for slot in generate_slots() if slot not in occupied]

    # ==========================================
    # Commands
    # ==========================================

    def _defer(self, background_tasks: Optional[BackgroundTasks], func: Callable, *args, **kwargs) -> None:
        if background_tasks is None:
            logger.debug(f"No background task runner, skipping {getattr(func, '__name__', func)}")
            return
        background_tasks.add_task(func, *args, **kwargs)

    def _check_references(self, client_id: int, branch_id: int, appointment_type_id: int) -> None:
        if not self.db.query(Client).filter(Client.id == client_id).first():
            raise HTTPException(status_code=404, detail="Client not found")
        if not self.db.query(Branch).filter(Branch.id == branch_id).first():
            raise HTTPException(status_code=404, detail="Branch not found")
        if not self.db.query(AppointmentType).filter(AppointmentType.id == appointment_type_id).first():
            raise HTTPException(status_code=404, detail="Appointment type not found")

    def announce_created(self, appointment: Appointment, background_tasks: Optional[BackgroundTasks]) -> None:
        """Push appointment_created to assigned users and queue the confirmation fan-out"""
        assignments = (
            self.db.query(UserAssignment)
            .filter(
                UserAssignment.appointment_type_id == appointment.appointment_type_id,
                UserAssignment.is_active == True,  # noqa: E712
            )
            .all()
        )
        notification_data = {
            "type": "appointment_created",
            "data": {
                "id": appointment.id,
                "appointmentNumber": appointment.appointment_number,
                "clientId": appointment.client_id,
                "appointmentDate": appointment.appointment_date.isoformat(),
                "appointmentTypeId": appointment.appointment_type_id,
                "timestamp": datetime.utcnow().isoformat(),
            },
        }
        for assignment in assignments:
            if assignment.user is not None and assignment.user.is_active:
                self._defer(background_tasks, send_notification_to_user, assignment.user_id, notification_data)

        self._defer(background_tasks, send_confirmation_in_background, appointment.id, provider=self.provider)

    def create_appointment(
        self,
        data: AppointmentCreate,
        background_tasks: Optional[BackgroundTasks] = None,
        status_id: int = AppointmentStatus.PENDING,
    ) -> Appointment:
        ensure_bookable_date(self.db, data.appointment_date, data.branch_id)
        self._check_references(data.client_id, data.branch_id, data.appointment_type_id)

        appointment = Appointment(
            appointment_number=generate_appointment_number(),
            client_id=data.client_id,
            branch_id=data.branch_id,
            appointment_type_id=data.appointment_type_id,
            appointment_date=data.appointment_date,
            appointment_time=data.appointment_time,
            notes=data.notes,
            technician_id=data.technician_id,
            status_id=status_id,
        )
        created = self.repo.create_appointment(self.db, appointment)
        logger.info(f"✅ Appointment {created.appointment_number} created for {created.appointment_date}")

        self.announce_created(created, background_tasks)
        return created

    def schedule_appointment(
        self, data: AppointmentSchedule, background_tasks: Optional[BackgroundTasks] = None
    ) -> Appointment:
        """Book a confirmed appointment after capacity and time-slot checks"""
        max_per_day = get_int_setting(self.db, MAX_APPOINTMENTS_SETTING, DEFAULT_MAX_APPOINTMENTS_PER_DAY)
        booked = self.repo.count_for_day(self.db, data.branch_id, data.appointment_date)
        if booked >= max_per_day:
            logger.warning(
                f"⚠️ Branch {data.branch_id} is at capacity on {data.appointment_date} ({booked}/{max_per_day})"
            )
            raise HTTPException(
                status_code=400,
                detail=(
                    "No se pueden agendar más citas para este día. "
                    f"Máximo permitido: {max_per_day} citas por día."
                ),
            )

        if self.repo.has_time_conflict(self.db, data.branch_id, data.appointment_date, data.appointment_time):
            raise HTTPException(status_code=400, detail="The selected time slot is not available")

        return self.create_appointment(data, background_tasks, status_id=AppointmentStatus.CONFIRMED)

    def update_appointment(
        self,
        appointment_id: int,
        data: AppointmentUpdate,
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> Appointment:
        appointment = self.get_appointment(appointment_id)

        branch_id = data.branch_id or appointment.branch_id
        day = data.appointment_date or appointment.appointment_date
        if day != appointment.appointment_date or branch_id != appointment.branch_id:
            ensure_bookable_date(self.db, day, branch_id)

        previous_status = appointment.status_id
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(appointment, key, value)
        appointment.updated_at = datetime.utcnow()
        updated = self.repo.save(self.db, appointment)

        if data.status_id is not None and data.status_id != previous_status:
            logger.info(f"🔄 Appointment {appointment_id} status {previous_status} -> {data.status_id}")
            if data.status_id == AppointmentStatus.COMPLETED:
                self._defer(background_tasks, send_completed_in_background, appointment_id, provider=self.provider)
            elif data.status_id == AppointmentStatus.NO_SHOW:
                self._defer(
                    background_tasks,
                    send_cancellation_in_background,
                    appointment_id,
                    NO_SHOW_REASON,
                    provider=self.provider,
                )
            elif data.status_id == AppointmentStatus.CANCELLED:
                self._defer(
                    background_tasks,
                    send_cancellation_in_background,
                    appointment_id,
                    data.notes or ADMIN_CANCEL_REASON,
                    provider=self.provider,
                )
        return updated

    def cancel_appointment(
        self,
        appointment_id: int,
        reason: Optional[str],
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> Appointment:
        appointment = self.get_appointment(appointment_id)
        if appointment.status_id == AppointmentStatus.CANCELLED:
            raise HTTPException(status_code=400, detail="Appointment is already cancelled")
        if appointment.status_id == AppointmentStatus.COMPLETED:
            raise HTTPException(status_code=400, detail="Cannot cancel a completed appointment")

        appointment.status_id = AppointmentStatus.CANCELLED
        appointment.cancellation_reason = reason
        appointment.updated_at = datetime.utcnow()
        cancelled = self.repo.save(self.db, appointment)
        logger.info(f"❌ Appointment {appointment.appointment_number} cancelled")

        self._defer(background_tasks, send_cancellation_in_background, appointment_id, reason, provider=self.provider)
        return cancelled

    def complete_appointment(self, appointment_id: int, notes: Optional[str]) -> Appointment:
        appointment = self.get_appointment(appointment_id)
        if appointment.status_id == AppointmentStatus.COMPLETED:
            raise HTTPException(status_code=400, detail="Appointment is already completed")
        if appointment.status_id == AppointmentStatus.CANCELLED:
            raise HTTPException(status_code=400, detail="Cannot complete a cancelled appointment")

        appointment.status_id = AppointmentStatus.COMPLETED
        appointment.completed_date = datetime.utcnow()
        if notes:
            appointment.notes = notes
        appointment.updated_at = datetime.utcnow()
        logger.info(f"✅ Appointment {appointment.appointment_number} completed")
        return self.repo.save(self.db, appointment)

    def delete_logical(self, appointment_id: int) -> dict:
        appointment = self.get_appointment(appointment_id)
        appointment.is_active = False
        appointment.updated_at = datetime.utcnow()
        self.repo.save(self.db, appointment)
        return {"message": "Appointment deleted successfully"}
