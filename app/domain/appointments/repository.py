"""Appointment repository - Database operations for appointments"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Appointment, AppointmentStatus, Client, UserAssignment

# Appointments in these states no longer hold their time slot
RELEASED_STATUSES = (AppointmentStatus.CANCELLED, AppointmentStatus.COMPLETED)


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def _query(db: Session):
        return db.query(Appointment).options(
            joinedload(Appointment.client),
            joinedload(Appointment.branch),
            joinedload(Appointment.appointment_type),
            joinedload(Appointment.status),
        )

    @staticmethod
    def get_appointments(db: Session, include_inactive: bool = False) -> list[Appointment]:
        query = AppointmentRepository._query(db)
        if not include_inactive:
            query = query.filter(Appointment.is_active == True)  # noqa: E712
        return query.order_by(Appointment.appointment_date.desc(), Appointment.appointment_time).all()

    @staticmethod
    def get_appointment_by_id(db: Session, appointment_id: int) -> Optional[Appointment]:
        return AppointmentRepository._query(db).filter(Appointment.id == appointment_id).first()

    @staticmethod
    def get_appointment_by_number(db: Session, appointment_number: str) -> Optional[Appointment]:
        return (
            AppointmentRepository._query(db)
            .filter(Appointment.appointment_number == appointment_number.strip())
            .first()
        )

    @staticmethod
    def get_by_client_id(db: Session, client_id: int) -> list[Appointment]:
        return (
            AppointmentRepository._query(db)
            .filter(Appointment.client_id == client_id, Appointment.is_active == True)  # noqa: E712
            .order_by(Appointment.appointment_date.desc())
            .all()
        )

    @staticmethod
    def get_by_client_number(db: Session, client_number: str) -> list[Appointment]:
        return (
            AppointmentRepository._query(db)
            .join(Client, Client.id == Appointment.client_id)
            .filter(Client.client_number == client_number.strip(), Appointment.is_active == True)  # noqa: E712
            .order_by(Appointment.appointment_date.desc())
            .all()
        )

    @staticmethod
    def get_by_date(db: Session, day: date) -> list[Appointment]:
        return (
            AppointmentRepository._query(db)
            .filter(Appointment.appointment_date == day, Appointment.is_active == True)  # noqa: E712
            .order_by(Appointment.appointment_time)
            .all()
        )

    @staticmethod
    def get_by_branch(db: Session, branch_id: int) -> list[Appointment]:
        return (
            AppointmentRepository._query(db)
            .filter(Appointment.branch_id == branch_id, Appointment.is_active == True)  # noqa: E712
            .order_by(Appointment.appointment_date.desc(), Appointment.appointment_time)
            .all()
        )

    @staticmethod
    def get_by_status(db: Session, status_id: int) -> list[Appointment]:
        return (
            AppointmentRepository._query(db)
            .filter(Appointment.status_id == status_id, Appointment.is_active == True)  # noqa: E712
            .order_by(Appointment.appointment_date, Appointment.appointment_time)
            .all()
        )

    @staticmethod
    def get_by_appointment_types(db: Session, type_ids: list[int]) -> list[Appointment]:
        if not type_ids:
            return []
        return (
            AppointmentRepository._query(db)
            .filter(Appointment.appointment_type_id.in_(type_ids), Appointment.is_active == True)  # noqa: E712
            .order_by(Appointment.appointment_date.desc(), Appointment.appointment_time)
            .all()
        )

    @staticmethod
    def get_assigned_type_ids(db: Session, user_id: int) -> list[int]:
        rows = (
            db.query(UserAssignment.appointment_type_id)
            .filter(UserAssignment.user_id == user_id, UserAssignment.is_active == True)  # noqa: E712
            .all()
        )
        return [row[0] for row in rows]

    @staticmethod
    def count_for_day(db: Session, branch_id: int, day: date) -> int:
        """Non-cancelled appointments booked at the branch that day"""
        return (
            db.query(Appointment)
            .filter(
                Appointment.branch_id == branch_id,
                Appointment.appointment_date == day,
                Appointment.is_active == True,  # noqa: E712
                Appointment.status_id != AppointmentStatus.CANCELLED,
            )
            .count()
        )

    @staticmethod
    def get_occupied_times(db: Session, branch_id: int, day: date) -> list[str]:
        """Sorted times held by enabled appointments that are neither cancelled nor completed"""
        rows = (
            db.query(Appointment.appointment_time)
            .filter(
                Appointment.branch_id == branch_id,
                Appointment.appointment_date == day,
                Appointment.is_enabled == True,  # noqa: E712
                Appointment.is_active == True,  # noqa: E712
                Appointment.status_id.notin_(RELEASED_STATUSES),
                Appointment.appointment_time.isnot(None),
            )
            .all()
        )
        return sorted({row[0] for row in rows})

    @staticmethod
    def has_time_conflict(
        db: Session,
        branch_id: int,
        day: date,
        time: str,
        exclude_id: Optional[int] = None,
    ) -> bool:
        query = db.query(Appointment).filter(
            Appointment.branch_id == branch_id,
            Appointment.appointment_date == day,
            Appointment.appointment_time == time,
            Appointment.is_active == True,  # noqa: E712
            Appointment.status_id.notin_(RELEASED_STATUSES),
        )
        if exclude_id is not None:
            query = query.filter(Appointment.id != exclude_id)
        return db.query(query.exists()).scalar()

    @staticmethod
    def create_appointment(db: Session, appointment: Appointment) -> Appointment:
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def save(db: Session, appointment: Appointment) -> Appointment:
        db.commit()
        db.refresh(appointment)
        return appointment
