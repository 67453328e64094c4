"""Appointment status repository - Database operations for the status catalogue"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import AppointmentStatusRecord


class AppointmentStatusRepository:
    @staticmethod
    def get_statuses(db: Session) -> list[AppointmentStatusRecord]:
        return (
            db.query(AppointmentStatusRecord)
            .filter(AppointmentStatusRecord.is_active == True)  # noqa: E712
            .order_by(AppointmentStatusRecord.display_order, AppointmentStatusRecord.id)
            .all()
        )

    @staticmethod
    def get_status_by_id(db: Session, status_id: int) -> Optional[AppointmentStatusRecord]:
        return db.query(AppointmentStatusRecord).filter(AppointmentStatusRecord.id == status_id).first()

    @staticmethod
    def save(db: Session, status: AppointmentStatusRecord) -> AppointmentStatusRecord:
        db.commit()
        db.refresh(status)
        return status
