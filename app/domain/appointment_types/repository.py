"""Appointment type repository - Database operations for appointment types"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import AppointmentType


class AppointmentTypeRepository:
    """Repository for appointment type database operations"""

    @staticmethod
    def get_types(db: Session, include_inactive: bool = False) -> list[AppointmentType]:
        query = db.query(AppointmentType)
        if not include_inactive:
            query = query.filter(AppointmentType.is_active == True)  # noqa: E712
        return query.order_by(AppointmentType.display_order, AppointmentType.name).all()

    @staticmethod
    def get_type_by_id(db: Session, type_id: int) -> Optional[AppointmentType]:
        return db.query(AppointmentType).filter(AppointmentType.id == type_id).first()

    @staticmethod
    def get_type_by_name(db: Session, name: str) -> Optional[AppointmentType]:
        return (
            db.query(AppointmentType)
            .filter(func.lower(AppointmentType.name) == name.strip().lower())
            .first()
        )

    @staticmethod
    def add(db: Session, appointment_type: AppointmentType) -> AppointmentType:
        db.add(appointment_type)
        db.commit()
        db.refresh(appointment_type)
        return appointment_type

    @staticmethod
    def update_type(db: Session, appointment_type: AppointmentType, **updates) -> AppointmentType:
        for key, value in updates.items():
            if value is not None and hasattr(appointment_type, key):
                setattr(appointment_type, key, value)
        db.commit()
        db.refresh(appointment_type)
        return appointment_type

    @staticmethod
    def delete_type(db: Session, appointment_type: AppointmentType) -> None:
        db.delete(appointment_type)
        db.commit()
