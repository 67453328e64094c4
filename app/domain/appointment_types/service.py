"""Appointment type service - Business logic for appointment types"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import AppointmentType
from .repository import AppointmentTypeRepository
from .schemas import AppointmentTypeCreate, AppointmentTypeUpdate

logger = logging.getLogger(__name__)


class AppointmentTypeService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentTypeRepository()

    def get_types(self, include_inactive: bool = False) -> list[AppointmentType]:
        return self.repo.get_types(self.db, include_inactive)

    def get_type(self, type_id: int) -> AppointmentType:
        appointment_type = self.repo.get_type_by_id(self.db, type_id)
        if not appointment_type:
            raise HTTPException(status_code=404, detail="Appointment type not found")
        return appointment_type

    def get_type_by_name(self, name: str) -> AppointmentType:
        appointment_type = self.repo.get_type_by_name(self.db, name)
        if not appointment_type:
            raise HTTPException(status_code=404, detail="Appointment type not found")
        return appointment_type

    def create_type(self, data: AppointmentTypeCreate) -> AppointmentType:
        if self.repo.get_type_by_name(self.db, data.name):
            raise HTTPException(status_code=400, detail="An appointment type with this name already exists")

        appointment_type = AppointmentType.create(
            name=data.name,
            code=data.code,
            estimated_time_minutes=data.estimated_time_minutes,
            description=data.description,
            icon=data.icon,
            color_primary=data.color_primary,
            color_secondary=data.color_secondary,
            requires_documentation=data.requires_documentation,
            display_order=data.display_order,
        )
        created = self.repo.add(self.db, appointment_type)
        logger.info(f"✅ Appointment type created: {created.name}")
        return created

    def update_type(self, type_id: int, data: AppointmentTypeUpdate) -> AppointmentType:
        appointment_type = self.get_type(type_id)
        updates = data.model_dump(exclude_unset=True)
        if updates.get("code"):
            updates["code"] = updates["code"].strip().upper()
        if updates.get("name"):
            updates["name"] = updates["name"].strip()
            existing = self.repo.get_type_by_name(self.db, updates["name"])
            if existing and existing.id != appointment_type.id:
                raise HTTPException(
                    status_code=400, detail="An appointment type with this name already exists"
                )
        return self.repo.update_type(self.db, appointment_type, **updates)

    def set_active(self, type_id: int, is_active: bool) -> AppointmentType:
        appointment_type = self.get_type(type_id)
        appointment_type.is_active = is_active
        self.db.commit()
        self.db.refresh(appointment_type)
        logger.info(f"{'✅ Activated' if is_active else '⏸️ Deactivated'} appointment type {type_id}")
        return appointment_type

    def delete_type(self, type_id: int) -> dict:
        appointment_type = self.get_type(type_id)
        self.repo.delete_type(self.db, appointment_type)
        return {"message": "Appointment type deleted successfully"}
