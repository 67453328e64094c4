"""Appointment status service - Catalogue reads and design updates"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import AppointmentStatusRecord
from .repository import AppointmentStatusRepository
from .schemas import AppointmentStatusDesignUpdate

logger = logging.getLogger(__name__)


class AppointmentStatusService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentStatusRepository()

    def get_statuses(self) -> list[AppointmentStatusRecord]:
        return self.repo.get_statuses(self.db)

    def get_status(self, status_id: int) -> AppointmentStatusRecord:
        status = self.repo.get_status_by_id(self.db, status_id)
        if not status:
            raise HTTPException(status_code=404, detail=f"Estado con ID {status_id} no encontrado")
        return status

    def update_design(self, status_id: int, data: AppointmentStatusDesignUpdate) -> AppointmentStatusRecord:
        if status_id != data.id:
            raise HTTPException(status_code=400, detail="El ID de la ruta no coincide con el ID del comando")

        status = self.get_status(status_id)
        status.update_design(data.color_primary, data.color_secondary, data.color_text, data.icon_name)
        updated = self.repo.save(self.db, status)
        logger.info(f"🎨 Appointment status {updated.code} design updated")
        return updated
