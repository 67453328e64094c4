"""Available time service - Business logic for configured time slots"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import AppointmentType, AvailableTime, Branch
from .repository import AvailableTimeRepository
from .schemas import AvailableTimeBulkCreate, AvailableTimeCreate, AvailableTimeUpdate

logger = logging.getLogger(__name__)


class AvailableTimeService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AvailableTimeRepository()

    def get_times(self) -> list[AvailableTime]:
        return self.repo.get_times(self.db)

    def get_time(self, time_id: int) -> AvailableTime:
        slot = self.repo.get_time_by_id(self.db, time_id)
        if not slot:
            raise HTTPException(status_code=404, detail="Available time not found")
        return slot

    def get_times_by_branch(self, branch_id: int) -> list[AvailableTime]:
        return self.repo.get_times_by_branch(self.db, branch_id)

    def get_times_by_type(self, appointment_type_id: int) -> list[AvailableTime]:
        return self.repo.get_times_by_type(self.db, appointment_type_id)

    def _check_references(self, branch_id: int, appointment_type_id: Optional[int]) -> None:
        if not self.db.query(Branch).filter(Branch.id == branch_id).first():
            raise HTTPException(status_code=404, detail="Branch not found")
        if appointment_type_id is not None:
            if not self.db.query(AppointmentType).filter(AppointmentType.id == appointment_type_id).first():
                raise HTTPException(status_code=404, detail="Appointment type not found")

    def create_time(self, data: AvailableTimeCreate) -> AvailableTime:
        self._check_references(data.branch_id, data.appointment_type_id)
        if self.repo.exists(self.db, data.branch_id, data.time, data.appointment_type_id):
            raise HTTPException(status_code=400, detail="This time is already configured for the branch")
        slot = AvailableTime(
            branch_id=data.branch_id,
            appointment_type_id=data.appointment_type_id,
            time=data.time,
        )
        return self.repo.add_all(self.db, [slot])[0]

    def create_times_bulk(self, data: AvailableTimeBulkCreate) -> list[AvailableTime]:
        """Create every time not already configured; existing ones are skipped"""
        self._check_references(data.branch_id, data.appointment_type_id)
        new_slots = []
        for value in sorted(set(data.times)):
            if self.repo.exists(self.db, data.branch_id, value, data.appointment_type_id):
                logger.debug(f"Time {value} already configured for branch {data.branch_id}")
                continue
            new_slots.append(
                AvailableTime(
                    branch_id=data.branch_id,
                    appointment_type_id=data.appointment_type_id,
                    time=value,
                )
            )
        created = self.repo.add_all(self.db, new_slots) if new_slots else []
        logger.info(f"✅ {len(created)} available times created for branch {data.branch_id}")
        return created

    def update_time(self, time_id: int, data: AvailableTimeUpdate) -> AvailableTime:
        slot = self.get_time(time_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(slot, key, value)
        return self.repo.save(self.db, slot)

    def delete_logical(self, time_id: int) -> dict:
        slot = self.get_time(time_id)
        slot.is_active = False
        self.repo.save(self.db, slot)
        return {"message": "Available time deactivated successfully"}
