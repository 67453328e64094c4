"""Holiday service - Business logic for holiday operations"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Branch, Holiday
from ...shared.exceptions import DomainException
from .repository import HolidayRepository
from .schemas import HolidayCreate, HolidayUpdate, LocalHolidayCreate

logger = logging.getLogger(__name__)


class HolidayService:
    """Service layer for holiday business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = HolidayRepository()

    def get_holidays(self, year: Optional[int] = None) -> list[Holiday]:
        return self.repo.get_holidays(self.db, year)

    def get_holiday(self, holiday_id: int) -> Holiday:
        holiday = self.repo.get_holiday_by_id(self.db, holiday_id)
        if not holiday:
            raise HTTPException(status_code=404, detail="Holiday not found")
        return holiday

    def get_holidays_in_range(self, start: date, end: date) -> list[Holiday]:
        if end < start:
            raise HTTPException(status_code=400, detail="End date must be on or after start date")
        return self.repo.get_holidays_in_range(self.db, start, end)

    def check_date(self, day: date, branch_id: Optional[int] = None) -> Optional[Holiday]:
        return self.repo.get_holiday_for_date(self.db, day, branch_id)

    def _ensure_unique(self, holiday: Holiday, exclude_id: Optional[int] = None) -> None:
        if self.repo.exists_for_scope(self.db, holiday.holiday_date, holiday.branch_id, exclude_id):
            raise DomainException(
                f"A holiday already exists on {holiday.holiday_date.isoformat()} for this scope"
            )

    def _create(self, holiday: Holiday) -> Holiday:
        self._ensure_unique(holiday)
        created = self.repo.create_holiday(self.db, holiday)
        logger.info(f"✅ {created.holiday_type} holiday created: {created.holiday_name} ({created.holiday_date})")
        return created

    def create_national_holiday(self, data: HolidayCreate) -> Holiday:
        return self._create(Holiday.create(data.holiday_date, data.holiday_name, "NATIONAL"))

    def create_company_holiday(self, data: HolidayCreate) -> Holiday:
        return self._create(Holiday.create(data.holiday_date, data.holiday_name, "COMPANY"))

    def create_local_holiday(self, data: LocalHolidayCreate) -> Holiday:
        holiday = Holiday.create(data.holiday_date, data.holiday_name, "LOCAL", data.branch_id)
        if not self.db.query(Branch).filter(Branch.id == data.branch_id).first():
            raise HTTPException(status_code=404, detail="Branch not found")
        return self._create(holiday)

    def update_holiday(self, holiday_id: int, data: HolidayUpdate) -> Holiday:
        holiday = self.get_holiday(holiday_id)

        holiday_type = data.holiday_type or holiday.holiday_type
        branch_id = data.branch_id if data.branch_id is not None else holiday.branch_id
        validated = Holiday.create(
            data.holiday_date or holiday.holiday_date,
            data.holiday_name or holiday.holiday_name,
            holiday_type,
            branch_id,
        )
        self._ensure_unique(validated, exclude_id=holiday.id)

        holiday.holiday_date = validated.holiday_date
        holiday.holiday_name = validated.holiday_name
        holiday.holiday_type = validated.holiday_type
        holiday.branch_id = validated.branch_id
        return self.repo.save(self.db, holiday)

    def delete_holiday(self, holiday_id: int) -> dict:
        holiday = self.get_holiday(holiday_id)
        self.repo.delete_holiday(self.db, holiday)
        logger.info(f"🗑️ Holiday {holiday_id} deleted")
        return {"message": "Holiday deleted successfully"}

    def set_active(self, holiday_id: int, is_active: bool) -> Holiday:
        holiday = self.get_holiday(holiday_id)
        holiday.is_active = is_active
        return self.repo.save(self.db, holiday)
