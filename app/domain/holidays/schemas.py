"""Holiday domain schemas"""

from datetime import date, datetime
from typing import Optional

from pydantic import field_validator

from ...shared.schemas import CamelModel


class HolidayCreate(CamelModel):
    holiday_date: date
    holiday_name: str

    @field_validator("holiday_name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Holiday name is required")
        return v.strip()


class LocalHolidayCreate(HolidayCreate):
    branch_id: int


class HolidayUpdate(CamelModel):
    holiday_date: Optional[date] = None
    holiday_name: Optional[str] = None
    holiday_type: Optional[str] = None
    branch_id: Optional[int] = None


class HolidayResponse(CamelModel):
    id: int
    holiday_date: date
    holiday_name: str
    holiday_type: str
    branch_id: Optional[int] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class HolidayCheckResponse(CamelModel):
    is_holiday: bool
    holiday: Optional[HolidayResponse] = None
