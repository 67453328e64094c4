"""Available time domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from ...shared.schemas import CamelModel
from ...shared.validators import validate_time_slot


class AvailableTimeCreate(CamelModel):
    branch_id: int
    appointment_type_id: Optional[int] = None
    time: str

    @field_validator("time")
    @classmethod
    def validate_time(cls, v):
        return validate_time_slot(v)


class AvailableTimeBulkCreate(CamelModel):
    branch_id: int
    appointment_type_id: Optional[int] = None
    times: list[str]

    @field_validator("times")
    @classmethod
    def validate_times(cls, v):
        if not v:
            raise ValueError("At least one time is required")
        return [validate_time_slot(t) for t in v]


class AvailableTimeUpdate(CamelModel):
    appointment_type_id: Optional[int] = None
    time: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("time")
    @classmethod
    def validate_time(cls, v):
        return validate_time_slot(v)


class AvailableTimeResponse(CamelModel):
    id: int
    branch_id: int
    appointment_type_id: Optional[int] = None
    time: str
    is_active: bool
    created_at: Optional[datetime] = None
