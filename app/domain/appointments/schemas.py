"""Appointment domain schemas"""

from datetime import date, datetime
from typing import Optional

from pydantic import field_validator

from ...models import AppointmentStatus
from ...shared.schemas import CamelModel
from ...shared.validators import validate_time_slot


class AppointmentCreate(CamelModel):
    client_id: int
    branch_id: int
    appointment_type_id: int
    appointment_date: date
    appointment_time: Optional[str] = None
    notes: Optional[str] = None
    technician_id: Optional[int] = None

    @field_validator("appointment_time")
    @classmethod
    def validate_time(cls, v):
        return validate_time_slot(v)


class AppointmentSchedule(AppointmentCreate):
    appointment_time: str


class AppointmentUpdate(CamelModel):
    appointment_date: Optional[date] = None
    appointment_time: Optional[str] = None
    status_id: Optional[int] = None
    notes: Optional[str] = None
    branch_id: Optional[int] = None
    appointment_type_id: Optional[int] = None
    technician_id: Optional[int] = None

    @field_validator("appointment_time")
    @classmethod
    def validate_time(cls, v):
        return validate_time_slot(v)

    @field_validator("status_id")
    @classmethod
    def validate_status(cls, v):
        if v is not None and v not in {s.value for s in AppointmentStatus}:
            raise ValueError(f"Invalid status id {v}")
        return v


class CancelRequest(CamelModel):
    reason: Optional[str] = None


class CompleteRequest(CamelModel):
    notes: Optional[str] = None


class AppointmentResponse(CamelModel):
    id: int
    appointment_number: str
    client_id: int
    client_name: Optional[str] = None
    client_number: Optional[str] = None
    branch_id: int
    branch_name: Optional[str] = None
    appointment_type_id: int
    appointment_type_name: Optional[str] = None
    status_id: int
    status_name: Optional[str] = None
    appointment_date: date
    appointment_time: Optional[str] = None
    notes: Optional[str] = None
    cancellation_reason: Optional[str] = None
    completed_date: Optional[datetime] = None
    technician_id: Optional[int] = None
    is_enabled: bool
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AvailabilityResponse(CamelModel):
    is_available: bool
