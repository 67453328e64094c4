"""Appointment type domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from ...shared.schemas import CamelModel
from ...shared.validators import validate_hex_color


class AppointmentTypeCreate(CamelModel):
    name: str
    code: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    color_primary: Optional[str] = None
    color_secondary: Optional[str] = None
    estimated_time_minutes: int = 120
    requires_documentation: bool = False
    display_order: int = 0

    @field_validator("color_primary", "color_secondary")
    @classmethod
    def validate_color(cls, v):
        return validate_hex_color(v)


class AppointmentTypeUpdate(CamelModel):
    name: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    color_primary: Optional[str] = None
    color_secondary: Optional[str] = None
    estimated_time_minutes: Optional[int] = None
    requires_documentation: Optional[bool] = None
    display_order: Optional[int] = None

    @field_validator("color_primary", "color_secondary")
    @classmethod
    def validate_color(cls, v):
        return validate_hex_color(v)

    @field_validator("estimated_time_minutes")
    @classmethod
    def validate_minutes(cls, v):
        if v is not None and v <= 0:
            raise ValueError("Estimated time must be greater than 0 minutes")
        return v


class AppointmentTypeResponse(CamelModel):
    id: int
    name: str
    code: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    color_primary: Optional[str] = None
    color_secondary: Optional[str] = None
    estimated_time_minutes: int
    requires_documentation: bool
    display_order: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
