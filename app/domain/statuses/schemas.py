"""Appointment status domain schemas"""

from typing import Optional

from pydantic import field_validator

from ...shared.schemas import CamelModel
from ...shared.validators import validate_hex_color


class AppointmentStatusDesignUpdate(CamelModel):
    id: int
    color_primary: Optional[str] = None
    color_secondary: Optional[str] = None
    color_text: Optional[str] = None
    icon_name: Optional[str] = None

    @field_validator("color_primary", "color_secondary", "color_text")
    @classmethod
    def validate_color(cls, v):
        return validate_hex_color(v)


class AppointmentStatusResponse(CamelModel):
    id: int
    code: str
    name: str
    description: Optional[str] = None
    color_primary: Optional[str] = None
    color_secondary: Optional[str] = None
    color_text: Optional[str] = None
    icon_name: Optional[str] = None
    display_order: int
    allow_cancellation: bool
    is_final_state: bool
    is_active: bool
