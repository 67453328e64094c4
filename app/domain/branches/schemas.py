"""Branch domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from ...shared.schemas import CamelModel
from ...shared.validators import validate_hex_color


class BranchCreate(CamelModel):
    name: str
    code: str
    address: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    is_main: bool = False
    color_primary: Optional[str] = None

    @field_validator("name", "code")
    @classmethod
    def validate_required(cls, v):
        if not v or not v.strip():
            raise ValueError("Field is required")
        return v.strip()

    @field_validator("color_primary")
    @classmethod
    def validate_color(cls, v):
        return validate_hex_color(v)


class BranchUpdate(CamelModel):
    name: Optional[str] = None
    code: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    is_main: Optional[bool] = None
    color_primary: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("color_primary")
    @classmethod
    def validate_color(cls, v):
        return validate_hex_color(v)


class BranchResponse(CamelModel):
    id: int
    name: str
    code: str
    address: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    is_main: bool
    color_primary: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
