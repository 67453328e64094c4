"""Role and permission schemas"""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from ...shared.schemas import CamelModel


class RolCreate(CamelModel):
    name: str
    code: str

    @field_validator("name", "code")
    @classmethod
    def validate_required(cls, v):
        if not v or not v.strip():
            raise ValueError("Field is required")
        return v.strip()


class RolUpdate(CamelModel):
    name: Optional[str] = None
    code: Optional[str] = None
    is_active: Optional[bool] = None


class RolResponse(CamelModel):
    id: int
    name: str
    code: str
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class FormResponse(CamelModel):
    id: int
    name: str
    code: str
    description: Optional[str] = None


class FormPermissionRequest(CamelModel):
    rol_id: int
    form_id: int
    can_read: bool = False
    can_create: bool = False
    can_update: bool = False
    can_delete: bool = False


class FormPermissionResponse(CamelModel):
    id: int
    rol_id: int
    rol_name: Optional[str] = None
    form_id: int
    form_code: Optional[str] = None
    form_name: Optional[str] = None
    can_read: bool
    can_create: bool
    can_update: bool
    can_delete: bool


class RolPermissionSummary(CamelModel):
    rol_id: int
    rol_name: str
    rol_code: str
    permissions: list[str]


class AllowedTabsUpdate(CamelModel):
    allowed_tabs: list[str]
