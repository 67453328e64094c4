"""User domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from ...shared.schemas import CamelModel
from ...shared.validators import validate_email


class UserCreate(CamelModel):
    username: str
    email: str
    password: str
    full_name: Optional[str] = None
    identification_type: Optional[str] = None
    identification_number: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    allowed_tabs: list[str] = []

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        if not v or not v.strip():
            raise ValueError("Username is required")
        return v.strip()

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        if not v:
            raise ValueError("Email is required")
        return validate_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if not v or len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v


class UserCreateWithRoles(UserCreate):
    role_ids: list[int] = []


class UserUpdate(CamelModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    full_name: Optional[str] = None
    identification_type: Optional[str] = None
    identification_number: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)


class UserUpdateWithRoles(UserUpdate):
    role_ids: Optional[list[int]] = None


class AssignRolesRequest(CamelModel):
    role_ids: list[int]


class RoleSummary(CamelModel):
    id: int
    name: str
    code: str


class UserResponse(CamelModel):
    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    identification_type: Optional[str] = None
    identification_number: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    allowed_tabs: list[str] = []
    roles: list[RoleSummary] = []
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("allowed_tabs", mode="before")
    @classmethod
    def split_tabs(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [tab.strip() for tab in v.split(",") if tab.strip()]
        return v


class HasPermissionResponse(CamelModel):
    has_permission: bool


# ============================================================================
# ASSIGNMENTS
# ============================================================================


class AssignmentCreate(CamelModel):
    user_id: int
    appointment_type_id: int


class BulkAssignmentCreate(CamelModel):
    user_id: int
    appointment_type_ids: list[int]


class AssignmentResponse(CamelModel):
    id: int
    user_id: int
    appointment_type_id: int
    appointment_type_name: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
