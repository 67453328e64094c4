"""Client domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from ...models import parse_document_type
from ...shared.schemas import CamelModel
from ...shared.validators import validate_email


class ClientCreate(CamelModel):
    """Schema for creating a new client"""

    document_type: Optional[str] = "CC"
    document_number: str
    full_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    mobile: Optional[str] = None
    address: Optional[str] = None

    @field_validator("document_number", "full_name")
    @classmethod
    def validate_required(cls, v):
        if not v or not v.strip():
            raise ValueError("Field is required")
        return v.strip()

    @field_validator("document_type")
    @classmethod
    def validate_document_type(cls, v):
        return parse_document_type(v)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)


class ClientUpdate(CamelModel):
    """Schema for updating an existing client"""

    document_type: Optional[str] = None
    document_number: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    mobile: Optional[str] = None
    address: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("document_type")
    @classmethod
    def validate_document_type(cls, v):
        if v is None:
            return v
        return parse_document_type(v)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)


class ClientResponse(CamelModel):
    """Schema for client response"""

    id: int
    client_number: str
    document_type: str
    document_number: str
    full_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    mobile: Optional[str] = None
    address: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ExistsResponse(CamelModel):
    exists: bool
