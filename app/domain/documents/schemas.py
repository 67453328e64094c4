"""Appointment document domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from ...shared.schemas import CamelModel


class AppointmentDocumentCreate(CamelModel):
    appointment_id: int
    document_name: str
    document_type: Optional[str] = None
    file_path: str
    file_size: Optional[int] = None
    description: Optional[str] = None

    @field_validator("appointment_id")
    @classmethod
    def validate_appointment_id(cls, v):
        if v <= 0:
            raise ValueError("Appointment id must be greater than 0")
        return v

    @field_validator("document_name", "file_path")
    @classmethod
    def validate_required(cls, v):
        if not v or not v.strip():
            raise ValueError("Field is required")
        return v.strip()

    @field_validator("file_size")
    @classmethod
    def validate_size(cls, v):
        if v is not None and v < 0:
            raise ValueError("File size cannot be negative")
        return v


class AppointmentDocumentUpdate(CamelModel):
    id: int
    description: Optional[str] = None


class AppointmentDocumentResponse(CamelModel):
    id: int
    appointment_id: int
    document_name: str
    document_type: Optional[str] = None
    file_path: str
    file_size: Optional[int] = None
    file_size_formatted: str
    uploaded_by: Optional[int] = None
    description: Optional[str] = None
    is_image: bool
    is_pdf: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AppointmentDocumentStats(CamelModel):
    appointment_id: int
    total_documents: int
    total_size_bytes: int
    total_size_formatted: str
    image_count: int
    pdf_count: int
    other_count: int
