"""Public booking schemas (no authentication)"""

from datetime import date
from typing import Optional

from pydantic import field_validator

from ...models import DOCUMENT_TYPES
from ...shared.schemas import CamelModel
from ...shared.validators import validate_email, validate_time_slot


class PublicClientResponse(CamelModel):
    id: int
    client_number: str
    full_name: str
    email: Optional[str] = None
    document_number: str
    phone: Optional[str] = None
    mobile: Optional[str] = None


class PublicAppointmentSchedule(CamelModel):
    """Booking for a client that already has a client number"""

    client_number: str
    branch_id: int
    appointment_type_id: int
    appointment_date: date
    appointment_time: str
    observations: Optional[str] = None

    @field_validator("appointment_time")
    @classmethod
    def validate_time(cls, v):
        return validate_time_slot(v)


class SimpleAppointmentSchedule(CamelModel):
    """Booking that registers the client on the fly when the document is unknown"""

    document_type: str = "CC"
    document_number: str
    full_name: str
    phone: Optional[str] = None
    mobile: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    branch_id: int
    appointment_type_id: int
    appointment_date: date
    appointment_time: str
    observations: Optional[str] = None

    @field_validator("document_type")
    @classmethod
    def validate_document_type(cls, v):
        if not v or v.strip().upper() not in DOCUMENT_TYPES:
            raise ValueError("El tipo de documento debe ser CC, TI, CE o RC")
        return v.strip().upper()

    @field_validator("document_number")
    @classmethod
    def validate_document_number(cls, v):
        v = (v or "").strip()
        if not v:
            raise ValueError("El número de documento es requerido")
        if len(v) > 20:
            raise ValueError("El número de documento no puede exceder 20 caracteres")
        if not v.isalnum():
            raise ValueError("El número de documento solo puede contener letras y números")
        return v

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v):
        if not v or not v.strip():
            raise ValueError("El nombre completo es requerido")
        return v.strip()

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @field_validator("appointment_time")
    @classmethod
    def validate_time(cls, v):
        return validate_time_slot(v)


class SimpleAppointmentResponse(CamelModel):
    client_number: str
    appointment_number: str
    message: str
    appointment_date: date
    appointment_time: str
    branch_name: str


class PublicCancelRequest(CamelModel):
    reason: Optional[str] = None
