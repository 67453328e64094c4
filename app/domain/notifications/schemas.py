"""Notification domain schemas"""

from datetime import datetime
from typing import Any, Optional

from ...shared.schemas import CamelModel


class NotificationCreate(CamelModel):
    """In-app notification for a user"""

    user_id: int
    title: str
    message: str
    appointment_id: Optional[int] = None


class NotificationResponse(CamelModel):
    id: int
    user_id: Optional[int] = None
    client_id: Optional[int] = None
    appointment_id: Optional[int] = None
    type: str
    title: str
    message: str
    status: str
    is_read: bool
    sent_at: Optional[datetime] = None
    read_at: Optional[datetime] = None
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None


class UnreadCountResponse(CamelModel):
    count: int


class TemplateCreate(CamelModel):
    template_code: str
    template_name: str
    template_type: str
    subject: Optional[str] = None
    body_template: str
    placeholders: Optional[list[str]] = None


class TemplateUpdate(CamelModel):
    template_name: Optional[str] = None
    subject: Optional[str] = None
    body_template: Optional[str] = None
    placeholders: Optional[list[str]] = None
    is_active: Optional[bool] = None


class TemplateResponse(CamelModel):
    id: int
    template_code: str
    template_name: str
    template_type: str
    subject: Optional[str] = None
    body_template: str
    placeholders: list[str] = []
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TemplatePreviewRequest(CamelModel):
    values: dict[str, Any] = {}


class TemplatePreviewResponse(CamelModel):
    template_code: str
    subject: str
    body: str
