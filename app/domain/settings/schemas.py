"""Settings domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from ...shared.schemas import CamelModel
from ...shared.validators import validate_hex_color


class SystemSettingCreate(CamelModel):
    setting_key: str
    setting_value: Optional[str] = None
    setting_type: str = "STRING"
    description: Optional[str] = None
    is_encrypted: bool = False


class SystemSettingUpdate(CamelModel):
    setting_value: Optional[str] = None
    setting_type: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


class SettingValueUpdate(CamelModel):
    setting_key: str
    setting_value: Optional[str] = None


class SystemSettingResponse(CamelModel):
    id: int
    setting_key: str
    setting_value: Optional[str] = None
    setting_type: str
    description: Optional[str] = None
    is_encrypted: bool
    is_active: bool
    updated_at: Optional[datetime] = None


COLOR_FIELDS = (
    "primary_color",
    "secondary_color",
    "accent_color",
    "intermediate_color",
    "success_color",
    "error_color",
    "warning_color",
    "info_color",
    "background_color",
    "background_secondary_color",
    "text_color",
    "text_secondary_color",
    "scrollbar_track_color",
    "scrollbar_thumb_color",
    "scrollbar_thumb_hover_color",
)


class ThemeUpdate(CamelModel):
    """Partial theme update; blank values are ignored"""

    name: Optional[str] = None
    description: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    accent_color: Optional[str] = None
    intermediate_color: Optional[str] = None
    success_color: Optional[str] = None
    error_color: Optional[str] = None
    warning_color: Optional[str] = None
    info_color: Optional[str] = None
    background_color: Optional[str] = None
    background_secondary_color: Optional[str] = None
    text_color: Optional[str] = None
    text_secondary_color: Optional[str] = None
    scrollbar_track_color: Optional[str] = None
    scrollbar_thumb_color: Optional[str] = None
    scrollbar_thumb_hover_color: Optional[str] = None

    @field_validator(*COLOR_FIELDS)
    @classmethod
    def validate_color(cls, v):
        if v is None or not v.strip():
            return v
        return validate_hex_color(v.strip())


class ThemeReplace(ThemeUpdate):
    """Full theme update; every colour is required"""

    name: str
    primary_color: str
    secondary_color: str
    accent_color: str
    intermediate_color: str
    success_color: str
    error_color: str
    warning_color: str
    info_color: str
    background_color: str
    background_secondary_color: str
    text_color: str
    text_secondary_color: str
    scrollbar_track_color: str
    scrollbar_thumb_color: str
    scrollbar_thumb_hover_color: str


class ThemeResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    is_default_theme: bool
    is_active: bool
    primary_color: str
    secondary_color: str
    accent_color: str
    intermediate_color: str
    success_color: str
    error_color: str
    warning_color: str
    info_color: str
    background_color: str
    background_secondary_color: str
    text_color: str
    text_secondary_color: str
    scrollbar_track_color: str
    scrollbar_thumb_color: str
    scrollbar_thumb_hover_color: str
